from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from infrastructure.repositories.supabase_job_repository import JOB_COLUMNS, JobStoreError, SupabaseJobRepository


def test_list_active_jobs_newest_first():
    client = MagicMock()
    query = client.table.return_value.select.return_value
    query.eq.return_value.order.return_value.execute.return_value = SimpleNamespace(data=[{"id": "j1"}])

    jobs = SupabaseJobRepository(client).list_active_jobs()

    assert jobs == [{"id": "j1"}]
    client.table.assert_called_once_with("jobs")
    client.table.return_value.select.assert_called_once_with(JOB_COLUMNS)
    query.eq.assert_called_once_with("is_active", True)
    query.eq.return_value.order.assert_called_once_with("created_at", desc=True)


def test_list_active_jobs_empty():
    client = MagicMock()
    query = client.table.return_value.select.return_value
    query.eq.return_value.order.return_value.execute.return_value = SimpleNamespace(data=None)
    assert SupabaseJobRepository(client).list_active_jobs() == []


def test_insert_job():
    client = MagicMock()
    row = {"title": "CTO", "is_active": True}
    SupabaseJobRepository(client).insert_job(row)
    client.table.return_value.insert.assert_called_once_with(row)
    client.table.return_value.insert.return_value.execute.assert_called_once()


def test_backend_errors_are_wrapped():
    client = MagicMock()
    client.table.side_effect = RuntimeError("boom")
    repo = SupabaseJobRepository(client)
    with pytest.raises(JobStoreError):
        repo.list_active_jobs()
    with pytest.raises(JobStoreError):
        repo.insert_job({"title": "CTO"})
