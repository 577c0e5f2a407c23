from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from infrastructure.repositories.supabase_profile_repository import (
    DIRECTORY_COLUMNS,
    PROFILE_COLUMNS,
    ProfileStoreError,
    SupabaseProfileRepository,
    build_profile_updates,
)
from use_cases.session_models import Profile

FOUNDER_ROW = {
    "id": "u1",
    "role": "founder",
    "application_status": "pending",
    "first_name": "Ada",
    "last_name": "Lovelace",
    "linkedin_url": "https://l.in/ada",
    "company_name": "Acme",
    "company_website": None,
    "industry": "AI",
}


def client_returning(rows):
    client = MagicMock()
    query = client.table.return_value.select.return_value
    query.eq.return_value.limit.return_value.execute.return_value = SimpleNamespace(data=rows)
    return client


def test_get_profile_by_id_maps_row():
    client = client_returning([FOUNDER_ROW])
    profile = SupabaseProfileRepository(client).get_profile_by_id("u1")

    client.table.assert_called_once_with("profiles")
    client.table.return_value.select.assert_called_once_with(PROFILE_COLUMNS)
    client.table.return_value.select.return_value.eq.assert_called_once_with("id", "u1")
    assert profile.role == "founder"
    assert profile.application_status == "pending"
    assert profile.organization.company_website is None


def test_get_profile_by_id_not_found():
    assert SupabaseProfileRepository(client_returning([])).get_profile_by_id("nobody") is None


def test_get_profile_by_id_wraps_backend_errors():
    client = MagicMock()
    client.table.side_effect = RuntimeError("boom")
    with pytest.raises(ProfileStoreError):
        SupabaseProfileRepository(client).get_profile_by_id("u1")


def test_update_application_status():
    client = MagicMock()
    SupabaseProfileRepository(client).update_application_status("u1", "approved")
    client.table.return_value.update.assert_called_once_with({"application_status": "approved"})
    client.table.return_value.update.return_value.eq.assert_called_once_with("id", "u1")


def test_update_profile_skips_empty_updates():
    client = MagicMock()
    SupabaseProfileRepository(client).update_profile("u1", {})
    client.table.assert_not_called()


def test_assign_signup_role_only_when_unset():
    client = client_returning([{"id": "u1", "role": None}])
    assert SupabaseProfileRepository(client).assign_signup_role("u1", "founder") is True
    client.table.return_value.update.assert_called_once_with({"role": "founder"})

    client = client_returning([{"id": "u1", "role": "recruiter"}])
    assert SupabaseProfileRepository(client).assign_signup_role("u1", "founder") is False
    client.table.return_value.update.assert_not_called()


def test_build_profile_updates_by_role():
    recruiter = Profile(id="r", role="recruiter")
    updates = build_profile_updates(recruiter, {"first_name": " Grace ", "last_name": "", "company_name": "X"})
    assert updates == {"first_name": "Grace", "last_name": None}

    founder = Profile(id="f", role="founder")
    updates = build_profile_updates(founder, {"company_name": " Acme ", "industry": "AI"})
    assert updates == {"company_name": "Acme", "industry": "AI"}


def test_list_approved_founders_for_directory():
    client = MagicMock()
    query = client.table.return_value.select.return_value
    query.eq.return_value.eq.return_value.order.return_value.execute.return_value = SimpleNamespace(
        data=[{"id": "u1", "first_name": "Ada"}]
    )

    rows = SupabaseProfileRepository(client).list_approved_founders()

    assert rows == [{"id": "u1", "first_name": "Ada"}]
    client.table.return_value.select.assert_called_once_with(DIRECTORY_COLUMNS)
    query.eq.assert_called_once_with("role", "founder")
    query.eq.return_value.eq.assert_called_once_with("application_status", "approved")
    query.eq.return_value.eq.return_value.order.assert_called_once_with("created_at", desc=True)
