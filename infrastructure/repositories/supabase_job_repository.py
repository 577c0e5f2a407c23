import logging
from typing import Any, Dict, List, Mapping

log = logging.getLogger(__name__)

JOBS_TABLE = "jobs"
JOB_COLUMNS = "id, title, description, job_type, geography, compensation_details, created_at"


class JobStoreError(Exception):
    pass


class SupabaseJobRepository:
    def __init__(self, client):
        self.client = client

    def _table(self):
        return self.client.table(JOBS_TABLE)

    def list_active_jobs(self) -> List[Dict[str, Any]]:
        """Active postings, newest first."""
        try:
            res = (
                self._table()
                .select(JOB_COLUMNS)
                .eq("is_active", True)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise JobStoreError(f"Job listing failed: {e}") from e
        return list(res.data or [])

    def insert_job(self, row: Mapping[str, Any]) -> None:
        try:
            self._table().insert(dict(row)).execute()
        except Exception as e:
            raise JobStoreError(f"Job insert failed: {e}") from e
