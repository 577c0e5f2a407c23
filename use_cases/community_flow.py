"""Job board and founder directory flows."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from infrastructure.repositories.supabase_job_repository import SupabaseJobRepository
from infrastructure.repositories.supabase_profile_repository import SupabaseProfileRepository
from use_cases.session_models import Profile

log = logging.getLogger(__name__)

JOB_TYPES = ("full-time", "part-time", "advisory", "fractional", "coaching")
JOB_POSTER_ROLES = ("recruiter", "admin")
CONTACT_VIEWER_ROLES = ("recruiter", "admin")
REQUIRED_JOB_FIELDS = ("title", "description", "job_type")


class JobValidationError(ValueError):
    pass


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def can_post_jobs(profile: Optional[Profile]) -> bool:
    return profile is not None and profile.role in JOB_POSTER_ROLES


def can_view_contact(profile: Optional[Profile]) -> bool:
    return profile is not None and profile.role in CONTACT_VIEWER_ROLES


def list_jobs(repo: SupabaseJobRepository) -> List[Dict[str, Any]]:
    return repo.list_active_jobs()


def build_job_row(poster_id: str, values: Mapping[str, Any]) -> Dict[str, Any]:
    """Validated `jobs` row. Optional fields are stored as None when empty."""
    row = {
        "posted_by_recruiter_id": poster_id,
        "title": _text(values.get("title")),
        "description": _text(values.get("description")),
        "job_type": _text(values.get("job_type")),
        "geography": _text(values.get("geography")),
        "compensation_details": _text(values.get("compensation_details")),
        "is_active": True,
    }
    missing = [field for field in REQUIRED_JOB_FIELDS if row[field] is None]
    if missing:
        raise JobValidationError("Please fill in all required fields (Title, Description, Job Type).")
    if row["job_type"] not in JOB_TYPES:
        raise JobValidationError(f"Unknown job type '{row['job_type']}'")
    return row


def post_job(repo: SupabaseJobRepository, profile: Optional[Profile], values: Mapping[str, Any]) -> Dict[str, Any]:
    if not can_post_jobs(profile):
        raise PermissionError("Only recruiters can post jobs.")
    row = build_job_row(profile.id, values)
    repo.insert_job(row)
    log.info(f"Job '{row['title']}' posted by {profile.id}")
    return row


def list_directory(repo: SupabaseProfileRepository, viewer: Optional[Profile]) -> List[Dict[str, Any]]:
    """Approved founders. Contact details are only shown to recruiters and admins."""
    rows = repo.list_approved_founders()
    if can_view_contact(viewer):
        return rows
    return [dict(row, linkedin_url=None) for row in rows]
