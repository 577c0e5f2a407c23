"""Profile completion and founder approval flows."""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional

from infrastructure.repositories.supabase_profile_repository import (
    SupabaseProfileRepository,
    build_profile_updates,
)
from use_cases.session_models import (
    OrganizationDetails,
    Profile,
    is_complete,
    is_founder,
    next_application_status,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileSaveResult:
    profile: Profile
    complete: bool
    submitted_for_review: bool = False


def apply_updates(profile: Profile, updates: Mapping[str, Optional[str]]) -> Profile:
    common = {k: updates[k] for k in ("first_name", "last_name", "linkedin_url") if k in updates}
    updated = replace(profile, **common)
    if is_founder(profile):
        org = profile.organization or OrganizationDetails()
        org_fields = {k: updates[k] for k in ("company_name", "company_website", "industry") if k in updates}
        updated = replace(updated, organization=replace(org, **org_fields))
    return updated


def save_profile(repo: SupabaseProfileRepository, profile: Profile, values: Mapping[str, Any]) -> ProfileSaveResult:
    """
    Persist the editable fields for the profile's role.

    A founder who completes their profile while still `not_submitted` is
    moved to `pending` so the application shows up for review.
    """
    updates: Dict[str, Any] = build_profile_updates(profile, values)
    updated = apply_updates(profile, updates)
    complete = is_complete(updated)

    submitted = False
    if is_founder(updated) and complete and updated.application_status == "not_submitted":
        updates["application_status"] = next_application_status("not_submitted", "pending")
        updated = replace(updated, application_status="pending")
        submitted = True

    repo.update_profile(profile.id, updates)
    if submitted:
        log.info(f"Founder {profile.id} submitted application for review")
    return ProfileSaveResult(profile=updated, complete=complete, submitted_for_review=submitted)


def list_pending_applications(repo: SupabaseProfileRepository) -> List[Dict[str, Any]]:
    return repo.list_founders_by_status("pending")


def review_application(repo: SupabaseProfileRepository, founder_id: str, approve: bool) -> str:
    """Approve or reject a founder. Raises InvalidTransitionError on an illegal move."""
    profile = repo.get_profile_by_id(founder_id)
    if profile is None or not is_founder(profile):
        raise LookupError(f"No founder profile with id {founder_id}")

    target = "approved" if approve else "rejected"
    new_status = next_application_status(profile.application_status, target)
    repo.update_application_status(founder_id, new_status)
    log.info(f"Founder {founder_id} application {profile.application_status} -> {new_status}")
    return new_status
