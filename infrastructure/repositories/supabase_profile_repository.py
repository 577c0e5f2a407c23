import logging
from typing import Any, Dict, List, Mapping, Optional

from use_cases.session_models import Profile, profile_from_row

log = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
PROFILE_COLUMNS = (
    "id, role, application_status, first_name, last_name, linkedin_url, "
    "company_name, company_website, industry"
)
DIRECTORY_COLUMNS = "id, first_name, last_name, linkedin_url, company_name, company_website, industry"
COMMON_EDITABLE_FIELDS = ("first_name", "last_name", "linkedin_url")
FOUNDER_EDITABLE_FIELDS = ("company_name", "company_website", "industry")


class ProfileStoreError(Exception):
    pass


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class SupabaseProfileRepository:
    def __init__(self, client):
        self.client = client

    def _table(self):
        return self.client.table(PROFILES_TABLE)

    def get_profile_by_id(self, user_id: str) -> Optional[Profile]:
        """Single-row lookup. Returns None when no row exists."""
        try:
            res = (
                self._table()
                .select(PROFILE_COLUMNS)
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise ProfileStoreError(f"Profile lookup failed: {e}") from e
        rows = res.data or []
        return profile_from_row(rows[0]) if rows else None

    def list_founders_by_status(self, status: str) -> List[Dict[str, Any]]:
        try:
            res = (
                self._table()
                .select(PROFILE_COLUMNS)
                .eq("role", "founder")
                .eq("application_status", status)
                .execute()
            )
        except Exception as e:
            raise ProfileStoreError(f"Founder listing failed: {e}") from e
        return list(res.data or [])

    def list_approved_founders(self) -> List[Dict[str, Any]]:
        """Directory rows for approved founders, newest first."""
        try:
            res = (
                self._table()
                .select(DIRECTORY_COLUMNS)
                .eq("role", "founder")
                .eq("application_status", "approved")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise ProfileStoreError(f"Directory listing failed: {e}") from e
        return list(res.data or [])

    def update_profile(self, user_id: str, updates: Mapping[str, Any]) -> None:
        if not updates:
            return
        try:
            self._table().update(dict(updates)).eq("id", user_id).execute()
        except Exception as e:
            raise ProfileStoreError(f"Profile update failed: {e}") from e

    def update_application_status(self, user_id: str, status: str) -> None:
        self.update_profile(user_id, {"application_status": status})

    def assign_signup_role(self, user_id: str, role: str) -> bool:
        """Set the role chosen at sign-up, only when the profile has none yet."""
        profile = self.get_profile_by_id(user_id)
        if profile is None or profile.role is not None:
            return False
        self.update_profile(user_id, {"role": role})
        return True


def build_profile_updates(profile: Profile, values: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    """Editable fields for the profile's role, trimmed, empty values as None."""
    fields = COMMON_EDITABLE_FIELDS
    if profile.role == "founder":
        fields = fields + FOUNDER_EDITABLE_FIELDS
    return {field: _clean(values.get(field)) for field in fields if field in values}
