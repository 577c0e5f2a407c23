"""Session and profile DTOs shared across application layers."""

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

Role = Literal["founder", "recruiter", "admin"]
ApplicationStatus = Literal["not_submitted", "pending", "approved", "rejected"]

ROLES: Tuple[str, ...] = ("founder", "recruiter", "admin")
SIGNUP_ROLES: Tuple[str, ...] = ("founder", "recruiter")
APPLICATION_STATUSES: Tuple[str, ...] = ("not_submitted", "pending", "approved", "rejected")

# Allowed founder application moves. "rejected" is terminal.
APPLICATION_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    "not_submitted": ("pending", "approved"),
    "pending": ("approved", "rejected"),
    "approved": (),
    "rejected": (),
}


class InvalidTransitionError(Exception):
    pass


@dataclass(frozen=True)
class CookieUpdate:
    """A cookie to write on the response. value=None deletes the cookie."""

    name: str
    value: Optional[str]
    max_age: int = 0

    @property
    def is_deletion(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class AuthSession:
    user_id: str
    access_token: str
    refresh_token: str
    expires_at: Optional[int] = None


@dataclass(frozen=True)
class OrganizationDetails:
    company_name: Optional[str] = None
    company_website: Optional[str] = None
    industry: Optional[str] = None


@dataclass(frozen=True)
class Profile:
    id: str
    role: Optional[Role]
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    linkedin_url: Optional[str] = None
    # Founder-only extension; None for other roles.
    application_status: Optional[ApplicationStatus] = None
    organization: Optional[OrganizationDetails] = None


def is_admin(profile: Profile) -> bool:
    return profile.role == "admin"


def is_founder(profile: Profile) -> bool:
    return profile.role == "founder"


def is_approved(profile: Profile) -> bool:
    return is_founder(profile) and profile.application_status == "approved"


def is_rejected(profile: Profile) -> bool:
    return is_founder(profile) and profile.application_status == "rejected"


def _filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def is_complete(profile: Profile) -> bool:
    """True when every field required for the profile's role is filled in."""
    if profile.role is None:
        return False
    if not all(_filled(v) for v in (profile.first_name, profile.last_name, profile.linkedin_url)):
        return False
    if profile.role != "founder":
        return True
    org = profile.organization
    if org is None:
        return False
    return all(_filled(v) for v in (org.company_name, org.company_website, org.industry))


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def profile_from_row(row: Mapping[str, Any]) -> Profile:
    """Build a typed Profile from a `profiles` row. Unknown roles map to None."""
    raw_role = (_text(row.get("role")) or "").strip().lower()
    role = raw_role if raw_role in ROLES else None

    application_status = None
    organization = None
    if role == "founder":
        raw_status = (_text(row.get("application_status")) or "").strip().lower()
        application_status = raw_status if raw_status in APPLICATION_STATUSES else "not_submitted"
        organization = OrganizationDetails(
            company_name=_text(row.get("company_name")),
            company_website=_text(row.get("company_website")),
            industry=_text(row.get("industry")),
        )

    return Profile(
        id=str(row.get("id")),
        role=role,
        first_name=_text(row.get("first_name")),
        last_name=_text(row.get("last_name")),
        linkedin_url=_text(row.get("linkedin_url")),
        application_status=application_status,
        organization=organization,
    )


def next_application_status(current: Optional[str], target: str) -> str:
    current = current or "not_submitted"
    if target not in APPLICATION_TRANSITIONS.get(current, ()):
        raise InvalidTransitionError(f"Cannot move application from '{current}' to '{target}'")
    return target
