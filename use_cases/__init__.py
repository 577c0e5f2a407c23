"""Application layer contracts for orchestrating high-level flows."""

from .access_policy import Decision, DecisionStatus, decide, decide_without_backend, is_gated_path
from .session_models import (
    ApplicationStatus,
    AuthSession,
    CookieUpdate,
    InvalidTransitionError,
    OrganizationDetails,
    Profile,
    Role,
    is_admin,
    is_approved,
    is_complete,
    is_founder,
    is_rejected,
    profile_from_row,
)

__all__ = [
    "ApplicationStatus",
    "AuthSession",
    "CookieUpdate",
    "Decision",
    "DecisionStatus",
    "InvalidTransitionError",
    "OrganizationDetails",
    "Profile",
    "Role",
    "decide",
    "decide_without_backend",
    "is_admin",
    "is_approved",
    "is_complete",
    "is_founder",
    "is_gated_path",
    "is_rejected",
    "profile_from_row",
]
