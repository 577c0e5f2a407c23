"""
Route access policy.

`decide` is a pure function over (path, session presence, profile). Rules are
evaluated in priority order and the first match wins.
"""

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from use_cases.session_models import Profile, is_admin, is_approved, is_complete, is_founder, is_rejected

DecisionStatus = Literal["PROCEED", "REDIRECT"]

HOME_PATH = "/"
LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
CALLBACK_PATH = "/auth/callback"
SETTINGS_AREA = "/settings"
PROFILE_SETTINGS_PATH = "/settings/profile"
PENDING_APPROVAL_PATH = "/pending-approval"
ADMIN_AREA = "/admin"

INCOMPLETE_PROFILE_REDIRECT = f"{PROFILE_SETTINGS_PATH}?incomplete=true"
REJECTED_APPLICATION_REDIRECT = f"{PENDING_APPROVAL_PATH}?status=rejected"

PUBLIC_PATHS: Tuple[str, ...] = (LOGIN_PATH, SIGNUP_PATH, CALLBACK_PATH)

# Requests the gate never sees.
EXCLUDED_PREFIXES: Tuple[str, ...] = ("/_stcore/", "/static/", "/app/static/", "/api/")
EXCLUDED_PATHS: Tuple[str, ...] = ("/favicon.ico",)
EXCLUDED_EXTENSIONS: Tuple[str, ...] = (".svg", ".png", ".jpg", ".jpeg", ".gif", ".webp")


@dataclass(frozen=True)
class Decision:
    status: DecisionStatus
    reason: str
    target: Optional[str] = None


def proceed(reason: str) -> Decision:
    return Decision(status="PROCEED", reason=reason)


def redirect_to(target: str, reason: str) -> Decision:
    return Decision(status="REDIRECT", reason=reason, target=target)


def normalize_path(path: Optional[str]) -> str:
    path = (path or "").split("?", 1)[0].split("#", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def url_path_for(path: str) -> str:
    """Streamlit page slugs cannot nest, so /jobs/post is served as jobs-post."""
    path = normalize_path(path)
    if path == HOME_PATH:
        return ""
    return path.strip("/").replace("/", "-")


def matches(path: str, prefix: str) -> bool:
    """Segment-aware prefix match: /settings matches /settings/profile, not /settingsx."""
    if prefix == HOME_PATH:
        return path == HOME_PATH
    return path == prefix or path.startswith(prefix + "/")


def is_public_path(path: str) -> bool:
    return any(matches(path, p) for p in PUBLIC_PATHS)


def is_gated_path(path: Optional[str]) -> bool:
    raw = "/" + (path or "").split("?", 1)[0].lstrip("/")
    if raw in EXCLUDED_PATHS:
        return False
    if any(raw.startswith(prefix) for prefix in EXCLUDED_PREFIXES):
        return False
    return not raw.lower().endswith(EXCLUDED_EXTENSIONS)


def decide(path: str, has_session: bool, profile: Optional[Profile]) -> Decision:
    path = normalize_path(path)
    public = is_public_path(path)

    if matches(path, CALLBACK_PATH) or (public and not has_session):
        return proceed("public_path")
    if not has_session:
        return redirect_to(LOGIN_PATH, "auth_required")
    if public:
        return redirect_to(HOME_PATH, "already_authenticated")

    in_settings = matches(path, SETTINGS_AREA)
    on_pending = matches(path, PENDING_APPROVAL_PATH)

    # Missing profile behaves like an incomplete profile with an unknown role.
    if profile is None:
        if in_settings:
            return proceed("profile_unavailable")
        return redirect_to(INCOMPLETE_PROFILE_REDIRECT, "profile_unavailable")

    if is_admin(profile):
        return proceed("admin")

    if not is_complete(profile) and not in_settings and not on_pending:
        return redirect_to(INCOMPLETE_PROFILE_REDIRECT, "profile_incomplete")

    if matches(path, ADMIN_AREA):
        return redirect_to(HOME_PATH, "admin_only")

    if is_founder(profile):
        if not is_approved(profile):
            if not (on_pending or in_settings or path == HOME_PATH):
                if is_rejected(profile):
                    return redirect_to(REJECTED_APPLICATION_REDIRECT, "founder_rejected")
                return redirect_to(PENDING_APPROVAL_PATH, "founder_not_approved")
        elif on_pending:
            return redirect_to(HOME_PATH, "founder_already_approved")

    return proceed("allowed")


def decide_without_backend(path: str) -> Decision:
    """Fail-closed decision used when the backend is not configured."""
    path = normalize_path(path)
    if is_public_path(path):
        return proceed("public_path")
    return redirect_to(LOGIN_PATH, "backend_unconfigured")
