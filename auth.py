import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
from urllib.parse import urlencode, urlparse

from infrastructure.repositories.supabase_profile_repository import SupabaseProfileRepository
from infrastructure.session_resolver import (
    SupabaseSessionResolver,
    clear_session_cookies,
    session_cookie_updates,
    to_auth_session,
)
from infrastructure.settings import BackendSettings, get_secret
from infrastructure.supabase_client import RequestCookieStorage, create_request_client
from use_cases.access_policy import CALLBACK_PATH, HOME_PATH, LOGIN_PATH, url_path_for
from use_cases.session_models import SIGNUP_ROLES, CookieUpdate

log = logging.getLogger(__name__)

__all__ = [
    "CallbackResult",
    "OAuthStart",
    "authenticated_client",
    "complete_auth_callback",
    "get_secret",
    "safe_next_path",
    "sign_out",
    "start_oauth_sign_in",
]


@dataclass(frozen=True)
class OAuthStart:
    url: str
    cookies: Tuple[CookieUpdate, ...] = ()


@dataclass(frozen=True)
class CallbackResult:
    target: str
    cookies: Tuple[CookieUpdate, ...] = ()
    user_id: Optional[str] = None


def safe_next_path(next_path: Optional[str]) -> str:
    """Only same-origin relative paths are allowed as post-login targets."""
    if not next_path:
        return HOME_PATH
    parsed = urlparse(next_path)
    if parsed.scheme or parsed.netloc or not next_path.startswith("/") or next_path.startswith("//"):
        return HOME_PATH
    return next_path


def _login_error(message: str) -> str:
    return f"{LOGIN_PATH}?{urlencode({'error': message})}"


def start_oauth_sign_in(
    settings: BackendSettings,
    cookies: Mapping[str, str],
    signup_role: Optional[str] = None,
    next_path: Optional[str] = None,
) -> OAuthStart:
    """
    Begin the provider sign-in (PKCE). The returned URL must be opened by the
    browser; the returned cookies carry the code verifier to the callback.
    """
    params = {}
    if signup_role is not None:
        if signup_role not in SIGNUP_ROLES:
            raise ValueError(f"Role '{signup_role}' cannot be chosen at sign-up")
        params["signup_role"] = signup_role
    if next_path:
        params["next"] = safe_next_path(next_path)

    redirect_to = f"{settings.site_url}/{url_path_for(CALLBACK_PATH)}"
    if params:
        redirect_to = f"{redirect_to}?{urlencode(params)}"

    storage = RequestCookieStorage(cookies)
    client = create_request_client(settings, storage)
    response = client.auth.sign_in_with_oauth(
        {"provider": settings.oauth_provider, "options": {"redirect_to": redirect_to}}
    )
    return OAuthStart(url=response.url, cookies=storage.cookie_updates)


def complete_auth_callback(
    settings: BackendSettings,
    cookies: Mapping[str, str],
    code: Optional[str],
    next_path: Optional[str] = None,
    signup_role: Optional[str] = None,
) -> CallbackResult:
    """Exchange the provider code for a session and pick where to send the user."""
    if not code:
        log.error("Auth callback: code parameter missing")
        return CallbackResult(target=_login_error("Authentication failed"))

    storage = RequestCookieStorage(cookies)
    client = create_request_client(settings, storage)
    try:
        response = client.auth.exchange_code_for_session({"auth_code": code})
        session = to_auth_session(getattr(response, "session", None))
    except Exception as e:
        log.error(f"Auth callback error: {e}")
        return CallbackResult(target=_login_error("Could not authenticate user"), cookies=storage.cookie_updates)

    if session is None:
        log.error("Auth callback: exchange returned no session")
        return CallbackResult(target=_login_error("Could not authenticate user"), cookies=storage.cookie_updates)

    if signup_role in SIGNUP_ROLES:
        try:
            if SupabaseProfileRepository(client).assign_signup_role(session.user_id, signup_role):
                log.info(f"Assigned sign-up role {signup_role} to user {session.user_id}")
        except Exception as e:
            log.warning(f"Could not assign sign-up role for {session.user_id}: {e}")

    return CallbackResult(
        target=safe_next_path(next_path),
        cookies=storage.cookie_updates + session_cookie_updates(session, settings.cookie_max_age),
        user_id=session.user_id,
    )


def authenticated_client(settings: Optional[BackendSettings], cookies: Mapping[str, str]):
    """A request client carrying the caller's session, or None when there is no session."""
    if settings is None:
        return None
    client = create_request_client(settings)
    resolution = SupabaseSessionResolver(client, settings.cookie_max_age).resolve(cookies)
    if resolution.session is None:
        return None
    return client


def sign_out(settings: Optional[BackendSettings], cookies: Mapping[str, str]) -> Tuple[CookieUpdate, ...]:
    """Revoke the session best-effort; the session cookies are always cleared."""
    client = authenticated_client(settings, cookies)
    if client is not None:
        try:
            client.auth.sign_out()
        except Exception as e:
            log.warning(f"Sign-out request failed: {e}")
    return clear_session_cookies()
