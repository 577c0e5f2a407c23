import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from use_cases.session_models import AuthSession, CookieUpdate

log = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "sb-access-token"
REFRESH_TOKEN_COOKIE = "sb-refresh-token"


@dataclass(frozen=True)
class SessionResolution:
    session: Optional[AuthSession] = None
    cookie_updates: Tuple[CookieUpdate, ...] = ()
    refreshed: bool = False


def session_cookie_updates(session: AuthSession, max_age: int) -> Tuple[CookieUpdate, ...]:
    return (
        CookieUpdate(name=ACCESS_TOKEN_COOKIE, value=session.access_token, max_age=max_age),
        CookieUpdate(name=REFRESH_TOKEN_COOKIE, value=session.refresh_token, max_age=max_age),
    )


def clear_session_cookies() -> Tuple[CookieUpdate, ...]:
    return (
        CookieUpdate(name=ACCESS_TOKEN_COOKIE, value=None),
        CookieUpdate(name=REFRESH_TOKEN_COOKIE, value=None),
    )


def to_auth_session(raw: Any) -> Optional[AuthSession]:
    """Convert a supabase Session object into an AuthSession."""
    if raw is None or getattr(raw, "user", None) is None:
        return None
    return AuthSession(
        user_id=str(raw.user.id),
        access_token=raw.access_token,
        refresh_token=raw.refresh_token,
        expires_at=getattr(raw, "expires_at", None),
    )


class SupabaseSessionResolver:
    def __init__(self, client, cookie_max_age: int):
        self.client = client
        self.cookie_max_age = cookie_max_age

    def resolve(self, cookies: Mapping[str, str]) -> SessionResolution:
        """
        Verify the session stored in the request cookies.

        set_session() checks a live access token against the auth server, or
        exchanges the refresh token when the access token has expired. Any
        failure is reported as "no session".
        """
        access_token = (cookies.get(ACCESS_TOKEN_COOKIE) or "").strip()
        refresh_token = (cookies.get(REFRESH_TOKEN_COOKIE) or "").strip()
        if not access_token and not refresh_token:
            return SessionResolution()

        try:
            response = self.client.auth.set_session(access_token, refresh_token)
            session = to_auth_session(getattr(response, "session", None))
        except Exception as e:
            log.warning(f"Session resolution failed: {type(e).__name__}")
            return SessionResolution()

        if session is None:
            return SessionResolution()

        if session.access_token != access_token or session.refresh_token != refresh_token:
            log.info(f"Session refreshed for user {session.user_id}")
            return SessionResolution(
                session=session,
                cookie_updates=session_cookie_updates(session, self.cookie_max_age),
                refreshed=True,
            )
        return SessionResolution(session=session)
