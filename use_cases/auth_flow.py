"""Route access gate orchestration (application layer)."""

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Mapping, Optional, Tuple

from infrastructure.repositories.supabase_profile_repository import SupabaseProfileRepository
from infrastructure.session_resolver import SessionResolution, SupabaseSessionResolver
from infrastructure.settings import BackendSettings
from infrastructure.supabase_client import create_request_client
from use_cases import access_policy
from use_cases.access_policy import Decision
from use_cases.session_models import AuthSession, CookieUpdate, Profile

log = logging.getLogger(__name__)

GateStatus = Literal["PROCEED", "REDIRECT"]


@dataclass(frozen=True)
class GateResponse:
    """Result contract for one gate evaluation."""

    status: GateStatus
    reason: str
    location: Optional[str] = None
    cookies: Tuple[CookieUpdate, ...] = ()
    session: Optional[AuthSession] = None
    profile: Optional[Profile] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id if self.session is not None else None


def load_profile(repository: SupabaseProfileRepository, user_id: str) -> Optional[Profile]:
    """Fetch the profile for user_id. Missing rows and backend errors both yield None."""
    try:
        profile = repository.get_profile_by_id(user_id)
    except Exception as e:
        log.warning(f"Profile fetch failed for user {user_id}: {e}")
        return None
    if profile is None:
        log.warning(f"No profile row for user {user_id}")
    return profile


def build_response(
    decision: Decision,
    cookies: Tuple[CookieUpdate, ...] = (),
    session: Optional[AuthSession] = None,
    profile: Optional[Profile] = None,
) -> GateResponse:
    """Refreshed cookies ride along on both branches so a redirect never logs anyone out."""
    if decision.status == "REDIRECT":
        return GateResponse(
            status="REDIRECT",
            reason=decision.reason,
            location=decision.target,
            cookies=cookies,
            session=session,
            profile=profile,
        )
    return GateResponse(status="PROCEED", reason=decision.reason, cookies=cookies, session=session, profile=profile)


class RouteGate:
    """
    Evaluated once per navigation: resolve session, load profile, decide,
    build the response.

    Settings are loaded once at startup. A fresh backend client is built for
    every evaluation so no auth state is shared between requests.
    """

    def __init__(self, settings: Optional[BackendSettings], client_factory: Callable = create_request_client):
        self.settings = settings
        self._client_factory = client_factory

    @property
    def configured(self) -> bool:
        return self.settings is not None

    def open_client(self):
        if self.settings is None:
            return None
        return self._client_factory(self.settings)

    def evaluate(self, path: str, cookies: Mapping[str, str]) -> GateResponse:
        if not access_policy.is_gated_path(path):
            return GateResponse(status="PROCEED", reason="not_gated")

        if self.settings is None:
            log.error("Backend is not configured (SUPABASE_URL / SUPABASE_ANON_KEY); gate is failing closed")
            return build_response(access_policy.decide_without_backend(path))

        resolution = SessionResolution()
        try:
            client = self.open_client()
            resolution = SupabaseSessionResolver(client, self.settings.cookie_max_age).resolve(cookies)

            profile = None
            normalized = access_policy.normalize_path(path)
            if resolution.session is not None and not access_policy.is_public_path(normalized):
                profile = load_profile(SupabaseProfileRepository(client), resolution.session.user_id)

            decision = access_policy.decide(path, resolution.session is not None, profile)
        except Exception:
            log.exception(f"Gate evaluation failed for {path}")
            decision = access_policy.decide_without_backend(path)
            if decision.status == "REDIRECT":
                decision = access_policy.redirect_to(access_policy.LOGIN_PATH, "gate_error")
            return build_response(decision, resolution.cookie_updates)

        if decision.status == "REDIRECT":
            log.info(f"Gate redirect {path} -> {decision.target} ({decision.reason})")
        return build_response(decision, resolution.cookie_updates, resolution.session, profile)
