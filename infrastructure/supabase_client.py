import logging
from typing import Dict, Mapping, Optional, Tuple

from supabase import Client, ClientOptions, create_client

from infrastructure.settings import BackendSettings
from use_cases.session_models import CookieUpdate

log = logging.getLogger(__name__)

COOKIE_PREFIX = "sb-"


def cookie_name_for(storage_key: str) -> str:
    return COOKIE_PREFIX + storage_key.replace(".", "-")


class RequestCookieStorage:
    """
    Auth storage backed by the request's cookies.

    Supabase Auth keeps the PKCE code verifier in its storage between the
    sign-in redirect and the callback. Reads come from the incoming cookies;
    writes are collected as CookieUpdate objects for the response.
    """

    def __init__(self, cookies: Optional[Mapping[str, str]] = None, max_age: int = 600):
        self._cookies: Dict[str, str] = dict(cookies or {})
        self._updates: Dict[str, CookieUpdate] = {}
        self._max_age = max_age

    def get_item(self, key: str) -> Optional[str]:
        return self._cookies.get(cookie_name_for(key))

    def set_item(self, key: str, value: str) -> None:
        name = cookie_name_for(key)
        self._cookies[name] = value
        self._updates[name] = CookieUpdate(name=name, value=value, max_age=self._max_age)

    def remove_item(self, key: str) -> None:
        name = cookie_name_for(key)
        self._cookies.pop(name, None)
        self._updates[name] = CookieUpdate(name=name, value=None)

    @property
    def cookie_updates(self) -> Tuple[CookieUpdate, ...]:
        return tuple(self._updates.values())


def create_request_client(settings: BackendSettings, storage: Optional[RequestCookieStorage] = None) -> Client:
    """
    Build a Supabase client scoped to a single request.

    Sessions live in memory only and are never auto-refreshed in the
    background, so nothing leaks between requests.
    """
    options = ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        storage=storage or RequestCookieStorage(),
        flow_type="pkce",
    )
    return create_client(settings.supabase_url, settings.supabase_anon_key, options=options)
