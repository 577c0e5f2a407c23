"""
Backend configuration.

Values come from Streamlit secrets first and the process environment second,
so the same code runs under `streamlit run` (secrets.toml) and in containers
(env vars).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import streamlit as st

log = logging.getLogger(__name__)

REQUIRED_KEYS = ("SUPABASE_URL", "SUPABASE_ANON_KEY")
DEFAULT_SITE_URL = "http://localhost:8501"
SESSION_TTL_DAYS = 30


class ConfigurationError(Exception):
    pass


def get_secret(key: str) -> Optional[str]:
    try:
        value = st.secrets.get(key)
    except FileNotFoundError:
        value = None
    if value is None:
        value = os.getenv(key)
    return value


@dataclass(frozen=True)
class BackendSettings:
    supabase_url: str
    supabase_anon_key: str
    site_url: str = DEFAULT_SITE_URL
    session_ttl_days: int = SESSION_TTL_DAYS
    cookie_secure: bool = False
    oauth_provider: str = "google"

    @property
    def cookie_max_age(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60


def _int_setting(key: str, default: int) -> int:
    raw = get_secret(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        log.warning(f"Ignoring malformed {key}={raw!r}, using {default}")
        return default


def _bool_setting(key: str, default: bool) -> bool:
    raw = get_secret(key)
    if raw is None:
        return default
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> BackendSettings:
    """Read backend settings. Raises ConfigurationError when a required key is missing."""
    values = {key: (get_secret(key) or "").strip() for key in REQUIRED_KEYS}
    missing = [key for key, value in values.items() if not value]
    if missing:
        raise ConfigurationError(f"Missing backend configuration: {', '.join(missing)}")

    site_url = (get_secret("SITE_URL") or DEFAULT_SITE_URL).strip().rstrip("/")
    return BackendSettings(
        supabase_url=values["SUPABASE_URL"].rstrip("/"),
        supabase_anon_key=values["SUPABASE_ANON_KEY"],
        site_url=site_url or DEFAULT_SITE_URL,
        session_ttl_days=_int_setting("SESSION_TTL_DAYS", SESSION_TTL_DAYS),
        cookie_secure=_bool_setting("COOKIE_SECURE", False),
        oauth_provider=(get_secret("OAUTH_PROVIDER") or "google").strip().lower(),
    )
