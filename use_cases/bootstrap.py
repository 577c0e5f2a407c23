"""Startup orchestration: configuration and gate construction."""

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

import streamlit as st

from infrastructure import settings as backend_settings
from use_cases.auth_flow import RouteGate
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]
    gate: Optional[RouteGate] = None


def build_gate() -> RouteGate:
    try:
        settings = backend_settings.load_settings()
    except backend_settings.ConfigurationError as e:
        log.error(f"{e}. Only public pages will be served until this is fixed.")
        return RouteGate(None)
    log.info(f"Route gate configured for {settings.supabase_url}")
    return RouteGate(settings)


@st.cache_resource
def get_gate() -> RouteGate:
    # Process-wide: built once, shared by every browser session.
    return build_gate()


def run_startup() -> StartupResult:
    executed_steps = []

    gate = get_gate()
    executed_steps.append("build_gate" if gate.configured else "build_gate_unconfigured")

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps), gate=gate)
