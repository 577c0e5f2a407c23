import time

import streamlit as st

import auth
from use_cases import bootstrap
from utils import session_manager

ROLE_LABELS = {
    "founder": "🚀 Founder",
    "recruiter": "🤝 Recruiter",
}


def _render_provider_link(gate, signup_role=None):
    label = f"Continue with {gate.settings.oauth_provider.title()}"
    if not st.button(label, key=f"oauth_{signup_role or 'login'}", type="primary", width="stretch"):
        return
    try:
        start = auth.start_oauth_sign_in(
            gate.settings,
            session_manager.read_request_cookies(),
            signup_role=signup_role,
        )
    except Exception as e:
        st.error(f"Could not start sign-in: {e}")
        return
    # The verifier cookie must reach the browser before it leaves for the provider.
    session_manager.write_browser_cookies(start.cookies, secure=gate.settings.cookie_secure)
    time.sleep(session_manager.COOKIE_FLUSH_DELAY)
    session_manager.navigate_external(start.url)


def _backend_ready(gate) -> bool:
    if not gate.configured:
        st.error("Sign-in is unavailable: the backend is not configured.")
        return False
    return True


def render_login():
    st.title("🔐 Log in to FounderBuilt")
    error = session_manager.pop_redirect_params().get("error")
    if error:
        st.error(error)

    gate = bootstrap.get_gate()
    if not _backend_ready(gate):
        return
    _render_provider_link(gate)
    st.caption("New here? Use the Sign up page to choose your role first.")


def render_signup():
    st.title("📝 Join the FounderBuilt community")
    gate = bootstrap.get_gate()
    if not _backend_ready(gate):
        return

    st.subheader("Choose your role")
    role = st.radio(
        "Role",
        options=list(ROLE_LABELS),
        format_func=ROLE_LABELS.get,
        index=None,
        horizontal=True,
        label_visibility="collapsed",
    )
    if role is None:
        st.info("Please select a role (Founder or Recruiter) before signing up.")
        return
    _render_provider_link(gate, signup_role=role)
