import time

import streamlit as st

import auth
from use_cases import bootstrap
from use_cases.access_policy import LOGIN_PATH
from utils import session_manager


def render_callback():
    from views import routes

    pages = routes.build_pages()
    gate = bootstrap.get_gate()
    if not gate.configured:
        session_manager.redirect(LOGIN_PATH, pages)
        return

    with st.spinner("Signing you in..."):
        result = auth.complete_auth_callback(
            gate.settings,
            session_manager.read_request_cookies(),
            st.query_params.get("code"),
            next_path=st.query_params.get("next"),
            signup_role=st.query_params.get("signup_role"),
        )
    st.query_params.clear()

    session_manager.write_browser_cookies(result.cookies, secure=gate.settings.cookie_secure)
    time.sleep(session_manager.COOKIE_FLUSH_DELAY)
    session_manager.redirect(result.target, pages)
