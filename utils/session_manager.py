import html
import json
import logging
import time
from typing import Dict, Iterable, Mapping
from urllib.parse import parse_qsl, unquote

import streamlit as st
import streamlit.components.v1 as components

import auth
from use_cases.access_policy import LOGIN_PATH
from use_cases.session_models import CookieUpdate

log = logging.getLogger(__name__)

"""
SESSION STATE CONTRACT

Keys in st.session_state owned by this module:

auth_cookies: dict[str, str | None]
    cookies written during this browser session, overlaid on the request
    cookies (Streamlit only sees the cookies of the initial page load).
    None marks a deleted cookie.
    default: {}

redirect_params: dict[str, str]
    query parameters handed to the page a redirect lands on
    default: {}

current_user_id: str | None
current_profile: Profile | None
    identity and profile resolved by the last gate evaluation
    default: None
"""

# Lets the cookie script reach the browser before the page switches.
COOKIE_FLUSH_DELAY = 0.5


def init_session_state():
    if "auth_cookies" not in st.session_state:
        st.session_state.auth_cookies = {}
    if "redirect_params" not in st.session_state:
        st.session_state.redirect_params = {}
    if "current_user_id" not in st.session_state:
        st.session_state.current_user_id = None
    if "current_profile" not in st.session_state:
        st.session_state.current_profile = None


def read_request_cookies() -> Dict[str, str]:
    try:
        cookies = {name: unquote(value) for name, value in st.context.cookies.items()}
    except Exception:
        # During some tests contexts might not be fully available
        cookies = {}
    for name, value in st.session_state.get("auth_cookies", {}).items():
        if value is None:
            cookies.pop(name, None)
        else:
            cookies[name] = value
    return cookies


def _cookie_script(updates: Iterable[CookieUpdate], secure: bool) -> str:
    lines = []
    for update in updates:
        max_age = 0 if update.is_deletion else update.max_age
        value = "" if update.is_deletion else update.value
        attrs = f"; path=/; max-age={max_age}; SameSite=Lax" + ("; Secure" if secure else "")
        lines.append(
            f"write({json.dumps(update.name)}, {json.dumps(value)}, {json.dumps(attrs)});"
        )
    return (
        "<script>\n"
        "function write(name, value, attrs) {\n"
        "  var cookieStr = name + \"=\" + encodeURIComponent(value) + attrs;\n"
        "  document.cookie = cookieStr;\n"
        "  try { window.parent.document.cookie = cookieStr; } catch (e) {}\n"
        "}\n"
        + "\n".join(lines)
        + "\n</script>"
    )


def write_browser_cookies(updates: Iterable[CookieUpdate], secure: bool = False) -> None:
    updates = tuple(updates)
    if not updates:
        return
    for update in updates:
        st.session_state.setdefault("auth_cookies", {})[update.name] = update.value
    components.html(_cookie_script(updates, secure), height=0)


def _cookie_secure(gate) -> bool:
    settings = getattr(gate, "settings", None)
    return bool(settings and settings.cookie_secure)


def redirect(target: str, pages: Mapping[str, object]) -> None:
    path, _, query = target.partition("?")
    st.session_state.redirect_params = dict(parse_qsl(query))
    page = pages.get(path)
    if page is None:
        log.warning(f"No page registered for redirect target {path}, sending to home")
        page = pages.get("/")
    if page is None:
        st.stop()
    st.switch_page(page)


def navigate_external(url: str) -> None:
    """Send the browser to url in the current tab."""
    st.markdown(
        f'<meta http-equiv="refresh" content="0; url={html.escape(url, quote=True)}" />',
        unsafe_allow_html=True,
    )
    st.stop()


def pop_redirect_params() -> Dict[str, str]:
    params = dict(st.session_state.get("redirect_params") or {})
    st.session_state.redirect_params = {}
    return params


def enforce_gate(gate, path: str, pages: Mapping[str, object]):
    """Run the route gate for path and act on its response."""
    response = gate.evaluate(path, read_request_cookies())
    st.session_state.current_user_id = response.user_id
    st.session_state.current_profile = response.profile

    write_browser_cookies(response.cookies, secure=_cookie_secure(gate))
    if response.status == "REDIRECT":
        if response.cookies:
            time.sleep(COOKIE_FLUSH_DELAY)
        redirect(response.location, pages)
    return response


def current_client(gate):
    """Backend client acting as the signed-in user, or None."""
    return auth.authenticated_client(getattr(gate, "settings", None), read_request_cookies())


def logout(gate, pages: Mapping[str, object]):
    updates = auth.sign_out(getattr(gate, "settings", None), read_request_cookies())
    write_browser_cookies(updates, secure=_cookie_secure(gate))
    st.session_state.current_user_id = None
    st.session_state.current_profile = None
    time.sleep(COOKIE_FLUSH_DELAY)
    redirect(LOGIN_PATH, pages)
