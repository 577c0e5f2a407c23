"""Route table: logical URL paths mapped to Streamlit pages."""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import streamlit as st

from use_cases.access_policy import HOME_PATH, normalize_path, url_path_for
from views import admin_view, callback_view, community_view, login_view, pending_view, profile_view


@dataclass(frozen=True)
class Route:
    path: str
    title: str
    render: Callable[[], None]
    icon: Optional[str] = None
    # Sidebar visibility only; access is decided by the gate.
    roles: Tuple[str, ...] = ()
    public: bool = False
    in_sidebar: bool = True


ROUTES: Tuple[Route, ...] = (
    Route("/", "Home", community_view.render_home, "🏠"),
    Route("/login", "Log in", login_view.render_login, "🔐", public=True),
    Route("/signup", "Sign up", login_view.render_signup, "📝", public=True),
    Route("/auth/callback", "Signing in", callback_view.render_callback, public=True, in_sidebar=False),
    Route("/jobs", "Jobs", community_view.render_jobs, "💼"),
    Route("/jobs/post", "Post a job", community_view.render_post_job, "➕", roles=("recruiter", "admin")),
    Route("/directory", "Directory", community_view.render_directory, "📇"),
    Route("/events", "Events", community_view.render_events, "📅"),
    Route("/pending-approval", "Application status", pending_view.render_pending_approval, "⏳", roles=("founder",)),
    Route("/settings/profile", "Profile", profile_view.render_profile_settings, "⚙️"),
    Route("/admin/approvals", "Founder approvals", admin_view.render_approvals, "🛡", roles=("admin",)),
)


def path_for_url_path(url_path: Optional[str]) -> str:
    slug = (url_path or "").strip("/")
    for route in ROUTES:
        if url_path_for(route.path) == slug:
            return route.path
    return normalize_path(slug.replace("-", "/")) if slug else HOME_PATH


def build_pages() -> Dict[str, "st.Page"]:
    pages = {}
    for route in ROUTES:
        if route.path == HOME_PATH:
            pages[route.path] = st.Page(route.render, title=route.title, icon=route.icon, default=True)
        else:
            pages[route.path] = st.Page(route.render, title=route.title, icon=route.icon, url_path=url_path_for(route.path))
    return pages


def visible_routes(signed_in: bool, role: Optional[str]) -> Tuple[Route, ...]:
    visible = []
    for route in ROUTES:
        if not route.in_sidebar:
            continue
        if route.public:
            if not signed_in:
                visible.append(route)
            continue
        if not signed_in:
            continue
        if route.roles and role not in route.roles:
            continue
        visible.append(route)
    return tuple(visible)


def render_sidebar(pages, on_logout=None):
    profile = st.session_state.get("current_profile")
    signed_in = st.session_state.get("current_user_id") is not None
    role = profile.role if profile is not None else None

    with st.sidebar:
        st.markdown("### 🚀 FounderBuilt")
        for route in visible_routes(signed_in, role):
            st.page_link(pages[route.path], label=route.title, icon=route.icon)
        if signed_in and on_logout is not None:
            st.divider()
            if st.button("Log out", key="logout_btn", type="secondary"):
                on_logout()
