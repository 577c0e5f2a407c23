import os
from datetime import datetime

import streamlit as st
import streamlit.components.v1 as components

from infrastructure.observability import setup_observability
setup_observability()

from use_cases import bootstrap
from utils import session_manager
from views import routes

# --- PAGE SETTINGS ---
st.set_page_config(page_title="FounderBuilt Community", page_icon="🚀", layout="wide")

# --- SECURITY ---
FORCE_HTTPS = os.getenv("FORCE_HTTPS", "False").lower() == "true"

# Health Check (Basic load-balancer heartbeat)
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "version": "1.0", "uptime": datetime.utcnow().isoformat()})
    st.stop()

if FORCE_HTTPS:
    proto = st.context.headers.get("x-forwarded-proto", "http").lower()
    if proto != "https":
        # Streamlit cannot issue a 301 midway; the reverse proxy should redirect.
        st.error("🚨 Insecure connection. Please use HTTPS.")
        st.stop()

components.html(
    """
    <script>
    var meta1 = document.createElement('meta');
    meta1.httpEquiv = "X-Content-Type-Options";
    meta1.content = "nosniff";
    document.getElementsByTagName('head')[0].appendChild(meta1);

    var meta2 = document.createElement('meta');
    meta2.name = "referrer";
    meta2.content = "no-referrer";
    document.getElementsByTagName('head')[0].appendChild(meta2);
    </script>
    """,
    height=0,
)

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()
gate = startup_result.gate

# --- ROUTE GATE ---
pages = routes.build_pages()
nav = st.navigation(list(pages.values()), position="hidden")
current_path = routes.path_for_url_path(nav.url_path)
gate_response = session_manager.enforce_gate(gate, current_path, pages)

# Build Sentry Context
try:
    import sentry_sdk
    if sentry_sdk.Hub.current.client and gate_response.user_id:
        profile = gate_response.profile
        sentry_sdk.set_user({"id": gate_response.user_id, "role": profile.role if profile else None})
        sentry_sdk.set_tag("app.path", current_path)
except (ImportError, AttributeError):
    pass

routes.render_sidebar(pages, on_logout=lambda: session_manager.logout(gate, pages))
nav.run()
