import streamlit as st

from infrastructure.repositories.supabase_profile_repository import ProfileStoreError, SupabaseProfileRepository
from use_cases import bootstrap, profile_flow
from use_cases.session_models import InvalidTransitionError
from utils import session_manager


def _display_name(row):
    name = " ".join(part for part in (row.get("first_name"), row.get("last_name")) if part)
    return name or row.get("id")


def render_approvals():
    st.header("🛡 Pending Founder Applications")

    client = session_manager.current_client(bootstrap.get_gate())
    if client is None:
        st.error("Your session has expired. Please log in again.")
        return
    repo = SupabaseProfileRepository(client)

    try:
        pending = profile_flow.list_pending_applications(repo)
    except ProfileStoreError as e:
        st.error(f"Failed to load applications: {e}")
        return

    if not pending:
        st.success("No pending applications.")
        return

    for row in pending:
        with st.container(border=True):
            c_info, c_ok, c_no = st.columns([4, 1, 1])
            c_info.markdown(f"**{_display_name(row)}**  \n{row.get('company_name') or '—'} · {row.get('industry') or '—'}")
            if row.get("linkedin_url"):
                c_info.caption(row["linkedin_url"])

            decision = None
            if c_ok.button("Approve", key=f"approve_{row['id']}", type="primary"):
                decision = True
            if c_no.button("Reject", key=f"reject_{row['id']}"):
                decision = False

            if decision is not None:
                try:
                    new_status = profile_flow.review_application(repo, row["id"], approve=decision)
                except (InvalidTransitionError, LookupError, ProfileStoreError) as e:
                    st.error(str(e))
                else:
                    st.toast(f"{_display_name(row)}: {new_status}")
                    st.rerun()
