import streamlit as st

from infrastructure.repositories.supabase_profile_repository import ProfileStoreError, SupabaseProfileRepository
from use_cases import bootstrap, profile_flow
from use_cases.session_models import is_complete, is_founder
from utils import session_manager


def _org_value(profile, field):
    if profile.organization is None:
        return ""
    return getattr(profile.organization, field) or ""


def render_profile_settings():
    st.title("⚙️ Profile Settings")
    params = session_manager.pop_redirect_params()

    profile = st.session_state.get("current_profile")
    if profile is None:
        st.error("Profile not found. Please try logging out and back in.")
        return

    if params.get("incomplete") == "true" or not is_complete(profile):
        st.warning("Please complete your profile to continue using the community.")

    with st.form("profile_form", clear_on_submit=False):
        c1, c2 = st.columns(2)
        values = {
            "first_name": c1.text_input("First name *", value=profile.first_name or ""),
            "last_name": c2.text_input("Last name *", value=profile.last_name or ""),
            "linkedin_url": st.text_input("LinkedIn URL *", value=profile.linkedin_url or ""),
        }
        if is_founder(profile):
            st.subheader("🏢 Company")
            values["company_name"] = st.text_input("Company name *", value=_org_value(profile, "company_name"))
            values["company_website"] = st.text_input("Company website *", value=_org_value(profile, "company_website"))
            values["industry"] = st.text_input("Industry *", value=_org_value(profile, "industry"))
        submitted = st.form_submit_button("Save profile", type="primary")

    if not submitted:
        return

    client = session_manager.current_client(bootstrap.get_gate())
    if client is None:
        st.error("Your session has expired. Please log in again.")
        return
    try:
        result = profile_flow.save_profile(SupabaseProfileRepository(client), profile, values)
    except ProfileStoreError as e:
        st.error(f"Failed to save profile: {e}")
        return

    st.session_state.current_profile = result.profile
    if result.submitted_for_review:
        st.success("Profile saved. Your application has been submitted for review.")
    elif result.complete:
        st.success("Profile saved.")
    else:
        st.info("Profile saved. Some required fields are still empty.")
