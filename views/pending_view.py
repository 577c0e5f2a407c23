import streamlit as st

from use_cases.session_models import is_rejected
from utils import session_manager


def render_pending_approval():
    params = session_manager.pop_redirect_params()
    profile = st.session_state.get("current_profile")
    rejected = params.get("status") == "rejected" or (profile is not None and is_rejected(profile))

    _, col, _ = st.columns([1, 2, 1])
    with col:
        if rejected:
            st.title("Application not approved")
            st.write("Thank you for your interest in the FounderBuilt community.")
            st.caption(
                "After review, our admin team was unable to approve your application. "
                "You can still update your profile from Settings."
            )
            return

        st.title("Application Submitted")
        st.write("Thank you for applying to join the FounderBuilt community!")
        st.caption(
            "Your application is currently under review by our admin team. "
            "You will receive an email notification once a decision has been made."
        )
