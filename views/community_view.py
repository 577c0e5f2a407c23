import streamlit as st

from infrastructure.repositories.supabase_job_repository import JobStoreError, SupabaseJobRepository
from infrastructure.repositories.supabase_profile_repository import ProfileStoreError, SupabaseProfileRepository
from use_cases import bootstrap, community_flow
from use_cases.session_models import is_founder
from utils import session_manager

JOB_TYPE_LABELS = {
    "full-time": "Full-time",
    "part-time": "Part-time",
    "advisory": "Advisory",
    "fractional": "Fractional",
    "coaching": "Coaching",
}


def _greeting_name():
    profile = st.session_state.get("current_profile")
    if profile is None:
        return None
    return profile.first_name


def _client():
    client = session_manager.current_client(bootstrap.get_gate())
    if client is None:
        st.error("Your session has expired. Please log in again.")
    return client


def render_home():
    name = _greeting_name()
    st.title(f"👋 Welcome back, {name}" if name else "👋 Welcome to FounderBuilt")
    profile = st.session_state.get("current_profile")
    if profile is not None and is_founder(profile) and profile.application_status != "approved":
        st.info("Your founder application is still under review. Some areas unlock once it is approved.")
    st.write("Browse open roles, meet other founders and keep an eye on upcoming events.")


def render_jobs():
    st.title("💼 Jobs")
    client = _client()
    if client is None:
        return
    try:
        jobs = community_flow.list_jobs(SupabaseJobRepository(client))
    except JobStoreError as e:
        st.error(f"Failed to load job board: {e}")
        return

    if not jobs:
        st.info("No open roles right now. Check back soon.")
        return

    for job in jobs:
        with st.container(border=True):
            st.subheader(job.get("title") or "Untitled role")
            posted = (job.get("created_at") or "")[:10]
            job_type = JOB_TYPE_LABELS.get(job.get("job_type"), job.get("job_type"))
            st.caption(f"Posted: {posted} | Type: {job_type} | Location: {job.get('geography') or 'N/A'}")
            st.write(job.get("description") or "")
            st.markdown(f"Compensation: **{job.get('compensation_details') or 'Not specified'}**")


def render_post_job():
    st.title("➕ Post a Job")
    profile = st.session_state.get("current_profile")
    if not community_flow.can_post_jobs(profile):
        st.error("Access denied. Only recruiters can post jobs.")
        return

    with st.form("post_job_form", clear_on_submit=True):
        values = {
            "title": st.text_input("Job title *"),
            "description": st.text_area("Description *", height=160),
            "job_type": st.selectbox(
                "Job type *",
                options=list(JOB_TYPE_LABELS),
                format_func=JOB_TYPE_LABELS.get,
                index=None,
                placeholder="Select job type...",
            ),
            "geography": st.text_input("Geography / Location", placeholder="e.g., Remote, NYC, US Only"),
            "compensation_details": st.text_input(
                "Compensation details", placeholder="e.g., $100k-$120k, Equity options, Project-based"
            ),
        }
        submitted = st.form_submit_button("Post job", type="primary")

    if not submitted:
        return

    client = _client()
    if client is None:
        return
    try:
        community_flow.post_job(SupabaseJobRepository(client), profile, values)
    except community_flow.JobValidationError as e:
        st.error(str(e))
        return
    except JobStoreError as e:
        st.error(f"Failed to post job: {e}")
        return
    st.success("Job posted successfully!")


def render_directory():
    st.title("📇 Founder Directory")
    client = _client()
    if client is None:
        return
    viewer = st.session_state.get("current_profile")
    try:
        founders = community_flow.list_directory(SupabaseProfileRepository(client), viewer)
    except ProfileStoreError as e:
        st.error(f"Failed to load founder directory: {e}")
        return

    if not founders:
        st.info("No approved founders found in the directory yet.")
        return

    cols = st.columns(3)
    for i, founder in enumerate(founders):
        name = " ".join(p for p in (founder.get("first_name"), founder.get("last_name")) if p) or "Founder"
        with cols[i % 3].container(border=True):
            st.markdown(f"**{name}**")
            company = founder.get("company_name")
            if company:
                st.caption(f"{company} · {founder.get('industry') or 'N/A'}")
            if founder.get("linkedin_url"):
                st.markdown(f"[LinkedIn profile]({founder['linkedin_url']})")


def render_events():
    st.title("📅 Events")
    st.info("Upcoming community events will appear here.")
