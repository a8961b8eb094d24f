import html
import logging

import streamlit as st

from src.api.client import EvidiClient
from src.config import configure_logging, load_settings
from src.cv.analyzer import analyze_resume
from src.cv.parser import parse_resume
from src.generation.cover_letter import generate_cover_letter
from src.matching.dashboard import dashboard_stats
from src.matching.listing import QueryState, filter_postings, tab_counts
from src.models.criteria import EXPERIENCE_LEVELS, JOB_TYPES, FilterCriteria
from src.models.source import SOURCE_TYPES
from src.settings.account import (
    LANGUAGES,
    TIMEZONES,
    AccountDeletionDisabled,
    PasswordChangeError,
    delete_account,
    validate_password_change,
)
from src.sources.registry import add_source, delete_source, sync_source, toggle_source
from src.storage.cache import PostingCache
from src.storage.settings_store import SettingsStore
from src.utils.dates import format_last_sync, format_long_date, format_posted
from src.utils.http_client import ApiError, AuthenticationError

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("evidi.app")

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Evidi", layout="wide", initial_sidebar_state="collapsed")

st.markdown("""
<style>
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}
.match-badge {
    display: inline-block; padding: 2px 10px; border-radius: 12px;
    background: #e8f5e9; color: #2e7d32; font-weight: 700; font-size: 0.85rem;
}
.stack-tag {
    display: inline-block; padding: 1px 8px; margin: 2px; border-radius: 8px;
    background: #EDE8F5; font-size: 0.8rem;
}
.ai-summary { border-left: 3px solid #6C3BAA; padding-left: 10px; color: #5A6275; }
</style>
""", unsafe_allow_html=True)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
SORT_LABELS = {"matchScore": "Best Match", "date": "Most Recent"}
FREE_TEXT_FIELDS = [
    ("stack", "Technology Stack", "Skills and technologies you're looking for", "e.g., React, TypeScript, Node.js"),
    ("keywords", "Keywords", "Must-have terms in job descriptions", "e.g., remote, startup, agile"),
    ("exclude_keywords", "Exclude Keywords", "Terms to filter out", "e.g., unpaid, intern"),
    ("location", "Locations", "Preferred work locations", "e.g., Remote, San Francisco, New York"),
]

# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "email": None,
    "jobs": [],
    "sources": [],
    "filters": FilterCriteria(),
    "saved_filters": FilterCriteria(),
    "resume_required": False,
    "resume_text": "",
    "resume_analysis": None,
    "letters": {},
}
for k, v in _DEFAULTS.items():
    if k not in st.session_state:
        st.session_state[k] = v

cache = PostingCache(settings.cache_path, ttl=settings.cache_ttl)
settings_store = SettingsStore(settings.settings_path)


def _client() -> EvidiClient:
    return EvidiClient(settings)


def _load_session(email: str) -> None:
    with _client() as client:
        session = client.load_session(email)

    jobs = session.jobs
    if session.jobs_loaded:
        cache.store(jobs)
    else:
        cached = cache.load()
        if cached is not None:
            logger.info("Using %d cached postings", len(cached))
            jobs = cached

    st.session_state.jobs = jobs
    st.session_state.sources = session.sources
    st.session_state.filters = session.filters
    st.session_state.saved_filters = session.filters
    st.session_state.resume_required = session.needs_resume
    if session.user and session.user.resume:
        st.session_state.resume_text = session.user.resume
    for err in session.errors:
        st.toast(f"Could not load {err}")


def _logout() -> None:
    for k, v in _DEFAULTS.items():
        st.session_state[k] = v if not isinstance(v, dict) else {}


def _toggle_filter(field_name: str, value: str) -> None:
    st.session_state.filters = st.session_state.filters.toggle(field_name, value)


def _toggle_source(source_id: str) -> None:
    st.session_state.sources = toggle_source(st.session_state.sources, source_id)


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------
if not st.session_state.email:
    st.title("Welcome Back")
    st.caption("Sign in to your Evidi account")
    with st.form("login"):
        email = st.text_input("Email", placeholder="you@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In", type="primary")
    if submitted:
        with st.spinner("Signing in..."):
            try:
                with _client() as client:
                    confirmed = client.login(email.strip(), password)
                st.session_state.email = confirmed
                _load_session(confirmed)
                st.rerun()
            except AuthenticationError:
                st.error("Invalid email or password")
            except ApiError as e:
                st.error(f"Login failed: {e}")
    st.stop()

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
head_l, head_r = st.columns([5, 1])
with head_l:
    st.title("Evidi")
with head_r:
    st.caption(st.session_state.email)
    if st.button("Logout", use_container_width=True):
        _logout()
        st.rerun()

if st.session_state.resume_required:
    st.warning("Add your resume before using the rest of Evidi.")
    tab_cv, tab_settings = st.tabs(["My Resume", "Settings"])
    tab_dashboard = tab_jobs = tab_sources = tab_filters = None
else:
    tab_dashboard, tab_jobs, tab_sources, tab_filters, tab_cv, tab_settings = st.tabs(
        ["Dashboard", "Jobs", "Sources", "Filters", "My Resume", "Settings"]
    )

# ===== Dashboard =====
if tab_dashboard is not None:
    with tab_dashboard:
        stats = dashboard_stats(st.session_state.jobs, st.session_state.sources)
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Total Jobs", stats.total_jobs, help="Collected from all sources")
        c2.metric("Matched Jobs", stats.matched_jobs, help="Based on your criteria")
        c3.metric("Match Rate", f"{stats.match_rate}%")
        c4.metric("Active Sources", f"{stats.enabled_sources}/{stats.total_sources}")
        if stats.last_sync:
            st.caption(f"Last source sync: {format_last_sync(stats.last_sync.isoformat())}")

# ===== Jobs =====
if tab_jobs is not None:
    with tab_jobs:
        st.caption("Browse and filter collected job opportunities")
        jobs = st.session_state.jobs

        col_search, col_sort = st.columns([4, 1])
        with col_search:
            search = st.text_input("Search", placeholder="Search jobs, companies, or technologies...",
                                   label_visibility="collapsed")
        with col_sort:
            sort = st.selectbox("Sort by", list(SORT_LABELS), format_func=SORT_LABELS.get,
                                label_visibility="collapsed")

        counts = tab_counts(jobs)
        tab_labels = {
            "all": f"All Jobs ({counts.all})",
            "matched": f"Matched ({counts.matched})",
            "new": f"New ({counts.new})",
        }
        tab = st.radio("Category", list(tab_labels), format_func=tab_labels.get,
                       horizontal=True, label_visibility="collapsed")

        visible = filter_postings(jobs, QueryState(search=search, sort=sort, tab=tab))

        if not visible:
            st.info("No jobs found. Try a different search or category.")

        for job in visible:
            with st.container(border=True):
                title_col, meta_col = st.columns([4, 1])
                with title_col:
                    badge = f' <span class="match-badge">{job.match_score}% Match</span>' if job.is_match else ""
                    st.markdown(f"### {html.escape(job.title)}{badge}", unsafe_allow_html=True)
                    st.caption(f"{job.company} · {job.location or 'Not specified'} · {format_posted(job.posted_date)}")
                with meta_col:
                    if job.job_type:
                        st.markdown(f"**{job.job_type}**")
                    if job.salary:
                        st.caption(job.salary)
                if job.stack:
                    st.markdown(" ".join(f'<span class="stack-tag">{html.escape(t)}</span>' for t in job.stack),
                                unsafe_allow_html=True)
                if job.ai_summary:
                    st.markdown(f'<div class="ai-summary">{html.escape(job.ai_summary)}</div>',
                                unsafe_allow_html=True)

                src_col, link_col = st.columns([4, 1])
                src_col.caption(f"Source: {job.source}")
                if job.url:
                    link_col.link_button("View Original", job.url, use_container_width=True)

                with st.expander("Details & cover letter"):
                    st.caption(f"Posted {format_long_date(job.posted_date)}"
                               + (f" · {job.experience}" if job.experience else ""))
                    st.write(job.description or "No description.")
                    if job.requirements:
                        st.markdown("**Requirements**")
                        st.markdown("\n".join(f"- {r}" for r in job.requirements))
                    if st.button("Generate cover letter", key=f"letter_{job.id}"):
                        st.session_state.letters[job.id] = generate_cover_letter(job)
                    if job.id in st.session_state.letters:
                        st.text_area("Cover letter", st.session_state.letters[job.id],
                                     height=360, key=f"letter_text_{job.id}")

# ===== Sources =====
if tab_sources is not None:
    with tab_sources:
        st.caption("Manage where job offers are collected from")

        with st.expander("Add Source"):
            with st.form("add_source", clear_on_submit=True):
                name = st.text_input("Source Name", placeholder="e.g., LinkedIn Tech Jobs")
                source_type = st.selectbox("Source Type", SOURCE_TYPES)
                url = st.text_input("URL / Endpoint", placeholder="https://example.com/jobs/feed")
                if st.form_submit_button("Add Source"):
                    try:
                        st.session_state.sources = add_source(st.session_state.sources, name, source_type, url)
                        st.rerun()
                    except ValueError as e:
                        st.error(str(e))

        if not st.session_state.sources:
            st.info("No sources configured yet.")

        for source in st.session_state.sources:
            with st.container(border=True):
                info_col, toggle_col, sync_col, del_col = st.columns([4, 1, 1, 1])
                with info_col:
                    st.markdown(f"**{source.name}** `{source.type}`")
                    st.caption(f"{source.url} · Last synced {format_last_sync(source.last_sync)}")
                with toggle_col:
                    st.session_state[f"src_on_{source.id}"] = source.enabled
                    st.toggle("Enabled", key=f"src_on_{source.id}", on_change=_toggle_source, args=(source.id,))
                with sync_col:
                    if st.button("Sync Now", key=f"src_sync_{source.id}", disabled=not source.enabled):
                        st.session_state.sources = sync_source(st.session_state.sources, source.id)
                        st.rerun()
                with del_col:
                    if st.button("Delete", key=f"src_del_{source.id}"):
                        st.session_state.sources = delete_source(st.session_state.sources, source.id)
                        st.rerun()

# ===== Filters =====
if tab_filters is not None:
    with tab_filters:
        filters: FilterCriteria = st.session_state.filters
        is_dirty = filters != st.session_state.saved_filters

        top_l, top_r = st.columns([5, 1])
        top_l.caption("Define what jobs should match for you")
        if top_r.button("Save", type="primary" if is_dirty else "secondary",
                        disabled=not is_dirty, use_container_width=True):
            try:
                with _client() as client:
                    client.save_filters(st.session_state.email, filters)
                st.session_state.saved_filters = filters
                st.toast("Filters saved successfully")
                st.rerun()
            except ApiError as e:
                logger.error("Error saving filters: %s", e)
                st.error("Failed to save filters")

        left, right = st.columns(2)
        for i, (field_name, title, description, placeholder) in enumerate(FREE_TEXT_FIELDS):
            with (left if i % 2 == 0 else right):
                with st.container(border=True):
                    st.markdown(f"**{title}**")
                    st.caption(description)
                    with st.form(f"add_{field_name}", clear_on_submit=True, border=False):
                        value = st.text_input(title, placeholder=placeholder, label_visibility="collapsed")
                        if st.form_submit_button("Add"):
                            st.session_state.filters = st.session_state.filters.add(field_name, value)
                            st.rerun()
                    items = getattr(filters, field_name)
                    for idx, item in enumerate(items):
                        item_col, x_col = st.columns([5, 1])
                        item_col.markdown(f'<span class="stack-tag">{html.escape(item)}</span>', unsafe_allow_html=True)
                        if x_col.button("✕", key=f"rm_{field_name}_{idx}", help=f"Remove {item}"):
                            st.session_state.filters = st.session_state.filters.remove(field_name, idx)
                            st.rerun()

        exp_col, type_col = st.columns(2)
        with exp_col:
            with st.container(border=True):
                st.markdown("**Experience Level**")
                st.caption("Preferred seniority levels")
                for level in EXPERIENCE_LEVELS:
                    # Widget state follows filters, which other pages can replace
                    st.session_state[f"exp_{level}"] = level in filters.experience
                    st.checkbox(level, key=f"exp_{level}", on_change=_toggle_filter, args=("experience", level))
        with type_col:
            with st.container(border=True):
                st.markdown("**Job Type**")
                st.caption("Employment types you're interested in")
                for job_type in JOB_TYPES:
                    st.session_state[f"type_{job_type}"] = job_type in filters.job_type
                    st.checkbox(job_type, key=f"type_{job_type}", on_change=_toggle_filter, args=("job_type", job_type))

# ===== My Resume =====
with tab_cv:
    st.caption("Upload your CV to automatically extract filter criteria")

    uploaded = st.file_uploader("Upload CV (PDF, DOCX, TXT, MD, or HTML)",
                                type=["pdf", "docx", "txt", "md", "html", "htm"])
    if uploaded is not None:
        upload_key = f"_parsed_{uploaded.name}_{uploaded.size}"
        if upload_key not in st.session_state:
            try:
                st.session_state.resume_text = parse_resume(uploaded.name, uploaded.read())
                st.session_state[upload_key] = True
            except ValueError as e:
                st.error(str(e))

    resume_text = st.text_area("Or paste your CV content", value=st.session_state.resume_text, height=300)
    st.session_state.resume_text = resume_text

    save_col, analyze_col = st.columns(2)
    with save_col:
        if st.button("Save Resume", type="primary", disabled=not resume_text.strip()):
            try:
                with _client() as client:
                    client.save_resume(st.session_state.email, resume_text)
                st.session_state.resume_required = False
                st.toast("Resume saved.")
                st.rerun()
            except ApiError as e:
                logger.error("Error saving resume: %s", e)
                st.error("Failed to save resume")
    with analyze_col:
        if st.button("Extract Filters from CV", disabled=not resume_text.strip()):
            st.session_state.resume_analysis = analyze_resume(resume_text)

    analysis = st.session_state.resume_analysis
    if analysis is not None:
        with st.container(border=True):
            st.markdown("**Extracted Information**")
            st.markdown("Skills: " + (", ".join(analysis.skills) or "none found"))
            st.markdown(f"Experience level: {analysis.experience or 'unknown'}")
            st.markdown("Locations: " + (", ".join(analysis.locations) or "none found"))
            if st.button("Apply to Filters", disabled=st.session_state.resume_required):
                st.session_state.filters = st.session_state.filters.merge(analysis.to_criteria_update())
                st.success("Filters updated. Review and save them on the Filters tab.")

# ===== Settings =====
with tab_settings:
    account = settings_store.load()
    if not account.email:
        account.email = st.session_state.email or ""

    with st.form("profile"):
        st.markdown("**Profile Information**")
        account.username = st.text_input("Username", value=account.username)
        account.email = st.text_input("Email", value=account.email)
        if st.form_submit_button("Save Profile"):
            settings_store.save(account)
            st.success("Profile updated successfully")

    with st.form("password", clear_on_submit=True):
        st.markdown("**Change Password**")
        st.text_input("Current Password", type="password")
        new_password = st.text_input("New Password", type="password")
        confirm_password = st.text_input("Confirm New Password", type="password")
        if st.form_submit_button("Change Password"):
            try:
                validate_password_change(new_password, confirm_password)
                st.success("Password changed successfully")
            except PasswordChangeError as e:
                st.error(str(e))

    with st.form("preferences"):
        st.markdown("**Notifications & Preferences**")
        account.email_notifications = st.toggle("Email notifications", value=account.email_notifications)
        account.push_notifications = st.toggle("Push notifications", value=account.push_notifications)
        account.weekly_digest = st.toggle("Weekly digest", value=account.weekly_digest)
        lang_codes = list(LANGUAGES)
        account.language = st.selectbox(
            "Language", lang_codes, format_func=LANGUAGES.get,
            index=lang_codes.index(account.language) if account.language in lang_codes else 0,
        )
        account.timezone = st.selectbox(
            "Timezone", TIMEZONES,
            index=TIMEZONES.index(account.timezone) if account.timezone in TIMEZONES else 0,
        )
        if st.form_submit_button("Save Preferences"):
            settings_store.save(account)
            st.success("Preferences saved")

    with st.expander("Local data"):
        exported = settings_store.export()
        if exported:
            st.download_button("Download settings JSON", exported, "evidi_settings.json", "application/json")
        imported = st.file_uploader("Import settings JSON", type=["json"], key="import_settings")
        if imported is not None and settings_store.import_json(imported.read().decode("utf-8")):
            st.success("Imported!")
        if st.button("Delete local settings and cached jobs"):
            settings_store.delete()
            cache.clear()
            st.success("All cleared.")

    with st.expander("Danger Zone"):
        if st.button("Delete Account"):
            try:
                delete_account()
            except AccountDeletionDisabled as e:
                st.error(str(e))
