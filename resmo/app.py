"""
Resmo Streamlit frontend.
No business logic in layout; every state change goes through the WorkflowEngine.
"""

import base64
from typing import List, Optional

import streamlit as st

from resmo.config import ACCEPTED_RESUME_EXTENSIONS, OPENAI_API_KEY, SKILL_CHECK_PASS_MARK
from resmo.errors import ResmoError
from resmo.schemas.analysis import EmailDraft
from resmo.schemas.candidate import Candidate, CandidateStatus
from resmo.schemas.skill_check import UNANSWERED, SkillCheckOutcome, SkillCheckSession
from resmo.services.ai_gateway import AIGateway
from resmo.services.auth_service import Session, UserRole, authenticate
from resmo.services.candidate_store import CandidateStore
from resmo.services.seed_data import seed_candidates
from resmo.services.statistics import (
    experience_histogram,
    filter_by_status,
    fit_score_histogram,
    pipeline_breakdown,
    role_distribution,
    top_skills,
)
from resmo.utils.helpers import run_sync
from resmo.utils.logger import get_logger
from resmo.workflow.engine import WorkflowEngine
from resmo.workflow.status_machine import PIPELINE_ORDER, allowed_targets, is_terminal

logger = get_logger(__name__)

STATUS_BADGE = {
    CandidateStatus.NEW: "🔵",
    CandidateStatus.SKILL_CHECK_PENDING: "🟠",
    CandidateStatus.SKILL_CHECK_COMPLETED: "🟢",
    CandidateStatus.SHORTLISTED: "🟡",
    CandidateStatus.INTERVIEWING: "🟣",
    CandidateStatus.HIRED: "✅",
    CandidateStatus.REJECTED: "🔴",
}


@st.cache_resource
def get_engine() -> WorkflowEngine:
    """One store and engine per server process, shared by all browser sessions."""
    store = CandidateStore(seed_candidates())
    return WorkflowEngine(store, AIGateway())


def _init_state() -> None:
    defaults = {
        "session": None,
        "selected_id": None,
        "email_draft": None,  # (candidate_id, CandidateStatus, EmailDraft)
        "skill_session": None,
        "skill_outcome": None,
        "flash": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def _status_label(status: CandidateStatus) -> str:
    return f"{STATUS_BADGE.get(status, '')} {status.value}"


def _show_flash() -> None:
    message = st.session_state.get("flash")
    if message:
        st.toast(message)
        st.session_state["flash"] = None


# ---------------------------------------------------------------- login
def render_login(engine: WorkflowEngine) -> None:
    st.title("Resmo")
    st.caption("AI-assisted recruiting workflow")
    recruiter_tab, candidate_tab = st.tabs(["Recruiter Login", "Candidate Login"])

    with recruiter_tab:
        with st.form("recruiter_login"):
            st.text_input("Username", value="recruiter", disabled=True)
            password = st.text_input("Password", type="password")
            if st.form_submit_button("Sign In", type="primary"):
                _login(engine, UserRole.RECRUITER, password)

    with candidate_tab:
        candidates = engine.store.list_candidates()
        with st.form("candidate_login"):
            email = st.selectbox(
                "Select Your Application",
                options=[c.email for c in candidates],
                format_func=lambda e: next((f"{c.name} ({c.role})" for c in candidates if c.email == e), e),
            )
            password = st.text_input("Password", type="password")
            if st.form_submit_button("Sign In", type="primary"):
                _login(engine, UserRole.CANDIDATE, password, email)


def _login(engine: WorkflowEngine, role: UserRole, password: str, email: Optional[str] = None) -> None:
    try:
        st.session_state["session"] = authenticate(engine.store, role, password, email)
    except ResmoError as e:
        st.error(str(e))
        return
    st.rerun()


def render_header() -> None:
    session: Session = st.session_state["session"]
    col_a, col_b = st.columns([5, 1])
    with col_a:
        st.title("Resmo")
        st.caption(f"Signed in as **{session.identifier}**")
    with col_b:
        if st.button("Log out", key="logout"):
            for key in ("session", "selected_id", "email_draft", "skill_session", "skill_outcome"):
                st.session_state[key] = None
            st.rerun()
    if not OPENAI_API_KEY:
        st.warning("OPENAI_API_KEY is not set. AI features will fail until it is added to your .env file.")


# ---------------------------------------------------------------- recruiter
def render_statistics(candidates: List[Candidate]) -> None:
    st.subheader("Pipeline Overview")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Candidates", len(candidates))
    with col2:
        st.metric("Analyzed", sum(1 for c in candidates if c.analysis is not None))
    with col3:
        st.metric("Hired", sum(1 for c in candidates if c.status == CandidateStatus.HIRED))

    left, right = st.columns(2)
    with left:
        st.markdown("**Status breakdown**")
        for row in pipeline_breakdown(candidates):
            st.progress(row.percentage / 100, text=f"{_status_label(row.status)} · {row.count}")
        st.markdown("**Fit score distribution**")
        for row in fit_score_histogram(candidates):
            st.progress(row.percentage / 100, text=f"{row.label} · {row.count}")
    with right:
        st.markdown("**Roles**")
        for row in role_distribution(candidates):
            st.progress(row.percentage / 100, text=f"{row.role} · {row.count} ({row.percentage:.0f}%)")
        st.markdown("**Experience**")
        for row in experience_histogram(candidates):
            st.progress(row.percentage / 100, text=f"{row.label} · {row.count}")
        skills = top_skills(candidates, 5)
        if skills:
            with st.expander("Top 5 skills (frequency)"):
                for skill, count in skills:
                    st.markdown(f"- **{skill}** ({count})")


def _offers_skill_check(candidate: Candidate) -> bool:
    if candidate.analysis is None:
        return False
    if candidate.status == CandidateStatus.NEW:
        return True
    return (
        candidate.recommended_action == "Request Skill Check"
        and not is_terminal(candidate.status)
        and candidate.status not in (CandidateStatus.SKILL_CHECK_PENDING, CandidateStatus.SKILL_CHECK_COMPLETED)
    )


def _analyze(engine: WorkflowEngine, candidate: Candidate) -> None:
    with st.spinner(f"Analyzing {candidate.name}…"):
        try:
            run_sync(engine.analyze_candidate(candidate.id))
        except ResmoError as e:
            logger.warning("Analysis failed for %s: %s", candidate.id, e)
            st.session_state["flash"] = f"Analysis failed for {candidate.name}: {e}"
        else:
            st.session_state["flash"] = f"Analysis complete for {candidate.name}!"
    st.rerun()


def _send_skill_check(engine: WorkflowEngine, candidate: Candidate) -> None:
    try:
        engine.send_skill_check(candidate.id)
    except ResmoError as e:
        st.session_state["flash"] = str(e)
    else:
        st.session_state["flash"] = f"Skill check sent to {candidate.name}."
    st.rerun()


def render_candidate_list(engine: WorkflowEngine, candidates: List[Candidate]) -> None:
    st.subheader("Candidates")
    selected_statuses = st.multiselect(
        "Filter by Status",
        options=list(CandidateStatus),
        default=[],
        format_func=lambda s: s.value,
        key="status_filter",
        help="Leave empty to show every candidate.",
    )
    shown = filter_by_status(candidates, selected_statuses)
    if not shown:
        st.info("No candidates match the selected statuses.")
    for candidate in shown:
        with st.container(border=True):
            col_a, col_b, col_c, col_d = st.columns([3, 2, 1, 2])
            with col_a:
                st.markdown(f"**{candidate.name}**")
                st.caption(f"{candidate.role} · applied {candidate.applied_date}")
            with col_b:
                st.markdown(_status_label(candidate.status))
            with col_c:
                if candidate.analysis:
                    st.markdown(f"Fit **{candidate.analysis.fit_score}/10**")
            with col_d:
                busy = engine.is_busy(candidate.id)
                if st.button("View", key=f"view_{candidate.id}"):
                    st.session_state["selected_id"] = candidate.id
                    st.session_state["email_draft"] = None
                if candidate.has_resume and candidate.analysis is None:
                    if st.button("Analyze", key=f"analyze_{candidate.id}", disabled=busy, type="primary"):
                        _analyze(engine, candidate)
                if _offers_skill_check(candidate):
                    if st.button("Send Skill Check", key=f"skill_{candidate.id}", disabled=busy):
                        _send_skill_check(engine, candidate)


def render_add_candidate(engine: WorkflowEngine) -> None:
    with st.expander("Add candidate"):
        with st.form("add_candidate", clear_on_submit=True):
            name = st.text_input("Name")
            email = st.text_input("Email")
            role = st.text_input("Role")
            if st.form_submit_button("Add"):
                if not (name.strip() and email.strip() and role.strip()):
                    st.error("Name, email and role are required.")
                    return
                try:
                    engine.register_candidate(name, email, role)
                except ValueError as e:
                    st.error(str(e))
                    return
                st.session_state["flash"] = f"{name} added."
                st.rerun()


def render_candidate_detail(engine: WorkflowEngine, candidate: Candidate) -> None:
    st.divider()
    col_a, col_b = st.columns([5, 1])
    with col_a:
        st.header(candidate.name)
        st.caption(f"{candidate.role} · {candidate.email}")
    with col_b:
        if st.button("Close", key="close_detail"):
            st.session_state["selected_id"] = None
            st.session_state["email_draft"] = None
            st.rerun()

    left, right = st.columns([1, 2])
    with left:
        st.markdown(f"**Status:** {_status_label(candidate.status)}")
        targets = allowed_targets(candidate.status)
        if targets:
            new_status = st.selectbox(
                "Change status",
                options=targets,
                format_func=lambda s: s.value,
                key=f"status_select_{candidate.id}",
            )
            if st.button("Draft status email", key="draft_email"):
                with st.spinner("Generating AI email draft…"):
                    try:
                        draft = run_sync(engine.draft_status_email(candidate.id, new_status))
                    except ResmoError as e:
                        st.error(str(e))
                    else:
                        st.session_state["email_draft"] = (candidate.id, new_status, draft)
        else:
            st.caption("This status is final.")
        if candidate.recommended_action:
            st.info(f"**Recommended Action:** {candidate.recommended_action}\n\n*\"{candidate.action_justification}\"*")

    with right:
        tab_analysis, tab_anon, tab_original, tab_audit = st.tabs(
            ["AI Analysis", "Anonymized Resume", "Original Resume", "Audit Log"]
        )
        with tab_analysis:
            _render_analysis(candidate)
        with tab_anon:
            st.text(candidate.anonymized_resume_text or "Not available.")
        with tab_original:
            st.text(candidate.resume_text or "Not available.")
            for number, image in enumerate(candidate.resume_images, start=1):
                st.image(base64.b64decode(image.data), caption=f"Page {number}")
        with tab_audit:
            for entry in candidate.audit_log:
                st.markdown(f"`{entry.timestamp}` **{entry.action}**: {entry.details}")

    pending = st.session_state.get("email_draft")
    if pending and pending[0] == candidate.id:
        render_email_dialog(engine, candidate, pending[1], pending[2])


def _render_analysis(candidate: Candidate) -> None:
    analysis = candidate.analysis
    if analysis is None:
        st.write("No AI analysis available.")
        return
    st.markdown("**Summary**")
    st.write(analysis.summary)
    col1, col2 = st.columns(2)
    with col1:
        st.metric("AI Fit Score", f"{analysis.fit_score}/10")
    with col2:
        if candidate.skill_check_score is not None:
            passed = candidate.skill_check_score >= SKILL_CHECK_PASS_MARK
            st.metric("Skill Check Score", f"{candidate.skill_check_score}%", delta="pass" if passed else "below pass mark",
                      delta_color="normal" if passed else "inverse")
    if analysis.skills:
        st.markdown(" ".join(f"`{s}`" for s in analysis.skills))
    st.caption(f"Experience: {analysis.experience_years} years · Education: {', '.join(analysis.education) or '—'}")
    if candidate.skill_check_details:
        details = candidate.skill_check_details
        with st.expander("Skill check breakdown"):
            st.write(details.summary)
            if details.strengths:
                st.markdown("**Strengths:** " + ", ".join(details.strengths))
            if details.areas_for_improvement:
                st.markdown("**Areas for improvement:** " + ", ".join(details.areas_for_improvement))
    if analysis.work_history:
        with st.expander("Work history"):
            for job in analysis.work_history:
                st.markdown(f"**{job.title}**, {job.company} ({job.start_date} – {job.end_date})")
                if job.industry:
                    st.caption(job.industry)
                st.write(job.description)


def render_email_dialog(
    engine: WorkflowEngine,
    candidate: Candidate,
    new_status: CandidateStatus,
    draft: EmailDraft,
) -> None:
    st.subheader("Send Status Update to Candidate")
    st.caption(f"An email will be sent to {candidate.email} and the status set to **{new_status.value}**.")
    if not draft.generated:
        st.caption("AI draft unavailable; using the standard template.")
    subject = st.text_input("Subject", value=draft.subject, key=f"subject_{candidate.id}_{new_status.name}")
    body = st.text_area("Body", value=draft.body, height=240, key=f"body_{candidate.id}_{new_status.name}")
    col_a, col_b = st.columns(2)
    with col_a:
        if st.button("Cancel", key="cancel_email"):
            st.session_state["email_draft"] = None
            st.rerun()
    with col_b:
        if st.button("Send Email", type="primary", key="send_email", disabled=engine.is_busy(candidate.id)):
            edited = EmailDraft(subject=subject, body=body, generated=draft.generated)
            try:
                engine.confirm_status_change(candidate.id, new_status, edited)
            except ResmoError as e:
                st.error(str(e))
                return
            st.session_state["email_draft"] = None
            st.session_state["flash"] = f"Email sent to {candidate.name}!"
            st.rerun()


def render_recruiter_dashboard(engine: WorkflowEngine) -> None:
    candidates = engine.store.list_candidates()
    render_statistics(candidates)
    st.divider()
    render_add_candidate(engine)
    render_candidate_list(engine, candidates)
    selected_id = st.session_state.get("selected_id")
    if selected_id and selected_id in engine.store:
        render_candidate_detail(engine, engine.store.get(selected_id))


# ---------------------------------------------------------------- candidate
def render_status_tracker(candidate: Candidate) -> None:
    st.subheader("Your Application Status")
    if candidate.status == CandidateStatus.REJECTED:
        st.error("Rejected. Unfortunately, we are not moving forward at this time.")
        return
    current = PIPELINE_ORDER.index(candidate.status)
    cols = st.columns(len(PIPELINE_ORDER))
    for index, (col, status) in enumerate(zip(cols, PIPELINE_ORDER)):
        with col:
            if index < current or (index == current and status == CandidateStatus.HIRED):
                st.markdown(f"✅ **{status.value}**")
            elif index == current:
                st.markdown(f"🔷 **{status.value}**")
            else:
                st.markdown(f"⚪ {status.value}")


def render_resume_upload(engine: WorkflowEngine, candidate: Candidate) -> None:
    st.subheader("Your Resume")
    if candidate.has_resume:
        st.success("Resume on file. You can upload a new version below.")
    uploaded = st.file_uploader(
        "Upload your resume",
        type=[ext.lstrip(".") for ext in ACCEPTED_RESUME_EXTENSIONS],
        key=f"resume_{candidate.id}",
    )
    if uploaded is not None and st.button("Submit resume", type="primary", disabled=engine.is_busy(candidate.id)):
        with st.spinner("Reading your resume…"):
            try:
                run_sync(engine.upload_resume(candidate.id, uploaded.getvalue(), uploaded.name))
            except ResmoError as e:
                st.error(f"Upload failed: {e}")
                return
        st.session_state["flash"] = "Resume uploaded."
        st.rerun()


def render_skill_check(engine: WorkflowEngine, candidate: Candidate) -> None:
    outcome: Optional[SkillCheckOutcome] = st.session_state.get("skill_outcome")
    if outcome is not None:
        render_skill_check_results(outcome)
        return
    if candidate.status != CandidateStatus.SKILL_CHECK_PENDING:
        return

    st.subheader("Skill Check")
    session: Optional[SkillCheckSession] = st.session_state.get("skill_session")
    if session is None or session.candidate_id != candidate.id:
        st.write(f"You're applying for the {candidate.role} position. Please complete this short skill check to proceed.")
        if st.button("Start Skill Check", type="primary"):
            with st.spinner("Preparing your skill check…"):
                try:
                    st.session_state["skill_session"] = run_sync(engine.start_skill_check(candidate.id))
                except ResmoError as e:
                    st.error(f"Could not start the skill check: {e}")
                    return
            st.rerun()
        return

    with st.form("skill_check"):
        answers: List[int] = []
        for number, question in enumerate(session.questions, start=1):
            choice = st.radio(
                f"{number}. {question.question}",
                options=list(range(len(question.options))),
                format_func=lambda i, q=question: q.options[i],
                index=None,
                key=f"q_{number}",
            )
            answers.append(UNANSWERED if choice is None else int(choice))
        if st.form_submit_button("Submit Test", type="primary"):
            with st.spinner("Scoring and generating feedback…"):
                try:
                    st.session_state["skill_outcome"] = run_sync(engine.submit_skill_check(session, answers))
                except ResmoError as e:
                    st.error(f"Submission failed: {e}")
                    return
            st.session_state["skill_session"] = None
            st.rerun()


def render_skill_check_results(outcome: SkillCheckOutcome) -> None:
    st.subheader("Test Complete!")
    st.metric("Your score", f"{outcome.score}%", delta=f"{outcome.correct}/{outcome.total} correct")
    if outcome.learning_path_error:
        st.info(outcome.learning_path_error)
    if outcome.learning_paths:
        st.markdown("### Your AI-Generated Learning Path")
        for path in outcome.learning_paths:
            with st.expander(path.skill, expanded=True):
                for res in path.resources:
                    st.markdown(f"- [{res.title}]({res.url}) `{res.type}`")
    if st.button("Return to Portal Home"):
        st.session_state["skill_outcome"] = None
        st.rerun()


def render_candidate_portal(engine: WorkflowEngine) -> None:
    session: Session = st.session_state["session"]
    if not session.candidate_id or session.candidate_id not in engine.store:
        st.error("Error: Could not find candidate data.")
        return
    candidate = engine.store.get(session.candidate_id)
    st.markdown(f"### Welcome, {candidate.name}!")
    render_status_tracker(candidate)
    st.divider()
    render_skill_check(engine, candidate)
    render_resume_upload(engine, candidate)


def render_layout() -> None:
    """Streamlit page layout; state changes go through the WorkflowEngine."""
    st.set_page_config(page_title="Resmo", layout="wide")
    _init_state()
    engine = get_engine()
    _show_flash()

    session: Optional[Session] = st.session_state.get("session")
    if session is None:
        render_login(engine)
        return
    render_header()
    st.divider()
    if session.role == UserRole.RECRUITER:
        render_recruiter_dashboard(engine)
    else:
        render_candidate_portal(engine)


if __name__ == "__main__":
    render_layout()
