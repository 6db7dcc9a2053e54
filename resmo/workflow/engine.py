"""
Workflow Engine: the recruiter and candidate operations.

Each composite operation reads the current record from the store, runs its
AI steps, and writes the result back with a single ``CandidateStore.replace``.
Failures before that write leave the stored record untouched.
"""

import threading
import uuid
from contextlib import contextmanager
from datetime import date
from typing import Callable, Iterator, Optional, Sequence, Set

from resmo.agents.analysis_agent import analyze_resume, anonymize_resume, transcribe_resume_images
from resmo.agents.email_agent import draft_status_email
from resmo.agents.skill_check_agent import (
    find_weak_skills,
    generate_skill_check,
    score_answers,
    suggest_learning_path,
)
from resmo.config import DEFAULT_SKILL_CHECK_SKILLS, SKILL_CHECK_OPTION_COUNT
from resmo.errors import InvalidTransition, MissingResumeData, OperationInProgress, ResmoError
from resmo.schemas.analysis import EmailDraft
from resmo.schemas.candidate import (
    Candidate,
    CandidateStatus,
    ImageResume,
    SkillCheckDetails,
)
from resmo.schemas.skill_check import UNANSWERED, SkillCheckOutcome, SkillCheckSession
from resmo.services.ai_gateway import AIGateway
from resmo.services.candidate_store import CandidateStore
from resmo.services.resume_ingestion import ingest_resume
from resmo.utils.logger import get_logger
from resmo.workflow.status_machine import audit_entry, ensure_transition, transition

logger = get_logger(__name__)

EmailSender = Callable[[Candidate, EmailDraft], None]


def log_email_sender(candidate: Candidate, draft: EmailDraft) -> None:
    """Default sender: there is no mail server, the email is only logged."""
    logger.info("Email sent to %s | subject=%s", candidate.email, draft.subject)


class WorkflowEngine:
    """Operations over an injected CandidateStore and AIGateway."""

    def __init__(
        self,
        store: CandidateStore,
        gateway: AIGateway,
        email_sender: Optional[EmailSender] = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self._send_email = email_sender or log_email_sender
        self._busy: Set[str] = set()
        self._busy_lock = threading.Lock()

    # ---------- Mutual exclusion ----------
    @contextmanager
    def _exclusive(self, candidate_id: str) -> Iterator[None]:
        """One composite operation per candidate at a time."""
        with self._busy_lock:
            if candidate_id in self._busy:
                raise OperationInProgress(f"Another operation is already running for '{candidate_id}'.")
            self._busy.add(candidate_id)
        try:
            yield
        finally:
            with self._busy_lock:
                self._busy.discard(candidate_id)

    def is_busy(self, candidate_id: str) -> bool:
        with self._busy_lock:
            return candidate_id in self._busy

    # ---------- Candidates ----------
    def register_candidate(self, name: str, email: str, role: str) -> Candidate:
        if self.store.find_by_email(email) is not None:
            raise ValueError(f"A candidate with email '{email}' already exists")
        candidate = Candidate(
            id=f"cand-{uuid.uuid4().hex[:8]}",
            name=name.strip(),
            email=email.strip(),
            role=role.strip(),
            applied_date=date.today().isoformat(),
            audit_log=[audit_entry("Initial Entry", "Candidate added, awaiting resume.")],
        )
        return self.store.add(candidate)

    # ---------- Resume ----------
    async def upload_resume(self, candidate_id: str, file_bytes: bytes, filename: str) -> Candidate:
        """
        Ingest the file and store it on the candidate. Image-only resumes get
        their text transcribed by the model first; if that fails nothing is stored.
        """
        with self._exclusive(candidate_id):
            self.store.get(candidate_id)
            resume = ingest_resume(file_bytes, filename)
            if isinstance(resume, ImageResume):
                text = await transcribe_resume_images(self.gateway, resume.images)
                resume = resume.model_copy(update={"text": text})
            current = self.store.get(candidate_id)
            updated = current.with_audit(
                audit_entry("Resume Uploaded", f"Candidate uploaded their resume ({filename})."),
                resume=resume,
            )
            logger.info("Resume stored: id=%s kind=%s", candidate_id, resume.kind)
            return self.store.replace(updated)

    # ---------- Analysis ----------
    async def analyze_candidate(self, candidate_id: str) -> Candidate:
        """Structured analysis then anonymization, written together or not at all."""
        with self._exclusive(candidate_id):
            candidate = self.store.get(candidate_id)
            if not candidate.has_resume:
                raise MissingResumeData("Cannot analyze: Resume data is missing.")
            if not candidate.resume_text:
                # anonymization works on text only
                raise MissingResumeData("Cannot analyze: the resume has no extracted text.")
            images = candidate.resume_images
            result = await analyze_resume(
                self.gateway,
                candidate.role,
                resume_text=candidate.resume_text,
                images=images or None,
            )
            anonymized = await anonymize_resume(self.gateway, candidate.resume_text)
            current = self.store.get(candidate_id)
            updated = current.with_audit(
                audit_entry("Resume Analyzed", "AI analysis completed by recruiter."),
                analysis=result.to_analysis(),
                anonymized_resume_text=anonymized,
                recommended_action=result.recommended_action,
                action_justification=result.action_justification,
            )
            logger.info("Analysis stored: id=%s fit_score=%s", candidate_id, result.fit_score)
            return self.store.replace(updated)

    # ---------- Skill check ----------
    def send_skill_check(self, candidate_id: str) -> Candidate:
        with self._exclusive(candidate_id):
            candidate = self.store.get(candidate_id)
            updated = transition(
                candidate,
                CandidateStatus.SKILL_CHECK_PENDING,
                "Skill Check Sent",
                "Recruiter initiated skill check.",
            )
            logger.info("Skill check sent: id=%s", candidate_id)
            return self.store.replace(updated)

    async def start_skill_check(self, candidate_id: str) -> SkillCheckSession:
        """Generate the quiz. Nothing is stored until the candidate submits."""
        candidate = self.store.get(candidate_id)
        if candidate.status != CandidateStatus.SKILL_CHECK_PENDING:
            raise InvalidTransition(f"No skill check is pending for {candidate.name}.")
        skills = list(candidate.analysis.skills) if candidate.analysis and candidate.analysis.skills else []
        quiz_skills = skills or list(DEFAULT_SKILL_CHECK_SKILLS)
        questions = await generate_skill_check(self.gateway, candidate.role, quiz_skills)
        logger.info("Skill check generated: id=%s questions=%s", candidate_id, len(questions))
        return SkillCheckSession(
            candidate_id=candidate_id,
            role=candidate.role,
            skills=skills,
            questions=questions,
        )

    async def submit_skill_check(self, session: SkillCheckSession, answers: Sequence[int]) -> SkillCheckOutcome:
        """
        Score the answers and record the result immediately; the learning path
        for weak skills is fetched afterwards and its failure is only reported.
        """
        for answer in answers:
            if answer != UNANSWERED and not 0 <= answer < SKILL_CHECK_OPTION_COUNT:
                raise ValueError(f"Answer index {answer} out of range")
        with self._exclusive(session.candidate_id):
            candidate = self.store.get(session.candidate_id)
            correct, score = score_answers(session.questions, answers)
            weak = find_weak_skills(session.questions, answers, session.skills)
            details = SkillCheckDetails(
                summary=f"Answered {correct} of {len(session.questions)} questions correctly.",
                strengths=[s for s in session.skills if s not in weak],
                areas_for_improvement=weak,
            )
            updated = transition(
                candidate,
                CandidateStatus.SKILL_CHECK_COMPLETED,
                "Skill Check Completed",
                f"Candidate scored {score}%",
                by_candidate=True,
                skill_check_score=score,
                skill_check_details=details,
            )
            updated = self.store.replace(updated)
            logger.info("Skill check completed: id=%s score=%s weak=%s", session.candidate_id, score, weak)

            paths = []
            path_error = None
            if weak:
                try:
                    paths = await suggest_learning_path(self.gateway, session.role, weak)
                except ResmoError as e:
                    logger.warning("Learning path failed for %s: %s", session.candidate_id, e)
                    path_error = "We could not generate a learning path right now."
            return SkillCheckOutcome(
                score=score,
                correct=correct,
                total=len(session.questions),
                weak_skills=weak,
                learning_paths=paths,
                learning_path_error=path_error,
                candidate=updated,
            )

    # ---------- Status change + notification ----------
    async def draft_status_email(self, candidate_id: str, new_status: CandidateStatus) -> EmailDraft:
        """Validate the move and draft the email; the record is not touched."""
        candidate = self.store.get(candidate_id)
        ensure_transition(candidate.status, new_status)
        return await draft_status_email(self.gateway, candidate.name, candidate.role, new_status)

    def confirm_status_change(self, candidate_id: str, new_status: CandidateStatus, draft: EmailDraft) -> Candidate:
        """Explicit send: store the new status with both log entries, then send the email."""
        with self._exclusive(candidate_id):
            candidate = self.store.get(candidate_id)
            updated = transition(
                candidate,
                new_status,
                "Status Changed",
                f"Status updated to {new_status.value}",
            )
            updated = updated.with_audit(
                audit_entry("Email Sent", f"Status update email sent to candidate: {draft.subject}"),
            )
            updated = self.store.replace(updated)
            self._send_email(updated, draft)
            return updated
