"""Email Agent: draft status-update emails, falling back to a fixed template."""

from resmo.config import EMAIL_SIGNATURE
from resmo.errors import ResmoError
from resmo.schemas.analysis import EmailDraft
from resmo.schemas.candidate import CandidateStatus
from resmo.services.ai_gateway import AIGateway
from resmo.utils.logger import get_logger

logger = get_logger(__name__)

STATUS_EMAIL_PROMPT = """Write a short, professional email to a job applicant about a change in their application status.

Candidate name: {name}
Role applied for: {role}
New status: {status}

Be warm and clear. If the status is "Rejected", be respectful and encouraging. If it is "Skill Check Pending", invite them to log in to the candidate portal to take the skill check.
Sign off as "{signature}".
Provide a subject line and a plain-text body."""


def fallback_email(name: str, role: str, status: CandidateStatus) -> EmailDraft:
    return EmailDraft(
        subject=f"Update on your application for {role}",
        body=(
            f"Hi {name},\n\n"
            f"This is an update regarding your application. Your new status is: {status.value}.\n\n"
            f"Best,\n{EMAIL_SIGNATURE}"
        ),
        generated=False,
    )


async def draft_status_email(gateway: AIGateway, name: str, role: str, status: CandidateStatus) -> EmailDraft:
    """Never raises for gateway failures: the fixed template is returned instead."""
    prompt = STATUS_EMAIL_PROMPT.format(name=name, role=role, status=status.value, signature=EMAIL_SIGNATURE)
    try:
        draft = await gateway.generate_structured(prompt, EmailDraft)
    except ResmoError as e:
        logger.warning("Email draft generation failed, using template: %s", e)
        return fallback_email(name, role, status)
    if not draft.subject.strip() or not draft.body.strip():
        logger.warning("Email draft came back blank, using template")
        return fallback_email(name, role, status)
    return draft.model_copy(update={"generated": True})
