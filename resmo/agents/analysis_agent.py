"""Analysis Agent: structured resume analysis, anonymization and page transcription."""

from typing import Optional, Sequence

from resmo.config import FIT_SCORE_RANGE, MAX_ANALYSIS_SKILLS, RESUME_MAX_CHARS
from resmo.schemas.analysis import ResumeAnalysisResult
from resmo.schemas.candidate import ResumeImage
from resmo.services.ai_gateway import AIGateway
from resmo.services.resume_ingestion import IMAGE_TRANSCRIPTION_PROMPT
from resmo.utils.helpers import truncate
from resmo.utils.logger import get_logger

logger = get_logger(__name__)

ANALYSIS_PROMPT = """Analyze the following resume for a "{role}" position.
{resume_block}
Based on the resume and job role, provide:
1. summary: a concise summary of the candidate's profile.
2. skills: a list of key skills (maximum {max_skills}).
3. experience_years: total years of relevant experience, as a whole number.
4. education: a summary of their education, one entry per degree or certificate.
5. fit_score: a whole number from 1 to 10, where 10 is a perfect fit for the role.
6. work_history: each position with company, title, start_date, end_date ("Present" if current), description and industry.
7. recommended_action: the next step, e.g. "Request Skill Check", "Shortlist for Interview", "Proceed to final interview", "Reject".
8. action_justification: a brief justification for the recommended action."""

RESUME_TEXT_BLOCK = """
Resume Text:
---
{resume_text}
---
"""

RESUME_IMAGES_BLOCK = """
The resume is attached as {count} page image(s), in order.
"""

ANONYMIZE_PROMPT = """Anonymize the following resume text by removing all personally identifiable information (PII) such as name, email, phone number, address, and links to personal profiles (like LinkedIn, GitHub, portfolio). Replace the name with "[Candidate]". Keep company and school names.

Original Resume:
---
{resume_text}
---

Return only the anonymized text."""


async def analyze_resume(
    gateway: AIGateway,
    role: str,
    resume_text: Optional[str] = None,
    images: Optional[Sequence[ResumeImage]] = None,
) -> ResumeAnalysisResult:
    """Structured analysis; page images are preferred over text when both are given."""
    if images:
        block = RESUME_IMAGES_BLOCK.format(count=len(images))
    else:
        block = RESUME_TEXT_BLOCK.format(resume_text=truncate(resume_text or "", RESUME_MAX_CHARS))
    prompt = ANALYSIS_PROMPT.format(role=role, resume_block=block, max_skills=MAX_ANALYSIS_SKILLS)
    result = await gateway.generate_structured(prompt, ResumeAnalysisResult, images=images or None)
    low, high = FIT_SCORE_RANGE
    if not low <= result.fit_score <= high:
        # displayed as returned; only flagged here
        logger.warning("Fit score %s outside %s-%s for role %s", result.fit_score, low, high, role)
    if len(result.skills) > MAX_ANALYSIS_SKILLS:
        result = result.model_copy(update={"skills": result.skills[:MAX_ANALYSIS_SKILLS]})
    return result


async def anonymize_resume(gateway: AIGateway, resume_text: str) -> str:
    prompt = ANONYMIZE_PROMPT.format(resume_text=truncate(resume_text, RESUME_MAX_CHARS))
    return await gateway.generate_text(prompt)


async def transcribe_resume_images(gateway: AIGateway, images: Sequence[ResumeImage]) -> str:
    """Backfill a text form for image-only resumes (needed for anonymization)."""
    return await gateway.generate_text(IMAGE_TRANSCRIPTION_PROMPT, images=images)
