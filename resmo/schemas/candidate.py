"""Candidate record and its nested models."""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class CandidateStatus(str, Enum):
    """Lifecycle status; values are the labels shown in the dashboard."""

    NEW = "New"
    SKILL_CHECK_PENDING = "Skill Check Pending"
    SKILL_CHECK_COMPLETED = "Skill Check Completed"
    SHORTLISTED = "Shortlisted"
    INTERVIEWING = "Interviewing"
    HIRED = "Hired"
    REJECTED = "Rejected"


class AuditLogEntry(BaseModel):
    """One append-only audit event."""

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(..., description="ISO-8601 UTC timestamp")
    action: str = Field(..., description="Short action tag, e.g. 'Resume Analyzed'")
    details: str = Field(default="", description="Free-text details")


class WorkHistoryEntry(BaseModel):
    """One position in the candidate's work history."""

    company: str = Field(default="", description="Employer name")
    title: str = Field(default="", description="Job title")
    start_date: str = Field(default="", description="Free-form start date, e.g. '2020-01'")
    end_date: str = Field(default="", description="Free-form end date or 'Present'")
    description: str = Field(default="", description="What the candidate did")
    industry: Optional[str] = Field(default=None, description="Industry tag, e.g. 'Tech'")


class CandidateAnalysis(BaseModel):
    """AI-derived profile of a candidate against their target role."""

    summary: str = Field(..., description="Concise summary of the candidate's profile")
    skills: List[str] = Field(default_factory=list, description="Key skills (maximum 8)")
    experience_years: int = Field(..., description="Total years of relevant experience")
    education: List[str] = Field(default_factory=list, description="Education summary entries")
    fit_score: int = Field(..., description="Fit score from 1 to 10")
    work_history: List[WorkHistoryEntry] = Field(default_factory=list, description="Positions, most recent first")


class SkillCheckDetails(BaseModel):
    """Breakdown recorded when a skill check is completed."""

    summary: str = Field(default="", description="One-line result summary")
    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)


class ResumeImage(BaseModel):
    """One rendered resume page."""

    mime_type: str = Field(default="image/png")
    data: str = Field(..., description="Base64-encoded image bytes")


class TextResume(BaseModel):
    """Resume available as plain text (.txt / .docx uploads, seed data)."""

    kind: Literal["text"] = "text"
    text: str


class ImageResume(BaseModel):
    """Resume available as page images (.pdf uploads); ``text`` is the AI transcription."""

    kind: Literal["images"] = "images"
    images: List[ResumeImage]
    text: str = ""


Resume = Annotated[Union[TextResume, ImageResume], Field(discriminator="kind")]


class Candidate(BaseModel):
    """
    A candidate record. Frozen: every change is a new record that replaces
    the stored one by id (see CandidateStore.replace).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    role: str
    status: CandidateStatus = CandidateStatus.NEW
    applied_date: str
    analysis: Optional[CandidateAnalysis] = None
    resume: Optional[Resume] = None
    anonymized_resume_text: Optional[str] = None
    recommended_action: Optional[str] = None
    action_justification: Optional[str] = None
    skill_check_score: Optional[int] = None
    skill_check_details: Optional[SkillCheckDetails] = None
    audit_log: Tuple[AuditLogEntry, ...] = Field(..., min_length=1)  # append-only, see CandidateStore.replace

    @property
    def resume_text(self) -> Optional[str]:
        """Text form of the resume, whichever variant holds it."""
        if self.resume is None:
            return None
        return self.resume.text or None

    @property
    def resume_images(self) -> List[ResumeImage]:
        if isinstance(self.resume, ImageResume):
            return list(self.resume.images)
        return []

    @property
    def has_resume(self) -> bool:
        return bool(self.resume_text or self.resume_images)

    def with_audit(self, *entries: AuditLogEntry, **updates) -> "Candidate":
        """New record with ``updates`` applied and ``entries`` appended to the audit log."""
        updates["audit_log"] = (*self.audit_log, *entries)
        return self.model_copy(update=updates)
