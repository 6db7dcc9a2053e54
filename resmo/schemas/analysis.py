"""Structured model responses for resume analysis and status emails."""

import math
from typing import List

from pydantic import BaseModel, Field, field_validator

from resmo.schemas.candidate import CandidateAnalysis, WorkHistoryEntry


class ResumeAnalysisResult(BaseModel):
    """Structured analysis returned by the model for one resume."""

    summary: str = Field(..., description="Concise summary of the candidate's profile")
    skills: List[str] = Field(default_factory=list, description="Key skills (maximum 8)")
    experience_years: int = Field(..., description="Total years of relevant experience")
    education: List[str] = Field(default_factory=list, description="Summary of their education")
    fit_score: int = Field(..., description="Fit score from 1 to 10, 10 being a perfect fit")
    work_history: List[WorkHistoryEntry] = Field(default_factory=list, description="Work history, most recent first")
    recommended_action: str = Field(..., description="Recommended next action for the recruiter")
    action_justification: str = Field(..., description="Brief justification for the recommendation")

    @field_validator("experience_years", "fit_score", mode="before")
    @classmethod
    def _round_numbers(cls, value):
        # the model sometimes answers 4.5 or "7"; halves round up, like the skill-check score
        if isinstance(value, str) and value.strip():
            try:
                value = float(value.strip())
            except ValueError:
                return value
        if isinstance(value, float):
            return math.floor(value + 0.5)
        return value

    def to_analysis(self) -> CandidateAnalysis:
        return CandidateAnalysis(
            summary=self.summary,
            skills=list(self.skills),
            experience_years=self.experience_years,
            education=list(self.education),
            fit_score=self.fit_score,
            work_history=list(self.work_history),
        )


class EmailDraft(BaseModel):
    """A status-update email, editable by the recruiter before sending."""

    subject: str = Field(..., description="Email subject line")
    body: str = Field(..., description="Plain-text email body")
    generated: bool = Field(default=True, description="False when the fixed fallback template was used")
