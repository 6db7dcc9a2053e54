"""Skill check quiz, learning path and scoring outcome schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from resmo.config import SKILL_CHECK_OPTION_COUNT
from resmo.schemas.candidate import Candidate

UNANSWERED = -1


class SkillQuestion(BaseModel):
    """A multiple-choice question with exactly four options."""

    question: str = Field(..., description="The question text")
    options: List[str] = Field(..., description="Exactly 4 possible answers")
    correct_answer_index: int = Field(..., description="0-based index of the correct option")

    @field_validator("options")
    @classmethod
    def _four_options(cls, value: List[str]) -> List[str]:
        if len(value) != SKILL_CHECK_OPTION_COUNT:
            raise ValueError(f"expected {SKILL_CHECK_OPTION_COUNT} options, got {len(value)}")
        return value

    @model_validator(mode="after")
    def _index_in_range(self) -> "SkillQuestion":
        if not 0 <= self.correct_answer_index < len(self.options):
            raise ValueError(f"correct_answer_index {self.correct_answer_index} out of range")
        return self


class SkillCheckQuiz(BaseModel):
    """Model response wrapper: the generated questions."""

    questions: List[SkillQuestion] = Field(default_factory=list)


class LearningResource(BaseModel):
    title: str = Field(..., description="Title of the learning resource")
    url: str = Field(..., description="URL of the resource")
    type: str = Field(default="Article", description="Article, Video, Course, ...")


class LearningPath(BaseModel):
    skill: str = Field(..., description="The skill to improve")
    resources: List[LearningResource] = Field(default_factory=list)


class LearningPathPlan(BaseModel):
    """Model response wrapper: one learning path per weak skill."""

    paths: List[LearningPath] = Field(default_factory=list)


class SkillCheckSession(BaseModel):
    """A generated quiz in progress; lives only for the candidate's session."""

    candidate_id: str
    role: str
    skills: List[str] = Field(default_factory=list)
    questions: List[SkillQuestion] = Field(default_factory=list)


class SkillCheckOutcome(BaseModel):
    """Result of a submitted skill check."""

    score: int
    correct: int
    total: int
    weak_skills: List[str] = Field(default_factory=list)
    learning_paths: List[LearningPath] = Field(default_factory=list)
    learning_path_error: Optional[str] = None
    candidate: Candidate
