"""Schema exports."""

from .analysis import EmailDraft, ResumeAnalysisResult
from .candidate import (
    AuditLogEntry,
    Candidate,
    CandidateAnalysis,
    CandidateStatus,
    ImageResume,
    Resume,
    ResumeImage,
    SkillCheckDetails,
    TextResume,
    WorkHistoryEntry,
)
from .skill_check import (
    UNANSWERED,
    LearningPath,
    LearningPathPlan,
    LearningResource,
    SkillCheckOutcome,
    SkillCheckQuiz,
    SkillCheckSession,
    SkillQuestion,
)

__all__ = [
    "AuditLogEntry",
    "Candidate",
    "CandidateAnalysis",
    "CandidateStatus",
    "EmailDraft",
    "ImageResume",
    "LearningPath",
    "LearningPathPlan",
    "LearningResource",
    "Resume",
    "ResumeAnalysisResult",
    "ResumeImage",
    "SkillCheckDetails",
    "SkillCheckOutcome",
    "SkillCheckQuiz",
    "SkillCheckSession",
    "SkillQuestion",
    "TextResume",
    "UNANSWERED",
    "WorkHistoryEntry",
]
