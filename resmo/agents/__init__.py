"""Agent exports."""

from .analysis_agent import analyze_resume, anonymize_resume, transcribe_resume_images
from .email_agent import draft_status_email, fallback_email
from .skill_check_agent import (
    find_weak_skills,
    generate_skill_check,
    score_answers,
    suggest_learning_path,
)

__all__ = [
    "analyze_resume",
    "anonymize_resume",
    "transcribe_resume_images",
    "draft_status_email",
    "fallback_email",
    "find_weak_skills",
    "generate_skill_check",
    "score_answers",
    "suggest_learning_path",
]
