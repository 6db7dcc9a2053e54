"""Service exports."""

from .ai_gateway import AIGateway
from .auth_service import Session, UserRole, authenticate
from .candidate_store import CandidateStore
from .resume_ingestion import ingest_resume
from .seed_data import seed_candidates
from .statistics import (
    experience_histogram,
    filter_by_status,
    fit_score_histogram,
    pipeline_breakdown,
    role_distribution,
    top_skills,
)

__all__ = [
    "AIGateway",
    "CandidateStore",
    "Session",
    "UserRole",
    "authenticate",
    "ingest_resume",
    "seed_candidates",
    "experience_histogram",
    "filter_by_status",
    "fit_score_histogram",
    "pipeline_breakdown",
    "role_distribution",
    "top_skills",
]
