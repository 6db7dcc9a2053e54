"""Shared fixtures: a scripted fake gateway and a store seeded with demo candidates."""

from typing import Any, Dict, List, Optional, Sequence, Type

import pytest

from resmo.errors import RemoteCallFailure
from resmo.schemas.candidate import AuditLogEntry, Candidate, CandidateStatus, TextResume
from resmo.services.candidate_store import CandidateStore
from resmo.services.seed_data import seed_candidates
from resmo.workflow.engine import WorkflowEngine


class FakeGateway:
    """
    Stands in for AIGateway. Replies are queued per schema name (structured)
    or in ``texts`` (plain); an Exception instance in a queue is raised.
    """

    def __init__(self) -> None:
        self.structured: Dict[str, List[Any]] = {}
        self.texts: List[Any] = []
        self.calls: List[Dict[str, Any]] = []

    def queue(self, schema_name: str, *replies: Any) -> None:
        self.structured.setdefault(schema_name, []).extend(replies)

    async def generate_structured(self, prompt: str, schema: Type, images: Optional[Sequence] = None):
        self.calls.append({"kind": "structured", "schema": schema.__name__, "prompt": prompt, "images": images})
        replies = self.structured.get(schema.__name__) or []
        if not replies:
            raise RemoteCallFailure(f"no scripted reply for {schema.__name__}")
        reply = replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return schema.model_validate(reply)

    async def generate_text(self, prompt: str, images: Optional[Sequence] = None) -> str:
        self.calls.append({"kind": "text", "prompt": prompt, "images": images})
        if not self.texts:
            raise RemoteCallFailure("no scripted text reply")
        reply = self.texts.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_candidate(
    candidate_id: str = "cand-x",
    status: CandidateStatus = CandidateStatus.NEW,
    resume_text: Optional[str] = "Jane Doe, jane@example.com. 5 years of Python at Acme.",
    **fields: Any,
) -> Candidate:
    return Candidate(
        id=candidate_id,
        name=fields.pop("name", "Jane Doe"),
        email=fields.pop("email", f"{candidate_id}@example.com"),
        role=fields.pop("role", "Backend Engineer"),
        status=status,
        applied_date="2024-01-01",
        resume=TextResume(text=resume_text) if resume_text else None,
        audit_log=[AuditLogEntry(timestamp="2024-01-01T00:00:00+00:00", action="Initial Entry", details="Candidate added")],
        **fields,
    )


ANALYSIS_REPLY = {
    "summary": "Backend engineer focused on Python services.",
    "skills": ["Python", "PostgreSQL", "Docker"],
    "experience_years": 5,
    "education": ["BSc Computer Science"],
    "fit_score": 8,
    "work_history": [
        {
            "company": "Acme",
            "title": "Backend Engineer",
            "start_date": "2019-01",
            "end_date": "Present",
            "description": "Built payment APIs.",
            "industry": "Fintech",
        }
    ],
    "recommended_action": "Request Skill Check",
    "action_justification": "Strong background; verify depth.",
}


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def store() -> CandidateStore:
    return CandidateStore(seed_candidates())


@pytest.fixture
def engine(store: CandidateStore, gateway: FakeGateway) -> WorkflowEngine:
    return WorkflowEngine(store, gateway)
