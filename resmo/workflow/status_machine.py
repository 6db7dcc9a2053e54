"""Candidate status state machine: explicit transition table plus audit-logged transitions."""

from typing import Dict, FrozenSet, List

from resmo.errors import InvalidTransition
from resmo.schemas.candidate import AuditLogEntry, Candidate, CandidateStatus
from resmo.utils.helpers import utc_now_iso

S = CandidateStatus

# Happy path shown by the candidate status tracker (Rejected is drawn on its own).
PIPELINE_ORDER: List[CandidateStatus] = [
    S.NEW,
    S.SKILL_CHECK_PENDING,
    S.SKILL_CHECK_COMPLETED,
    S.SHORTLISTED,
    S.INTERVIEWING,
    S.HIRED,
]

TERMINAL_STATUSES: FrozenSet[CandidateStatus] = frozenset({S.HIRED, S.REJECTED})

# Recruiters may move a non-terminal candidate to any other status (forwards,
# backwards, or straight to Rejected). Terminal statuses have no way out.
RECRUITER_TRANSITIONS: Dict[CandidateStatus, FrozenSet[CandidateStatus]] = {
    status: (frozenset() if status in TERMINAL_STATUSES else frozenset(S) - {status})
    for status in S
}

# The only move a candidate can make: submitting the skill check.
CANDIDATE_TRANSITIONS: Dict[CandidateStatus, FrozenSet[CandidateStatus]] = {
    S.SKILL_CHECK_PENDING: frozenset({S.SKILL_CHECK_COMPLETED}),
}


def is_terminal(status: CandidateStatus) -> bool:
    return status in TERMINAL_STATUSES


def allowed_targets(current: CandidateStatus, by_candidate: bool = False) -> List[CandidateStatus]:
    """Statuses reachable from ``current``, in enum order (for the status dropdown)."""
    table = CANDIDATE_TRANSITIONS if by_candidate else RECRUITER_TRANSITIONS
    reachable = table.get(current, frozenset())
    return [s for s in S if s in reachable]


def can_transition(current: CandidateStatus, target: CandidateStatus, by_candidate: bool = False) -> bool:
    table = CANDIDATE_TRANSITIONS if by_candidate else RECRUITER_TRANSITIONS
    return target in table.get(current, frozenset())


def ensure_transition(current: CandidateStatus, target: CandidateStatus, by_candidate: bool = False) -> None:
    """Raise InvalidTransition unless ``current -> target`` is in the table."""
    if can_transition(current, target, by_candidate):
        return
    if is_terminal(current):
        raise InvalidTransition(f"'{current.value}' is final; the status can no longer change.")
    if current == target:
        raise InvalidTransition(f"Candidate is already '{current.value}'.")
    raise InvalidTransition(f"Cannot move from '{current.value}' to '{target.value}'.")


def audit_entry(action: str, details: str) -> AuditLogEntry:
    return AuditLogEntry(timestamp=utc_now_iso(), action=action, details=details)


def transition(
    candidate: Candidate,
    target: CandidateStatus,
    action: str,
    details: str,
    by_candidate: bool = False,
    **updates,
) -> Candidate:
    """
    Return a new record moved to ``target`` with exactly one audit entry for
    the transition appended. Extra field ``updates`` ride along in the same
    replacement.
    """
    ensure_transition(candidate.status, target, by_candidate)
    return candidate.with_audit(audit_entry(action, details), status=target, **updates)
