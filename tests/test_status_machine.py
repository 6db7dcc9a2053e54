import pytest

from resmo.errors import InvalidTransition
from resmo.schemas.candidate import CandidateStatus as S
from resmo.workflow.status_machine import (
    PIPELINE_ORDER,
    allowed_targets,
    can_transition,
    ensure_transition,
    is_terminal,
    transition,
)

from conftest import make_candidate


@pytest.mark.parametrize("terminal", [S.HIRED, S.REJECTED])
def test_terminal_states_have_no_way_out(terminal):
    assert is_terminal(terminal)
    assert allowed_targets(terminal) == []
    for target in S:
        assert not can_transition(terminal, target)
        with pytest.raises(InvalidTransition):
            ensure_transition(terminal, target)


@pytest.mark.parametrize("status", [s for s in S if s not in (S.HIRED, S.REJECTED)])
def test_rejected_reachable_from_every_open_state(status):
    assert can_transition(status, S.REJECTED)


def test_same_state_is_not_a_transition():
    with pytest.raises(InvalidTransition, match="already"):
        ensure_transition(S.SHORTLISTED, S.SHORTLISTED)


def test_candidate_can_only_complete_a_pending_check():
    assert can_transition(S.SKILL_CHECK_PENDING, S.SKILL_CHECK_COMPLETED, by_candidate=True)
    assert not can_transition(S.NEW, S.SKILL_CHECK_COMPLETED, by_candidate=True)
    assert not can_transition(S.SKILL_CHECK_PENDING, S.HIRED, by_candidate=True)


def test_pipeline_order_excludes_rejected():
    assert PIPELINE_ORDER[0] == S.NEW
    assert PIPELINE_ORDER[-1] == S.HIRED
    assert S.REJECTED not in PIPELINE_ORDER


def test_transition_appends_exactly_one_entry_and_keeps_original():
    candidate = make_candidate(status=S.NEW)
    moved = transition(candidate, S.SHORTLISTED, "Status Changed", "Status updated to Shortlisted")

    assert moved.status == S.SHORTLISTED
    assert len(moved.audit_log) == len(candidate.audit_log) + 1
    assert moved.audit_log[-1].action == "Status Changed"
    assert moved.audit_log[: len(candidate.audit_log)] == candidate.audit_log
    assert candidate.status == S.NEW


def test_transition_carries_extra_updates():
    candidate = make_candidate(status=S.SKILL_CHECK_PENDING)
    moved = transition(
        candidate, S.SKILL_CHECK_COMPLETED, "Skill Check Completed", "scored", by_candidate=True, skill_check_score=80
    )
    assert moved.skill_check_score == 80
