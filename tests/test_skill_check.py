import pytest

from resmo.agents.skill_check_agent import find_weak_skills, generate_skill_check, score_answers
from resmo.errors import InvalidResponseKind, InvalidTransition, RemoteCallFailure
from resmo.schemas.candidate import CandidateAnalysis, CandidateStatus
from resmo.schemas.skill_check import UNANSWERED, SkillCheckSession, SkillQuestion
from resmo.services.candidate_store import CandidateStore
from resmo.workflow.engine import WorkflowEngine

from conftest import FakeGateway, make_candidate

SKILLS = ["Python", "PostgreSQL", "Docker", "REST APIs", "Kubernetes"]


def _question(skill: str, correct: int = 0) -> dict:
    return {
        "question": f"Which statement about {skill} is true?",
        "options": ["a", "b", "c", "d"],
        "correct_answer_index": correct,
    }


def _quiz() -> dict:
    return {"questions": [_question(s) for s in SKILLS]}


def _questions():
    return [SkillQuestion.model_validate(q) for q in _quiz()["questions"]]


@pytest.mark.parametrize(
    "answers, correct, score",
    [
        ([0, 0, 0, 0, 0], 5, 100),
        ([0, 0, 0, 1, 1], 3, 60),
        ([1, 1, 1, 1, 1], 0, 0),
        ([UNANSWERED] * 5, 0, 0),
        ([0], 1, 20),
    ],
)
def test_score_answers(answers, correct, score):
    assert score_answers(_questions(), answers) == (correct, score)


def test_score_rounds_half_up():
    questions = _questions()[:2]
    assert score_answers(questions, [0, 1]) == (1, 50)
    three = _questions()[:3]
    assert score_answers(three, [0, 0, 1]) == (2, 67)
    assert score_answers(three, [0, 1, 1]) == (1, 33)


def test_empty_quiz_scores_zero():
    assert score_answers([], []) == (0, 0)


def test_weak_skills_match_first_word_of_skill():
    weak = find_weak_skills(_questions(), [0, 0, 0, 1, UNANSWERED], SKILLS)
    assert weak == ["REST APIs", "Kubernetes"]


def test_weak_skills_ignore_blank_names():
    assert find_weak_skills(_questions(), [1, 0, 0, 0, 0], ["", "  ", "Python"]) == ["Python"]


async def test_generate_requires_five_questions():
    gateway = FakeGateway()
    gateway.queue("SkillCheckQuiz", {"questions": [_question("Python")] * 3})
    with pytest.raises(InvalidResponseKind):
        await generate_skill_check(gateway, "Backend Engineer", SKILLS)


async def test_generate_drops_extra_questions():
    gateway = FakeGateway()
    gateway.queue("SkillCheckQuiz", {"questions": [_question("Python")] * 7})
    questions = await generate_skill_check(gateway, "Backend Engineer", SKILLS)
    assert len(questions) == 5


def test_question_needs_four_options():
    with pytest.raises(ValueError):
        SkillQuestion(question="q", options=["a", "b"], correct_answer_index=0)
    with pytest.raises(ValueError):
        SkillQuestion(question="q", options=["a", "b", "c", "d"], correct_answer_index=4)


def _pending_engine(gateway: FakeGateway) -> WorkflowEngine:
    analysis = CandidateAnalysis(summary="s", skills=SKILLS, experience_years=5, fit_score=7)
    candidate = make_candidate("c1", status=CandidateStatus.SKILL_CHECK_PENDING, analysis=analysis)
    return WorkflowEngine(CandidateStore([candidate]), gateway)


async def test_three_of_five_end_to_end():
    gateway = FakeGateway()
    gateway.queue("SkillCheckQuiz", _quiz())
    gateway.queue(
        "LearningPathPlan",
        {"paths": [{"skill": "REST APIs", "resources": [{"title": "REST", "url": "https://x", "type": "Article"}]}]},
    )
    engine = _pending_engine(gateway)
    before = len(engine.store.get("c1").audit_log)

    session = await engine.start_skill_check("c1")
    assert len(session.questions) == 5
    outcome = await engine.submit_skill_check(session, [0, 0, 0, 1, 2])

    stored = engine.store.get("c1")
    assert stored.status == CandidateStatus.SKILL_CHECK_COMPLETED
    assert stored.skill_check_score == 60
    assert len(stored.audit_log) == before + 1
    assert stored.audit_log[-1].action == "Skill Check Completed"
    assert "60" in stored.audit_log[-1].details
    assert stored.skill_check_details.areas_for_improvement == ["REST APIs", "Kubernetes"]
    assert outcome.score == 60
    assert outcome.correct == 3
    assert outcome.learning_paths[0].skill == "REST APIs"
    assert "REST APIs" in gateway.calls[-1]["prompt"]


async def test_learning_path_failure_keeps_the_score():
    gateway = FakeGateway()
    gateway.queue("SkillCheckQuiz", _quiz())
    gateway.queue("LearningPathPlan", RemoteCallFailure("down"))
    engine = _pending_engine(gateway)

    session = await engine.start_skill_check("c1")
    outcome = await engine.submit_skill_check(session, [1, 1, 1, 1, 1])

    assert outcome.score == 0
    assert outcome.learning_paths == []
    assert outcome.learning_path_error
    assert engine.store.get("c1").status == CandidateStatus.SKILL_CHECK_COMPLETED


async def test_perfect_score_skips_learning_path():
    gateway = FakeGateway()
    gateway.queue("SkillCheckQuiz", _quiz())
    engine = _pending_engine(gateway)

    session = await engine.start_skill_check("c1")
    outcome = await engine.submit_skill_check(session, [0] * 5)

    assert outcome.score == 100
    assert outcome.weak_skills == []
    assert [c["schema"] for c in gateway.calls] == ["SkillCheckQuiz"]


async def test_default_skills_without_analysis():
    gateway = FakeGateway()
    gateway.queue("SkillCheckQuiz", _quiz())
    engine = WorkflowEngine(
        CandidateStore([make_candidate("c2", status=CandidateStatus.SKILL_CHECK_PENDING)]), gateway
    )
    await engine.start_skill_check("c2")
    assert "React, TypeScript" in gateway.calls[0]["prompt"]


async def test_cannot_start_without_pending_check():
    engine = WorkflowEngine(CandidateStore([make_candidate("c3")]), FakeGateway())
    with pytest.raises(InvalidTransition):
        await engine.start_skill_check("c3")


async def test_second_submission_is_rejected():
    gateway = FakeGateway()
    gateway.queue("SkillCheckQuiz", _quiz())
    engine = _pending_engine(gateway)
    session = await engine.start_skill_check("c1")
    await engine.submit_skill_check(session, [0] * 5)
    log_length = len(engine.store.get("c1").audit_log)

    with pytest.raises(InvalidTransition):
        await engine.submit_skill_check(session, [0] * 5)
    assert len(engine.store.get("c1").audit_log) == log_length


async def test_out_of_range_answer_is_rejected():
    engine = _pending_engine(FakeGateway())
    session = SkillCheckSession(candidate_id="c1", role="r", skills=[], questions=_questions())
    with pytest.raises(ValueError):
        await engine.submit_skill_check(session, [4, 0, 0, 0, 0])
    assert engine.store.get("c1").status == CandidateStatus.SKILL_CHECK_PENDING
