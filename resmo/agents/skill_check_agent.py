"""Skill Check Agent: quiz generation, scoring, weak-skill detection and learning paths."""

from typing import List, Sequence, Set, Tuple

from resmo.config import SKILL_CHECK_OPTION_COUNT, SKILL_CHECK_QUESTION_COUNT
from resmo.errors import InvalidResponseKind
from resmo.schemas.skill_check import (
    UNANSWERED,
    LearningPath,
    LearningPathPlan,
    SkillCheckQuiz,
    SkillQuestion,
)
from resmo.services.ai_gateway import AIGateway
from resmo.utils.logger import get_logger

logger = get_logger(__name__)

QUIZ_PROMPT = """Create a skill check quiz for a "{role}" position, focusing on these skills: {skills}.
Generate {count} multiple-choice questions. For each question, provide {options} options and the correct answer's index (0-{last}).
Mention the skill being tested by name in each question."""

LEARNING_PATH_PROMPT = """For a candidate applying for a "{role}" role who has shown weakness in the following skills: {skills}, suggest a learning path.
For each skill, provide 2-3 learning resources (articles, videos, courses) with a title, a valid URL, and the type of resource."""


async def generate_skill_check(gateway: AIGateway, role: str, skills: Sequence[str]) -> List[SkillQuestion]:
    """Exactly SKILL_CHECK_QUESTION_COUNT questions; extra ones are dropped, too few is an error."""
    prompt = QUIZ_PROMPT.format(
        role=role,
        skills=", ".join(skills),
        count=SKILL_CHECK_QUESTION_COUNT,
        options=SKILL_CHECK_OPTION_COUNT,
        last=SKILL_CHECK_OPTION_COUNT - 1,
    )
    quiz = await gateway.generate_structured(prompt, SkillCheckQuiz)
    questions = quiz.questions
    if len(questions) < SKILL_CHECK_QUESTION_COUNT:
        raise InvalidResponseKind(
            f"Expected {SKILL_CHECK_QUESTION_COUNT} questions, got {len(questions)}."
        )
    if len(questions) > SKILL_CHECK_QUESTION_COUNT:
        logger.info("Quiz had %s questions; keeping %s", len(questions), SKILL_CHECK_QUESTION_COUNT)
    return questions[:SKILL_CHECK_QUESTION_COUNT]


def score_answers(questions: Sequence[SkillQuestion], answers: Sequence[int]) -> Tuple[int, int]:
    """
    Return (correct, score). Missing answers count as unanswered (-1).
    score = round(100 * correct / total), halves rounded up; 0 for an empty quiz.
    """
    total = len(questions)
    if total == 0:
        return 0, 0
    correct = 0
    for index, question in enumerate(questions):
        answer = answers[index] if index < len(answers) else UNANSWERED
        if answer == question.correct_answer_index:
            correct += 1
    return correct, (200 * correct + total) // (2 * total)


def find_weak_skills(
    questions: Sequence[SkillQuestion],
    answers: Sequence[int],
    skills: Sequence[str],
) -> List[str]:
    """
    Skills tied to wrongly answered questions: a skill matches when the
    first word of its name occurs (case-insensitive) in the question text.
    Returned in the order of ``skills``.
    """
    weak: Set[str] = set()
    for index, question in enumerate(questions):
        answer = answers[index] if index < len(answers) else UNANSWERED
        if answer == question.correct_answer_index:
            continue
        text = question.question.lower()
        for skill in skills:
            words = skill.lower().split()
            if words and words[0] in text:
                weak.add(skill)
    return [s for s in dict.fromkeys(skills) if s in weak]


async def suggest_learning_path(gateway: AIGateway, role: str, weak_skills: Sequence[str]) -> List[LearningPath]:
    prompt = LEARNING_PATH_PROMPT.format(role=role, skills=", ".join(weak_skills))
    plan = await gateway.generate_structured(prompt, LearningPathPlan)
    return plan.paths
