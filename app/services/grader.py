import logging
from dataclasses import dataclass, field

from app.schemas.submission import PerQuestionGrade, SubmittedAnswer
from app.services.answer_key import AnswerKeyEntry

logger = logging.getLogger(__name__)

UNKNOWN_QUESTION = "unknown question"


@dataclass
class GradingOutcome:
    per_question: list[PerQuestionGrade] = field(default_factory=list)
    total: int = 0
    max_total: int = 0


def is_exact_match(chosen: set[str] | frozenset[str], correct: frozenset[str]) -> bool:
    """선택 집합과 정답 집합이 정확히 같을 때만 정답 (부분 점수 없음)"""
    return len(chosen) == len(correct) and not (set(chosen) ^ correct)


def grade_answers(
    answers: list[SubmittedAnswer],
    answer_key: dict[str, AnswerKeyEntry],
) -> GradingOutcome:
    """답안 채점

    정답 키에 없는 문항은 0점/배점 0으로 기록하고 나머지 채점은 계속한다.
    """
    outcome = GradingOutcome()

    for answer in answers:
        key = answer_key.get(answer.question_id)

        if key is None:
            logger.warning(f"정답 키에 없는 문항 제출: question_id={answer.question_id}")
            outcome.per_question.append(
                PerQuestionGrade(
                    question_id=answer.question_id,
                    chosen=list(answer.chosen),
                    points=0,
                    max_points=0,
                    error=UNKNOWN_QUESTION,
                )
            )
            continue

        correct = is_exact_match(set(answer.chosen), key.correct_option_ids)
        points = key.points if correct else 0
        outcome.total += points
        outcome.max_total += key.points

        outcome.per_question.append(
            PerQuestionGrade(
                question_id=answer.question_id,
                correct=list(key.correct_order),
                chosen=list(answer.chosen),
                points=points,
                max_points=key.points,
            )
        )
        logger.debug(f"문항 채점: question_id={answer.question_id}, correct={correct}, points={points}")

    return outcome
