"""퀴즈 정의에서 정답 키 생성

정답 저장 형식이 두 가지(선택지별 correct 플래그 / 문항 단위 correct 목록)라서
추출 전략을 우선순위 순서로 시도하고, 처음으로 정답을 돌려주는 전략을 쓴다.
"""
from dataclasses import dataclass
from typing import Callable

from app.schemas.quiz import QuizDefinition, QuizQuestion

DEFAULT_POINTS = 1


@dataclass(frozen=True)
class AnswerKeyEntry:
    correct_option_ids: frozenset[str]
    # 정답 ID의 원래 순서 (결과 화면 표시용)
    correct_order: tuple[str, ...]
    points: int
    multiple: bool


def correct_from_option_flags(question: QuizQuestion) -> list[str]:
    """신규 형식: options[].correct == True 인 선택지"""
    return [option.id for option in question.options if option.correct is True]


def correct_from_question_list(question: QuizQuestion) -> list[str]:
    """구 형식: 문항 단위 correct 목록"""
    return [option_id for option_id in (question.correct or []) if option_id is not None]


ExtractionStrategy = Callable[[QuizQuestion], list[str]]

EXTRACTION_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    correct_from_option_flags,
    correct_from_question_list,
)


def extract_correct_ids(question: QuizQuestion) -> list[str]:
    for strategy in EXTRACTION_STRATEGIES:
        correct = strategy(question)
        if correct:
            return list(dict.fromkeys(correct))
    return []


def build_answer_key(quiz: QuizDefinition) -> dict[str, AnswerKeyEntry]:
    """문항 ID → 정답 키

    세션이 가리키는 퀴즈는 불변이므로 캐시하지 않고 채점할 때마다 다시 만든다.
    """
    answer_key = {}
    for question in quiz.questions:
        correct = extract_correct_ids(question)
        answer_key[question.id] = AnswerKeyEntry(
            correct_option_ids=frozenset(correct),
            correct_order=tuple(correct),
            points=question.points or DEFAULT_POINTS,
            multiple=len(correct) > 1 or question.multiple,
        )
    return answer_key
