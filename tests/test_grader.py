"""Grader 테스트"""
import pytest

from app.schemas.submission import SubmittedAnswer
from app.services.answer_key import AnswerKeyEntry
from app.services.grader import UNKNOWN_QUESTION, grade_answers


def _entry(*correct, points=1):
    return AnswerKeyEntry(
        correct_option_ids=frozenset(correct),
        correct_order=tuple(correct),
        points=points,
        multiple=len(correct) > 1,
    )


def _answer(question_id, chosen):
    return SubmittedAnswer(question_id=question_id, chosen=chosen)


@pytest.mark.parametrize(
    "chosen, expected_points",
    [
        (["a", "b"], 2),
        (["b", "a"], 2),
        (["a"], 0),
        (["a", "b", "c"], 0),
        ([], 0),
        (["c"], 0),
    ],
)
def test_exact_set_match(chosen, expected_points):
    """정답 집합과 정확히 같을 때만 만점, 부분 점수 없음"""
    answer_key = {"q1": _entry("a", "b", points=2)}

    outcome = grade_answers([_answer("q1", chosen)], answer_key)

    assert outcome.per_question[0].points == expected_points
    assert outcome.per_question[0].max_points == 2
    assert outcome.total == expected_points
    assert outcome.max_total == 2


def test_three_of_four_correct_scores_zero():
    answer_key = {"q1": _entry("a", "b", "c", "d")}

    outcome = grade_answers([_answer("q1", ["a", "b", "c"])], answer_key)

    assert outcome.total == 0


def test_unknown_question_is_not_fatal():
    """정답 키에 없는 문항은 0점 처리하고 나머지는 계속 채점"""
    answer_key = {"q1": _entry("b")}

    outcome = grade_answers([_answer("zzz", ["a"]), _answer("q1", ["b"])], answer_key)

    unknown, known = outcome.per_question
    assert unknown.error == UNKNOWN_QUESTION
    assert unknown.points == 0
    assert unknown.max_points == 0
    assert known.points == 1
    assert outcome.total == 1
    assert outcome.max_total == 1


def test_totals_across_questions():
    answer_key = {"q1": _entry("a"), "q2": _entry("b", points=3), "q3": _entry("c", points=2)}
    answers = [_answer("q1", ["a"]), _answer("q2", ["b"]), _answer("q3", ["a"])]

    outcome = grade_answers(answers, answer_key)

    assert outcome.total == 4
    assert outcome.max_total == 6
    assert [g.question_id for g in outcome.per_question] == ["q1", "q2", "q3"]


def test_grading_is_idempotent():
    answer_key = {"q1": _entry("a", "b"), "q2": _entry("c")}
    answers = [_answer("q1", ["a", "b"]), _answer("q2", ["d"])]

    first = grade_answers(answers, answer_key)
    second = grade_answers(answers, answer_key)

    assert first == second


def test_single_string_choice_and_duplicates():
    """단일 문자열 선택은 목록으로, 중복 선택은 하나로 취급"""
    answer = SubmittedAnswer.model_validate({"questionId": "q1", "chosen": "a"})
    duplicated = SubmittedAnswer.model_validate({"questionId": "q2", "chosen": ["b", "b"]})

    outcome = grade_answers([answer, duplicated], {"q1": _entry("a"), "q2": _entry("b")})

    assert answer.chosen == ["a"]
    assert duplicated.chosen == ["b"]
    assert outcome.total == 2
