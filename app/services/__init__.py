from app.services.answer_key import AnswerKeyEntry, build_answer_key
from app.services.export_service import get_session_stats
from app.services.grader import GradingOutcome, grade_answers
from app.services.grading_service import (
    compute_question_stats,
    get_result,
    get_session_submissions,
    submit_answers,
)
from app.services.quiz_service import create_quiz, load_quiz
from app.services.session_gate import SessionState, classify, may_disclose, may_submit
from app.services.session_service import (
    create_session,
    get_all_sessions,
    get_currently_open_sessions,
    get_session,
    get_session_quiz,
    update_session_times,
)

__all__ = [
    "AnswerKeyEntry",
    "build_answer_key",
    "GradingOutcome",
    "grade_answers",
    "SessionState",
    "classify",
    "may_submit",
    "may_disclose",
    "load_quiz",
    "create_quiz",
    "create_session",
    "get_session",
    "get_all_sessions",
    "get_currently_open_sessions",
    "get_session_quiz",
    "update_session_times",
    "submit_answers",
    "get_result",
    "compute_question_stats",
    "get_session_submissions",
    "get_session_stats",
]
