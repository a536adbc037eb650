from app.crud.quiz import create_quiz, get_quiz_by_id
from app.crud.session import (
    create_session,
    get_session_by_name,
    get_sessions_with_title,
    get_unclosed_sessions_with_title,
    session_name_exists,
    update_session_window,
)
from app.crud.submission import (
    add_submission,
    get_submission_by_id,
    get_submission_by_session_and_user,
    get_submissions_by_session_name,
)

__all__ = [
    "get_quiz_by_id",
    "create_quiz",
    "get_session_by_name",
    "session_name_exists",
    "create_session",
    "get_sessions_with_title",
    "get_unclosed_sessions_with_title",
    "update_session_window",
    "get_submission_by_id",
    "get_submission_by_session_and_user",
    "get_submissions_by_session_name",
    "add_submission",
]
