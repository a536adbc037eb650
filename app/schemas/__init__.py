from app.schemas.quiz import (
    QuizCreateResponse,
    QuizDefinition,
    QuizOption,
    QuizQuestion,
    SessionQuizResponse,
)
from app.schemas.result import (
    PendingDisclosureResponse,
    QuestionStat,
    ResultDetail,
    ResultResponse,
    SessionStatsResponse,
)
from app.schemas.session import (
    SessionCreateRequest,
    SessionCreateResponse,
    SessionListResponse,
    SessionResponse,
    SessionUpdateRequest,
)
from app.schemas.submission import (
    PerQuestionGrade,
    SubmissionListResponse,
    SubmitRequest,
    SubmitResponse,
    SubmittedAnswer,
)

__all__ = [
    "QuizDefinition",
    "QuizQuestion",
    "QuizOption",
    "QuizCreateResponse",
    "SessionQuizResponse",
    "SessionCreateRequest",
    "SessionUpdateRequest",
    "SessionCreateResponse",
    "SessionResponse",
    "SessionListResponse",
    "SubmittedAnswer",
    "SubmitRequest",
    "SubmitResponse",
    "PerQuestionGrade",
    "SubmissionListResponse",
    "ResultDetail",
    "ResultResponse",
    "PendingDisclosureResponse",
    "QuestionStat",
    "SessionStatsResponse",
]
