"""커스텀 예외 클래스 정의"""
from datetime import datetime
from typing import Any


class BaseAppError(Exception):
    """애플리케이션 기본 예외 클래스

    error_code와 details로 어떤 규칙이 요청을 막았는지 호출자가 구분할 수 있다.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """API 응답용 딕셔너리 변환"""
        return {
            "detail": self.message,
            "error_code": self.error_code,
            "context": self.details,
        }


# 입력 오류 (400)

class InvalidAnswersError(BaseAppError):
    """제출 답안 구조가 잘못되었을 때 발생하는 예외 (400)"""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            message,
            status_code=400,
            error_code="INVALID_ANSWERS",
            details={"errors": errors or []},
        )


class InvalidSessionWindowError(BaseAppError):
    """세션 공개 기간이 잘못되었을 때 발생하는 예외 (400)"""

    def __init__(self, open_from: datetime | None, open_until: datetime | None):
        super().__init__(
            "open_until은 open_from 이후여야 합니다",
            status_code=400,
            error_code="INVALID_SESSION_WINDOW",
            details={
                "open_from": open_from.isoformat() if open_from else None,
                "open_until": open_until.isoformat() if open_until else None,
            },
        )


# 리소스 없음 (404)

class QuizNotFoundError(BaseAppError):
    """퀴즈를 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, quiz_id: str):
        super().__init__(
            f"퀴즈를 찾을 수 없습니다: {quiz_id}",
            status_code=404,
            error_code="QUIZ_NOT_FOUND",
            details={"quiz_id": quiz_id},
        )


class SessionNotFoundError(BaseAppError):
    """세션을 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, session_name: str):
        super().__init__(
            f"세션을 찾을 수 없습니다: {session_name}",
            status_code=404,
            error_code="SESSION_NOT_FOUND",
            details={"session_name": session_name},
        )


class SubmissionNotFoundError(BaseAppError):
    """결과(제출 기록)를 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, result_token: str):
        super().__init__(
            f"결과를 찾을 수 없습니다: {result_token}",
            status_code=404,
            error_code="SUBMISSION_NOT_FOUND",
            details={"result_token": result_token},
        )


# 비즈니스 규칙 위반 (409 / 422)

class SessionNotOpenError(BaseAppError):
    """세션이 제출 가능 상태가 아닐 때의 기본 예외 (422)"""

    def __init__(self, message: str, error_code: str, details: dict[str, Any]):
        super().__init__(message, status_code=422, error_code=error_code, details=details)


class SessionNotYetOpenError(SessionNotOpenError):
    """세션이 아직 열리지 않았을 때 발생하는 예외 (422)"""

    def __init__(self, session_name: str, open_from: datetime):
        super().__init__(
            "세션이 아직 열리지 않았습니다",
            error_code="SESSION_NOT_YET_OPEN",
            details={"session_name": session_name, "open_from": open_from.isoformat()},
        )


class SessionClosedError(SessionNotOpenError):
    """세션이 이미 종료되었을 때 발생하는 예외 (422)"""

    def __init__(self, session_name: str, open_until: datetime):
        super().__init__(
            "세션이 이미 종료되었습니다",
            error_code="SESSION_CLOSED",
            details={"session_name": session_name, "open_until": open_until.isoformat()},
        )


class DuplicateSubmissionError(BaseAppError):
    """같은 참가자가 같은 세션에 다시 제출했을 때 발생하는 예외 (409)"""

    def __init__(self, session_name: str, user_code: str):
        super().__init__(
            f"이미 이 퀴즈에 참여했습니다 ({session_name})",
            status_code=409,
            error_code="DUPLICATE_SUBMISSION",
            details={"session_name": session_name, "user_code": user_code},
        )


# 데이터 손상 (500)

class QuizDataCorruptedError(BaseAppError):
    """저장된 퀴즈 정의를 해석할 수 없을 때 발생하는 예외 (500)"""

    def __init__(self, quiz_id: str):
        super().__init__(
            f"퀴즈 데이터가 손상되었습니다: {quiz_id}",
            status_code=500,
            error_code="QUIZ_DATA_CORRUPTED",
            details={"quiz_id": quiz_id},
        )
