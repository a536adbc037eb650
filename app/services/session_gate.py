"""세션 공개 기간 판정

(now, open_from, open_until)만으로 판정하는 순수 함수 모음.
- 제출 허용: OPEN 상태일 때만
- 결과 공개: open_until이 없거나 이미 지났을 때
"""
import enum
from datetime import datetime, timezone

from app.exceptions import SessionClosedError, SessionNotYetOpenError


class SessionState(str, enum.Enum):
    NOT_YET_OPEN = "not_yet_open"
    OPEN = "open"
    CLOSED = "closed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """naive 시각은 UTC로 간주 (SQLite는 tzinfo를 저장하지 않음)"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def classify(
    now: datetime,
    open_from: datetime | None,
    open_until: datetime | None,
) -> SessionState:
    """세션 상태 판정"""
    now = ensure_utc(now)
    open_from = ensure_utc(open_from)
    open_until = ensure_utc(open_until)

    if open_from is not None and now < open_from:
        return SessionState.NOT_YET_OPEN
    if open_until is not None and now > open_until:
        return SessionState.CLOSED
    return SessionState.OPEN


def may_submit(now: datetime, open_from: datetime | None, open_until: datetime | None) -> bool:
    return classify(now, open_from, open_until) is SessionState.OPEN


def may_disclose(now: datetime, open_until: datetime | None) -> bool:
    """결과 공개 가능 여부

    open_until이 없는 세션은 종료되지 않으면서 결과도 항상 공개된다.
    """
    if open_until is None:
        return True
    return ensure_utc(now) > ensure_utc(open_until)


def ensure_open(
    session_name: str,
    now: datetime,
    open_from: datetime | None,
    open_until: datetime | None,
) -> None:
    """제출 가능 상태가 아니면 위반한 경계를 담은 예외 발생"""
    state = classify(now, open_from, open_until)
    if state is SessionState.NOT_YET_OPEN:
        raise SessionNotYetOpenError(session_name, ensure_utc(open_from))
    if state is SessionState.CLOSED:
        raise SessionClosedError(session_name, ensure_utc(open_until))
