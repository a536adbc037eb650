import logging
import uuid
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import quiz as quiz_crud, session as session_crud
from app.exceptions import InvalidSessionWindowError, QuizNotFoundError, SessionNotFoundError
from app.models.quiz_session import QuizSession
from app.schemas import quiz as quiz_schema, session as session_schema
from app.services import quiz_service, session_gate
from app.services.answer_key import DEFAULT_POINTS, extract_correct_ids

logger = logging.getLogger(__name__)

MAX_SESSION_NAME_ATTEMPTS = 10


def _validate_window(open_from: datetime | None, open_until: datetime | None) -> None:
    if open_from is not None and open_until is not None and open_until <= open_from:
        raise InvalidSessionWindowError(open_from, open_until)


def _to_response(quiz_session: QuizSession, quiz_title: str | None = None) -> session_schema.SessionResponse:
    return session_schema.SessionResponse(
        id=quiz_session.id,
        session_name=quiz_session.session_name,
        quiz_id=quiz_session.quiz_id,
        quiz_title=quiz_title,
        open_from=session_gate.ensure_utc(quiz_session.open_from),
        open_until=session_gate.ensure_utc(quiz_session.open_until),
        created_at=session_gate.ensure_utc(quiz_session.created_at),
    )


def format_session_name(created_at: datetime) -> str:
    """생성 시각 기반 세션 이름 (YYYY-MM-DD-HH-MM, UTC)"""
    return created_at.strftime("%Y-%m-%d-%H-%M")


async def _generate_session_name(session: AsyncSession, created_at: datetime) -> str:
    """같은 분에 생성된 세션이 있으면 -2, -3 ... 접미사 부여"""
    base_name = format_session_name(created_at)
    candidate = base_name
    suffix = 1
    while await session_crud.session_name_exists(session, candidate):
        suffix += 1
        candidate = f"{base_name}-{suffix}"
    return candidate


async def create_session(
    session: AsyncSession,
    request: session_schema.SessionCreateRequest,
    now: datetime | None = None,
) -> session_schema.SessionCreateResponse:
    """세션 생성"""
    now = session_gate.ensure_utc(now) or session_gate.utcnow()

    quiz = await quiz_crud.get_quiz_by_id(session, request.quiz_id)
    if not quiz:
        raise QuizNotFoundError(request.quiz_id)

    open_from = session_gate.ensure_utc(request.open_from) or now
    open_until = session_gate.ensure_utc(request.open_until)
    _validate_window(open_from, open_until)

    quiz_id = quiz.id

    for attempt in range(1, MAX_SESSION_NAME_ATTEMPTS + 1):
        session_name = await _generate_session_name(session, now)
        try:
            quiz_session = await session_crud.create_session(
                session,
                session_id=str(uuid.uuid4()),
                session_name=session_name,
                quiz_id=quiz_id,
                open_from=open_from,
                open_until=open_until,
                created_at=now,
            )
            break
        except IntegrityError:
            await session.rollback()
            # 같은 분에 동시에 생성된 세션이 먼저 이름을 차지한 경우
            if attempt == MAX_SESSION_NAME_ATTEMPTS:
                logger.error(f"세션 이름 할당 실패: session_name={session_name}, quiz_id={quiz_id}", exc_info=True)
                raise
            logger.warning(f"세션 이름 충돌, 재시도: session_name={session_name}, attempt={attempt}")
        except Exception as e:
            logger.error(f"세션 생성 실패: {e}, quiz_id={quiz_id}", exc_info=True)
            await session.rollback()
            raise

    logger.info(f"세션 생성: session_name={session_name}, quiz_id={quiz_id}")
    return session_schema.SessionCreateResponse(
        session_id=quiz_session.id,
        session_name=quiz_session.session_name,
    )


async def get_session(session: AsyncSession, session_name: str) -> QuizSession:
    """세션 조회 (없으면 SessionNotFoundError)"""
    quiz_session = await session_crud.get_session_by_name(session, session_name)
    if not quiz_session:
        logger.warning(f"세션을 찾을 수 없음: session_name={session_name}")
        raise SessionNotFoundError(session_name)
    return quiz_session


async def get_session_detail(session: AsyncSession, session_name: str) -> session_schema.SessionResponse:
    quiz_session = await get_session(session, session_name)
    quiz = await quiz_crud.get_quiz_by_id(session, quiz_session.quiz_id)
    return _to_response(quiz_session, quiz.title if quiz else None)


async def get_all_sessions(
    session: AsyncSession,
    limit: int = 100,
) -> session_schema.SessionListResponse:
    """세션 목록 조회 (최신순)"""
    rows = await session_crud.get_sessions_with_title(session, limit)
    sessions = [_to_response(quiz_session, title) for quiz_session, title in rows]
    return session_schema.SessionListResponse(sessions=sessions, total=len(sessions))


async def get_currently_open_sessions(
    session: AsyncSession,
    now: datetime | None = None,
) -> session_schema.SessionListResponse:
    """현재 제출 가능한 세션만 조회"""
    now = session_gate.ensure_utc(now) or session_gate.utcnow()
    rows = await session_crud.get_unclosed_sessions_with_title(session, now)
    sessions = [
        _to_response(quiz_session, title)
        for quiz_session, title in rows
        if session_gate.may_submit(now, quiz_session.open_from, quiz_session.open_until)
    ]
    logger.debug(f"열린 세션 조회: count={len(sessions)}")
    return session_schema.SessionListResponse(sessions=sessions, total=len(sessions))


async def update_session_times(
    session: AsyncSession,
    session_name: str,
    request: session_schema.SessionUpdateRequest,
) -> session_schema.SessionResponse:
    """세션 공개 기간 수정 (관리자용, 요청에 포함된 필드만 변경)"""
    quiz_session = await get_session(session, session_name)

    open_from = quiz_session.open_from
    open_until = quiz_session.open_until
    if "open_from" in request.model_fields_set:
        open_from = request.open_from
    if "open_until" in request.model_fields_set:
        open_until = request.open_until

    open_from = session_gate.ensure_utc(open_from)
    open_until = session_gate.ensure_utc(open_until)
    _validate_window(open_from, open_until)

    quiz_session = await session_crud.update_session_window(session, quiz_session, open_from, open_until)
    logger.info(f"세션 기간 수정: session_name={session_name}, open_from={open_from}, open_until={open_until}")
    return _to_response(quiz_session)


async def get_session_quiz(
    session: AsyncSession,
    session_name: str,
    for_stat: bool = False,
    now: datetime | None = None,
) -> quiz_schema.SessionQuizResponse:
    """참가자용 퀴즈 조회 (정답 정보 제외)

    for_stat이 아니면 제출 가능 기간에만 조회할 수 있다.
    """
    quiz_session = await get_session(session, session_name)

    if not for_stat:
        now = session_gate.ensure_utc(now) or session_gate.utcnow()
        session_gate.ensure_open(session_name, now, quiz_session.open_from, quiz_session.open_until)

    quiz = await quiz_service.load_quiz(session, quiz_session.quiz_id)

    questions = []
    for question in quiz.questions:
        correct = extract_correct_ids(question)
        questions.append(
            quiz_schema.SessionQuizQuestion(
                id=question.id,
                keyword=question.short_label(),
                text=question.text,
                options=[
                    quiz_schema.SessionQuizOption(id=option.id, text=option.text)
                    for option in question.options
                ],
                multiple=len(correct) > 1 or question.multiple,
                points=question.points or DEFAULT_POINTS,
            )
        )

    return quiz_schema.SessionQuizResponse(id=quiz_session.quiz_id, title=quiz.title, questions=questions)
