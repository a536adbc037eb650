from datetime import datetime
from typing import Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.quiz import Quiz
from app.models.quiz_session import QuizSession


async def get_session_by_name(session: AsyncSession, session_name: str) -> QuizSession | None:
    """세션 이름으로 조회"""
    result = await session.execute(
        select(QuizSession).where(QuizSession.session_name == session_name)
    )
    return result.scalar_one_or_none()


async def session_name_exists(session: AsyncSession, session_name: str) -> bool:
    result = await session.execute(
        select(QuizSession.id).where(QuizSession.session_name == session_name)
    )
    return result.first() is not None


async def create_session(
    session: AsyncSession,
    session_id: str,
    session_name: str,
    quiz_id: str,
    open_from: datetime | None,
    open_until: datetime | None,
    created_at: datetime,
) -> QuizSession:
    """세션 생성"""
    quiz_session = QuizSession(
        id=session_id,
        session_name=session_name,
        quiz_id=quiz_id,
        open_from=open_from,
        open_until=open_until,
        created_at=created_at,
        updated_at=created_at,
    )
    session.add(quiz_session)
    await session.commit()
    await session.refresh(quiz_session)
    return quiz_session


async def get_sessions_with_title(
    session: AsyncSession,
    limit: int = 100,
) -> Sequence[tuple[QuizSession, str | None]]:
    """최근 세션 목록 조회 (퀴즈 제목 포함)"""
    stmt = (
        select(QuizSession, Quiz.title)
        .outerjoin(Quiz, QuizSession.quiz_id == Quiz.id)
        .order_by(QuizSession.created_at.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.all()


async def get_unclosed_sessions_with_title(
    session: AsyncSession,
    now: datetime,
) -> Sequence[tuple[QuizSession, str | None]]:
    """종료되지 않은 세션 조회 (퀴즈 제목 포함)

    시작 전 세션도 포함되므로 최종 판정은 호출 측에서 한다.
    """
    stmt = (
        select(QuizSession, Quiz.title)
        .outerjoin(Quiz, QuizSession.quiz_id == Quiz.id)
        .where(or_(QuizSession.open_until.is_(None), QuizSession.open_until >= now))
        .order_by(QuizSession.created_at.desc())
    )
    result = await session.execute(stmt)
    return result.all()


async def update_session_window(
    session: AsyncSession,
    quiz_session: QuizSession,
    open_from: datetime | None,
    open_until: datetime | None,
) -> QuizSession:
    """세션 공개 기간 수정"""
    quiz_session.open_from = open_from
    quiz_session.open_until = open_until
    await session.commit()
    await session.refresh(quiz_session)
    return quiz_session
