from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.submission import Submission


async def get_submission_by_id(session: AsyncSession, submission_id: str) -> Submission | None:
    """ID(결과 토큰)로 제출 기록 조회"""
    result = await session.execute(select(Submission).where(Submission.id == submission_id))
    return result.scalar_one_or_none()


async def get_submission_by_session_and_user(
    session: AsyncSession,
    session_name: str,
    user_code: str,
) -> Submission | None:
    """세션 이름과 참가자 코드로 제출 기록 조회"""
    stmt = select(Submission).where(
        Submission.session_name == session_name,
        Submission.user_code == user_code,
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_submissions_by_session_name(
    session: AsyncSession,
    session_name: str,
) -> Sequence[Submission]:
    """세션의 모든 제출 기록 조회 (최신순)"""
    stmt = (
        select(Submission)
        .where(Submission.session_name == session_name)
        .order_by(Submission.created_at.desc())
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def add_submission(
    session: AsyncSession,
    submission_id: str,
    session_id: str,
    session_name: str,
    user_code: str,
    answers: list[dict],
    score: int,
    max_score: int,
    created_at: datetime,
) -> Submission:
    """제출 기록 추가 (flush만 수행, 커밋은 호출 측 트랜잭션에서)

    (session_name, user_code) 유니크 제약 위반 시 IntegrityError가 여기서 발생한다.
    """
    submission = Submission(
        id=submission_id,
        session_id=session_id,
        session_name=session_name,
        user_code=user_code,
        answers=answers,
        score=score,
        max_score=max_score,
        created_at=created_at,
        updated_at=created_at,
    )
    session.add(submission)
    await session.flush()
    return submission
