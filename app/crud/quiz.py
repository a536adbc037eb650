from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.quiz import Quiz


async def get_quiz_by_id(session: AsyncSession, quiz_id: str) -> Quiz | None:
    """ID로 퀴즈 조회"""
    result = await session.execute(select(Quiz).where(Quiz.id == quiz_id))
    return result.scalar_one_or_none()


async def create_quiz(
    session: AsyncSession,
    quiz_id: str,
    title: str,
    quiz_json: str,
    created_at: datetime,
) -> Quiz:
    """퀴즈 생성"""
    quiz = Quiz(
        id=quiz_id,
        title=title,
        quiz_json=quiz_json,
        created_at=created_at,
        updated_at=created_at,
    )
    session.add(quiz)
    await session.commit()
    await session.refresh(quiz)
    return quiz
