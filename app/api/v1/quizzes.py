from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import quiz as quiz_schema
from app.services import quiz_service

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.post("", response_model=quiz_schema.QuizCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_quiz(
    request: quiz_schema.QuizDefinition,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 정의 등록 API"""
    return await quiz_service.create_quiz(db, request)
