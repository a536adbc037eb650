import json
import logging
import uuid

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import quiz as quiz_crud
from app.exceptions import QuizDataCorruptedError, QuizNotFoundError
from app.schemas import quiz as quiz_schema
from app.services.session_gate import utcnow

logger = logging.getLogger(__name__)


async def load_quiz(session: AsyncSession, quiz_id: str) -> quiz_schema.QuizDefinition:
    """저장된 퀴즈 정의 로드"""
    quiz = await quiz_crud.get_quiz_by_id(session, quiz_id)
    if not quiz:
        logger.warning(f"퀴즈를 찾을 수 없음: quiz_id={quiz_id}")
        raise QuizNotFoundError(quiz_id)

    try:
        return quiz_schema.QuizDefinition.model_validate(json.loads(quiz.quiz_json))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"퀴즈 정의 파싱 실패: quiz_id={quiz_id}, error={e}")
        raise QuizDataCorruptedError(quiz_id) from e


async def create_quiz(
    session: AsyncSession,
    definition: quiz_schema.QuizDefinition,
) -> quiz_schema.QuizCreateResponse:
    """퀴즈 정의 저장"""
    quiz_id = str(uuid.uuid4())
    quiz = await quiz_crud.create_quiz(
        session,
        quiz_id=quiz_id,
        title=definition.title,
        quiz_json=definition.model_dump_json(exclude_none=True),
        created_at=utcnow(),
    )
    logger.info(f"퀴즈 등록: quiz_id={quiz.id}, questions={len(definition.questions)}")
    return quiz_schema.QuizCreateResponse(quiz_id=quiz.id, title=quiz.title)
