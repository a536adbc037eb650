import logging
import math
import uuid
from datetime import datetime
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.crud import submission as submission_crud
from app.exceptions import (
    BaseAppError,
    DuplicateSubmissionError,
    InvalidAnswersError,
    SubmissionNotFoundError,
)
from app.schemas import result as result_schema, submission as submission_schema
from app.services import quiz_service, session_gate, session_service
from app.services.answer_key import build_answer_key
from app.services.grader import grade_answers

logger = logging.getLogger(__name__)


def validate_answers(answers: Any) -> list[submission_schema.SubmittedAnswer]:
    """답안 구조 검증 (문항 1~1000개, 문항당 선택 50개 이하)"""
    try:
        return submission_schema.SubmittedAnswerList.validate_python(answers)
    except ValidationError as e:
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in e.errors()
        ]
        raise InvalidAnswersError("답안 형식이 올바르지 않습니다", errors) from e


def build_result_link(result_token: str) -> str:
    return f"{settings.base_path}/result/?id={result_token}"


async def submit_answers(
    session: AsyncSession,
    session_name: str,
    user_code: str,
    answers: Any,
    now: datetime | None = None,
) -> submission_schema.SubmitResponse:
    """답안 제출 및 채점

    중복 확인 → 채점 → 저장을 하나의 트랜잭션에서 수행한다.
    동시에 들어온 같은 참가자의 요청은 (session_name, user_code) 유니크 제약이 막는다.
    """
    logger.info(f"답안 제출 시도: session_name={session_name}, user_code={user_code}")

    validated_answers = validate_answers(answers)

    quiz_session = await session_service.get_session(session, session_name)

    now = session_gate.ensure_utc(now) or session_gate.utcnow()
    try:
        session_gate.ensure_open(session_name, now, quiz_session.open_from, quiz_session.open_until)
    except BaseAppError as e:
        logger.warning(f"제출 거부: {e.error_code}, session_name={session_name}, user_code={user_code}")
        raise

    quiz = await quiz_service.load_quiz(session, quiz_session.quiz_id)

    try:
        existing = await submission_crud.get_submission_by_session_and_user(session, session_name, user_code)
        if existing:
            logger.warning(f"중복 제출 시도: session_name={session_name}, user_code={user_code}")
            raise DuplicateSubmissionError(session_name, user_code)

        answer_key = build_answer_key(quiz)
        outcome = grade_answers(validated_answers, answer_key)

        submission_id = str(uuid.uuid4())
        await submission_crud.add_submission(
            session,
            submission_id=submission_id,
            session_id=quiz_session.id,
            session_name=session_name,
            user_code=user_code,
            answers=[grade.model_dump() for grade in outcome.per_question],
            score=outcome.total,
            max_score=outcome.max_total,
            created_at=now,
        )
        await session.commit()
    except IntegrityError:
        await session.rollback()
        # 동시 요청이 먼저 커밋된 경우 유니크 제약에서 걸림
        if await submission_crud.get_submission_by_session_and_user(session, session_name, user_code):
            logger.warning(f"동시 중복 제출 차단: session_name={session_name}, user_code={user_code}")
            raise DuplicateSubmissionError(session_name, user_code) from None
        logger.error(f"제출 저장 실패 (무결성 오류): session_name={session_name}", exc_info=True)
        raise
    except BaseAppError:
        await session.rollback()
        raise
    except Exception as e:
        logger.error(
            f"제출 저장 중 예상치 못한 오류: {e}, session_name={session_name}, user_code={user_code}",
            exc_info=True,
        )
        await session.rollback()
        raise

    logger.info(
        f"제출 성공: session_name={session_name}, user_code={user_code}, "
        f"score={outcome.total}/{outcome.max_total}, submission_id={submission_id}"
    )
    return submission_schema.SubmitResponse(
        result_token=submission_id,
        result_link=build_result_link(submission_id),
        score=outcome.total,
        max_score=outcome.max_total,
    )


async def compute_question_stats(
    session: AsyncSession,
    session_name: str,
) -> dict[str, result_schema.QuestionStat]:
    """세션 전체 제출 기록을 훑어 문항별 통계 계산 (매번 새로 계산)"""
    submissions = await submission_crud.get_submissions_by_session_name(session, session_name)
    stats: dict[str, result_schema.QuestionStat] = {}

    for submission in submissions:
        for raw_grade in submission.answers:
            grade = submission_schema.PerQuestionGrade.model_validate(raw_grade)
            stat = stats.setdefault(grade.question_id, result_schema.QuestionStat(question_id=grade.question_id))
            stat.total_responses += 1
            if grade.points > 0:
                stat.correct_count += 1
            for option_id in grade.chosen:
                stat.option_counts[option_id] = stat.option_counts.get(option_id, 0) + 1

    return stats


def _correct_percent(stat: result_schema.QuestionStat | None) -> int | None:
    if stat is None or stat.total_responses == 0:
        return None
    return math.floor(100 * stat.correct_count / stat.total_responses + 0.5)


async def get_result(
    session: AsyncSession,
    result_token: str,
    now: datetime | None = None,
) -> result_schema.ResultResponse | result_schema.PendingDisclosureResponse:
    """결과 조회

    세션이 아직 제출 기간 중이면 데이터 대신 공개 시각(open_after)을 돌려준다.
    """
    submission = await submission_crud.get_submission_by_id(session, result_token)
    if not submission:
        logger.warning(f"결과를 찾을 수 없음: result_token={result_token}")
        raise SubmissionNotFoundError(result_token)

    quiz_session = await session_service.get_session(session, submission.session_name)

    now = session_gate.ensure_utc(now) or session_gate.utcnow()
    if not session_gate.may_disclose(now, quiz_session.open_until):
        logger.debug(f"결과 공개 전: result_token={result_token}, open_until={quiz_session.open_until}")
        return result_schema.PendingDisclosureResponse(
            open_after=session_gate.ensure_utc(quiz_session.open_until),
        )

    quiz = await quiz_service.load_quiz(session, quiz_session.quiz_id)
    question_map = quiz.question_map()
    question_stats = await compute_question_stats(session, submission.session_name)

    details = []
    for raw_grade in submission.answers:
        grade = submission_schema.PerQuestionGrade.model_validate(raw_grade)
        question = question_map.get(grade.question_id)
        details.append(
            result_schema.ResultDetail(
                question_id=grade.question_id,
                keyword=(question.keyword if question and question.keyword else grade.question_id),
                text=question.text if question else None,
                options=question.options if question else None,
                reason=question.reason if question else None,
                correct=grade.correct,
                chosen=grade.chosen,
                points=grade.points,
                max_points=grade.max_points,
                avg_correct_percent=_correct_percent(question_stats.get(grade.question_id)),
            )
        )

    return result_schema.ResultResponse(
        quiz_id=quiz_session.quiz_id,
        quiz_title=quiz.title,
        session_name=submission.session_name,
        user_code=submission.user_code,
        score=submission.score,
        max_score=submission.max_score,
        created_at=session_gate.ensure_utc(submission.created_at),
        details=details,
    )


async def get_session_submissions(
    session: AsyncSession,
    session_name: str,
) -> submission_schema.SubmissionListResponse:
    """세션 제출 목록 조회 (최신순)"""
    await session_service.get_session(session, session_name)
    submissions = await submission_crud.get_submissions_by_session_name(session, session_name)

    summaries = [
        submission_schema.SubmissionSummary(
            id=s.id,
            user_code=s.user_code,
            score=s.score,
            max_score=s.max_score,
            created_at=session_gate.ensure_utc(s.created_at),
            details=[submission_schema.PerQuestionGrade.model_validate(g) for g in s.answers],
        )
        for s in submissions
    ]
    logger.debug(f"제출 목록 조회: session_name={session_name}, count={len(summaries)}")
    return submission_schema.SubmissionListResponse(
        session_name=session_name,
        submissions=summaries,
        total=len(summaries),
    )
