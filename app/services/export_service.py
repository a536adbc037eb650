import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import submission as submission_crud
from app.schemas import result as result_schema
from app.services import grading_service, quiz_service, session_service
from app.services.answer_key import build_answer_key

logger = logging.getLogger(__name__)


async def get_session_stats(
    session: AsyncSession,
    session_name: str,
) -> result_schema.SessionStatsResponse:
    """세션 통계 (교사용, 결과 공개 기간과 무관하게 조회 가능)

    퀴즈 문항 순서대로 정렬하고, 선택되지 않은 선택지도 0으로 채운다.
    퀴즈에 없는 문항의 채점 기록은 제외한다.
    """
    quiz_session = await session_service.get_session(session, session_name)
    quiz = await quiz_service.load_quiz(session, quiz_session.quiz_id)
    submissions = await submission_crud.get_submissions_by_session_name(session, session_name)

    answer_key = build_answer_key(quiz)
    computed = await grading_service.compute_question_stats(session, session_name)

    question_stats = []
    for question in quiz.questions:
        stat = computed.get(question.id)
        option_counts = {option.id: 0 for option in question.options}
        if stat is not None:
            for option_id, count in stat.option_counts.items():
                if option_id in option_counts:
                    option_counts[option_id] = count

        question_stats.append(
            result_schema.SessionQuestionStat(
                question_id=question.id,
                keyword=question.short_label(),
                correct=list(answer_key[question.id].correct_order),
                total_responses=stat.total_responses if stat else 0,
                correct_count=stat.correct_count if stat else 0,
                option_counts=option_counts,
            )
        )

    average_score = None
    if submissions:
        average_score = round(sum(s.score for s in submissions) / len(submissions), 2)

    logger.info(f"세션 통계 조회: session_name={session_name}, participants={len(submissions)}")
    return result_schema.SessionStatsResponse(
        session_name=session_name,
        quiz_title=quiz.title,
        participants=len(submissions),
        average_score=average_score,
        question_stats=question_stats,
    )
