from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.base import get_db
from app.schemas import (
    quiz as quiz_schema,
    result as result_schema,
    session as session_schema,
    submission as submission_schema,
)
from app.services import export_service, grading_service, session_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=session_schema.SessionCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: session_schema.SessionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """세션 생성 API"""
    return await session_service.create_session(db, request)


@router.get("", response_model=session_schema.SessionListResponse)
async def get_sessions(
    limit: int | None = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """세션 목록 조회 API"""
    return await session_service.get_all_sessions(db, limit or settings.session_list_limit)


@router.get("/open", response_model=session_schema.SessionListResponse)
async def get_open_sessions(
    db: AsyncSession = Depends(get_db),
):
    """현재 제출 가능한 세션 목록 조회 API (참가자용)"""
    return await session_service.get_currently_open_sessions(db)


@router.get("/{session_name}", response_model=session_schema.SessionResponse)
async def get_session(
    session_name: str,
    db: AsyncSession = Depends(get_db),
):
    """세션 조회 API"""
    return await session_service.get_session_detail(db, session_name)


@router.patch("/{session_name}", response_model=session_schema.SessionResponse)
async def update_session(
    session_name: str,
    request: session_schema.SessionUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """세션 공개 기간 수정 API (관리자용)"""
    return await session_service.update_session_times(db, session_name, request)


@router.get("/{session_name}/quiz", response_model=quiz_schema.SessionQuizResponse)
async def get_session_quiz(
    session_name: str,
    for_stat: bool = Query(False, description="통계 화면용 조회 (공개 기간 검사 생략)"),
    db: AsyncSession = Depends(get_db),
):
    """세션 퀴즈 조회 API (정답 정보 제외)"""
    return await session_service.get_session_quiz(db, session_name, for_stat=for_stat)


@router.post(
    "/{session_name}/submit",
    response_model=submission_schema.SubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_answers(
    session_name: str,
    request: submission_schema.SubmitRequest,
    db: AsyncSession = Depends(get_db),
):
    """답안 제출 API"""
    return await grading_service.submit_answers(db, session_name, request.user_code, request.answers)


@router.get("/{session_name}/stats", response_model=result_schema.SessionStatsResponse)
async def get_session_stats(
    session_name: str,
    db: AsyncSession = Depends(get_db),
):
    """세션 통계 조회 API (교사용)"""
    return await export_service.get_session_stats(db, session_name)


@router.get("/{session_name}/submissions", response_model=submission_schema.SubmissionListResponse)
async def get_session_submissions(
    session_name: str,
    db: AsyncSession = Depends(get_db),
):
    """세션 제출 목록 조회 API (교사용)"""
    return await grading_service.get_session_submissions(db, session_name)
