from datetime import datetime

from pydantic import BaseModel, Field


class SessionCreateRequest(BaseModel):
    """세션 생성 요청 스키마"""
    quiz_id: str = Field(..., min_length=1, description="퀴즈 ID")
    open_from: datetime | None = Field(None, description="제출 시작 시각 (기본값: 생성 시각)")
    open_until: datetime | None = Field(None, description="제출 종료 시각 (None이면 종료 없음, 결과 즉시 공개)")


class SessionUpdateRequest(BaseModel):
    """세션 공개 기간 수정 요청 스키마 (관리자용)"""
    open_from: datetime | None = None
    open_until: datetime | None = None


class SessionCreateResponse(BaseModel):
    """세션 생성 응답 스키마"""
    session_id: str
    session_name: str


class SessionResponse(BaseModel):
    """세션 응답 스키마"""
    id: str
    session_name: str
    quiz_id: str
    quiz_title: str | None = None
    open_from: datetime | None
    open_until: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class SessionListResponse(BaseModel):
    """세션 목록 응답 스키마"""
    sessions: list[SessionResponse]
    total: int
