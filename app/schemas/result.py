from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.quiz import QuizOption


class ResultDetail(BaseModel):
    """결과 화면용 문항별 상세"""
    question_id: str
    keyword: str
    text: str | None = None
    options: list[QuizOption] | None = None
    reason: str | None = None
    correct: list[str]
    chosen: list[str]
    points: int
    max_points: int
    avg_correct_percent: int | None = Field(None, description="세션 전체 정답률 (%)")


class ResultResponse(BaseModel):
    """결과 조회 응답 스키마"""
    quiz_id: str
    quiz_title: str
    session_name: str
    user_code: str
    score: int
    max_score: int
    created_at: datetime
    details: list[ResultDetail]


class PendingDisclosureResponse(BaseModel):
    """결과 공개 전 응답 (세션 종료 시각 이후 공개)"""
    open_after: datetime


class QuestionStat(BaseModel):
    """문항별 응답 통계"""
    question_id: str
    total_responses: int = 0
    correct_count: int = 0
    option_counts: dict[str, int] = Field(default_factory=dict)


class SessionQuestionStat(QuestionStat):
    """세션 통계 화면용 문항 통계"""
    keyword: str
    correct: list[str]


class SessionStatsResponse(BaseModel):
    """세션 통계 응답 스키마"""
    session_name: str
    quiz_title: str
    participants: int
    average_score: float | None
    question_stats: list[SessionQuestionStat]
