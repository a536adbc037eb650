from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, Field, StringConstraints, TypeAdapter, field_validator

# 영문/숫자/움라우트/공백/하이픈/밑줄
USER_CODE_PATTERN = r"^[a-zA-Z0-9äöüÄÖÜß _-]+$"

MAX_ANSWERS = 1000
MAX_CHOSEN_PER_ANSWER = 50

OptionId = Annotated[str, StringConstraints(min_length=1, max_length=10)]


class SubmittedAnswer(BaseModel):
    """제출 답안 (문항 하나)"""
    question_id: str = Field(..., alias="questionId", min_length=1, max_length=100)
    chosen: list[OptionId] = Field(default_factory=list, max_length=MAX_CHOSEN_PER_ANSWER)

    model_config = {"populate_by_name": True}

    @field_validator("chosen", mode="before")
    @classmethod
    def wrap_single_choice(cls, v):
        """단일 선택 문자열을 목록으로 변환"""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("chosen")
    @classmethod
    def collapse_duplicates(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


SubmittedAnswerList = TypeAdapter(
    Annotated[list[SubmittedAnswer], Field(min_length=1, max_length=MAX_ANSWERS)]
)


class SubmitRequest(BaseModel):
    """답안 제출 요청 스키마 (프론트엔드 호환: userCode 필드명 지원)"""
    user_code: str = Field(
        ...,
        alias="userCode",
        min_length=1,
        max_length=100,
        pattern=USER_CODE_PATTERN,
        description="참가자 코드",
    )
    # 답안 구조 검증은 채점 서비스에서 수행 (입력 오류를 400으로 응답)
    answers: Any = Field(None, description="답안 목록 [{questionId, chosen}]")

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}


class PerQuestionGrade(BaseModel):
    """문항별 채점 결과"""
    question_id: str
    correct: list[str] = Field(default_factory=list)
    chosen: list[str] = Field(default_factory=list)
    points: int
    max_points: int
    error: str | None = Field(None, description="채점 불가 사유 (예: unknown question)")


class SubmitResponse(BaseModel):
    """답안 제출 응답 스키마"""
    result_token: str
    result_link: str
    score: int
    max_score: int


class SubmissionSummary(BaseModel):
    """세션 제출 목록 항목"""
    id: str
    user_code: str
    score: int
    max_score: int
    created_at: datetime
    details: list[PerQuestionGrade]


class SubmissionListResponse(BaseModel):
    """세션 제출 목록 응답 스키마"""
    session_name: str
    submissions: list[SubmissionSummary]
    total: int
