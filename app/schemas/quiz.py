from pydantic import BaseModel, Field, field_validator


class QuizOption(BaseModel):
    """퀴즈 선택지 스키마 (correct 플래그는 신규 형식에서만 존재)"""
    id: str
    text: str = ""
    correct: bool | None = Field(None, description="정답 여부 (신규 형식)")

    model_config = {"extra": "allow"}


class QuizQuestion(BaseModel):
    """퀴즈 문항 스키마

    정답은 두 가지 형식으로 저장된다.
    - 신규 형식: options[].correct = true
    - 구 형식: 문항 단위 correct 목록 (단일 값도 허용)
    """
    id: str = Field(..., min_length=1, max_length=100)
    text: str = ""
    keyword: str | None = None
    reason: str | None = None
    points: int | None = Field(None, ge=1, description="배점 (기본값 1)")
    multiple: bool = False
    options: list[QuizOption] = Field(default_factory=list)
    correct: list[str] | None = Field(None, description="정답 선택지 ID 목록 (구 형식)")

    model_config = {"extra": "allow"}

    @field_validator("correct", mode="before")
    @classmethod
    def wrap_single_correct(cls, v):
        """구 형식의 단일 정답 값을 목록으로 변환"""
        if v is None or isinstance(v, list):
            return v
        return [v]

    def short_label(self) -> str:
        """목록/통계 화면용 짧은 문항 이름"""
        if self.keyword:
            return self.keyword
        return self.text if len(self.text) <= 30 else self.text[:30] + "..."


class QuizDefinition(BaseModel):
    """퀴즈 정의 스키마 (세션이 참조하는 불변 스냅샷)"""
    title: str = Field("Untitled", max_length=200)
    questions: list[QuizQuestion] = Field(..., min_length=1)

    model_config = {"extra": "allow"}

    def question_map(self) -> dict[str, QuizQuestion]:
        return {q.id: q for q in self.questions}


class QuizCreateResponse(BaseModel):
    """퀴즈 등록 응답 스키마"""
    quiz_id: str
    title: str


class SessionQuizOption(BaseModel):
    """참가자용 선택지 (정답 정보 제외)"""
    id: str
    text: str


class SessionQuizQuestion(BaseModel):
    """참가자용 문항 (정답 정보 제외)"""
    id: str
    keyword: str
    text: str
    options: list[SessionQuizOption]
    multiple: bool
    points: int


class SessionQuizResponse(BaseModel):
    """세션 퀴즈 조회 응답 스키마"""
    id: str
    title: str
    questions: list[SessionQuizQuestion]
