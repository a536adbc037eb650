from sqlalchemy import JSON, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Submission(Base, TimestampMixin):
    __tablename__ = "submissions"
    __table_args__ = (
        # 참가자당 세션별 제출 1회 (동시 요청에 대한 최종 안전장치)
        UniqueConstraint("session_name", "user_code", name="uq_submissions_session_user"),
    )

    # 결과 조회 토큰으로도 사용
    id: Mapped[str] = mapped_column(primary_key=True)
    session_id: Mapped[str] = mapped_column(ForeignKey("quiz_sessions.id"), nullable=False, index=True)
    session_name: Mapped[str] = mapped_column(nullable=False, index=True)
    user_code: Mapped[str] = mapped_column(nullable=False)
    answers: Mapped[list[dict]] = mapped_column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    score: Mapped[int] = mapped_column(nullable=False)
    max_score: Mapped[int] = mapped_column(nullable=False)

    session: Mapped["QuizSession"] = relationship("QuizSession", back_populates="submissions")
