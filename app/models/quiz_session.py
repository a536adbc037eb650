from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class QuizSession(Base, TimestampMixin):
    __tablename__ = "quiz_sessions"
    __table_args__ = (
        CheckConstraint(
            "open_until IS NULL OR open_from IS NULL OR open_until > open_from",
            name="ck_quiz_sessions_window",
        ),
    )

    id: Mapped[str] = mapped_column(primary_key=True)
    session_name: Mapped[str] = mapped_column(nullable=False, unique=True, index=True)
    quiz_id: Mapped[str] = mapped_column(ForeignKey("quizzes.id"), nullable=False, index=True)
    open_from: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    # None이면 종료되지 않는 세션 (결과도 즉시 공개)
    open_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)

    quiz: Mapped["Quiz"] = relationship("Quiz", back_populates="sessions")
    submissions: Mapped[list["Submission"]] = relationship(
        "Submission",
        back_populates="session",
    )
