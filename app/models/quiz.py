from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Quiz(Base, TimestampMixin):
    __tablename__ = "quizzes"

    id: Mapped[str] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(nullable=False)
    # 문제/선택지/정답 정보를 담은 퀴즈 정의 전체 (JSON 문자열)
    quiz_json: Mapped[str] = mapped_column(Text, nullable=False)

    sessions: Mapped[list["QuizSession"]] = relationship(
        "QuizSession",
        back_populates="quiz",
    )
