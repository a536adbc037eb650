from app.models.base import Base, get_db
from app.models.quiz import Quiz
from app.models.quiz_session import QuizSession
from app.models.submission import Submission

__all__ = ["Base", "Quiz", "QuizSession", "Submission", "get_db"]
