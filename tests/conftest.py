"""공용 테스트 픽스처"""
import json
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.models import Base, Quiz, QuizSession
from app.models.base import get_db

SAMPLE_QUIZ = {
    "title": "지리 기초",
    "questions": [
        {
            "id": "q1",
            "text": "대한민국의 수도는?",
            "keyword": "수도",
            "reason": "서울은 1394년부터 수도였다.",
            "options": [
                {"id": "a", "text": "부산"},
                {"id": "b", "text": "서울", "correct": True},
                {"id": "c", "text": "대구"},
            ],
        },
        {
            "id": "q2",
            "text": "바다에 접한 도시를 모두 고르시오",
            "points": 2,
            "options": [
                {"id": "a", "text": "부산", "correct": True},
                {"id": "b", "text": "인천", "correct": True},
                {"id": "c", "text": "대전", "correct": False},
            ],
        },
        {
            "id": "q3",
            "text": "한라산이 있는 곳은?",
            "options": [
                {"id": "a", "text": "제주도"},
                {"id": "b", "text": "울릉도"},
            ],
            "correct": ["a"],
        },
    ],
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
async def test_engine():
    """테스트용 인메모리 SQLite 엔진"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest.fixture
async def test_db_session(session_factory):
    """테스트용 DB 세션"""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """get_db를 테스트 DB로 교체한 API 클라이언트"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_session(test_db_session):
    """퀴즈와 세션을 DB에 직접 생성하는 팩토리"""
    async def _make(
        quiz: dict | None = None,
        open_from: datetime | None = None,
        open_until: datetime | None = None,
    ) -> QuizSession:
        quiz_row = Quiz(
            id=str(uuid.uuid4()),
            title=(quiz or SAMPLE_QUIZ)["title"],
            quiz_json=json.dumps(quiz or SAMPLE_QUIZ),
        )
        quiz_session = QuizSession(
            id=str(uuid.uuid4()),
            session_name=f"2026-01-01-00-00-{uuid.uuid4().hex[:8]}",
            quiz_id=quiz_row.id,
            open_from=open_from,
            open_until=open_until,
        )
        test_db_session.add(quiz_row)
        test_db_session.add(quiz_session)
        await test_db_session.commit()
        return quiz_session

    return _make


@pytest.fixture
async def open_session(make_session):
    """1시간 전에 열렸고 종료 시각이 없는 세션"""
    return await make_session(open_from=utcnow() - timedelta(hours=1))


@pytest.fixture
def sample_quiz():
    return SAMPLE_QUIZ


@pytest.fixture
def perfect_answers():
    return [
        {"questionId": "q1", "chosen": ["b"]},
        {"questionId": "q2", "chosen": ["a", "b"]},
        {"questionId": "q3", "chosen": "a"},
    ]
