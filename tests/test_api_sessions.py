"""Sessions API 통합 테스트"""
import re
import warnings
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import SADeprecationWarning

from app.crud import session as session_crud
from app.schemas import session as session_schema
from app.services import session_service

SESSION_NAME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}-\d{2}-\d{2}(-\d+)?$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def _create_quiz(client, quiz) -> str:
    response = await client.post("/api/v1/quizzes", json=quiz)
    assert response.status_code == 201
    return response.json()["quiz_id"]


@pytest.mark.asyncio
async def test_create_quiz_and_session(client, sample_quiz):
    """퀴즈 등록 후 세션 생성 (open_from 기본값은 생성 시각)"""
    quiz_id = await _create_quiz(client, sample_quiz)

    response = await client.post("/api/v1/sessions", json={"quiz_id": quiz_id})

    assert response.status_code == 201
    data = response.json()
    assert SESSION_NAME_PATTERN.match(data["session_name"])

    response = await client.get(f"/api/v1/sessions/{data['session_name']}")

    assert response.status_code == 200
    session = response.json()
    assert session["id"] == data["session_id"]
    assert session["quiz_id"] == quiz_id
    assert session["quiz_title"] == "지리 기초"
    assert session["open_from"] is not None
    assert session["open_until"] is None


@pytest.mark.asyncio
async def test_session_names_are_unique_within_a_minute(test_db_session, client, sample_quiz):
    """같은 분에 만든 세션은 접미사로 구분"""
    quiz_id = await _create_quiz(client, sample_quiz)
    now = datetime(2026, 5, 4, 12, 0, 30, tzinfo=timezone.utc)
    request = session_schema.SessionCreateRequest(quiz_id=quiz_id)

    first = await session_service.create_session(test_db_session, request, now=now)
    second = await session_service.create_session(test_db_session, request, now=now + timedelta(seconds=10))

    assert first.session_name == "2026-05-04-12-00"
    assert second.session_name == "2026-05-04-12-00-2"


@pytest.mark.asyncio
async def test_create_session_quiz_not_found(client):
    response = await client.post("/api/v1/sessions", json={"quiz_id": "no-such-quiz"})

    assert response.status_code == 404
    assert response.json()["error_code"] == "QUIZ_NOT_FOUND"


@pytest.mark.asyncio
async def test_create_session_invalid_window(client, sample_quiz):
    """open_until은 open_from 이후여야 함"""
    quiz_id = await _create_quiz(client, sample_quiz)
    open_from = utcnow() + timedelta(hours=2)

    response = await client.post(
        "/api/v1/sessions",
        json={
            "quiz_id": quiz_id,
            "open_from": open_from.isoformat(),
            "open_until": (open_from - timedelta(hours=1)).isoformat(),
        },
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_SESSION_WINDOW"


@pytest.mark.asyncio
async def test_get_session_not_found(client):
    response = await client.get("/api/v1/sessions/2000-01-01-00-00")

    assert response.status_code == 404
    assert response.json()["error_code"] == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_open_sessions(client, make_session):
    """현재 제출 가능한 세션만 조회"""
    now = utcnow()
    open_window = await make_session(open_from=now - timedelta(hours=1), open_until=now + timedelta(hours=1))
    unlimited = await make_session(open_from=now - timedelta(hours=1))
    await make_session(open_from=now + timedelta(hours=1), open_until=now + timedelta(hours=2))
    await make_session(open_from=now - timedelta(hours=2), open_until=now - timedelta(hours=1))

    response = await client.get("/api/v1/sessions/open")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert {s["session_name"] for s in data["sessions"]} == {open_window.session_name, unlimited.session_name}
    assert all(s["quiz_title"] == "지리 기초" for s in data["sessions"])


@pytest.mark.asyncio
async def test_get_all_sessions(client, make_session):
    now = utcnow()
    await make_session(open_from=now - timedelta(hours=1))
    await make_session(open_from=now - timedelta(hours=2), open_until=now - timedelta(hours=1))

    response = await client.get("/api/v1/sessions", params={"limit": 10})

    assert response.status_code == 200
    assert response.json()["total"] == 2


@pytest.mark.asyncio
async def test_update_session_times(client, open_session):
    """관리자용 공개 기간 수정 (보낸 필드만 변경)"""
    open_until = utcnow() + timedelta(days=1)

    response = await client.patch(
        f"/api/v1/sessions/{open_session.session_name}",
        json={"open_until": open_until.isoformat()},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["open_from"] is not None
    assert datetime.fromisoformat(data["open_until"].replace("Z", "+00:00")) == open_until


@pytest.mark.asyncio
async def test_update_session_times_invalid_window(client, open_session):
    response = await client.patch(
        f"/api/v1/sessions/{open_session.session_name}",
        json={"open_until": (utcnow() - timedelta(days=1)).isoformat()},
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_SESSION_WINDOW"


@pytest.mark.asyncio
async def test_get_session_quiz_strips_answers(client, open_session):
    """참가자용 퀴즈에는 정답 정보가 없음"""
    response = await client.get(f"/api/v1/sessions/{open_session.session_name}/quiz")

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "지리 기초"
    questions = {q["id"]: q for q in data["questions"]}
    assert questions["q1"]["keyword"] == "수도"
    assert questions["q1"]["multiple"] is False
    assert questions["q2"]["multiple"] is True
    assert questions["q2"]["points"] == 2
    assert "correct" not in response.text


@pytest.mark.asyncio
async def test_get_session_quiz_not_yet_open(client, make_session):
    """시작 전에는 조회 불가, 통계용 조회는 허용"""
    now = utcnow()
    quiz_session = await make_session(open_from=now + timedelta(hours=1), open_until=now + timedelta(hours=2))

    response = await client.get(f"/api/v1/sessions/{quiz_session.session_name}/quiz")
    assert response.status_code == 422
    assert response.json()["error_code"] == "SESSION_NOT_YET_OPEN"

    response = await client.get(
        f"/api/v1/sessions/{quiz_session.session_name}/quiz",
        params={"for_stat": "true"},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_session_rows_unpack_with_quiz_title(test_db_session, make_session):
    """세션 목록 조회 결과는 (세션, 퀴즈 제목) 쌍"""
    now = utcnow()
    open_window = await make_session(open_from=now - timedelta(hours=1))

    with warnings.catch_warnings():
        warnings.simplefilter("error", SADeprecationWarning)
        all_rows = await session_crud.get_sessions_with_title(test_db_session, 10)
        unclosed_rows = await session_crud.get_unclosed_sessions_with_title(test_db_session, now)

    for rows in (all_rows, unclosed_rows):
        [(quiz_session, title)] = rows
        assert quiz_session.session_name == open_window.session_name
        assert title == "지리 기초"
