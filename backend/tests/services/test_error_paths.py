"""Failure envelopes — database errors (503) and unexpected exceptions (500)."""

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

import teacher_api.infrastructure.database as db_module
from teacher_api.core.errors import DatabaseError
from teacher_api.infrastructure.database import DatabaseSessionManager, get_db
from teacher_api.main import app

UNREACHABLE_URL = "sqlite+aiosqlite:////nonexistent-dir/teacher_api/portal.db"


@pytest.fixture
async def memory_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with manager.engine.begin() as conn:
        await conn.execute(text("CREATE TABLE marks (id INTEGER PRIMARY KEY)"))
    yield manager
    await manager.dispose()


@pytest.fixture
async def raw_client():
    """Client that returns 500 responses instead of re-raising app exceptions."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


async def test_integrity_error_maps_to_database_error_and_rolls_back(memory_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with memory_manager.session() as db:
            await db.execute(text("INSERT INTO marks (id) VALUES (1)"))
            await db.execute(text("INSERT INTO marks (id) VALUES (1)"))

    assert exc_info.value.http_status == 503
    assert exc_info.value.code == "DATABASE_ERROR"
    assert exc_info.value.operation == "commit"

    async with memory_manager.session() as db:
        assert await db.scalar(text("SELECT count(*) FROM marks")) == 0


async def test_operational_error_maps_to_database_error(memory_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with memory_manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))
    assert exc_info.value.operation == "execute"


async def test_readiness_reports_unreachable_database(client):
    broken = DatabaseSessionManager(UNREACHABLE_URL)
    working = db_module.db_manager
    db_module.db_manager = broken
    try:
        response = await client.get("/v1/api/health/ready")
    finally:
        db_module.db_manager = working
        await broken.dispose()

    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "reason": "database_unavailable"}


async def test_database_error_envelope(raw_client, auth):
    async def failing_db():
        raise DatabaseError("Connection or operational error", "execute")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = failing_db
    response = await raw_client.get(
        "/v1/api/teacher/filters/courses", headers=auth(sub=str(uuid4())),
    )

    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "DATABASE_ERROR"
    assert error["category"] == "database"
    assert error["severity"] == "critical"


async def test_unexpected_error_envelope_hides_details(raw_client, auth):
    async def exploding_db():
        raise RuntimeError("password=hunter2 host=db.internal")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = exploding_db
    response = await raw_client.get(
        "/v1/api/teacher/filters/courses", headers=auth(sub=str(uuid4())),
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": "internal",
            "severity": "critical",
        },
    }
    assert "hunter2" not in response.text
