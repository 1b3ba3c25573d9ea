"""Shared fixtures: a throwaway SQLite database per test, seeded rows and an HTTP client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from fitness_tracker.core.config import Settings
from fitness_tracker.db.session import Database
from fitness_tracker.main import create_application
from fitness_tracker.models import Exercise, User


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_dsn=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        create_tables_on_startup=True,
        jwt_secret_key="test-secret",
        environment="test",
        log_level="WARNING",
    )


# =============================================================================
# Service-level fixtures (async session on SQLite)
# =============================================================================


@pytest.fixture
async def database(settings):
    db = Database(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session_maker() as s:
        yield s


@pytest.fixture
async def user_id(session) -> int:
    user = User(username="lifter", email="lifter@example.com", password_hash="not-a-real-hash")
    session.add(user)
    await session.commit()
    return user.id


@pytest.fixture
async def exercise_ids(session) -> list[int]:
    """Ids of Squat, Bench Press, Deadlift (in that order)."""
    items = [Exercise(name=name) for name in ("Squat", "Bench Press", "Deadlift")]
    session.add_all(items)
    await session.commit()
    return [e.id for e in items]


@pytest.fixture
def count_rows(session):
    """``await count_rows(Model, *criteria)`` -> number of matching rows."""

    async def _count(model, *criteria) -> int:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        return await session.scalar(stmt)

    return _count


# =============================================================================
# HTTP fixtures
# =============================================================================


@pytest.fixture
def client(settings):
    app = create_application(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_client(client):
    """Client carrying a bearer token for a freshly registered user; ``client.user_id`` is that user."""
    response = client.post(
        "/auth/register",
        json={"username": "lifter", "email": "lifter@example.com", "password": "Password123!"},
    )
    assert response.status_code == 201
    body = response.json()
    client.headers["Authorization"] = f"Bearer {body['token']}"
    client.user_id = body["user"]["id"]
    return client
