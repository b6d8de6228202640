"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Ensure a valid JWT_SECRET is always set for test runs.
# This must happen before any import of nexus.api.deps which validates
# the secret at module-load time.
# ---------------------------------------------------------------------------
_TEST_JWT_SECRET = "test-secret-for-pytest-only-" + "x" * 40  # > 32 chars
os.environ.setdefault("JWT_SECRET", _TEST_JWT_SECRET)

import pytest  # noqa: E402
from sqlalchemy import Engine, create_engine, event  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from nexus import security  # noqa: E402
from nexus.config import NexusConfig  # noqa: E402
from nexus.database.models import Base, Course  # noqa: E402


@pytest.fixture(autouse=True)
def _fast_bcrypt(monkeypatch):
    """bcrypt at its minimum work factor; the default makes the suite crawl."""
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with all Nexus tables.

    Uses StaticPool so all threads share the same in-memory database
    (required by ``asyncio.to_thread`` used for login/registration).
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enforce_foreign_keys(dbapi_connection, _record):
        # SQLite ignores FOREIGN KEY clauses unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """Provide a transactional session that rolls back after each test."""
    with Session(db_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def nexus_config() -> NexusConfig:
    return NexusConfig(
        app_name="Nexus Test",
        token_ttl_days=7,
        completion_xp_bonus=150,
        chat_history_limit=50,
        enable_seed_endpoint=False,
    )


@pytest.fixture
def client(db_engine, nexus_config):
    """FastAPI TestClient wired to the in-memory engine and test config."""
    from fastapi.testclient import TestClient

    from nexus.api.deps import get_config, get_engine
    from nexus.api.main import app

    app.dependency_overrides[get_engine] = lambda: db_engine
    app.dependency_overrides[get_config] = lambda: nexus_config
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def courses(db_engine) -> dict[str, int]:
    """The three catalog courses; returns ``{title: id}``."""
    rows = [
        Course(
            title="AI Tools for Modern Developers",
            description="Master the integration of LLMs into your daily coding workflow.",
            category="Technical",
            duration="2h 30m",
            rating=4.8,
        ),
        Course(
            title="Collaborative Problem Solving",
            description="Strategies for overcoming resistance to change in large teams.",
            category="Soft Skills",
            duration="45m",
            rating=4.5,
            gradient="from-orange-400 to-pink-500",
            icon="users",
        ),
        Course(
            title="Managing Remote Teams",
            description="Best practices for leading distributed teams effectively.",
            category="Leadership",
            duration="1h 15m",
            rating=4.7,
            is_locked=True,
            gradient="from-green-400 to-teal-500",
            icon="users-2",
        ),
    ]
    with Session(db_engine, expire_on_commit=False) as session:
        session.add_all(rows)
        session.commit()
    return {c.title: c.id for c in rows}


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client, name="Test User", email="test@nexus.com", password="password123") -> dict:
    """Register through the API and return the response body."""
    resp = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
