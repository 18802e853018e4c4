"""Root conftest - shared test configuration."""

import os

# Keep any app built from process settings off a real database or frontend build
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("STATIC_DIR", "tests-no-frontend")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.infrastructure.database import DatabaseSessionManager  # noqa: E402
from app.models import Lead, QuizAttempt  # noqa: E402,F401


@pytest.fixture
def database_url(tmp_path):
    """Fresh on-disk SQLite file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def db_manager(database_url):
    """Unverified manager over a provisioned schema (state NOT_READY)."""
    manager = DatabaseSessionManager(database_url)
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def ready_db(db_manager):
    await db_manager.verify()
    return db_manager
