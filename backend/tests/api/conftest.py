"""API test fixtures - FastAPI app built around an injected test database.

Invariants:
    - Every test gets a fresh SQLite file with both tables provisioned
    - The app under test never reads the process-wide settings cache
    - Lifespan is not run by ASGITransport; readiness is set by the fixtures
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.infrastructure.database import DatabaseSessionManager
from app.main import create_app

ALLOWED_ORIGIN = "http://allowed.example"


@pytest.fixture
def settings(tmp_path, database_url):
    return Settings(
        _env_file=None,
        database_url=database_url,
        static_dir=str(tmp_path / "no-frontend"),
        cors_origins=[ALLOWED_ORIGIN],
        log_format="text",
    )


def _client(app) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    )


@pytest.fixture
async def client(settings, ready_db):
    """Client against an app whose store is verified and provisioned."""
    app = create_app(settings, ready_db, verify_on_startup=False)
    async with _client(app) as c:
        yield c


@pytest.fixture
async def unready_client(settings, db_manager):
    """Client against an app whose store has not been verified yet."""
    app = create_app(settings, db_manager, verify_on_startup=False)
    async with _client(app) as c:
        yield c


@pytest.fixture
async def broken_client(settings, tmp_path):
    """Store reachable (verify passes) but tables missing: every insert fails."""
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}",
    )
    await manager.verify()
    app = create_app(settings, manager, verify_on_startup=False)
    async with _client(app) as c:
        yield c
    await manager.dispose()


@pytest.fixture
def frontend_dir(tmp_path):
    root = tmp_path / "frontend"
    root.mkdir()
    (root / "index.html").write_text("<html><body>quiz app</body></html>")
    (root / "app.js").write_text("console.log('quiz');")
    return root


@pytest.fixture
async def spa_client(settings, ready_db, frontend_dir):
    app = create_app(
        settings.model_copy(update={"static_dir": str(frontend_dir)}),
        ready_db, verify_on_startup=False,
    )
    async with _client(app) as c:
        yield c
