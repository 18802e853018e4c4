"""Startup - fail-fast verification surfaced to the entry point.

Invariants:
    - `python -m app` serves before verify() finishes: writes answer 503,
      then 201 once the store is verified
    - A failed verify() stops the server and exits with status 1
    - Importing the factory module builds no app
"""

import asyncio

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

import app.__main__ as entry
import app.main as main_module
from app.config import Settings
from app.core.domain_types import ReadinessState
from app.core.errors import StartupError
from app.infrastructure.database import DatabaseSessionManager
from app.main import create_app

LEAD = {"name": "Ana", "email": "ana@example.com"}


@pytest.fixture
def unreachable_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'missing-dir' / 'x.db'}"


@pytest.fixture
def unreachable_db(unreachable_url):
    return DatabaseSessionManager(unreachable_url)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        static_dir=str(tmp_path / "no-frontend"),
        log_format="text",
    )


@pytest.fixture
def servers(monkeypatch):
    """Replace uvicorn.Server with one that idles until told to exit."""
    started = []

    class IdleServer:
        def __init__(self, config):
            self.config = config
            self.should_exit = False
            started.append(self)

        async def serve(self):
            while not self.should_exit:
                await asyncio.sleep(0.01)

    monkeypatch.setattr(entry.uvicorn, "Server", IdleServer)
    return started


async def _wait_until(predicate):
    async def poll():
        while not predicate():
            await asyncio.sleep(0.01)
    await asyncio.wait_for(poll(), timeout=5)


async def test_lifespan_aborts_on_unreachable_database(settings, unreachable_db):
    app = create_app(settings, unreachable_db)
    with pytest.raises(StartupError):
        async with app.router.lifespan_context(app):
            pass
    await unreachable_db.dispose()


async def test_lifespan_verifies_reachable_database(settings, db_manager):
    app = create_app(settings, db_manager)
    async with app.router.lifespan_context(app):
        assert db_manager.is_ready


async def test_lifespan_skips_verify_when_disabled(settings, db_manager):
    app = create_app(settings, db_manager, verify_on_startup=False)
    async with app.router.lifespan_context(app):
        assert not db_manager.is_ready


async def test_serve_answers_503_until_verified(
    monkeypatch, settings, database_url, db_manager, servers,
):
    gate = asyncio.Event()
    verify = DatabaseSessionManager.verify

    async def gated_verify(self):
        await gate.wait()
        await verify(self)

    monkeypatch.setattr(DatabaseSessionManager, "verify", gated_verify)
    monkeypatch.setattr(
        entry, "get_settings",
        lambda: settings.model_copy(update={"database_url": database_url}),
    )

    task = asyncio.create_task(entry.serve())
    await _wait_until(lambda: servers)
    app = servers[0].config.app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        res = await c.post("/api/leads", json=LEAD)
        assert res.status_code == 503

        gate.set()
        await _wait_until(lambda: app.state.db.is_ready)
        res = await c.post("/api/leads", json=LEAD)
        assert res.status_code == 201

    servers[0].should_exit = True
    await task


async def test_serve_stops_server_when_verify_fails(
    monkeypatch, settings, unreachable_url, servers,
):
    monkeypatch.setattr(
        entry, "get_settings",
        lambda: settings.model_copy(update={"database_url": unreachable_url}),
    )

    with pytest.raises(StartupError):
        await entry.serve()

    assert servers[0].should_exit
    assert servers[0].config.app.state.db.state is ReadinessState.FAILED


def test_main_exits_nonzero_when_database_unreachable(
    monkeypatch, settings, unreachable_url, servers,
):
    monkeypatch.setattr(
        entry, "get_settings",
        lambda: settings.model_copy(update={"database_url": unreachable_url}),
    )
    assert entry.main() == 1


def test_main_exits_nonzero_on_startup_error(monkeypatch):
    async def failing_serve():
        raise StartupError("Database unreachable at startup")

    monkeypatch.setattr(entry, "serve", failing_serve)
    assert entry.main() == 1


def test_factory_module_builds_no_app():
    assert "app" not in vars(main_module)


def test_asgi_module_exposes_app():
    from app import asgi

    assert isinstance(asgi.app, FastAPI)
