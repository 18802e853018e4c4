"""Global error handlers.

Invariants:
    - Unhandled exceptions answer 500 with the generic envelope
    - Exception text never reaches the client
"""

from httpx import ASGITransport, AsyncClient

from app.main import create_app


async def test_unhandled_exception_is_generic_500(settings, ready_db):
    app = create_app(settings, ready_db, verify_on_startup=False)

    @app.get("/api/explode")
    async def explode():
        raise RuntimeError("password=hunter2 at db.internal:5432")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        res = await c.get("/api/explode")

    assert res.status_code == 500
    body = res.json()["error"]
    assert body["code"] == "INTERNAL_ERROR"
    assert body["message"] == "Internal error"
    assert body["severity"] == "critical"
    assert "hunter2" not in res.text
