"""Single-page-app fallback.

Invariants:
    - Existing frontend files are served as-is
    - Unknown non-API GET paths get index.html
    - Unknown /api paths return 404, never the SPA index
    - Without a frontend build unmatched routes return 404
    - Unmatched POSTs answer 404 with or without a frontend build
"""


async def test_existing_asset_served(spa_client):
    res = await spa_client.get("/app.js")
    assert res.status_code == 200
    assert "console.log" in res.text


async def test_root_serves_index(spa_client):
    res = await spa_client.get("/")
    assert res.status_code == 200
    assert "quiz app" in res.text


async def test_unknown_path_falls_back_to_index(spa_client):
    res = await spa_client.get("/results/42")
    assert res.status_code == 200
    assert "quiz app" in res.text


async def test_unknown_api_path_is_404(spa_client):
    res = await spa_client.get("/api/unknown")
    assert res.status_code == 404


async def test_api_routes_take_precedence(spa_client):
    res = await spa_client.get("/api")
    assert res.text == "API is running"
    res = await spa_client.post(
        "/api/leads", json={"name": "Ana", "email": "ana@example.com"},
    )
    assert res.status_code == 201


async def test_unmatched_route_404_without_frontend(client):
    res = await client.get("/results/42")
    assert res.status_code == 404


async def test_unmatched_post_is_404_with_frontend(spa_client):
    res = await spa_client.post("/contact", json={})
    assert res.status_code == 404


async def test_unmatched_post_is_404_without_frontend(client):
    res = await client.post("/contact", json={})
    assert res.status_code == 404
