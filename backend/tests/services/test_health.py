"""Observability endpoints — liveness, readiness, metrics, root.

Invariants:
    - /health is 200 whether or not the database is connected
    - /health/ready is 503 when the database is unreachable
    - /metrics request counter strictly increases across calls
"""


async def test_health_reports_connected(client):
    res = await client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["uptime"] >= 0
    assert "timestamp" in body


async def test_health_is_200_when_disconnected(disconnected_client):
    res = await disconnected_client.get("/health")
    assert res.status_code == 200
    assert res.json()["database"] == "disconnected"


async def test_ready_when_connected(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "connected"


async def test_not_ready_when_disconnected(disconnected_client):
    res = await disconnected_client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_metrics_snapshot_shape(client):
    res = await client.get("/metrics")
    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"uptime", "memory", "database", "requests", "timestamp"}
    assert body["database"] == "connected"
    assert body["memory"]["maxRssBytes"] > 0


async def test_metrics_counter_counts_every_request(client):
    first = (await client.get("/metrics")).json()["requests"]
    await client.get("/health")
    await client.get("/does-not-exist")
    second = (await client.get("/metrics")).json()["requests"]
    assert second == first + 3


async def test_root_reports_environment(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_unknown_route_returns_json_message(client):
    res = await client.get("/nope")
    assert res.status_code == 404
    assert res.json() == {"message": "Not Found"}


async def test_cors_preflight_allows_configured_origin(client):
    res = await client.options(
        "/api/signup",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "http://localhost:3000"
