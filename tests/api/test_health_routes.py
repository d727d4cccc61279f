"""Health probe tests — liveness, API-gated readiness, push status reporting."""


async def test_liveness(client):
    res = await client.get("/health/")
    assert res.status_code == 200
    assert res.json() == {"status": "healthy", "service": "binhub-web", "version": "1.0.0"}


async def test_ready_when_api_answers(client, marketplace):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    body = res.json()
    assert body["checks"] == {"api": "reachable"}
    assert body["push"] == {"enabled": True, "open_channels": 0}


async def test_not_ready_when_api_down(client, marketplace):
    marketplace.down = True
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "api_unavailable"


async def test_ready_reports_open_push_channels(client, app):
    await app.state.push_hub.subscribe("supplier-token", "supplier")
    res = await client.get("/health/ready")
    assert res.json()["push"]["open_channels"] == 1
