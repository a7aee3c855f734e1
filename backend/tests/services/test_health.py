"""Health and readiness probes."""


async def test_liveness(client):
    response = await client.get("/v1/api/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_readiness_uses_database(client):
    response = await client.get("/v1/api/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"database": "healthy"}}
