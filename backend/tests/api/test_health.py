"""Health & Readiness endpoints."""

import taskboard.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_store(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_store(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    error = res.json()["error"]
    assert error["code"] == "DATABASE_ERROR"
    assert error["severity"] == "critical"
    assert error["context"]["operation"] == "health_check"


async def test_readiness_with_unhealthy_store(client, test_db_manager, monkeypatch):
    async def unhealthy():
        return False

    monkeypatch.setattr(test_db_manager, "health_check", unhealthy)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DATABASE_ERROR"
