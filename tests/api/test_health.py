from __future__ import annotations

from fastapi.testclient import TestClient


def test_health_returns_ok(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    # In tests no DATABASE_URL is set, the in-memory repos serve.
    assert data["checks"]["database"] == "not_configured"


def test_ready_returns_200(client: TestClient) -> None:
    assert client.get("/ready").status_code == 200
