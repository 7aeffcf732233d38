"""Smoke tests for health and app wiring."""

from fastapi import FastAPI
from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json().get("status") == "ok"


async def test_ready_with_memory_backend(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "backend": "memory"}


async def test_ready_returns_503_without_store(app: FastAPI, client: AsyncClient) -> None:
    app.state.memory_backend = None
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


async def test_request_id_is_generated_and_forwarded(client: AsyncClient) -> None:
    generated = await client.get("/api/v1/health")
    assert generated.headers.get("X-Request-ID")
    assert generated.headers["X-Correlation-ID"] == generated.headers["X-Request-ID"]

    forwarded = await client.get(
        "/api/v1/health",
        headers={"X-Request-ID": "req-123", "X-Correlation-ID": "corr-456"},
    )
    assert forwarded.headers["X-Request-ID"] == "req-123"
    assert forwarded.headers["X-Correlation-ID"] == "corr-456"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id; drop"})
    assert response.headers["X-Request-ID"] != "bad id; drop"
