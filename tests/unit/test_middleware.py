"""Tests for the raw ASGI middlewares outside the full app."""

import asyncio

from httpx import ASGITransport, AsyncClient

from app.middleware import RequestIDMiddleware, TimeoutMiddleware
from app.middleware._headers import sanitize_trace_id
from app.shared.context import get_request_id


async def _slow_app(scope, receive, send) -> None:
    await asyncio.sleep(1)


async def _echo_request_id_app(scope, receive, send) -> None:
    body = (get_request_id() or "").encode()
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": body})


async def test_timeout_returns_504_envelope() -> None:
    app = RequestIDMiddleware(TimeoutMiddleware(_slow_app, timeout_seconds=0.01))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/slow", headers={"X-Request-ID": "req-1"})
    assert response.status_code == 504
    body = response.json()
    assert body["error"] == "GATEWAY_TIMEOUT"
    assert body["details"]["request_id"] == "req-1"


async def test_request_id_is_visible_in_context_during_request() -> None:
    app = RequestIDMiddleware(_echo_request_id_app)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/", headers={"X-Request-ID": "abc-123"})
    assert response.text == "abc-123"
    assert get_request_id() is None


def test_sanitize_trace_id() -> None:
    assert sanitize_trace_id("  ok_id-1 ") == "ok_id-1"
    assert sanitize_trace_id("x" * 65, fallback="fb") == "fb"
    assert sanitize_trace_id(None, fallback="fb") == "fb"
    assert len(sanitize_trace_id("bad id")) == 36
