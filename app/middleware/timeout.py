"""Request timeout middleware.

Runs each HTTP request under asyncio.wait_for and, if the budget runs out
before the response started, answers 504 in the API error envelope.
"""

import asyncio
import json
import logging
from typing import Callable

logger = logging.getLogger(__name__)


def _gateway_timeout(timeout_seconds: float, request_id: str | None) -> list[dict]:
    """ASGI messages for a 504 envelope response."""
    body = {
        "error": "GATEWAY_TIMEOUT",
        "message": f"Request timed out after {timeout_seconds} seconds",
        "details": {"timeout_seconds": timeout_seconds, "request_id": request_id},
    }
    return [
        {
            "type": "http.response.start",
            "status": 504,
            "headers": [(b"content-type", b"application/json")],
        },
        {"type": "http.response.body", "body": json.dumps(body).encode()},
    ]


def TimeoutMiddleware(app: Callable, timeout_seconds: float) -> Callable:
    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        started = False

        async def tracking_send(message: dict) -> None:
            nonlocal started
            started = started or message["type"] == "http.response.start"
            await send(message)

        try:
            await asyncio.wait_for(
                app(scope, receive, tracking_send), timeout=float(timeout_seconds)
            )
        except asyncio.TimeoutError:
            logger.warning(
                "%s %s exceeded %ss",
                scope.get("method", ""),
                scope.get("path", ""),
                timeout_seconds,
            )
            # Headers already sent: nothing left to answer with.
            if started:
                return
            request_id = scope.get("state", {}).get("request_id")
            for message in _gateway_timeout(timeout_seconds, request_id):
                await send(message)

    return asgi_app
