"""Header helpers shared by the raw ASGI id middlewares."""

import uuid
from contextvars import Token
from typing import Callable

from app.domain.value_objects import is_valid_identifier


def get_header(scope: dict, name: str) -> str | None:
    """First value of header name (case-insensitive); ASGI headers are byte pairs."""
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("utf-8", errors="replace")
    return None


def sanitize_trace_id(raw: str | None, fallback: str | None = None) -> str:
    """Keep raw if it is a well-formed identifier, else use fallback or a new UUID.

    Only log-safe values (letters, digits, '-', '_', at most 64) are echoed.
    """
    candidate = raw.strip() if raw else ""
    if is_valid_identifier(candidate):
        return candidate
    return fallback or str(uuid.uuid4())


def id_middleware(
    app: Callable,
    header_name: str,
    state_key: str,
    bind: Callable[[str], Token],
    unbind: Callable[[Token], None],
    fallback_state_key: str | None = None,
) -> Callable:
    """Raw ASGI wrapper that resolves one id header for the request.

    The id is stored on scope state under state_key, bound to a context
    variable for logging while the request runs, and echoed on the response.
    """

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        state = scope.setdefault("state", {})
        fallback = state.get(fallback_state_key) if fallback_state_key else None
        value = sanitize_trace_id(get_header(scope, header_name), fallback=fallback)
        state[state_key] = value
        encoded = (header_name.encode(), value.encode())

        async def send_with_header(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [*message.get("headers", []), encoded]
            await send(message)

        token = bind(value)
        try:
            await app(scope, receive, send_with_header)
        finally:
            unbind(token)

    return asgi_app
