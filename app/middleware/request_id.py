"""Request ID middleware: forwards a well-formed X-Request-ID or mints one."""

from typing import Callable

from app.middleware._headers import id_middleware
from app.shared.context import reset_request_id, set_request_id


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    return id_middleware(
        app, header_name, "request_id", set_request_id, reset_request_id
    )
