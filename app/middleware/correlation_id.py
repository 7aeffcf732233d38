"""Correlation ID middleware.

Propagates X-Correlation-ID across back-office services. A missing or
malformed header falls back to the request id, so RequestIDMiddleware must
run first (be added later).
"""

from typing import Callable

from app.middleware._headers import id_middleware
from app.shared.context import reset_correlation_id, set_correlation_id


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    return id_middleware(
        app,
        header_name,
        "correlation_id",
        set_correlation_id,
        reset_correlation_id,
        fallback_state_key="request_id",
    )
