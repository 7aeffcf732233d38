"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    get_correlation_id,
    get_request_id,
    reset_correlation_id,
    reset_request_id,
    set_correlation_id,
    set_request_id,
)
from app.shared.utils import ensure_utc, utc_now

__all__ = [
    "get_correlation_id",
    "get_request_id",
    "reset_correlation_id",
    "reset_request_id",
    "set_correlation_id",
    "set_request_id",
    "ensure_utc",
    "utc_now",
]
