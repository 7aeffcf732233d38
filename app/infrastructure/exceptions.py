"""Infrastructure exceptions for store operations.

Store errors extend BackofficeException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import BackofficeException


class StoreException(BackofficeException):
    """Base exception for store operations."""


class StoreConflictError(StoreException):
    """A keyed write kept losing races with concurrent writers."""

    def __init__(self, document_id: str, attempts: int) -> None:
        super().__init__(
            f"Concurrent writes prevented saving {document_id}",
            "STORE_CONFLICT",
            {"document_id": document_id, "attempts": attempts},
        )
