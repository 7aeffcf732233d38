"""Domain value objects."""

from app.domain.value_objects.core import (
    IDENTIFIER_MAX_LENGTH,
    IDENTIFIER_PATTERN,
    AccessControlKey,
    is_valid_identifier,
)

__all__ = [
    "IDENTIFIER_MAX_LENGTH",
    "IDENTIFIER_PATTERN",
    "AccessControlKey",
    "is_valid_identifier",
]
