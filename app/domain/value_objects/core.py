"""Domain value objects for the access control service.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

from app.domain.exceptions import ValidationException

# Opaque identifiers: alphanumeric, hyphen, underscore (ObjectId, CUID, UUID all fit).
IDENTIFIER_MAX_LENGTH = 64
IDENTIFIER_PATTERN = r"^[a-zA-Z0-9_-]{1," + str(IDENTIFIER_MAX_LENGTH) + r"}$"
_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)

KEY_SEPARATOR = "."


def is_valid_identifier(value: str) -> bool:
    """Return True if value is a well-formed opaque identifier."""
    return bool(value) and bool(_IDENTIFIER_RE.fullmatch(value))


@dataclass(frozen=True)
class AccessControlKey:
    """Composite key of an access control matrix: (project_id, channel_id).

    Both parts must be well-formed identifiers. KEY_SEPARATOR cannot occur
    in either part, so document_id maps keys to documents one-to-one.
    """

    project_id: str
    channel_id: str

    def __post_init__(self) -> None:
        if not is_valid_identifier(self.project_id):
            raise ValidationException(
                "project_id must be 1-64 characters of letters, digits, '-' or '_'",
                field="project_id",
            )
        if not is_valid_identifier(self.channel_id):
            raise ValidationException(
                "channel_id must be 1-64 characters of letters, digits, '-' or '_'",
                field="channel_id",
            )

    @property
    def document_id(self) -> str:
        """Store document id for this key."""
        return f"{self.project_id}{KEY_SEPARATOR}{self.channel_id}"
