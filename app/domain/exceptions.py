"""Domain exceptions for the access control service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class BackofficeException(Exception):
    """Base exception for all application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error envelope used by the API."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(BackofficeException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class NotFoundException(BackofficeException):
    """Raised when a required entity or entity set cannot be found."""

    def __init__(self, message: str, **details: Any) -> None:
        """Initialize with message and optional identifying details.

        Args:
            message: Human-readable description naming what is missing.
            **details: Identifiers of the missing entity (e.g. channel_id).
        """
        super().__init__(message, "RESOURCE_NOT_FOUND", details)


class ModuleNotFoundException(NotFoundException):
    """Raised when a referenced module no longer exists in the module catalog."""

    def __init__(self, module_id: str) -> None:
        super().__init__(
            f"Module with id {module_id} not found",
            resource_type="module",
            resource_id=module_id,
        )


class StoreNotConfiguredException(BackofficeException):
    """Raised when the configured persistence backend is unavailable."""

    def __init__(self, backend: str) -> None:
        super().__init__(
            message=f"The '{backend}' store is not configured.",
            error_code="SERVICE_UNAVAILABLE",
            details={"backend": backend},
        )
