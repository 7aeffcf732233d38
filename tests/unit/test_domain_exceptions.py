"""Tests for domain exceptions (error_code, message, details, to_dict)."""

from app.domain.exceptions import (
    BackofficeException,
    ModuleNotFoundException,
    NotFoundException,
    StoreNotConfiguredException,
    ValidationException,
)
from app.infrastructure.exceptions import StoreConflictError


def test_backoffice_exception_default_error_code() -> None:
    """Base BackofficeException uses class name as error_code when not provided."""
    exc = BackofficeException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "BackofficeException"
    assert exc.details == {}


def test_backoffice_exception_to_dict() -> None:
    exc = BackofficeException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="project_id")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "project_id"}


def test_validation_exception_without_field() -> None:
    assert ValidationException("Bad").details == {}


def test_not_found_exception_keeps_identifiers() -> None:
    exc = NotFoundException("No active roles found for the channel", channel_id="ch1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.message == "No active roles found for the channel"
    assert exc.details == {"channel_id": "ch1"}


def test_module_not_found_exception() -> None:
    """ModuleNotFoundException is a NotFoundException naming the module."""
    exc = ModuleNotFoundException("M9")
    assert isinstance(exc, NotFoundException)
    assert exc.message == "Module with id M9 not found"
    assert exc.details == {"resource_type": "module", "resource_id": "M9"}


def test_store_not_configured_exception() -> None:
    exc = StoreNotConfiguredException("firestore")
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert exc.details == {"backend": "firestore"}


def test_store_conflict_error_is_backoffice_exception() -> None:
    exc = StoreConflictError("p1.ch1", 3)
    assert isinstance(exc, BackofficeException)
    assert exc.error_code == "STORE_CONFLICT"
    assert exc.details == {"document_id": "p1.ch1", "attempts": 3}
