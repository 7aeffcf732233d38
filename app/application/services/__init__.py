"""Application services: access control matrix reconciliation."""

from app.application.services.access_control_service import AccessControlService

__all__ = [
    "AccessControlService",
]
