"""Pydantic request/response schemas for the API."""

from app.schemas.access_control import (
    AccessControlPageResponse,
    AccessControlResponse,
    AccessControlUpsertRequest,
    ModuleConfigRequest,
    RoleAssignmentRequest,
)
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

__all__ = [
    "AccessControlPageResponse",
    "AccessControlResponse",
    "AccessControlUpsertRequest",
    "HealthResponse",
    "ModuleConfigRequest",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "RoleAssignmentRequest",
]
