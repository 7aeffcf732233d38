"""Application DTOs (no persistence dependency)."""

from app.application.dtos.access_control import (
    AccessControlDisplay,
    AccessControlFilter,
    AccessControlPage,
    AccessControlView,
    ModuleDisplay,
    RoleDisplay,
    SortField,
    SortOrder,
)
from app.application.dtos.catalog import ModuleResult, RoleResult

__all__ = [
    "AccessControlDisplay",
    "AccessControlFilter",
    "AccessControlPage",
    "AccessControlView",
    "ModuleDisplay",
    "ModuleResult",
    "RoleDisplay",
    "RoleResult",
    "SortField",
    "SortOrder",
]
