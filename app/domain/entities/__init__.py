"""Domain entities and aggregates.

Pure domain models; no persistence concerns.
"""

from app.domain.entities.access_control import (
    AccessControlConfig,
    ModuleConfig,
    RoleConfig,
)

__all__ = [
    "AccessControlConfig",
    "ModuleConfig",
    "RoleConfig",
]
