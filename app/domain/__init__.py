"""Domain layer: entities, value objects, pure matrix operations, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import AccessControlConfig, ModuleConfig, RoleConfig
from app.domain.exceptions import (
    BackofficeException,
    ModuleNotFoundException,
    NotFoundException,
    StoreNotConfiguredException,
    ValidationException,
)
from app.domain.value_objects import AccessControlKey

__all__ = [
    # Entities
    "AccessControlConfig",
    "ModuleConfig",
    "RoleConfig",
    # Exceptions
    "BackofficeException",
    "ModuleNotFoundException",
    "NotFoundException",
    "StoreNotConfiguredException",
    "ValidationException",
    # Value objects
    "AccessControlKey",
]
