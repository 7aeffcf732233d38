"""Access control matrix aggregate.

AccessControlConfig is the stored matrix for one (project, channel) pair:
one ModuleConfig row per module, one RoleConfig cell per role. Entities hold
identifiers only; module and role names are a read-time projection
(see app.application.dtos.access_control).
"""

from dataclasses import dataclass
from datetime import datetime

from app.domain.exceptions import ValidationException


@dataclass(frozen=True)
class RoleConfig:
    """One cell of the matrix: whether role_id may use the enclosing module."""

    role_id: str
    status: bool = False

    def __post_init__(self) -> None:
        if not self.role_id:
            raise ValidationException("Role ID is required", field="role_id")


@dataclass(frozen=True)
class ModuleConfig:
    """One row of the matrix. Role ids are unique and at least one cell is present."""

    module_id: str
    role_configs: tuple[RoleConfig, ...]

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate row invariants. Raises ValidationException if invalid."""
        if not self.module_id:
            raise ValidationException("Module ID is required", field="module_id")
        if not self.role_configs:
            raise ValidationException(
                "At least one role configuration is required",
                field="role_configs",
            )
        seen: set[str] = set()
        for role_config in self.role_configs:
            if role_config.role_id in seen:
                raise ValidationException(
                    f"Duplicate role {role_config.role_id} in module {self.module_id}",
                    field="role_configs",
                )
            seen.add(role_config.role_id)

    @property
    def role_ids(self) -> tuple[str, ...]:
        return tuple(rc.role_id for rc in self.role_configs)

    def status_of(self, role_id: str) -> bool | None:
        """Return the stored status for role_id, or None if the role has no cell."""
        for role_config in self.role_configs:
            if role_config.role_id == role_id:
                return role_config.status
        return None


@dataclass(frozen=True)
class AccessControlConfig:
    """Root aggregate, unique per (project_id, channel_id) among non-deleted records."""

    id: str
    project_id: str
    channel_id: str
    module_configs: tuple[ModuleConfig, ...]
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate aggregate invariants. Raises ValidationException if invalid."""
        if not self.module_configs:
            raise ValidationException(
                "At least one module configuration is required",
                field="module_configs",
            )
        seen: set[str] = set()
        for module_config in self.module_configs:
            if module_config.module_id in seen:
                raise ValidationException(
                    f"Duplicate module {module_config.module_id}",
                    field="module_configs",
                )
            seen.add(module_config.module_id)

    @property
    def module_ids(self) -> tuple[str, ...]:
        return tuple(mc.module_id for mc in self.module_configs)

    def get_module(self, module_id: str) -> ModuleConfig | None:
        for module_config in self.module_configs:
            if module_config.module_id == module_id:
                return module_config
        return None
