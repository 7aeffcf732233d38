"""Access control API schemas.

JSON uses camelCase (moduleConfigs, rolesAssigned, ...) to match the other
back-office APIs; snake_case field names are accepted on input too.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.application.dtos.access_control import (
    AccessControlDisplay,
    AccessControlPage,
    AccessControlView,
)
from app.domain.entities.access_control import (
    AccessControlConfig,
    ModuleConfig,
    RoleConfig,
)
from app.domain.value_objects import IDENTIFIER_MAX_LENGTH, IDENTIFIER_PATTERN


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoleAssignmentRequest(CamelModel):
    """One matrix cell in a createOrUpdate body."""

    role_id: str = Field(
        ..., min_length=1, max_length=IDENTIFIER_MAX_LENGTH, pattern=IDENTIFIER_PATTERN
    )
    status: bool


class ModuleConfigRequest(CamelModel):
    """One matrix row in a createOrUpdate body."""

    module_id: str = Field(
        ..., min_length=1, max_length=IDENTIFIER_MAX_LENGTH, pattern=IDENTIFIER_PATTERN
    )
    roles_assigned: list[RoleAssignmentRequest] = Field(..., min_length=1)

    def to_entity(self) -> ModuleConfig:
        """Build the domain row (raises ValidationException on duplicate roles)."""
        return ModuleConfig(
            module_id=self.module_id,
            role_configs=tuple(
                RoleConfig(role_id=r.role_id, status=r.status)
                for r in self.roles_assigned
            ),
        )


class AccessControlUpsertRequest(CamelModel):
    """Request body for POST .../createOrUpdate (full replacement of the matrix)."""

    module_configs: list[ModuleConfigRequest] = Field(..., min_length=1)

    def to_entities(self) -> list[ModuleConfig]:
        return [mc.to_entity() for mc in self.module_configs]


class RoleAssignmentResponse(CamelModel):
    role_id: str
    role_name: str | None = None
    role_code: str | None = None
    status: bool
    active: bool | None = Field(
        default=None,
        description="False when the role is no longer an active role of the channel",
    )


class ModuleConfigResponse(CamelModel):
    module_id: str
    module_name: str | None = None
    module_code: str | None = None
    roles_assigned: list[RoleAssignmentResponse]


class AccessControlResponse(CamelModel):
    """Matrix for one (project, channel). Display fields are null in list pages."""

    id: str
    project_id: str
    channel_id: str
    module_configs: list[ModuleConfigResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_config(
        cls,
        config: AccessControlConfig,
        display: AccessControlDisplay | None = None,
    ) -> AccessControlResponse:
        """Render the stored matrix, decorated with display names when given."""
        modules = display.modules if display else {}
        roles = display.roles if display else {}
        module_configs = []
        for mc in config.module_configs:
            module = modules.get(mc.module_id)
            cells = []
            for rc in mc.role_configs:
                role = roles.get(rc.role_id)
                cells.append(
                    RoleAssignmentResponse(
                        role_id=rc.role_id,
                        role_name=role.name if role else None,
                        role_code=role.code if role else None,
                        status=rc.status,
                        active=role.active if role else (False if display else None),
                    )
                )
            module_configs.append(
                ModuleConfigResponse(
                    module_id=mc.module_id,
                    module_name=module.name if module else None,
                    module_code=module.code if module else None,
                    roles_assigned=cells,
                )
            )
        return cls(
            id=config.id,
            project_id=config.project_id,
            channel_id=config.channel_id,
            module_configs=module_configs,
            created_at=config.created_at,
            updated_at=config.updated_at,
        )

    @classmethod
    def from_view(cls, view: AccessControlView) -> AccessControlResponse:
        return cls.from_config(view.config, view.display)


class AccessControlPageResponse(CamelModel):
    """Response for GET /access-controls (paginated)."""

    items: list[AccessControlResponse]
    total: int
    page: int
    limit: int

    @classmethod
    def from_page(cls, page: AccessControlPage) -> AccessControlPageResponse:
        return cls(
            items=[AccessControlResponse.from_config(c) for c in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
        )
