"""DTOs for access control use cases.

AccessControlView pairs the stored aggregate with a display projection built
from catalog snapshots at read time. The projection is advisory and never
written back to the store.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from app.application.dtos.catalog import ModuleResult, RoleResult
from app.domain.entities.access_control import AccessControlConfig

SortField = Literal["created_at", "updated_at"]
SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True)
class ModuleDisplay:
    name: str
    code: str


@dataclass(frozen=True)
class RoleDisplay:
    """Role labels plus whether the role is a controllable (active) column for the channel."""

    name: str
    code: str
    active: bool


@dataclass(frozen=True)
class AccessControlDisplay:
    """Read-time names/codes keyed by module id and role id."""

    modules: dict[str, ModuleDisplay] = field(default_factory=dict)
    roles: dict[str, RoleDisplay] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        channel_id: str,
        modules: Iterable[ModuleResult],
        roles: Iterable[RoleResult],
    ) -> AccessControlDisplay:
        """Project catalog snapshots; a role is active only if active in this channel."""
        return cls(
            modules={m.id: ModuleDisplay(name=m.name, code=m.code) for m in modules},
            roles={
                r.id: RoleDisplay(
                    name=r.name,
                    code=r.code,
                    active=r.is_active and r.channel_id == channel_id,
                )
                for r in roles
            },
        )


@dataclass(frozen=True)
class AccessControlView:
    """Result of get_or_create_default and create_or_update."""

    config: AccessControlConfig
    display: AccessControlDisplay


@dataclass(frozen=True)
class AccessControlFilter:
    """Optional filters for listing matrices (all combined with AND)."""

    project_id: str | None = None
    channel_id: str | None = None
    module_id: str | None = None


@dataclass(frozen=True)
class AccessControlPage:
    """One page of stored matrices (soft-deleted excluded)."""

    items: list[AccessControlConfig]
    total: int
    page: int
    limit: int
