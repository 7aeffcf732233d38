"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.access_control import (
        AccessControlFilter,
        SortField,
        SortOrder,
    )
    from app.application.dtos.catalog import ModuleResult, RoleResult
    from app.domain.entities.access_control import AccessControlConfig, ModuleConfig


# Module catalog interface
class IModuleCatalog(Protocol):
    """Protocol for the module catalog (read-only, owned elsewhere)."""

    async def list_active(self) -> list[ModuleResult]:
        """Return active, non-deleted, access-controlled modules ordered by code."""

    async def get_by_id(self, module_id: str) -> ModuleResult | None:
        """Return module by ID if not deleted (inactive modules still resolve)."""


# Role catalog interface
class IRoleCatalog(Protocol):
    """Protocol for the role catalog (read-only, roles are scoped to a channel)."""

    async def list_active_for_channel(self, channel_id: str) -> list[RoleResult]:
        """Return active, non-deleted roles of the channel ordered by code then id."""

    async def get_by_ids(self, role_ids: Sequence[str]) -> list[RoleResult]:
        """Return roles for the given ids (any status); missing ids are skipped."""


# Access control store interface
class IAccessControlRepository(Protocol):
    """Protocol for the access control store, keyed by (project_id, channel_id).

    upsert_by_key must be atomic per key: concurrent callers on an absent key
    converge on one document.
    """

    async def find_by_key(
        self, project_id: str, channel_id: str
    ) -> AccessControlConfig | None:
        """Return the matrix for the key, or None if absent or soft-deleted."""

    async def upsert_by_key(
        self,
        project_id: str,
        channel_id: str,
        module_configs: Sequence[ModuleConfig],
    ) -> AccessControlConfig:
        """Create or wholly replace the matrix for the key; return the stored aggregate."""

    async def soft_delete_by_key(self, project_id: str, channel_id: str) -> bool:
        """Mark the matrix deleted; return False if there was no live matrix."""

    async def list_paginated(
        self,
        filters: AccessControlFilter,
        page: int = 1,
        limit: int = 10,
        sort_by: SortField = "created_at",
        sort_order: SortOrder = "desc",
    ) -> tuple[list[AccessControlConfig], int]:
        """Return (page items, total matching) excluding soft-deleted matrices."""
