"""Access control service: get-or-create-default and explicit replace of the matrix.

All catalog reads happen before the single store write of each operation, so a
failure on any lookup leaves the stored matrix untouched. Merge logic lives in
app.domain.matrix; this service only gathers snapshots and persists results.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.application.dtos.access_control import (
    AccessControlDisplay,
    AccessControlFilter,
    AccessControlPage,
    AccessControlView,
    SortField,
    SortOrder,
)
from app.application.dtos.catalog import ModuleResult, RoleResult
from app.application.interfaces.repositories import (
    IAccessControlRepository,
    IModuleCatalog,
    IRoleCatalog,
)
from app.domain.entities.access_control import AccessControlConfig, ModuleConfig
from app.domain.exceptions import ModuleNotFoundException, NotFoundException
from app.domain.matrix import (
    build_default,
    count_changes,
    reconcile,
    replace,
    validate_module_configs,
)
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class AccessControlService:
    """Compute, reconcile, and replace the module x role matrix per (project, channel)."""

    def __init__(
        self,
        access_control_repo: IAccessControlRepository,
        module_catalog: IModuleCatalog,
        role_catalog: IRoleCatalog,
    ) -> None:
        self.access_control_repo = access_control_repo
        self.module_catalog = module_catalog
        self.role_catalog = role_catalog

    async def _resolve_modules(self, module_ids: Sequence[str]) -> list[ModuleResult]:
        """Resolve every module id against the catalog; raise on the first missing one."""
        resolved: list[ModuleResult] = []
        for module_id in module_ids:
            module = await self.module_catalog.get_by_id(module_id)
            if module is None:
                raise ModuleNotFoundException(module_id)
            resolved.append(module)
        return resolved

    async def _display(
        self,
        config: AccessControlConfig,
        modules: Sequence[ModuleResult],
        known_roles: Sequence[RoleResult] = (),
    ) -> AccessControlDisplay:
        """Build the display projection, looking up only roles not already known."""
        known_ids = {r.id for r in known_roles}
        unknown = sorted(
            {
                rc.role_id
                for mc in config.module_configs
                for rc in mc.role_configs
                if rc.role_id not in known_ids
            }
        )
        extra = await self.role_catalog.get_by_ids(unknown) if unknown else []
        return AccessControlDisplay.build(
            config.channel_id, modules, [*known_roles, *extra]
        )

    @traced("access_control.get_or_create_default")
    async def get_or_create_default(
        self, project_id: str, channel_id: str
    ) -> AccessControlView:
        """Return the matrix for (project_id, channel_id), creating or reconciling it.

        First use builds one row per active module with every active role False.
        Later calls keep every stored cell, append False cells for newly active
        roles and False rows for newly active modules, and write only when
        something was appended.

        Raises:
            NotFoundException: No active roles for the channel, or no active
                modules when the matrix has to be created.
            ModuleNotFoundException: A stored row references a vanished module.
        """
        roles = await self.role_catalog.list_active_for_channel(channel_id)
        if not roles:
            raise NotFoundException(
                "No active roles found for the channel", channel_id=channel_id
            )
        role_ids = [r.id for r in roles]

        existing = await self.access_control_repo.find_by_key(project_id, channel_id)
        if existing is None:
            modules = await self.module_catalog.list_active()
            if not modules:
                raise NotFoundException("No active modules found")
            module_configs = build_default([m.id for m in modules], role_ids)
            saved = await self.access_control_repo.upsert_by_key(
                project_id, channel_id, module_configs
            )
            logger.info(
                "Created default access control for project %s channel %s (%d modules x %d roles)",
                project_id,
                channel_id,
                len(modules),
                len(role_ids),
            )
            add_span_attributes(created=True)
            return AccessControlView(
                config=saved,
                display=await self._display(saved, modules, roles),
            )

        stored_modules = await self._resolve_modules(existing.module_ids)
        active_modules = await self.module_catalog.list_active()
        merged = reconcile(
            existing.module_configs, [m.id for m in active_modules], role_ids
        )
        stored_ids = set(existing.module_ids)
        modules = [
            *stored_modules,
            *(m for m in active_modules if m.id not in stored_ids),
        ]
        if merged == existing.module_configs:
            logger.debug(
                "Access control for project %s channel %s already reconciled",
                project_id,
                channel_id,
            )
            saved = existing
        else:
            rows_added, cells_added = count_changes(existing.module_configs, merged)
            saved = await self.access_control_repo.upsert_by_key(
                project_id, channel_id, merged
            )
            logger.info(
                "Reconciled access control for project %s channel %s: +%d modules, +%d role cells",
                project_id,
                channel_id,
                rows_added,
                cells_added,
            )
        add_span_attributes(created=False)
        return AccessControlView(
            config=saved,
            display=await self._display(saved, modules, roles),
        )

    @traced("access_control.create_or_update")
    async def create_or_update(
        self,
        project_id: str,
        channel_id: str,
        module_configs: Sequence[ModuleConfig],
    ) -> AccessControlView:
        """Replace the whole matrix for (project_id, channel_id) with module_configs.

        Role ids are stored as given. Modules or roles omitted from the input are
        dropped from the stored matrix.

        Raises:
            ValidationException: Empty input or a repeated module id (checked
                before any catalog access).
            ModuleNotFoundException: A module id does not resolve; nothing is written.
        """
        validate_module_configs(module_configs)
        modules = await self._resolve_modules([mc.module_id for mc in module_configs])
        replacement = replace(module_configs, {m.id for m in modules})
        saved = await self.access_control_repo.upsert_by_key(
            project_id, channel_id, replacement
        )
        logger.info(
            "Replaced access control for project %s channel %s (%d modules)",
            project_id,
            channel_id,
            len(replacement),
        )
        return AccessControlView(config=saved, display=await self._display(saved, modules))

    async def soft_delete(self, project_id: str, channel_id: str) -> None:
        """Soft-delete the matrix; raise NotFoundException if there is no live matrix."""
        deleted = await self.access_control_repo.soft_delete_by_key(
            project_id, channel_id
        )
        if not deleted:
            raise NotFoundException(
                f"Access control for project {project_id} and channel {channel_id} not found",
                project_id=project_id,
                channel_id=channel_id,
            )
        logger.info(
            "Soft-deleted access control for project %s channel %s",
            project_id,
            channel_id,
        )

    async def list_access_controls(
        self,
        filters: AccessControlFilter,
        page: int = 1,
        limit: int = 10,
        sort_by: SortField = "created_at",
        sort_order: SortOrder = "desc",
    ) -> AccessControlPage:
        """Return one page of stored matrices (ids and statuses only, no display)."""
        items, total = await self.access_control_repo.list_paginated(
            filters,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return AccessControlPage(items=items, total=total, page=page, limit=limit)
