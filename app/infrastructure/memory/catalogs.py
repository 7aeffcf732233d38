"""In-memory module and role catalogs (local runs and tests)."""

from __future__ import annotations

from collections.abc import Sequence

from app.application.dtos.catalog import ModuleResult, RoleResult


class InMemoryModuleCatalog:
    """Module catalog held in a dict. Mirrors the Firestore catalog's filters."""

    def __init__(self) -> None:
        self._modules: dict[str, ModuleResult] = {}
        self._access_controlled: set[str] = set()
        self._deleted: set[str] = set()

    def add(
        self,
        module: ModuleResult,
        *,
        access_control: bool = True,
        is_deleted: bool = False,
    ) -> None:
        """Insert or replace a module."""
        self._modules[module.id] = module
        if access_control:
            self._access_controlled.add(module.id)
        else:
            self._access_controlled.discard(module.id)
        if is_deleted:
            self._deleted.add(module.id)
        else:
            self._deleted.discard(module.id)

    async def list_active(self) -> list[ModuleResult]:
        active = [
            m
            for m in self._modules.values()
            if m.is_active
            and m.id in self._access_controlled
            and m.id not in self._deleted
        ]
        return sorted(active, key=lambda m: (m.code, m.id))

    async def get_by_id(self, module_id: str) -> ModuleResult | None:
        if module_id in self._deleted:
            return None
        return self._modules.get(module_id)


class InMemoryRoleCatalog:
    """Role catalog held in a dict; is_active covers both status and deletion."""

    def __init__(self) -> None:
        self._roles: dict[str, RoleResult] = {}

    def add(self, role: RoleResult) -> None:
        """Insert or replace a role."""
        self._roles[role.id] = role

    async def list_active_for_channel(self, channel_id: str) -> list[RoleResult]:
        active = [
            r
            for r in self._roles.values()
            if r.is_active and r.channel_id == channel_id
        ]
        return sorted(active, key=lambda r: (r.code, r.id))

    async def get_by_ids(self, role_ids: Sequence[str]) -> list[RoleResult]:
        return [self._roles[r] for r in role_ids if r in self._roles]
