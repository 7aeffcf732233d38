"""DTOs for module and role catalog lookups (read-only collaborators)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ModuleResult:
    """Module read-model (result of list_active, get_by_id)."""

    id: str
    name: str
    code: str
    is_active: bool = True


@dataclass(frozen=True)
class RoleResult:
    """Role read-model (result of list_active_for_channel, get_by_ids)."""

    id: str
    channel_id: str
    name: str
    code: str
    is_active: bool = True
