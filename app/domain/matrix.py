"""Pure matrix operations: default build, reconciliation, and replacement.

These functions take immutable snapshots (stored rows, catalog id lists) and
return new tuples of ModuleConfig. They never read or write storage; the
application service does all I/O around them.
"""

from collections.abc import Collection, Iterable, Sequence

from app.domain.entities.access_control import ModuleConfig, RoleConfig
from app.domain.exceptions import ModuleNotFoundException, ValidationException


def _unique(ids: Iterable[str]) -> list[str]:
    """Return ids in first-seen order with duplicates removed."""
    seen: set[str] = set()
    result: list[str] = []
    for id_ in ids:
        if id_ not in seen:
            seen.add(id_)
            result.append(id_)
    return result


def _with_missing_roles(
    module_config: ModuleConfig, role_ids: Sequence[str]
) -> ModuleConfig:
    """Append a False cell for every role in role_ids the row does not have yet."""
    present = set(module_config.role_ids)
    missing = [RoleConfig(role_id=r) for r in role_ids if r not in present]
    if not missing:
        return module_config
    return ModuleConfig(
        module_id=module_config.module_id,
        role_configs=module_config.role_configs + tuple(missing),
    )


def reconcile(
    existing: Sequence[ModuleConfig],
    active_module_ids: Iterable[str],
    active_role_ids: Iterable[str],
) -> tuple[ModuleConfig, ...]:
    """Merge a stored matrix with the live module and role sets.

    Stored rows keep their order and every stored cell keeps its status,
    including cells for roles that are no longer active. Active roles missing
    from a row are appended as False. Active modules without a row are
    appended as new rows with every active role False.

    Args:
        existing: Stored rows (may be empty for a first build).
        active_module_ids: Currently active module ids, in catalog order.
        active_role_ids: Currently active role ids for the channel, in catalog order.

    Returns:
        New tuple of rows; equal to tuple(existing) when nothing changed.
    """
    role_ids = _unique(active_role_ids)
    merged = [_with_missing_roles(mc, role_ids) for mc in existing]
    present = {mc.module_id for mc in existing}
    for module_id in _unique(active_module_ids):
        if module_id in present:
            continue
        merged.append(
            ModuleConfig(
                module_id=module_id,
                role_configs=tuple(RoleConfig(role_id=r) for r in role_ids),
            )
        )
        present.add(module_id)
    return tuple(merged)


def build_default(
    module_ids: Iterable[str], role_ids: Iterable[str]
) -> tuple[ModuleConfig, ...]:
    """Return a fresh matrix: one row per module, one False cell per role."""
    return reconcile((), module_ids, role_ids)


def validate_module_configs(entries: Sequence[ModuleConfig]) -> None:
    """Check the shape of a caller-supplied matrix.

    Row-level invariants (module id present, at least one cell, unique role
    ids) are enforced when each ModuleConfig is built; this adds the
    matrix-level ones.

    Raises:
        ValidationException: If entries is empty or repeats a module id.
    """
    if not entries:
        raise ValidationException(
            "At least one module configuration is required",
            field="module_configs",
        )
    seen: set[str] = set()
    for entry in entries:
        if entry.module_id in seen:
            raise ValidationException(
                f"Duplicate module {entry.module_id}", field="module_configs"
            )
        seen.add(entry.module_id)


def replace(
    entries: Sequence[ModuleConfig], valid_module_ids: Collection[str]
) -> tuple[ModuleConfig, ...]:
    """Return entries as the new matrix, exactly as supplied.

    Role ids are taken as given. Every module id must be in valid_module_ids.

    Raises:
        ValidationException: If the shape is invalid.
        ModuleNotFoundException: For the first module id not in valid_module_ids.
    """
    validate_module_configs(entries)
    for entry in entries:
        if entry.module_id not in valid_module_ids:
            raise ModuleNotFoundException(entry.module_id)
    return tuple(entries)


def count_changes(
    before: Sequence[ModuleConfig], after: Sequence[ModuleConfig]
) -> tuple[int, int]:
    """Return (rows added, cells added) going from before to after."""
    before_rows = {mc.module_id: len(mc.role_configs) for mc in before}
    rows_added = 0
    cells_added = 0
    for mc in after:
        if mc.module_id not in before_rows:
            rows_added += 1
            cells_added += len(mc.role_configs)
        else:
            cells_added += len(mc.role_configs) - before_rows[mc.module_id]
    return rows_added, cells_added
