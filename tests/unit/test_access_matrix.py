"""Tests for the matrix entities, the key value object, and the pure matrix functions."""

import pytest

from app.domain.entities import AccessControlConfig, ModuleConfig, RoleConfig
from app.domain.exceptions import ModuleNotFoundException, ValidationException
from app.domain.matrix import (
    build_default,
    count_changes,
    reconcile,
    replace,
    validate_module_configs,
)
from app.domain.value_objects import AccessControlKey, is_valid_identifier


def row(module_id: str, **cells: bool) -> ModuleConfig:
    return ModuleConfig(
        module_id=module_id,
        role_configs=tuple(RoleConfig(role_id=r, status=s) for r, s in cells.items()),
    )


def as_dict(rows) -> dict[str, dict[str, bool]]:
    return {mc.module_id: {rc.role_id: rc.status for rc in mc.role_configs} for mc in rows}


# --- entities and key ---


def test_module_config_rejects_duplicate_roles() -> None:
    with pytest.raises(ValidationException) as exc_info:
        ModuleConfig(
            module_id="M1",
            role_configs=(RoleConfig("R1"), RoleConfig("R1", status=True)),
        )
    assert exc_info.value.details == {"field": "role_configs"}


def test_module_config_requires_a_role() -> None:
    with pytest.raises(ValidationException):
        ModuleConfig(module_id="M1", role_configs=())


def test_role_config_requires_id() -> None:
    with pytest.raises(ValidationException):
        RoleConfig(role_id="")


def test_access_control_config_rejects_duplicate_modules() -> None:
    with pytest.raises(ValidationException):
        AccessControlConfig(
            id="p1.ch1",
            project_id="p1",
            channel_id="ch1",
            module_configs=(row("M1", R1=False), row("M1", R2=True)),
        )


def test_module_config_status_of() -> None:
    mc = row("M1", R1=True, R2=False)
    assert mc.role_ids == ("R1", "R2")
    assert mc.status_of("R1") is True
    assert mc.status_of("R2") is False
    assert mc.status_of("R3") is None


def test_access_control_key_document_id() -> None:
    assert AccessControlKey("p1", "ch1").document_id == "p1.ch1"


@pytest.mark.parametrize(
    ("project_id", "channel_id", "field"),
    [
        ("", "ch1", "project_id"),
        ("p/1", "ch1", "project_id"),
        ("p1", "c h", "channel_id"),
        ("p1", "x" * 65, "channel_id"),
        ("p1", "a.b", "channel_id"),
    ],
)
def test_access_control_key_rejects_malformed_ids(
    project_id: str, channel_id: str, field: str
) -> None:
    with pytest.raises(ValidationException) as exc_info:
        AccessControlKey(project_id, channel_id)
    assert exc_info.value.details == {"field": field}


def test_is_valid_identifier_accepts_object_ids_and_uuids() -> None:
    assert is_valid_identifier("65f1c0a2b3c4d5e6f7a8b9c0")
    assert is_valid_identifier("3f2b8c9e-1d2a-4c5b-9e8f-7a6b5c4d3e2f")
    assert not is_valid_identifier("")


# --- build_default / reconcile ---


def test_build_default_two_by_two_all_false() -> None:
    """No stored config, modules {M1, M2}, roles {R1, R2}: 2 rows of 2 False cells."""
    rows = build_default(["M1", "M2"], ["R1", "R2"])
    assert as_dict(rows) == {
        "M1": {"R1": False, "R2": False},
        "M2": {"R1": False, "R2": False},
    }
    assert [mc.module_id for mc in rows] == ["M1", "M2"]


def test_reconcile_appends_new_role_and_new_module() -> None:
    """Stored {M1: {R1: true}}, M2 and R2 become active."""
    merged = reconcile([row("M1", R1=True)], ["M1", "M2"], ["R1", "R2"])
    assert as_dict(merged) == {
        "M1": {"R1": True, "R2": False},
        "M2": {"R1": False, "R2": False},
    }
    assert merged[0].role_ids == ("R1", "R2")


def test_reconcile_is_idempotent() -> None:
    once = reconcile([row("M1", R1=True)], ["M1", "M2"], ["R1", "R2"])
    assert reconcile(once, ["M1", "M2"], ["R1", "R2"]) == once


def test_reconcile_without_changes_returns_equal_rows() -> None:
    existing = (row("M1", R1=True, R2=False),)
    assert reconcile(existing, ["M1"], ["R1", "R2"]) == existing


def test_reconcile_keeps_stale_cells_and_rows() -> None:
    """Cells for deactivated roles and rows for deactivated modules are never dropped."""
    existing = (row("M1", R1=True, OLD=True), row("M9", R1=True))
    merged = reconcile(existing, ["M1"], ["R1"])
    assert as_dict(merged) == {"M1": {"R1": True, "OLD": True}, "M9": {"R1": True}}


def test_reconcile_never_flips_true_to_false() -> None:
    existing = (row("M1", R1=True, R2=True),)
    merged = reconcile(existing, ["M1", "M2"], ["R2", "R1", "R3"])
    assert merged[0].status_of("R1") is True
    assert merged[0].status_of("R2") is True
    assert merged[0].status_of("R3") is False


def test_reconcile_ignores_duplicate_catalog_ids() -> None:
    merged = reconcile((), ["M1", "M1"], ["R1", "R1"])
    assert as_dict(merged) == {"M1": {"R1": False}}


def test_count_changes() -> None:
    before = (row("M1", R1=True),)
    after = reconcile(before, ["M1", "M2"], ["R1", "R2"])
    assert count_changes(before, after) == (1, 3)
    assert count_changes(after, after) == (0, 0)


# --- validate_module_configs / replace ---


def test_validate_module_configs_rejects_empty() -> None:
    with pytest.raises(ValidationException):
        validate_module_configs([])


def test_validate_module_configs_rejects_duplicate_module() -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_module_configs([row("M1", R1=True), row("M1", R2=True)])
    assert "Duplicate module M1" in exc_info.value.message


def test_replace_keeps_only_given_modules() -> None:
    """Input with only M1 replaces a matrix that had M1 and M2."""
    result = replace([row("M1", R1=True)], {"M1", "M2"})
    assert as_dict(result) == {"M1": {"R1": True}}


def test_replace_takes_role_ids_as_given() -> None:
    result = replace([row("M1", UNKNOWN_ROLE=True)], {"M1"})
    assert result[0].role_ids == ("UNKNOWN_ROLE",)


def test_replace_raises_for_first_invalid_module() -> None:
    with pytest.raises(ModuleNotFoundException) as exc_info:
        replace([row("M1", R1=True), row("MX", R1=True), row("MY", R1=True)], {"M1"})
    assert exc_info.value.details["resource_id"] == "MX"
