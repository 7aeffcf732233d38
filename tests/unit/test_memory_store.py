"""Tests for the in-memory store (key handling, soft delete, listing)."""

import asyncio
from datetime import UTC, datetime

from app.application.dtos.access_control import AccessControlFilter
from app.application.dtos.catalog import ModuleResult, RoleResult
from app.domain.entities import ModuleConfig, RoleConfig
from app.infrastructure.memory import (
    InMemoryAccessControlRepository,
    InMemoryModuleCatalog,
    InMemoryRoleCatalog,
)

ROWS = [ModuleConfig("M1", (RoleConfig("R1", True),))]


async def test_upsert_keeps_created_at_and_bumps_updated_at() -> None:
    repo = InMemoryAccessControlRepository()
    first = await repo.upsert_by_key("p1", "ch1", ROWS)
    second = await repo.upsert_by_key("p1", "ch1", [ModuleConfig("M2", (RoleConfig("R1"),))])
    assert second.id == first.id == "p1.ch1"
    assert second.created_at == first.created_at
    assert second.updated_at >= first.updated_at
    assert second.module_ids == ("M2",)


async def test_concurrent_first_upserts_converge_on_one_record() -> None:
    repo = InMemoryAccessControlRepository()
    await asyncio.gather(*(repo.upsert_by_key("p1", "ch1", ROWS) for _ in range(5)))
    _, total = await repo.list_paginated(AccessControlFilter())
    assert total == 1


async def test_soft_delete_hides_record_and_is_not_repeatable() -> None:
    repo = InMemoryAccessControlRepository()
    await repo.upsert_by_key("p1", "ch1", ROWS)
    assert await repo.soft_delete_by_key("p1", "ch1") is True
    assert await repo.find_by_key("p1", "ch1") is None
    assert await repo.soft_delete_by_key("p1", "ch1") is False
    items, total = await repo.list_paginated(AccessControlFilter(project_id="p1"))
    assert (items, total) == ([], 0)


async def test_list_filters_by_channel() -> None:
    repo = InMemoryAccessControlRepository()
    await repo.upsert_by_key("p1", "ch1", ROWS)
    await repo.upsert_by_key("p1", "ch2", ROWS)
    items, total = await repo.list_paginated(AccessControlFilter(channel_id="ch2"))
    assert total == 1
    assert items[0].channel_id == "ch2"


async def test_module_catalog_filters() -> None:
    catalog = InMemoryModuleCatalog()
    catalog.add(ModuleResult(id="a", name="A", code="B_CODE"))
    catalog.add(ModuleResult(id="b", name="B", code="A_CODE"))
    catalog.add(ModuleResult(id="c", name="C", code="C_CODE", is_active=False))
    catalog.add(ModuleResult(id="d", name="D", code="D_CODE"), is_deleted=True)
    assert [m.id for m in await catalog.list_active()] == ["b", "a"]
    assert (await catalog.get_by_id("c")).is_active is False
    assert await catalog.get_by_id("d") is None


async def test_role_catalog_scopes_to_channel() -> None:
    catalog = InMemoryRoleCatalog()
    catalog.add(RoleResult(id="r1", channel_id="ch1", name="Admin", code="1"))
    catalog.add(RoleResult(id="r2", channel_id="ch2", name="Admin", code="1"))
    assert [r.id for r in await catalog.list_active_for_channel("ch1")] == ["r1"]
    assert [r.id for r in await catalog.get_by_ids(["r2", "nope"])] == ["r2"]


async def test_list_breaks_timestamp_ties_by_key(monkeypatch) -> None:
    frozen = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    monkeypatch.setattr(
        "app.infrastructure.memory.access_control_repo.utc_now", lambda: frozen
    )
    repo = InMemoryAccessControlRepository()
    for project in ("p2", "p3", "p1"):
        await repo.upsert_by_key(project, "ch1", ROWS)

    first, _ = await repo.list_paginated(AccessControlFilter(), page=1, limit=2, sort_order="asc")
    second, _ = await repo.list_paginated(AccessControlFilter(), page=2, limit=2, sort_order="asc")
    assert [c.id for c in first + second] == ["p1.ch1", "p2.ch1", "p3.ch1"]
    newest_first, _ = await repo.list_paginated(AccessControlFilter(), limit=3, sort_order="desc")
    assert [c.id for c in newest_first] == ["p3.ch1", "p2.ch1", "p1.ch1"]
