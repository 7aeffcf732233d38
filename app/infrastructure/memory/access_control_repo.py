"""In-memory access control store keyed by (project_id, channel_id)."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import replace

from app.application.dtos.access_control import (
    AccessControlFilter,
    SortField,
    SortOrder,
)
from app.domain.entities.access_control import AccessControlConfig, ModuleConfig
from app.domain.value_objects import AccessControlKey
from app.shared.utils.datetime import utc_now


class InMemoryAccessControlRepository:
    """Same contract as FirestoreAccessControlRepository; writes hold an asyncio.Lock."""

    def __init__(self) -> None:
        self._docs: dict[str, AccessControlConfig] = {}
        self._lock = asyncio.Lock()

    async def find_by_key(
        self, project_id: str, channel_id: str
    ) -> AccessControlConfig | None:
        doc = self._docs.get(AccessControlKey(project_id, channel_id).document_id)
        if doc is None or doc.is_deleted:
            return None
        return doc

    async def upsert_by_key(
        self,
        project_id: str,
        channel_id: str,
        module_configs: Sequence[ModuleConfig],
    ) -> AccessControlConfig:
        doc_id = AccessControlKey(project_id, channel_id).document_id
        async with self._lock:
            now = utc_now()
            existing = self._docs.get(doc_id)
            saved = AccessControlConfig(
                id=doc_id,
                project_id=project_id,
                channel_id=channel_id,
                module_configs=tuple(module_configs),
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            self._docs[doc_id] = saved
            return saved

    async def soft_delete_by_key(self, project_id: str, channel_id: str) -> bool:
        doc_id = AccessControlKey(project_id, channel_id).document_id
        async with self._lock:
            existing = self._docs.get(doc_id)
            if existing is None or existing.is_deleted:
                return False
            now = utc_now()
            self._docs[doc_id] = replace(
                existing, is_deleted=True, deleted_at=now, updated_at=now
            )
            return True

    async def list_paginated(
        self,
        filters: AccessControlFilter,
        page: int = 1,
        limit: int = 10,
        sort_by: SortField = "created_at",
        sort_order: SortOrder = "desc",
    ) -> tuple[list[AccessControlConfig], int]:
        matches = [
            doc
            for doc in self._docs.values()
            if not doc.is_deleted
            and (filters.project_id is None or doc.project_id == filters.project_id)
            and (filters.channel_id is None or doc.channel_id == filters.channel_id)
            and (filters.module_id is None or filters.module_id in doc.module_ids)
        ]
        matches.sort(
            key=lambda doc: (getattr(doc, sort_by), doc.id),
            reverse=sort_order == "desc",
        )
        start = (page - 1) * limit
        return matches[start : start + limit], len(matches)
