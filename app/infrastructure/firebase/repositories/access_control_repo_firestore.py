"""Firestore-backed access control repository (implements IAccessControlRepository).

One document per (project_id, channel_id); the document id is the key's
document_id, so create-if-absent is atomic and concurrent first writers
converge on a single document.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.application.dtos.access_control import (
    AccessControlFilter,
    SortField,
    SortOrder,
)
from app.domain.entities.access_control import (
    AccessControlConfig,
    ModuleConfig,
    RoleConfig,
)
from app.domain.value_objects import AccessControlKey
from app.infrastructure.exceptions import StoreConflictError
from app.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    FirestoreRESTClient,
)
from app.infrastructure.firebase.collections import COLLECTION_ACCESS_CONTROLS
from app.shared.utils.datetime import utc_now

# Attempts of create-then-update before giving up on a key.
_UPSERT_ATTEMPTS = 3


def _encode_module_configs(module_configs: Sequence[ModuleConfig]) -> list[dict]:
    return [
        {
            "module_id": mc.module_id,
            "role_configs": [
                {"role_id": rc.role_id, "status": rc.status}
                for rc in mc.role_configs
            ],
        }
        for mc in module_configs
    ]


def _decode_module_configs(raw: list[dict] | None) -> tuple[ModuleConfig, ...]:
    return tuple(
        ModuleConfig(
            module_id=row.get("module_id", ""),
            role_configs=tuple(
                RoleConfig(role_id=cell.get("role_id", ""), status=bool(cell.get("status")))
                for cell in row.get("role_configs") or []
            ),
        )
        for row in raw or []
    )


def _to_entity(doc_id: str, data: dict[str, Any]) -> AccessControlConfig:
    """Map a Firestore document to the aggregate."""
    return AccessControlConfig(
        id=doc_id,
        project_id=data.get("project_id", ""),
        channel_id=data.get("channel_id", ""),
        module_configs=_decode_module_configs(data.get("module_configs")),
        is_deleted=bool(data.get("is_deleted", False)),
        deleted_at=data.get("deleted_at"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


class FirestoreAccessControlRepository:
    """Access control store on Firestore. Soft-deleted documents read as absent."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_ACCESS_CONTROLS)

    async def find_by_key(
        self, project_id: str, channel_id: str
    ) -> AccessControlConfig | None:
        """Return the live matrix for the key, or None."""
        doc_id = AccessControlKey(project_id, channel_id).document_id
        doc = await self._coll.document(doc_id).get()
        if not doc:
            return None
        data = doc.to_dict()
        if data.get("is_deleted"):
            return None
        return _to_entity(doc.id, data)

    async def upsert_by_key(
        self,
        project_id: str,
        channel_id: str,
        module_configs: Sequence[ModuleConfig],
    ) -> AccessControlConfig:
        """Create the document, or replace its matrix if it already exists.

        A soft-deleted document is revived in place (created_at is kept).
        """
        doc_id = AccessControlKey(project_id, channel_id).document_id
        now = utc_now()
        body: dict[str, Any] = {
            "project_id": project_id,
            "channel_id": channel_id,
            "module_ids": [mc.module_id for mc in module_configs],
            "module_configs": _encode_module_configs(module_configs),
            "is_deleted": False,
            "deleted_at": None,
            "updated_at": now,
        }
        for _ in range(_UPSERT_ATTEMPTS):
            try:
                await self._coll.create(doc_id, {**body, "created_at": now})
            except DocumentExistsError:
                data = await self._coll.document(doc_id).update(body)
                if data is not None:
                    return _to_entity(doc_id, data)
                # Removed between create and update: try creating again.
                continue
            return _to_entity(doc_id, {**body, "created_at": now})
        raise StoreConflictError(doc_id, _UPSERT_ATTEMPTS)

    async def soft_delete_by_key(self, project_id: str, channel_id: str) -> bool:
        """Set is_deleted/deleted_at on the live document; False if none."""
        doc_id = AccessControlKey(project_id, channel_id).document_id
        doc_ref = self._coll.document(doc_id)
        doc = await doc_ref.get()
        if not doc or doc.to_dict().get("is_deleted"):
            return False
        now = utc_now()
        data = await doc_ref.update(
            {"is_deleted": True, "deleted_at": now, "updated_at": now}
        )
        return data is not None

    async def list_paginated(
        self,
        filters: AccessControlFilter,
        page: int = 1,
        limit: int = 10,
        sort_by: SortField = "created_at",
        sort_order: SortOrder = "desc",
    ) -> tuple[list[AccessControlConfig], int]:
        """Return one page of live matrices and the total count (server-side filter, order, offset)."""

        def _filtered():
            q = self._coll.where("is_deleted", "==", False)
            if filters.project_id:
                q = q.where("project_id", "==", filters.project_id)
            if filters.channel_id:
                q = q.where("channel_id", "==", filters.channel_id)
            if filters.module_id:
                q = q.where("module_ids", "array-contains", filters.module_id)
            return q

        total = await _filtered().count()
        direction = "DESCENDING" if sort_order == "desc" else "ASCENDING"
        q = (
            _filtered()
            .order_by(sort_by, direction)
            .order_by("__name__", direction)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        items = [_to_entity(snapshot.id, snapshot.to_dict()) async for snapshot in q.stream()]
        return items, total
