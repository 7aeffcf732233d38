"""Firestore-backed role catalog (implements IRoleCatalog, read-only)."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from app.application.dtos.catalog import RoleResult
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_ROLES

ROLE_STATUS_ACTIVE = "active"


def _to_result(doc_id: str, data: dict[str, Any]) -> RoleResult:
    """Map a role document; numeric codes are rendered as strings."""
    return RoleResult(
        id=doc_id,
        channel_id=data.get("channel_id", ""),
        name=data.get("name", ""),
        code=str(data.get("code", "")),
        is_active=(
            data.get("status") == ROLE_STATUS_ACTIVE and not data.get("is_deleted")
        ),
    )


class FirestoreRoleCatalog:
    """Reads the roles collection; roles belong to exactly one channel."""

    def __init__(self, client: FirestoreRESTClient, page_size: int = 500) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_ROLES)
        self._page_size = page_size

    async def list_active_for_channel(self, channel_id: str) -> list[RoleResult]:
        """Return all active, non-deleted roles of the channel ordered by code then id."""
        q = (
            self._coll.where("channel_id", "==", channel_id)
            .where("status", "==", ROLE_STATUS_ACTIVE)
            .where("is_deleted", "==", False)
        )
        results = [
            _to_result(s.id, s.to_dict()) async for s in q.stream_all(self._page_size)
        ]
        return sorted(results, key=lambda r: (r.code, r.id))

    async def get_by_ids(self, role_ids: Sequence[str]) -> list[RoleResult]:
        """Fetch roles by id concurrently; missing documents are skipped."""
        docs = await asyncio.gather(
            *(self._coll.document(role_id).get() for role_id in role_ids)
        )
        return [_to_result(doc.id, doc.to_dict()) for doc in docs if doc]
