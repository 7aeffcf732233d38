"""Firestore-backed module catalog (implements IModuleCatalog, read-only)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.catalog import ModuleResult
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_MODULES


def _to_result(doc_id: str, data: dict[str, Any]) -> ModuleResult:
    return ModuleResult(
        id=doc_id,
        name=data.get("name", ""),
        code=str(data.get("code", "")),
        is_active=bool(data.get("is_active", False)),
    )


class FirestoreModuleCatalog:
    """Reads the modules collection maintained by the module service."""

    def __init__(self, client: FirestoreRESTClient, page_size: int = 500) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_MODULES)
        self._page_size = page_size

    async def list_active(self) -> list[ModuleResult]:
        """Return active, access-controlled, non-deleted modules ordered by code.

        Ordering is applied in memory so the query needs no composite index.
        All matching documents are read, one page of page_size at a time.
        """
        q = (
            self._coll.where("is_active", "==", True)
            .where("access_control", "==", True)
            .where("is_deleted", "==", False)
        )
        results = [
            _to_result(s.id, s.to_dict()) async for s in q.stream_all(self._page_size)
        ]
        return sorted(results, key=lambda m: (m.code, m.id))

    async def get_by_id(self, module_id: str) -> ModuleResult | None:
        doc = await self._coll.document(module_id).get()
        if not doc:
            return None
        data = doc.to_dict()
        if data.get("is_deleted"):
            return None
        return _to_result(doc.id, data)
