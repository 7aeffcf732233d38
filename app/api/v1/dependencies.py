"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the store backend, path keys and the access
control service. Routes depend only on these dependencies, not on infra
directly.

When database_backend is 'firestore', repositories use the Firestore REST client.
When database_backend is 'memory', they use the InMemoryBackend on app.state.
Switch backends via DATABASE_BACKEND in config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Path, Request

from app.application.interfaces.repositories import (
    IAccessControlRepository,
    IModuleCatalog,
    IRoleCatalog,
)
from app.application.services.access_control_service import AccessControlService
from app.core.config import get_settings
from app.domain.exceptions import StoreNotConfiguredException
from app.domain.value_objects import AccessControlKey
from app.infrastructure.firebase.client import get_firestore_client
from app.infrastructure.firebase.repositories import (
    FirestoreAccessControlRepository,
    FirestoreModuleCatalog,
    FirestoreRoleCatalog,
)
from app.infrastructure.memory import InMemoryBackend


@dataclass
class StoreBundle:
    """Repositories of the configured backend for one request."""

    access_controls: IAccessControlRepository
    modules: IModuleCatalog
    roles: IRoleCatalog


def get_memory_backend(request: Request) -> InMemoryBackend:
    """Return the app's in-memory backend (created in create_app)."""
    backend = getattr(request.app.state, "memory_backend", None)
    if backend is None:
        raise StoreNotConfiguredException("memory")
    return backend


def get_store(request: Request) -> StoreBundle:
    """Build repositories for the configured backend; 503 if it is unavailable."""
    settings = get_settings()
    if settings.database_backend == "memory":
        backend = get_memory_backend(request)
        return StoreBundle(
            access_controls=backend.access_controls,
            modules=backend.modules,
            roles=backend.roles,
        )
    client = get_firestore_client()
    if client is None:
        raise StoreNotConfiguredException("firestore")
    return StoreBundle(
        access_controls=FirestoreAccessControlRepository(client),
        modules=FirestoreModuleCatalog(client, settings.catalog_page_size),
        roles=FirestoreRoleCatalog(client, settings.catalog_page_size),
    )


def get_access_control_service(
    store: Annotated[StoreBundle, Depends(get_store)],
) -> AccessControlService:
    return AccessControlService(
        access_control_repo=store.access_controls,
        module_catalog=store.modules,
        role_catalog=store.roles,
    )


def get_access_control_key(
    project_id: Annotated[str, Path(alias="projectId")],
    channel_id: Annotated[str, Path(alias="channelId")],
) -> AccessControlKey:
    """Validate the path key (400 via ValidationException when malformed)."""
    return AccessControlKey(project_id=project_id, channel_id=channel_id)
