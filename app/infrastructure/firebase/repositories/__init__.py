"""Firestore-backed repository implementations (swappable with the in-memory store)."""

from app.infrastructure.firebase.repositories.access_control_repo_firestore import (
    FirestoreAccessControlRepository,
)
from app.infrastructure.firebase.repositories.module_catalog_firestore import (
    FirestoreModuleCatalog,
)
from app.infrastructure.firebase.repositories.role_catalog_firestore import (
    FirestoreRoleCatalog,
)

__all__ = [
    "FirestoreAccessControlRepository",
    "FirestoreModuleCatalog",
    "FirestoreRoleCatalog",
]
