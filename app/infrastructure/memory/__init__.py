"""Process-local store implementations (DATABASE_BACKEND=memory)."""

from app.infrastructure.memory.access_control_repo import (
    InMemoryAccessControlRepository,
)
from app.infrastructure.memory.backend import InMemoryBackend
from app.infrastructure.memory.catalogs import InMemoryModuleCatalog, InMemoryRoleCatalog

__all__ = [
    "InMemoryAccessControlRepository",
    "InMemoryBackend",
    "InMemoryModuleCatalog",
    "InMemoryRoleCatalog",
]
