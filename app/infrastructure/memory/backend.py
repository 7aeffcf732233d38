"""Bundle of in-memory stores shared by every request of one app instance."""

from dataclasses import dataclass, field

from app.infrastructure.memory.access_control_repo import (
    InMemoryAccessControlRepository,
)
from app.infrastructure.memory.catalogs import InMemoryModuleCatalog, InMemoryRoleCatalog


@dataclass
class InMemoryBackend:
    modules: InMemoryModuleCatalog = field(default_factory=InMemoryModuleCatalog)
    roles: InMemoryRoleCatalog = field(default_factory=InMemoryRoleCatalog)
    access_controls: InMemoryAccessControlRepository = field(
        default_factory=InMemoryAccessControlRepository
    )
