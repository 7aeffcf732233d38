"""Pytest configuration and fixtures for the access control service.

Tests run against the in-memory backend; the environment is set before the
app is imported so settings validation never asks for Firestore credentials.
All imports use app.*.
"""

import os

os.environ["DATABASE_BACKEND"] = "memory"
os.environ["TELEMETRY_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.application.dtos.catalog import ModuleResult, RoleResult  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.infrastructure.memory import InMemoryBackend  # noqa: E402
from app.main import create_app  # noqa: E402

get_settings.cache_clear()

CHANNEL_ID = "ch1"
PROJECT_ID = "p1"


@pytest.fixture
def app() -> FastAPI:
    """Fresh app (and fresh in-memory backend) per test."""
    return create_app()


@pytest.fixture
def backend(app: FastAPI) -> InMemoryBackend:
    """The app's in-memory store, for seeding catalogs and inspecting writes."""
    return app.state.memory_backend


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def seeded_backend(backend: InMemoryBackend) -> InMemoryBackend:
    """Backend with modules M1, M2 and active roles R1, R2 in channel ch1."""
    backend.modules.add(ModuleResult(id="M1", name="Calendar", code="CALENDAR"))
    backend.modules.add(ModuleResult(id="M2", name="Leads", code="LEADS"))
    backend.roles.add(RoleResult(id="R1", channel_id=CHANNEL_ID, name="Admin", code="1"))
    backend.roles.add(RoleResult(id="R2", channel_id=CHANNEL_ID, name="Agent", code="2"))
    return backend
