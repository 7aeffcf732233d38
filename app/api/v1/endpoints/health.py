"""Health check endpoint. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.infrastructure.firebase.client import get_firestore_client
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Store not available", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 if the configured store can serve requests; 503 otherwise.

    Firestore is ready once the REST client has been initialized at startup;
    the memory backend is ready once create_app has attached it.
    """
    backend = get_settings().database_backend
    if backend == "memory":
        ready = getattr(request.app.state, "memory_backend", None) is not None
        reason = "In-memory backend not attached"
    else:
        ready = get_firestore_client() is not None
        reason = "Firestore client not initialized (check FIREBASE_SERVICE_ACCOUNT_KEY or PATH)"
    if ready:
        return ReadinessResponse(backend=backend)
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(backend=backend, message=reason).model_dump(),
    )
