"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when ready."""

    status: str = Field(default="ok", description="Readiness status")
    backend: str = Field(..., description="Configured store backend")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when the store is unavailable (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    backend: str = Field(..., description="Configured store backend")
    message: str = Field(..., description="Reason (e.g. Firestore client not initialized)")
