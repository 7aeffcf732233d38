"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, Firestore
client, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Firestore client (firestore backend only), then
    telemetry when create_app registered it. Shutdown closes the Firestore
    HTTP client before flushing telemetry.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()

    if settings.database_backend == "firestore":
        from app.infrastructure.firebase import init_firebase

        if init_firebase():
            logger.info("Firestore store ready")
        else:
            # Requests fail with 503 and /health/ready reports not ready.
            logger.error("Firestore store unavailable; check service account settings")

    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_logging()
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    if settings.database_backend == "firestore":
        from app.infrastructure.firebase import close_firebase

        await close_firebase()

    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
