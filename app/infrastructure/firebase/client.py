"""Process-wide Firestore REST client for the access control store.

Credentials come from FIREBASE_SERVICE_ACCOUNT_KEY (inline JSON) or, when
that is unset, FIREBASE_SERVICE_ACCOUNT_PATH. The client is created once at
startup and closed at shutdown; repositories fetch it per request.
"""

import json
import logging
from pathlib import Path
from typing import Any

from app.core.config import Settings, get_settings
from app.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)

_client: FirestoreRESTClient | None = None


def _service_account_info(settings: Settings) -> dict[str, Any] | None:
    """Return the parsed service account, or None when no usable source is set.

    Raises:
        ValueError: The inline key is not valid JSON.
    """
    if settings.firebase_service_account_key is not None:
        raw = settings.firebase_service_account_key.get_secret_value()
        if raw:
            try:
                return json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    if not settings.firebase_service_account_path:
        return None
    key_file = Path(settings.firebase_service_account_path).expanduser()
    if not key_file.is_file():
        logger.warning("Service account file not found: %s", key_file)
        return None
    return json.loads(key_file.read_text(encoding="utf-8"))


def init_firebase() -> bool:
    """Create the shared client; safe to call more than once.

    Failures are logged and reported as False so the app still starts and the
    readiness probe reports the store as unavailable.
    """
    global _client
    if _client is not None:
        return True
    settings = get_settings()
    try:
        info = _service_account_info(settings)
        if not info:
            return False
        project_id = info.get("project_id")
        if not project_id:
            logger.error("Service account JSON has no project_id")
            return False
        _client = FirestoreRESTClient(
            project_id,
            _get_credentials(info),
            timeout=settings.firestore_timeout_seconds,
        )
    except Exception:
        logger.exception("Could not initialize the Firestore client")
        return False
    logger.info("Firestore client ready for project %s", project_id)
    return True


def get_firestore_client() -> FirestoreRESTClient | None:
    """Return the shared client, or None before init_firebase succeeded."""
    return _client


async def close_firebase() -> None:
    """Release the client's connection pool (app shutdown, end of scripts)."""
    global _client
    if _client is None:
        return
    await _client.aclose()
    _client = None
    logger.info("Firestore client closed")
