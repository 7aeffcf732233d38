"""Seed the module catalog and one channel's roles into Firestore (local development).

Writes the default back-office modules (Leads, Calendar, Todo, ...) flagged for
access control, plus active roles for the given channel. Documents are written
with full replace, so running it twice is harmless.

Usage:
    uv run python -m scripts.seed_catalogs <channel_id> [code:name ...]

Role specs default to 1:Admin 2:Manager 3:Agent; the role document id is
"<channel_id>-role-<code>". Requires FIREBASE_SERVICE_ACCOUNT_KEY or PATH.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import datetime
from typing import Any

from app.core.config import get_settings
from app.domain.value_objects import is_valid_identifier
from app.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from app.infrastructure.firebase.collections import COLLECTION_MODULES, COLLECTION_ROLES
from app.shared.utils.datetime import utc_now

DEFAULT_MODULES: list[tuple[str, str]] = [
    ("Leads", "LEADS"),
    ("Calendar", "CALENDAR"),
    ("Todo", "TODO"),
    ("DailyBusiness", "DAILY_BUSINESS"),
    ("Product", "PRODUCT"),
    ("ResourceCenter", "RESOURCE_CENTER"),
]

DEFAULT_ROLE_SPECS = ["1:Admin", "2:Manager", "3:Agent"]


def parse_role_spec(spec: str) -> tuple[int, str]:
    """Parse "code:name" (numeric code) into (code, name)."""
    code, sep, name = spec.partition(":")
    if not sep or not code.strip().isdigit() or not name.strip():
        raise ValueError(f"Role spec must look like '<number>:<name>', got {spec!r}")
    return int(code), name.strip()


def module_documents(now: datetime) -> dict[str, dict[str, Any]]:
    """Return {doc_id: data} for the default modules; doc id is the lowercased code."""
    return {
        code.lower(): {
            "name": name,
            "code": code,
            "is_active": True,
            "access_control": True,
            "is_deleted": False,
            "created_at": now,
            "updated_at": now,
        }
        for name, code in DEFAULT_MODULES
    }


def role_documents(
    channel_id: str, specs: list[str], now: datetime
) -> dict[str, dict[str, Any]]:
    """Return {doc_id: data} for active roles of channel_id."""
    docs: dict[str, dict[str, Any]] = {}
    for spec in specs:
        code, name = parse_role_spec(spec)
        docs[f"{channel_id}-role-{code}"] = {
            "channel_id": channel_id,
            "name": name,
            "code": code,
            "status": "active",
            "is_deleted": False,
            "created_at": now,
            "updated_at": now,
        }
    return docs


async def main() -> None:
    """Seed modules and roles for the channel given on the command line."""
    if len(sys.argv) < 2:
        print(
            "Usage: uv run python -m scripts.seed_catalogs <channel_id> [code:name ...]",
            file=sys.stderr,
        )
        sys.exit(1)
    channel_id = sys.argv[1]
    if not is_valid_identifier(channel_id):
        print(f"Invalid channel id: {channel_id}", file=sys.stderr)
        sys.exit(1)
    try:
        now = utc_now()
        modules = module_documents(now)
        roles = role_documents(channel_id, sys.argv[2:] or DEFAULT_ROLE_SPECS, now)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    get_settings()
    if not init_firebase():
        print("Firestore not configured (set FIREBASE_SERVICE_ACCOUNT_KEY or PATH)", file=sys.stderr)
        sys.exit(1)
    db = get_firestore_client()
    assert db is not None
    try:
        for doc_id, data in modules.items():
            await db.collection(COLLECTION_MODULES).document(doc_id).set(data)
        for doc_id, data in roles.items():
            await db.collection(COLLECTION_ROLES).document(doc_id).set(data)
    finally:
        await close_firebase()
    print(f"Seeded {len(modules)} modules and {len(roles)} roles for channel {channel_id}")


if __name__ == "__main__":
    asyncio.run(main())
