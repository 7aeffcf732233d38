"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Example:
    from app.infrastructure.firebase.client import get_firestore_client
    from app.infrastructure.firebase.collections import COLLECTION_ACCESS_CONTROLS

    db = get_firestore_client()
    if db:
        snapshot = await db.collection(COLLECTION_ACCESS_CONTROLS).document(doc_id).get()
"""

# Owned by this service: one document per (project, channel), id "<project>.<channel>"
COLLECTION_ACCESS_CONTROLS = "access_controls"

# Read-only catalogs maintained by other back-office services
COLLECTION_MODULES = "modules"
COLLECTION_ROLES = "roles"
