"""Mapping between Python values and Firestore REST ``Value`` JSON.

Covers the value kinds access control documents are made of: null, bool,
int, float, string, UTC timestamp, array (list or tuple) and map.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from app.shared.utils.datetime import ensure_utc

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def encode_value(value: Any) -> dict:
    """Encode one Python value; bool is checked before int (bool subclasses int)."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": ensure_utc(value).strftime(_TIMESTAMP_FORMAT)}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Unsupported Firestore value type: {type(value).__name__}")


def encode_fields(data: dict[str, Any]) -> dict[str, dict]:
    return {key: encode_value(item) for key, item in data.items()}


def encode_document(data: dict[str, Any]) -> dict:
    """Document body for createDocument / patch: ``{"fields": {...}}``."""
    return {"fields": encode_fields(data)}


def _decode_timestamp(raw: str) -> datetime:
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


def _decode_array(raw: dict) -> list:
    return [decode_value(item) for item in raw.get("values") or []]


def _decode_map(raw: dict) -> dict:
    return decode_document(raw.get("fields"))


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "nullValue": lambda raw: None,
    "booleanValue": bool,
    "integerValue": int,
    "doubleValue": float,
    "stringValue": str,
    "timestampValue": _decode_timestamp,
    "arrayValue": _decode_array,
    "mapValue": _decode_map,
}


def decode_value(obj: dict) -> Any:
    """Decode one Firestore value; unknown kinds (geo points, references) decode to None."""
    for kind, raw in obj.items():
        decoder = _DECODERS.get(kind)
        if decoder is not None:
            return decoder(raw)
    return None


def decode_document(fields: dict | None) -> dict:
    """Convert a document's ``fields`` map to a plain dict."""
    if not fields:
        return {}
    return {key: decode_value(item) for key, item in fields.items()}
