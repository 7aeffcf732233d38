"""Tests for Firestore REST value encoding/decoding."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from app.infrastructure.firebase._rest_encoding import (
    decode_document,
    decode_value,
    encode_document,
    encode_value,
)


def test_encode_scalars() -> None:
    assert encode_value(None) == {"nullValue": None}
    assert encode_value(True) == {"booleanValue": True}
    assert encode_value(3) == {"integerValue": "3"}
    assert encode_value(1.5) == {"doubleValue": 1.5}
    assert encode_value("x") == {"stringValue": "x"}


def test_encode_datetime_normalizes_to_utc() -> None:
    eat = timezone(timedelta(hours=3))
    encoded = encode_value(datetime(2024, 5, 1, 15, 0, tzinfo=eat))
    assert encoded == {"timestampValue": "2024-05-01T12:00:00.000000Z"}


def test_encode_tuple_as_array() -> None:
    assert encode_value(("a",)) == {"arrayValue": {"values": [{"stringValue": "a"}]}}


def test_encode_unsupported_type() -> None:
    with pytest.raises(TypeError):
        encode_value(object())


def test_decode_document_nested_matrix() -> None:
    data = {
        "module_configs": [
            {"module_id": "M1", "role_configs": [{"role_id": "R1", "status": True}]}
        ],
        "created_at": datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        "deleted_at": None,
    }
    assert decode_document(encode_document(data)["fields"]) == data


def test_decode_empty_array_and_missing_fields() -> None:
    assert decode_document({"ids": {"arrayValue": {}}}) == {"ids": []}
    assert decode_document(None) == {}


def test_decode_server_values() -> None:
    assert decode_value({"nullValue": "NULL_VALUE"}) is None
    assert decode_value({"integerValue": "42"}) == 42
    assert decode_value({"timestampValue": "2024-05-01T12:00:00.123456Z"}) == datetime(
        2024, 5, 1, 12, 0, 0, 123456, tzinfo=UTC
    )
    assert decode_value({"geoPointValue": {"latitude": 0, "longitude": 0}}) is None
