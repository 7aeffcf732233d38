"""Tests for Firestore client bootstrap (service account loading)."""

import json

import pytest

from app.core.config import Settings
from app.infrastructure.firebase import client as firebase_client


def settings(**overrides) -> Settings:
    return Settings(database_backend="memory", **overrides)


def test_inline_key_wins_over_path(tmp_path) -> None:
    key_file = tmp_path / "sa.json"
    key_file.write_text(json.dumps({"project_id": "from-file"}))
    info = firebase_client._service_account_info(
        settings(
            firebase_service_account_key=json.dumps({"project_id": "inline"}),
            firebase_service_account_path=str(key_file),
        )
    )
    assert info == {"project_id": "inline"}


def test_path_is_read_when_no_inline_key(tmp_path) -> None:
    key_file = tmp_path / "sa.json"
    key_file.write_text(json.dumps({"project_id": "from-file"}))
    info = firebase_client._service_account_info(
        settings(firebase_service_account_path=str(key_file))
    )
    assert info == {"project_id": "from-file"}


def test_missing_file_or_no_source_gives_none(tmp_path) -> None:
    assert firebase_client._service_account_info(settings()) is None
    assert (
        firebase_client._service_account_info(
            settings(firebase_service_account_path=str(tmp_path / "absent.json"))
        )
        is None
    )


def test_malformed_inline_key_raises() -> None:
    with pytest.raises(ValueError, match="not valid JSON"):
        firebase_client._service_account_info(
            settings(firebase_service_account_key="{not json")
        )


def test_init_without_credentials_reports_not_ready(monkeypatch) -> None:
    monkeypatch.setattr(firebase_client, "get_settings", settings)
    assert firebase_client.init_firebase() is False
    assert firebase_client.get_firestore_client() is None
