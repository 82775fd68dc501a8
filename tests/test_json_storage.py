from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Make the users_api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from users_api.core import config as core_config  # noqa: E402
from users_api.repositories import JsonUserStore, build_store  # noqa: E402
from users_api.repositories.base import StoreReadError, StoreWriteError  # noqa: E402


def test_missing_file_loads_empty(tmp_path):
    assert JsonUserStore(tmp_path / "users.json").load() == []


def test_save_then_load_keeps_order(tmp_path):
    path = tmp_path / "nested" / "users.json"
    store = JsonUserStore(path)
    users = [
        {"id": 2, "name": "Zoé", "email": "z@example.com", "age": 3},
        {"id": 1, "name": "Ann", "email": "a@example.com", "age": 4},
    ]
    store.save(users)
    assert store.load() == users
    assert "Zoé" in path.read_text(encoding="utf-8")
    assert list(path.parent.glob("*.tmp")) == []


def test_invalid_json_is_a_read_fault(tmp_path):
    path = tmp_path / "users.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreReadError):
        JsonUserStore(path).load()


def test_non_array_is_a_read_fault(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": []}), encoding="utf-8")
    with pytest.raises(StoreReadError):
        JsonUserStore(path).load()


def test_unserializable_collection_is_a_write_fault(tmp_path):
    path = tmp_path / "users.json"
    with pytest.raises(StoreWriteError):
        JsonUserStore(path).save([{"id": 1, "name": object()}])
    assert not path.exists()
    assert list(tmp_path.glob("*.tmp")) == []


def test_build_store_reads_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("USERS_FILE", str(tmp_path / "custom.json"))
    monkeypatch.setenv("STORAGE_BACKEND", "json")
    core_config.get_settings.cache_clear()
    try:
        store = build_store()
        assert isinstance(store, JsonUserStore)
        assert store.path == tmp_path / "custom.json"
        monkeypatch.setenv("STORAGE_BACKEND", "redis")
        core_config.get_settings.cache_clear()
        with pytest.raises(RuntimeError):
            build_store()
    finally:
        core_config.get_settings.cache_clear()


def test_settings_defaults(monkeypatch):
    for name in ("PORT", "USERS_FILE", "STORAGE_BACKEND", "APP_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PORT", "not-a-number")
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
        assert settings.port == 3000
        assert settings.storage_backend == "json"
        assert settings.users_file == core_config.DEFAULT_USERS_FILE
        assert settings.app_env == "dev"
        assert settings.log_level == "INFO"
    finally:
        core_config.get_settings.cache_clear()
