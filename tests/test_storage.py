"""Tests for the durable key-value storage backends."""

from __future__ import annotations

import pytest

from visa_console.settings import Settings
from visa_console.utils.storage import (
    FileKeyValueStorage,
    MemoryKeyValueStorage,
    create_storage,
    format_bytes,
)


def test_file_storage_survives_a_new_instance(tmp_path):
    path = tmp_path / "state" / "session.json"
    FileKeyValueStorage(path).set("authToken", "t1")

    reopened = FileKeyValueStorage(path)

    assert reopened.get("authToken") == "t1"
    assert reopened.get("missing") is None


def test_file_storage_delete_is_idempotent(tmp_path):
    storage = FileKeyValueStorage(tmp_path / "session.json")
    storage.set("a", "1")
    storage.set("b", "2")

    storage.delete("a")
    storage.delete("a")

    assert storage.get("a") is None
    assert storage.get("b") == "2"


def test_unreadable_file_reads_as_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    storage = FileKeyValueStorage(path)

    assert storage.get("authToken") is None
    storage.set("authToken", "t2")
    assert storage.get("authToken") == "t2"


def test_create_storage_follows_settings(tmp_path):
    memory = create_storage(Settings(session_backend="memory"))
    on_disk = create_storage(Settings(session_backend="file", app_storage_dir=str(tmp_path)), session_key="abc123")

    assert isinstance(memory, MemoryKeyValueStorage)
    assert isinstance(on_disk, FileKeyValueStorage)
    assert on_disk.path == tmp_path / "sessions" / "abc123.json"


def test_file_backend_gives_each_caller_its_own_file(tmp_path):
    settings = Settings(session_backend="file", app_storage_dir=str(tmp_path))
    first = create_storage(settings)
    second = create_storage(settings)

    first.set("authToken", "t1")

    assert first.path != second.path
    assert second.get("authToken") is None


def test_session_key_cannot_escape_the_storage_dir(tmp_path):
    settings = Settings(session_backend="file", app_storage_dir=str(tmp_path))

    with pytest.raises(ValueError):
        create_storage(settings, session_key="../../etc")


def test_format_bytes():
    assert format_bytes(512) == "512.0 B"
    assert format_bytes(2 * 1024 * 1024) == "2.0 MB"
