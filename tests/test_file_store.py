"""
Unit tests for JsonFileKeyValueStore.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from smartparking_gateway.implementations import JsonFileKeyValueStore


@pytest.fixture
def session_file(tmp_path: Path) -> Path:
    return tmp_path / "nested" / "session.json"


def test_missing_file_reads_as_empty(session_file: Path) -> None:
    store = JsonFileKeyValueStore(session_file)

    assert store.read("authToken") is None
    assert not session_file.exists()


def test_values_survive_a_new_instance(session_file: Path) -> None:
    JsonFileKeyValueStore(session_file).write("authToken", "A1")

    assert JsonFileKeyValueStore(session_file).read("authToken") == "A1"
    assert json.loads(session_file.read_text(encoding="utf-8")) == {"authToken": "A1"}


def test_clear_removes_only_that_key(session_file: Path) -> None:
    store = JsonFileKeyValueStore(session_file)
    store.write("authToken", "A1")
    store.write("user", '{"id": 7}')

    store.clear("authToken")
    store.clear("never-written")

    assert store.read("authToken") is None
    assert store.read("user") == '{"id": 7}'


def test_write_leaves_no_temporary_file(session_file: Path) -> None:
    JsonFileKeyValueStore(session_file).write("authToken", "A1")

    assert sorted(p.name for p in session_file.parent.iterdir()) == ["session.json"]


def test_corrupt_file_is_treated_as_empty(session_file: Path) -> None:
    session_file.parent.mkdir(parents=True)
    session_file.write_text("{truncated", encoding="utf-8")
    store = JsonFileKeyValueStore(session_file)

    with capture_logs() as logs:
        value = store.read("authToken")

    assert value is None
    assert logs[0]["event"] == "Session file unreadable, treating as empty"
    assert logs[0]["log_level"] == "warning"


@pytest.mark.parametrize("content", ['["authToken"]', '{"authToken": 42}'])
def test_unexpected_shapes_read_as_missing(session_file: Path, content: str) -> None:
    session_file.parent.mkdir(parents=True)
    session_file.write_text(content, encoding="utf-8")

    assert JsonFileKeyValueStore(session_file).read("authToken") is None


def test_update_sets_and_removes_keys_in_one_save(
    session_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    store = JsonFileKeyValueStore(session_file)
    store.write("authToken", "A1")
    store.write("refreshToken", "R1")
    saves: list[dict[str, object]] = []
    original_save = store._save

    def recording_save(data: dict[str, object]) -> None:
        saves.append(dict(data))
        original_save(data)

    monkeypatch.setattr(store, "_save", recording_save)

    store.update({"authToken": "A2", "refreshToken": None, "user": '{"id": 7}'})

    assert saves == [{"authToken": "A2", "user": '{"id": 7}'}]
    assert json.loads(session_file.read_text(encoding="utf-8")) == saves[0]
