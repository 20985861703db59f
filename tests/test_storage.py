"""Tests for the JSON storage layer."""

import logging

import pytest

from daily_journal.adapters.memory_kv_store import InMemoryKeyValueStore
from daily_journal.domain.errors import StorageError
from daily_journal.services.storage import JournalStorage
from tests.conftest import FailingKeyValueStore


def test_load_returns_default_for_missing_key(
    memory_store: InMemoryKeyValueStore,
) -> None:
    storage = JournalStorage(memory_store)

    assert storage.load("entries", []) == []


def test_save_and_load_round_trip_json(memory_store: InMemoryKeyValueStore) -> None:
    storage = JournalStorage(memory_store)

    storage.save("archive", {"2024-10-17": [{"cal": 500}]})

    assert memory_store.values["archive"] == '{"2024-10-17": [{"cal": 500}]}'
    assert storage.load("archive", {}) == {"2024-10-17": [{"cal": 500}]}


def test_unreadable_value_loads_default(
    memory_store: InMemoryKeyValueStore,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(logging.getLogger("daily_journal"), "propagate", True)
    memory_store.values["entries"] = "{not json"
    storage = JournalStorage(memory_store)

    assert storage.load("entries", []) == []
    assert "Ignoring unreadable value" in caplog.text


def test_failed_writes_stay_pending_until_next_write(
    store: FailingKeyValueStore,
) -> None:
    storage = JournalStorage(store)
    store.failing = True

    with pytest.raises(StorageError):
        storage.save("theme", "dark")

    assert storage.pending_keys == ["theme"]
    assert storage.load("theme", "light") == "dark"

    store.failing = False
    storage.save("combos", [])

    assert storage.pending_keys == []
    assert store.values["theme"] == '"dark"'
    assert store.attempts == ["theme", "theme", "combos"]


def test_newer_value_replaces_pending_one(store: FailingKeyValueStore) -> None:
    storage = JournalStorage(store)
    store.failing = True
    with pytest.raises(StorageError):
        storage.save("theme", "dark")
    with pytest.raises(StorageError):
        storage.save("theme", "light")

    store.failing = False
    storage.flush()

    assert store.values["theme"] == '"light"'
