from __future__ import annotations

import pytest

from src.workforce_records.workforce_records.core.exceptions import StoreCorruptedError
from src.workforce_records.workforce_records.records.repository import RecordRepository
from src.workforce_records.workforce_records.storage.json_file_store import JsonFileStore
from src.workforce_records.workforce_records.storage.memory_store import MemoryStore


def test_memory_store_returns_copies():
    store = MemoryStore()
    value = [{"a": 1}]
    store.set("k", value)
    value[0]["a"] = 2

    assert store.get("k") == [{"a": 1}]
    assert store.get("missing") is None


def test_json_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "store.json"
    JsonFileStore(path).set("k", {"x": [1, 2]})

    assert JsonFileStore(path).get("k") == {"x": [1, 2]}

    JsonFileStore(path).delete("k")
    assert JsonFileStore(path).get("k") is None


def test_json_file_store_rejects_malformed_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreCorruptedError):
        JsonFileStore(path).get("k")


def test_seeded_data_survives_reopen(tmp_path):
    path = tmp_path / "store.json"
    first = RecordRepository(JsonFileStore(path)).list_users()
    second = RecordRepository(JsonFileStore(path)).list_users()

    # Password hashes are salted, so equality proves the seed was written once and reread.
    assert first == second
