"""Tests for the JSON key/value store."""

import pytest

from foodai.services.store import API_KEY_KEY, MEALS_KEY, InMemoryBackend, JsonStore
from tests.conftest import RecordingBackend


def test_get_missing_key_returns_none(store: JsonStore) -> None:
    assert store.get("missing") is None


def test_set_and_get_roundtrip_uses_prefix(
    store: JsonStore, backend: RecordingBackend
) -> None:
    store.set("settings", {"target_calories": 1800, "name": "김치"})

    assert store.get("settings") == {"target_calories": 1800, "name": "김치"}
    assert "foodai_settings" in backend.data
    assert "김치" in backend.data["foodai_settings"]


def test_corrupt_value_reads_as_absent() -> None:
    backend = InMemoryBackend(data={"foodai_meals": "{not json"})
    store = JsonStore(backend)

    assert store.get(MEALS_KEY) is None


def test_remove_deletes_key(store: JsonStore, backend: RecordingBackend) -> None:
    store.set("badges", [])
    store.remove("badges")

    assert store.get("badges") is None
    assert backend.data == {}


def test_batch_flushes_all_writes_at_once(
    store: JsonStore, backend: RecordingBackend
) -> None:
    with store.batch():
        store.set("meals", [1])
        store.set("achievements", {"current_streak": 1})
        assert backend.data == {}
        assert store.get("meals") == [1]

    assert len(backend.writes) == 1
    assert set(backend.writes[0]) == {"foodai_meals", "foodai_achievements"}


def test_batch_discards_writes_on_error(
    store: JsonStore, backend: RecordingBackend
) -> None:
    store.set("meals", [1])

    with pytest.raises(RuntimeError), store.batch():
        store.set("meals", [1, 2])
        store.remove("meals")
        raise RuntimeError("boom")

    assert store.get("meals") == [1]
    assert len(backend.writes) == 1


def test_nested_batches_flush_with_outer(
    store: JsonStore, backend: RecordingBackend
) -> None:
    with store.batch():
        with store.batch():
            store.set("meals", [])
        assert backend.writes == []
        store.set("badges", [])

    assert len(backend.writes) == 1


def test_removal_inside_batch_hides_value(store: JsonStore) -> None:
    store.set("fasting", {"enabled": True})

    with store.batch():
        store.remove("fasting")
        assert store.get("fasting") is None

    assert store.get("fasting") is None


def test_size_kb_counts_two_bytes_per_char(store: JsonStore) -> None:
    store.set(API_KEY_KEY, "x" * 510)

    # json string of 510 chars plus two quotes = 512 chars = 1024 bytes
    assert store.size_kb() == 1.0
