"""Tests for storage backend adapters."""

from dataclasses import dataclass, field
from pathlib import Path

from foodai.adapters.file_backend import JsonFileBackend
from foodai.adapters.supabase_kv_backend import SupabaseKeyValueBackend
from foodai.services.store import JsonStore


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: dict[str, str] = field(default_factory=dict)
    upserts: list[list[dict[str, str]]] = field(default_factory=list)
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self._payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        if action == "upsert":
            self.upserts.append(self._payload)
            for row in self._payload:
                self.rows[row["key"]] = row["value"]
            return FakeResponse(data=self._payload)
        key = str(self.last_filters[-1][1])
        if action == "delete":
            self.rows.pop(key, None)
            return FakeResponse(data=[])
        if key in self.rows:
            return FakeResponse(data=[{"value": self.rows[key]}])
        return FakeResponse(data=[])


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_backend_roundtrip() -> None:
    client = FakeSupabaseClient()
    store = JsonStore(SupabaseKeyValueBackend(client))  # type: ignore[arg-type]

    store.set("settings", {"target_calories": 1800})

    assert store.get("settings") == {"target_calories": 1800}
    assert store.get("badges") is None
    assert client.table("kv_store").rows["foodai_settings"] == '{"target_calories": 1800}'


def test_supabase_backend_sends_batch_as_single_upsert() -> None:
    client = FakeSupabaseClient()
    store = JsonStore(SupabaseKeyValueBackend(client, table="blobs"))  # type: ignore[arg-type]

    with store.batch():
        store.set("meals", [])
        store.set("achievements", {})

    assert len(client.table("blobs").upserts) == 1
    assert len(client.table("blobs").upserts[0]) == 2


def test_supabase_backend_delete() -> None:
    client = FakeSupabaseClient()
    store = JsonStore(SupabaseKeyValueBackend(client))  # type: ignore[arg-type]
    store.set("fasting", {"enabled": True})

    store.remove("fasting")

    assert store.get("fasting") is None


def test_file_backend_persists_between_instances(tmp_path: Path) -> None:
    path = tmp_path / "data" / "foodai.json"
    JsonStore(JsonFileBackend(path)).set("meals", [{"id": 1}])

    reopened = JsonStore(JsonFileBackend(path))

    assert reopened.get("meals") == [{"id": 1}]
    assert not path.with_suffix(".json.tmp").exists()


def test_file_backend_treats_corrupt_file_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "foodai.json"
    path.write_text("not json", encoding="utf-8")
    backend = JsonFileBackend(path)

    assert backend.get_raw("foodai_meals") is None

    backend.set_many({"foodai_meals": "[]"})
    assert backend.get_raw("foodai_meals") == "[]"


def test_file_backend_delete(tmp_path: Path) -> None:
    backend = JsonFileBackend(tmp_path / "foodai.json")
    backend.set_many({"a": "1", "b": "2"})

    backend.delete("a")
    backend.delete("missing")

    assert backend.get_raw("a") is None
    assert backend.get_raw("b") == "2"
