"""JSON key/value store shared by every service."""

import json
import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol

_logger = logging.getLogger(__name__)

MEALS_KEY = "meals"
SETTINGS_KEY = "settings"
BADGES_KEY = "badges"
ACHIEVEMENTS_KEY = "achievements"
FASTING_KEY = "fasting"
API_KEY_KEY = "apiKey"

CORE_KEYS = (MEALS_KEY, SETTINGS_KEY, BADGES_KEY, ACHIEVEMENTS_KEY, FASTING_KEY)
ALL_KEYS = (API_KEY_KEY, *CORE_KEYS)


class KeyValueBackend(Protocol):
    """Raw string storage behind the JSON store."""

    def get_raw(self, key: str) -> str | None:
        """Return the stored text for a key, if present."""

    def set_many(self, items: dict[str, str]) -> None:
        """Write several keys in one call."""

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""


@dataclass
class InMemoryBackend(KeyValueBackend):
    """Dictionary-backed storage for tests and ephemeral runs."""

    data: dict[str, str] = field(default_factory=dict)

    def get_raw(self, key: str) -> str | None:
        """Return the stored text for a key."""
        return self.data.get(key)

    def set_many(self, items: dict[str, str]) -> None:
        """Store all items."""
        self.data.update(items)

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        self.data.pop(key, None)


_REMOVED = object()


@dataclass
class JsonStore:
    """Named JSON blobs on top of a key/value backend.

    Reads never raise for missing or unparseable values; callers receive
    None and fall back to their defaults. Writes made inside ``batch()`` are
    buffered and flushed to the backend together.
    """

    backend: KeyValueBackend
    prefix: str = "foodai_"
    _pending: dict[str, object] | None = field(default=None, init=False, repr=False)
    _depth: int = field(default=0, init=False, repr=False)

    def get(self, key: str) -> object | None:
        """Return the decoded value for a key, or None if absent or corrupt."""
        if self._pending is not None and key in self._pending:
            pending = self._pending[key]
            return None if pending is _REMOVED else json.loads(pending)  # type: ignore[arg-type]
        raw = self.backend.get_raw(self._full_key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            _logger.warning("Discarding unparseable value for key=%s", key)
            return None

    def set(self, key: str, value: object) -> None:
        """Serialize and store a value."""
        encoded = json.dumps(value, ensure_ascii=False)
        if self._pending is not None:
            self._pending[key] = encoded
            return
        self.backend.set_many({self._full_key(key): encoded})

    def remove(self, key: str) -> None:
        """Remove a key."""
        if self._pending is not None:
            self._pending[key] = _REMOVED
            return
        self.backend.delete(self._full_key(key))

    def get_raw(self, key: str) -> str | None:
        """Return the stored text for a key without decoding it."""
        if self._pending is not None and key in self._pending:
            pending = self._pending[key]
            return None if pending is _REMOVED else pending  # type: ignore[return-value]
        return self.backend.get_raw(self._full_key(key))

    @contextmanager
    def batch(self) -> Iterator["JsonStore"]:
        """Group writes so they reach the backend in a single call.

        Nested batches join the outermost one. If the block raises, the
        buffered writes are dropped.
        """
        if self._pending is None:
            self._pending = {}
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self._pending = None
            raise
        self._depth -= 1
        if self._depth == 0:
            pending, self._pending = self._pending, None
            self._flush(pending)

    def size_kb(self, keys: Iterable[str] = ALL_KEYS) -> float:
        """Return the approximate storage footprint in KB (2 bytes per char)."""
        total = 0
        for key in keys:
            raw = self.get_raw(key)
            if raw:
                total += len(raw) * 2
        return round(total / 1024, 2)

    def _flush(self, pending: dict[str, object]) -> None:
        writes = {
            self._full_key(key): value
            for key, value in pending.items()
            if value is not _REMOVED
        }
        if writes:
            self.backend.set_many(writes)  # type: ignore[arg-type]
        for key, value in pending.items():
            if value is _REMOVED:
                self.backend.delete(self._full_key(key))

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"
