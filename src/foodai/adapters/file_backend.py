"""JSON file on disk used as the key/value backend."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from foodai.services.store import KeyValueBackend

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileBackend(KeyValueBackend):
    """Keeps every key in one JSON object written atomically on change."""

    path: Path

    def get_raw(self, key: str) -> str | None:
        """Return the stored text for a key."""
        return self._load().get(key)

    def set_many(self, items: dict[str, str]) -> None:
        """Write all items with a single file replace."""
        data = self._load()
        data.update(items)
        self._write(data)

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        data = self._load()
        if data.pop(key, None) is not None:
            self._write(data)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            _logger.warning("Data file %s is not valid JSON, starting empty", self.path)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Data file %s has unexpected layout, starting empty", self.path)
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)
