"""Export, import and reset of stored data."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from foodai.services.ledger import MealLedger
from foodai.services.store import (
    CORE_KEYS,
    MEALS_KEY,
    SETTINGS_KEY,
    JsonStore,
)
from foodai.services.user_settings import UserSettingsService

_logger = logging.getLogger(__name__)


@dataclass
class DataTransferService:
    """Moves meals and settings in and out of the store."""

    store: JsonStore
    ledger: MealLedger
    settings_service: UserSettingsService
    clock: Callable[[], datetime]

    def export_data(self) -> str:
        """Return meals and settings as an indented JSON document."""
        payload = {
            "meals": self.store.get(MEALS_KEY) or [],
            "settings": self.store.get(SETTINGS_KEY),
            "exportDate": self.clock().isoformat(),
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)

    def import_data(self, text: str) -> bool:
        """Replace meals and/or settings from an export document.

        Returns False, writing nothing, when the document is not valid JSON
        or its fields have the wrong shape.
        """
        try:
            payload = json.loads(text)
        except (TypeError, ValueError):
            _logger.exception("Import failed: invalid JSON")
            return False
        if not isinstance(payload, dict):
            _logger.error("Import failed: expected an object, got %s", type(payload))
            return False
        meals = payload.get("meals")
        settings = payload.get("settings")
        if meals is not None and not isinstance(meals, list):
            _logger.error("Import failed: meals must be a list")
            return False
        if settings is not None and not isinstance(settings, dict):
            _logger.error("Import failed: settings must be an object")
            return False

        with self.store.batch():
            if meals is not None:
                self.store.set(MEALS_KEY, meals)
            if settings is not None:
                self.store.set(SETTINGS_KEY, settings)
        _logger.info(
            "Imported data: meals=%s settings=%s",
            len(meals) if meals is not None else 0,
            settings is not None,
        )
        return True

    def clear_all(self) -> None:
        """Remove all tracked data except the API key and restore defaults."""
        with self.store.batch():
            for key in CORE_KEYS:
                self.store.remove(key)
            self.settings_service.ensure_defaults()
        _logger.info("Cleared all stored data")

    def storage_size_kb(self) -> float:
        """Return the approximate footprint of stored data in KB."""
        return self.store.size_kb()

    def meal_count(self) -> int:
        """Return the number of stored meals."""
        return self.ledger.count()
