"""Tests for container wiring."""

from datetime import UTC
from pathlib import Path

import pytest

from foodai.adapters.file_backend import JsonFileBackend
from foodai.config import Settings
from foodai.containers import build_backend, build_container, resolve_timezone
from foodai.services.store import InMemoryBackend


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert isinstance(container.store.backend, InMemoryBackend)
    assert container.meal_recorder.ledger is container.ledger
    assert container.user_settings_service.target_calories() == 2000


def test_build_backend_file(tmp_path: Path) -> None:
    settings = Settings(storage_backend="file", data_file=str(tmp_path / "db.json"))

    backend = build_backend(settings)

    assert isinstance(backend, JsonFileBackend)


def test_build_backend_supabase_requires_credentials() -> None:
    settings = Settings(storage_backend="supabase")

    with pytest.raises(ValueError, match="Supabase"):
        build_backend(settings)


def test_resolve_timezone_utc_shortcut() -> None:
    assert resolve_timezone("utc") is UTC
