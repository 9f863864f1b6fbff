"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from supabase import create_client

from foodai.adapters.file_backend import JsonFileBackend
from foodai.adapters.supabase_kv_backend import SupabaseKeyValueBackend
from foodai.config import Settings, parse_storage_backend
from foodai.services.achievements import AchievementEngine
from foodai.services.fasting import FastingService
from foodai.services.ledger import MealLedger
from foodai.services.recording import MealRecorder
from foodai.services.store import InMemoryBackend, JsonStore, KeyValueBackend
from foodai.services.transfer import DataTransferService
from foodai.services.user_settings import UserSettingsService

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(tz=UTC)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: JsonStore
    ledger: MealLedger
    user_settings_service: UserSettingsService
    achievement_engine: AchievementEngine
    meal_recorder: MealRecorder
    fasting_service: FastingService
    transfer_service: DataTransferService


def resolve_timezone(name: str) -> tzinfo:
    """Return the tzinfo for a configured timezone name."""
    if name.strip().upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def build_backend(settings: Settings) -> KeyValueBackend:
    """Create the storage backend selected in settings."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase backend requires supabase_url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueBackend(client, table=settings.supabase_table)
    if backend == "file":
        return JsonFileBackend(Path(settings.data_file))
    return InMemoryBackend()


def build_container(
    settings: Settings | None = None,
    backend: KeyValueBackend | None = None,
    clock: Clock = utc_now,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = JsonStore(
        backend or build_backend(resolved_settings),
        prefix=resolved_settings.storage_prefix,
    )
    timezone = resolve_timezone(resolved_settings.timezone)
    ledger = MealLedger(store=store, clock=clock, timezone=timezone)
    user_settings_service = UserSettingsService(store)
    user_settings_service.ensure_defaults()
    achievement_engine = AchievementEngine(
        store=store,
        ledger=ledger,
        settings_service=user_settings_service,
        clock=clock,
    )
    meal_recorder = MealRecorder(
        store=store, ledger=ledger, achievements=achievement_engine
    )
    fasting_service = FastingService(store=store, clock=clock)
    transfer_service = DataTransferService(
        store=store,
        ledger=ledger,
        settings_service=user_settings_service,
        clock=clock,
    )
    return AppContainer(
        settings=resolved_settings,
        store=store,
        ledger=ledger,
        user_settings_service=user_settings_service,
        achievement_engine=achievement_engine,
        meal_recorder=meal_recorder,
        fasting_service=fasting_service,
        transfer_service=transfer_service,
    )
