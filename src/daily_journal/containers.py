"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from supabase import create_client

from daily_journal.adapters.file_kv_store import FileKeyValueStore
from daily_journal.adapters.memory_kv_store import InMemoryKeyValueStore
from daily_journal.adapters.supabase_kv_store import SupabaseKeyValueStore
from daily_journal.config import Settings, parse_stations
from daily_journal.domain.goals import Goals
from daily_journal.services.archive import ArchiveService
from daily_journal.services.combos import ComboService
from daily_journal.services.days import Clock, utc_now
from daily_journal.services.entries import EntryService
from daily_journal.services.journal import JournalEngine
from daily_journal.services.presets import PresetService
from daily_journal.services.rollover import DayCloseStrategy, RolloverService
from daily_journal.services.storage import JournalStorage, KeyValueStore
from daily_journal.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: JournalStorage
    engine: JournalEngine


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by the settings."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "file":
        return FileKeyValueStore(Path(settings.storage_dir))
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "Supabase storage needs SUPABASE_URL and SUPABASE_SERVICE_KEY"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    clock: Clock = utc_now,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage = JournalStorage(store or build_store(resolved_settings))
    timezone = ZoneInfo(resolved_settings.timezone)
    entry_service = EntryService(
        storage,
        max_calories=resolved_settings.max_entry_calories,
        max_protein=resolved_settings.max_entry_protein,
        undo_window=timedelta(seconds=resolved_settings.undo_window_seconds),
        clock=clock,
    )
    archive_service = ArchiveService(storage)
    rollover_service = RolloverService(
        storage=storage,
        entry_service=entry_service,
        archive_service=archive_service,
        timezone=timezone,
        strategy=DayCloseStrategy(resolved_settings.day_close_strategy),
        clock=clock,
    )
    combo_service = ComboService(
        storage,
        stations=parse_stations(resolved_settings.stations),
        max_minutes=resolved_settings.max_combo_minutes,
        clock=clock,
    )
    settings_service = UserSettingsService(
        storage,
        defaults=Goals(
            calories=resolved_settings.default_calorie_goal,
            protein=resolved_settings.default_protein_goal,
            burn=resolved_settings.default_daily_burn,
        ),
    )
    engine = JournalEngine(
        entry_service=entry_service,
        archive_service=archive_service,
        rollover_service=rollover_service,
        combo_service=combo_service,
        settings_service=settings_service,
        preset_service=PresetService(storage),
        clock=clock,
    )
    return AppContainer(settings=resolved_settings, storage=storage, engine=engine)
