"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from daily_journal.adapters.memory_kv_store import InMemoryKeyValueStore
from daily_journal.config import Settings
from daily_journal.containers import AppContainer, build_container
from daily_journal.domain.errors import StorageError
from daily_journal.services.archive import ArchiveService
from daily_journal.services.combos import ComboService
from daily_journal.services.entries import EntryService
from daily_journal.services.journal import JournalEngine
from daily_journal.services.rollover import RolloverService
from daily_journal.services.storage import JournalStorage, KeyValueStore

START = datetime(2024, 10, 18, 9, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Clock that only moves when told to."""

    now: datetime = START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """In-memory store whose writes fail while ``failing`` is set."""

    values: dict[str, str] = field(default_factory=dict)
    failing: bool = False
    attempts: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.attempts.append(key)
        if self.failing:
            raise StorageError(f"quota exceeded writing {key}")
        self.values[key] = value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> FailingKeyValueStore:
    return FailingKeyValueStore()


@pytest.fixture
def storage(store: FailingKeyValueStore) -> JournalStorage:
    return JournalStorage(store)


@pytest.fixture
def entry_service(storage: JournalStorage, clock: FakeClock) -> EntryService:
    return EntryService(storage, clock=clock)


@pytest.fixture
def archive_service(storage: JournalStorage) -> ArchiveService:
    return ArchiveService(storage)


@pytest.fixture
def rollover_service(
    storage: JournalStorage,
    entry_service: EntryService,
    archive_service: ArchiveService,
    clock: FakeClock,
) -> RolloverService:
    return RolloverService(
        storage=storage,
        entry_service=entry_service,
        archive_service=archive_service,
        clock=clock,
    )


@pytest.fixture
def combo_service(storage: JournalStorage, clock: FakeClock) -> ComboService:
    return ComboService(storage, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        storage_backend="memory",
        timezone="UTC",
        stations="Sled,SkiErg,Row",
        _env_file=None,
    )


@pytest.fixture
def container(
    settings: Settings, store: FailingKeyValueStore, clock: FakeClock
) -> AppContainer:
    return build_container(settings, store=store, clock=clock)


@pytest.fixture
def engine(container: AppContainer) -> JournalEngine:
    return container.engine


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()
