"""Closing finished days into the archive."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, tzinfo
from enum import Enum

from daily_journal.domain.entries import Entry
from daily_journal.domain.errors import StorageError
from daily_journal.services.archive import ArchiveService
from daily_journal.services.days import Clock, day_key, utc_now
from daily_journal.services.entries import EntryService
from daily_journal.services.storage import LAST_CHECK_KEY, JournalStorage

logger = logging.getLogger(__name__)


class DayCloseStrategy(Enum):
    """How live entries are bucketed when a day closes."""

    LAST_CHECKED = "last_checked"
    ENTRY_DATE = "entry_date"


@dataclass(frozen=True)
class RolloverResult:
    """Outcome of a day-boundary check."""

    today: str
    rolled_over: bool
    archived_days: tuple[str, ...] = ()
    archived_entries: int = 0


@dataclass
class RolloverService:
    """Moves the live log into the archive when the calendar day changes.

    The check runs once at process start. With the ``last_checked`` strategy
    every live entry is archived under the last checked day, so when several
    days passed only that day gets a bucket. With ``entry_date`` each entry is
    archived under its own day and entries stamped today stay live.
    """

    storage: JournalStorage
    entry_service: EntryService
    archive_service: ArchiveService
    timezone: tzinfo = UTC
    strategy: DayCloseStrategy = DayCloseStrategy.LAST_CHECKED
    clock: Clock = utc_now

    def today(self) -> str:
        """Return today's day key."""
        return day_key(self.clock(), self.timezone)

    def check(self) -> RolloverResult:
        """Archive the live log if the day changed since the last check."""
        today = self.today()
        last_checked = self.storage.load(LAST_CHECK_KEY, None)
        if not isinstance(last_checked, str) or not last_checked:
            self.storage.save(LAST_CHECK_KEY, today)
            return RolloverResult(today=today, rolled_over=False)
        if last_checked == today:
            return RolloverResult(today=today, rolled_over=False)

        archived, retained = self._bucket(
            self.entry_service.entries(), last_checked, today
        )
        self._apply(archived, retained, today)
        result = RolloverResult(
            today=today,
            rolled_over=True,
            archived_days=tuple(sorted(archived)),
            archived_entries=sum(len(entries) for entries in archived.values()),
        )
        logger.info(
            "Closed day %s: archived %d entries into %s",
            last_checked,
            result.archived_entries,
            ", ".join(result.archived_days) or "nothing",
        )
        return result

    def _bucket(
        self, entries: list[Entry], last_checked: str, today: str
    ) -> tuple[dict[str, list[Entry]], list[Entry]]:
        if self.strategy is DayCloseStrategy.LAST_CHECKED:
            return ({last_checked: entries} if entries else {}), []
        archived: dict[str, list[Entry]] = {}
        retained: list[Entry] = []
        for entry in entries:
            key = day_key(entry.recorded_at, self.timezone)
            if key == today:
                retained.append(entry)
            else:
                archived.setdefault(key, []).append(entry)
        return archived, retained

    def _apply(
        self, archived: dict[str, list[Entry]], retained: list[Entry], today: str
    ) -> None:
        # Each step updates memory even when its write fails; the first
        # failure is re-raised once all steps ran.
        steps: list[Callable[[], None]] = [
            lambda: self.archive_service.store_days(archived),
            lambda: self.entry_service.replace_all(retained, workout_done=False),
            lambda: self.storage.save(LAST_CHECK_KEY, today),
        ]
        failure: StorageError | None = None
        for step in steps:
            try:
                step()
            except StorageError as exc:
                failure = failure or exc
        if failure is not None:
            raise failure
