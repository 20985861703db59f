"""Archive of closed days."""

from dataclasses import dataclass, field

from daily_journal.domain.entries import Entry
from daily_journal.domain.errors import NotFound
from daily_journal.services.records import archive_from_record, archive_to_record
from daily_journal.services.storage import ARCHIVE_KEY, JournalStorage


@dataclass
class ArchiveService:
    """Owns the date-keyed archive of past days."""

    storage: JournalStorage
    _archive: dict[str, list[Entry]] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Load the archive from storage."""
        self._archive = archive_from_record(self.storage.load(ARCHIVE_KEY, {}))

    def days(self) -> dict[str, list[Entry]]:
        """Return a copy of the archive."""
        return {day: list(entries) for day, entries in self._archive.items()}

    def day(self, key: str) -> list[Entry]:
        """Return the entries archived for a day."""
        if key not in self._archive:
            raise NotFound(f"No archived day {key}.")
        return list(self._archive[key])

    def store_days(self, days: dict[str, list[Entry]]) -> None:
        """Store whole days, overwriting any existing value for each key."""
        if not days:
            return
        for key, entries in days.items():
            self._archive[key] = list(entries)
        self._persist()

    def delete_entry(self, key: str, index: int) -> Entry:
        """Remove one archived entry; a day left empty is dropped."""
        entries = self._archive.get(key)
        if entries is None or index < 0 or index >= len(entries):
            raise NotFound(f"No archived entry {key}[{index}].")
        entry = entries.pop(index)
        if not entries:
            del self._archive[key]
        self._persist()
        return entry

    def clear(self) -> None:
        """Remove every archived day."""
        self._archive = {}
        self._persist()

    def _persist(self) -> None:
        self.storage.save(ARCHIVE_KEY, archive_to_record(self._archive))
