"""Live entry log for the current day."""

from dataclasses import dataclass, field
from datetime import timedelta

from daily_journal.domain.entries import DeletedEntry, Entry, EntryTotals
from daily_journal.domain.errors import NotFound, ValidationError
from daily_journal.services.days import Clock, utc_now
from daily_journal.services.records import entries_from_records, entry_to_record
from daily_journal.services.storage import ENTRIES_KEY, WORKOUT_KEY, JournalStorage
from daily_journal.services.validation import parse_number


@dataclass
class EntryService:
    """Owns today's entries, the workout flag and the undo slot."""

    storage: JournalStorage
    max_calories: float = 20000
    max_protein: float = 2000
    undo_window: timedelta = timedelta(seconds=5)
    clock: Clock = utc_now
    _entries: list[Entry] = field(default_factory=list, init=False, repr=False)
    _workout_done: bool = field(default=False, init=False, repr=False)
    _deleted: DeletedEntry | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Load entries and the workout flag from storage."""
        self._entries = entries_from_records(self.storage.load(ENTRIES_KEY, []))
        self._workout_done = bool(self.storage.load(WORKOUT_KEY, False))
        self._deleted = None

    def entries(self) -> list[Entry]:
        """Return today's entries in recording order."""
        return list(self._entries)

    @property
    def workout_done(self) -> bool:
        """Whether today's workout has been marked as done."""
        return self._workout_done

    def add(
        self, calories: object, protein: object, workout: bool | None = None
    ) -> Entry:
        """Validate and append a new entry stamped with the current time."""
        message = "Please enter valid numbers for calories and protein."
        calories_value = parse_number(calories, message)
        protein_value = parse_number(protein, message)
        if calories_value < 0 or protein_value < 0:
            raise ValidationError(
                "Please enter positive values for calories and protein."
            )
        if calories_value == 0 and protein_value == 0:
            raise ValidationError("Please enter at least calories or protein values.")
        if calories_value > self.max_calories or protein_value > self.max_protein:
            raise ValidationError("That entry seems too high. Please check your input.")

        entry = Entry(
            recorded_at=self.clock(),
            calories=calories_value,
            protein=protein_value,
            workout=self._workout_done if workout is None else workout,
        )
        self._entries.append(entry)
        self._persist()
        return entry

    def delete(self, index: int) -> Entry:
        """Remove an entry and hold it for undo until the window closes."""
        self._check_index(index)
        entry = self._entries.pop(index)
        self._deleted = DeletedEntry(
            entry=entry, index=index, expires_at=self.clock() + self.undo_window
        )
        self._persist()
        return entry

    def undo(self) -> Entry:
        """Restore the last deleted entry at its original position."""
        deleted = self.pending_undo()
        if deleted is None:
            raise NotFound("Nothing to undo.")
        self._deleted = None
        self._entries.insert(min(deleted.index, len(self._entries)), deleted.entry)
        self._persist()
        return deleted.entry

    def pending_undo(self) -> DeletedEntry | None:
        """Return the undo slot, discarding it once the window has passed."""
        if self._deleted is not None and self.clock() >= self._deleted.expires_at:
            self._deleted = None
        return self._deleted

    def edit(self, index: int) -> Entry:
        """Remove an entry and return it so its values can be re-added."""
        self._check_index(index)
        entry = self._entries.pop(index)
        self._persist()
        return entry

    def totals(self) -> EntryTotals:
        """Return the summed metrics of today's entries."""
        return EntryTotals(
            calories=sum(entry.calories for entry in self._entries),
            protein=sum(entry.protein for entry in self._entries),
        )

    def set_workout(self, done: bool) -> None:
        """Set today's workout flag."""
        self._workout_done = done
        self.storage.save(WORKOUT_KEY, done)

    def toggle_workout(self) -> bool:
        """Flip today's workout flag and return the new value."""
        self.set_workout(not self._workout_done)
        return self._workout_done

    def replace_all(self, entries: list[Entry], workout_done: bool = False) -> None:
        """Replace the live log, e.g. when a day is closed."""
        self._entries = list(entries)
        self._workout_done = workout_done
        self._deleted = None
        self._persist()

    def clear(self) -> None:
        """Drop every live entry and reset the workout flag."""
        self.replace_all([], workout_done=False)

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._entries):
            raise NotFound(f"No entry at index {index}.")

    def _persist(self) -> None:
        self.storage.save_many(
            {
                ENTRIES_KEY: [entry_to_record(entry) for entry in self._entries],
                WORKOUT_KEY: self._workout_done,
            }
        )
