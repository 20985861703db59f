"""Domain models for the live entry log."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Entry:
    """A single calorie and protein measurement."""

    recorded_at: datetime
    calories: float
    protein: float
    workout: bool = False


@dataclass(frozen=True)
class EntryTotals:
    """Summed metrics over a list of entries."""

    calories: float
    protein: float


@dataclass(frozen=True)
class DeletedEntry:
    """Entry held for undo after a delete."""

    entry: Entry
    index: int
    expires_at: datetime
