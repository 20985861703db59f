"""Workout combo tracking."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime

from daily_journal.domain.combos import Combo
from daily_journal.domain.errors import NotFound, ValidationError
from daily_journal.services.days import Clock, utc_now
from daily_journal.services.records import combo_from_record, combo_to_record
from daily_journal.services.storage import COMBOS_KEY, JournalStorage
from daily_journal.services.validation import parse_number

logger = logging.getLogger(__name__)

DEFAULT_STATIONS = ("Sled", "SkiErg", "Row", "Burpee", "WallBall")


def generate_combos(stations: Sequence[str], created_at: datetime) -> list[Combo]:
    """Return every ordered pair of distinct stations, in station order."""
    return [
        Combo(
            id=f"{first}-{second}",
            station1=first,
            station2=second,
            completed=False,
            times=(),
            created_at=created_at,
        )
        for i, first in enumerate(stations)
        for j, second in enumerate(stations)
        if i != j
    ]


@dataclass
class ComboService:
    """Owns the combo list; combos are only toggled and timed, never added."""

    storage: JournalStorage
    stations: tuple[str, ...] = DEFAULT_STATIONS
    max_minutes: float = 999
    clock: Clock = utc_now
    _combos: list[Combo] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Load combos from storage."""
        rows = self.storage.load(COMBOS_KEY, [])
        now = self.clock()
        self._combos = [
            combo_from_record(row, now)
            for row in (rows if isinstance(rows, list) else [])
            if isinstance(row, dict)
        ]

    def ensure_generated(self) -> bool:
        """Generate the combo list when none is stored; return True if created."""
        if self._combos:
            return False
        self._combos = generate_combos(self.stations, self.clock())
        logger.info("Generated %d combos", len(self._combos))
        self._persist()
        return True

    def combos(self) -> list[Combo]:
        """Return all combos in generation order."""
        return list(self._combos)

    def get(self, combo_id: str) -> Combo:
        """Return a combo by id."""
        return self._combos[self._index(combo_id)]

    def toggle_complete(self, combo_id: str) -> Combo:
        """Flip a combo's completed flag."""
        index = self._index(combo_id)
        combo = self._combos[index]
        updated = replace(combo, completed=not combo.completed)
        self._combos[index] = updated
        self._persist()
        return updated

    def add_time(self, combo_id: str, minutes: object) -> Combo:
        """Record an attempt time in minutes."""
        value = parse_number(minutes, "Please enter a valid number")
        if value <= 0:
            raise ValidationError("Time must be greater than 0")
        if value > self.max_minutes:
            raise ValidationError("Time seems too high. Please check your input.")
        index = self._index(combo_id)
        combo = self._combos[index]
        updated = replace(combo, times=(*combo.times, value))
        self._combos[index] = updated
        self._persist()
        return updated

    def remove_time(self, combo_id: str, time_index: int) -> float:
        """Delete one recorded time and return it."""
        index = self._index(combo_id)
        combo = self._combos[index]
        if time_index < 0 or time_index >= len(combo.times):
            raise NotFound(f"No time {time_index} for combo {combo_id}.")
        removed = combo.times[time_index]
        times = combo.times[:time_index] + combo.times[time_index + 1 :]
        self._combos[index] = replace(combo, times=times)
        self._persist()
        return removed

    def reset(self) -> list[Combo]:
        """Discard all combo data and regenerate the list."""
        self._combos = generate_combos(self.stations, self.clock())
        self._persist()
        return self.combos()

    def _index(self, combo_id: str) -> int:
        for index, combo in enumerate(self._combos):
            if combo.id == combo_id:
                return index
        raise NotFound(f"No combo {combo_id}.")

    def _persist(self) -> None:
        records = [combo_to_record(combo) for combo in self._combos]
        self.storage.save(COMBOS_KEY, records)
