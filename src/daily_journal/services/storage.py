"""Key-value persistence for journal state."""

import json
import logging
from dataclasses import dataclass, field
from typing import Protocol

from daily_journal.domain.errors import StorageError

ENTRIES_KEY = "entries"
ARCHIVE_KEY = "archive"
WORKOUT_KEY = "workoutDone"
LAST_CHECK_KEY = "lastCheckDate"
PRESETS_KEY = "customPresets"
CALORIE_GOAL_KEY = "DAILY_CAL_GOAL"
PROTEIN_GOAL_KEY = "DAILY_PROTEIN_GOAL"
BURN_KEY = "DAILY_BURN"
THEME_KEY = "hyrox_theme"
COMBOS_KEY = "hyrox_combos"

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistence interface for string values keyed by name."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value, raising StorageError when the write fails."""


@dataclass
class JournalStorage:
    """JSON codec over a key-value store.

    Writes that fail stay pending and are retried, oldest first, on every
    later write, so the in-memory state is eventually persisted once the
    store recovers.
    """

    store: KeyValueStore
    _pending: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def load(self, key: str, default: object) -> object:
        """Return the decoded value for a key, or the default."""
        raw = self._pending.get(key)
        if raw is None:
            raw = self.store.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable value for key %s", key)
            return default

    def save(self, key: str, value: object) -> None:
        """Encode and persist a single value."""
        self.save_many({key: value})

    def save_many(self, values: dict[str, object]) -> None:
        """Encode and persist several values, retrying earlier failures first."""
        for key, value in values.items():
            self._pending.pop(key, None)
            self._pending[key] = json.dumps(value)
        self.flush()

    def flush(self) -> None:
        """Write every pending value to the store."""
        for key, raw in list(self._pending.items()):
            try:
                self.store.set(key, raw)
            except StorageError:
                logger.exception("Failed to persist %s", key)
                raise
            del self._pending[key]

    @property
    def pending_keys(self) -> list[str]:
        """Keys whose latest value has not been persisted yet."""
        return list(self._pending)
