"""In-memory key-value store."""

from dataclasses import dataclass, field

from daily_journal.services.storage import KeyValueStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Key-value store that lives for the process only."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        self.values[key] = value
