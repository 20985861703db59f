"""File-backed key-value store."""

import re
from dataclasses import dataclass
from pathlib import Path

from daily_journal.domain.errors import StorageError
from daily_journal.services.storage import KeyValueStore

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each key as a JSON text file inside a directory.

    Writes go to a temporary file that replaces the target, so a failed
    write leaves the previous value intact.
    """

    directory: Path

    def __post_init__(self) -> None:
        self.directory = Path(self.directory).expanduser()

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to read {key}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        """Atomically replace the value for a key."""
        path = self._path_for_key(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            raise StorageError(f"Failed to write {key}: {exc}") from exc

    def _path_for_key(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"
