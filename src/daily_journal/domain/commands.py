"""Results returned by engine commands."""

from dataclasses import dataclass
from enum import Enum


class CommandStatus(Enum):
    """Outcome of a command."""

    OK = "ok"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    STORAGE_ERROR = "storage_error"


@dataclass(frozen=True)
class CommandResult:
    """Status, user-facing message and optional payload of a command."""

    status: CommandStatus
    message: str | None = None
    data: object | None = None

    @property
    def ok(self) -> bool:
        """Return True when the command succeeded."""
        return self.status is CommandStatus.OK


@dataclass(frozen=True)
class ExportDocument:
    """Downloadable export snapshot."""

    filename: str
    content: str
    media_type: str = "application/json"
