"""Domain models for workout combos."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Combo:
    """Ordered pair of stations tracked with its attempt times."""

    id: str
    station1: str
    station2: str
    completed: bool
    times: tuple[float, ...]
    created_at: datetime


@dataclass(frozen=True)
class ComboStats:
    """Statistics over a combo's recorded times, in minutes."""

    fastest: float
    slowest: float
    average: float
    improvement: float | None
    count: int


@dataclass(frozen=True)
class ComboOverview:
    """Totals across every combo."""

    total: int
    completed: int
    completion_percent: int
    total_time: float
    total_attempts: int
    total_training_time: float
