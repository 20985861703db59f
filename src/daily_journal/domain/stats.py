"""Domain models for statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricSummary:
    """Summary of a series of numeric values."""

    total: float
    average: float
    minimum: float
    maximum: float
    count: int


@dataclass(frozen=True)
class DailyTotals:
    """Per-metric summaries for one calendar day."""

    day: str
    calories: MetricSummary
    protein: MetricSummary
    count: int
    workout: bool


@dataclass(frozen=True)
class LogStats:
    """All-time statistics over the archive."""

    total_days: int
    workout_days: int
    avg_calories: int
    avg_protein: int


@dataclass(frozen=True)
class MetricProgress:
    """Progress of one metric against its daily goal."""

    total: float
    goal: float
    remaining: float
    percent: float
    status: str


@dataclass(frozen=True)
class DayProgress:
    """Progress of today's totals against the goals."""

    calories: MetricProgress
    protein: MetricProgress
    daily_burn: float
    net_calories: float
