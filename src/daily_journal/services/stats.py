"""Aggregations over entries, archived days and combos."""

import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta

from daily_journal.domain.combos import Combo, ComboOverview, ComboStats
from daily_journal.domain.entries import Entry, EntryTotals
from daily_journal.domain.errors import ValidationError
from daily_journal.domain.goals import Goals
from daily_journal.domain.stats import (
    DailyTotals,
    DayProgress,
    LogStats,
    MetricProgress,
    MetricSummary,
)
from daily_journal.services.days import parse_day_key

DAY_FILTERS = ("all", "week", "month", "workout")
COMBO_FILTERS = ("all", "pending", "completed")
WARNING_RATIO = 0.8
WEEK_DAYS = 7


def summarize(values: Iterable[float]) -> MetricSummary:
    """Return total, mean, min and max of a series."""
    items = list(values)
    if not items:
        return MetricSummary(total=0, average=0, minimum=0, maximum=0, count=0)
    total = sum(items)
    return MetricSummary(
        total=total,
        average=total / len(items),
        minimum=min(items),
        maximum=max(items),
        count=len(items),
    )


def daily_totals(day: str, entries: Sequence[Entry]) -> DailyTotals:
    """Return sum, mean, min and max per metric for a single day's entries."""
    return DailyTotals(
        day=day,
        calories=summarize(entry.calories for entry in entries),
        protein=summarize(entry.protein for entry in entries),
        count=len(entries),
        workout=any(entry.workout for entry in entries),
    )


def log_stats(archive: Mapping[str, Sequence[Entry]]) -> LogStats:
    """Return day counts and rounded per-day averages over the archive."""
    days = [daily_totals(day, entries) for day, entries in archive.items()]
    total_days = len(days)
    if not total_days:
        return LogStats(total_days=0, workout_days=0, avg_calories=0, avg_protein=0)
    return LogStats(
        total_days=total_days,
        workout_days=sum(1 for day in days if day.workout),
        avg_calories=round_half_up(
            sum(day.calories.total for day in days) / total_days
        ),
        avg_protein=round_half_up(
            sum(day.protein.total for day in days) / total_days
        ),
    )


def streak(
    archive: Mapping[str, Sequence[Entry]], live: Sequence[Entry], today: date
) -> int:
    """Count consecutive days with entries, walking back from today.

    Today counts when it has live entries or an archived bucket; a day
    without entries ends the streak, including today.
    """
    active = {day for day, entries in archive.items() if entries}
    if live:
        active.add(today.isoformat())
    count = 0
    current = today
    while current.isoformat() in active:
        count += 1
        current -= timedelta(days=1)
    return count


def filter_days(
    archive: Mapping[str, Sequence[Entry]], name: str, today: date
) -> list[str]:
    """Return archived day keys matching a named filter, newest first."""
    if name not in DAY_FILTERS:
        raise ValidationError(f"Unknown filter: {name}")
    keys = sorted(archive, reverse=True)
    if name == "all":
        return keys
    if name == "workout":
        return [key for key in keys if any(entry.workout for entry in archive[key])]
    matched = []
    for key in keys:
        day = parse_day_key(key)
        if day is None:
            continue
        if name == "week" and today - timedelta(days=WEEK_DAYS) <= day <= today:
            matched.append(key)
        elif name == "month" and (day.year, day.month) == (today.year, today.month):
            matched.append(key)
    return matched


def combo_stats(times: Sequence[float]) -> ComboStats | None:
    """Return fastest, slowest, mean and improvement of recorded times.

    Improvement compares the first recorded time with the most recent one,
    not with the best. It needs at least two times and a positive first time.
    """
    if not times:
        return None
    improvement = None
    if len(times) >= 2 and times[0] > 0:  # noqa: PLR2004
        first, last = times[0], times[-1]
        improvement = (first - last) / first * 100
    summary = summarize(times)
    return ComboStats(
        fastest=summary.minimum,
        slowest=summary.maximum,
        average=summary.average,
        improvement=improvement,
        count=summary.count,
    )


def completion_percent(combos: Sequence[Combo]) -> int:
    """Return the rounded share of completed combos, 0 when there are none."""
    if not combos:
        return 0
    completed = sum(1 for combo in combos if combo.completed)
    return round_half_up(completed / len(combos) * 100)


def filter_combos(combos: Sequence[Combo], name: str) -> list[Combo]:
    """Return combos matching a named filter."""
    if name not in COMBO_FILTERS:
        raise ValidationError(f"Unknown filter: {name}")
    if name == "pending":
        return [combo for combo in combos if not combo.completed]
    if name == "completed":
        return [combo for combo in combos if combo.completed]
    return list(combos)


def combo_overview(combos: Sequence[Combo]) -> ComboOverview:
    """Return totals across all combos."""
    total_time = 0.0
    for combo in combos:
        stats = combo_stats(combo.times)
        if stats:
            total_time += stats.average
    return ComboOverview(
        total=len(combos),
        completed=sum(1 for combo in combos if combo.completed),
        completion_percent=completion_percent(combos),
        total_time=total_time,
        total_attempts=sum(len(combo.times) for combo in combos),
        total_training_time=sum(sum(combo.times) for combo in combos),
    )


def goal_progress(totals: EntryTotals, goals: Goals) -> DayProgress:
    """Compare today's totals with the goals."""
    return DayProgress(
        calories=_metric_progress(totals.calories, goals.calories),
        protein=_metric_progress(totals.protein, goals.protein),
        daily_burn=goals.burn,
        net_calories=totals.calories - goals.burn,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def _metric_progress(total: float, goal: float) -> MetricProgress:
    if total >= goal:
        status = "exceeded"
    elif total >= goal * WARNING_RATIO:
        status = "warning"
    else:
        status = "under"
    percent = min(total / goal * 100, 100) if goal > 0 else 0
    return MetricProgress(
        total=total,
        goal=goal,
        remaining=goal - total,
        percent=percent,
        status=status,
    )
