"""Tests for aggregations."""

from datetime import UTC, date, datetime

import pytest

from daily_journal.domain.combos import Combo
from daily_journal.domain.entries import Entry, EntryTotals
from daily_journal.domain.errors import ValidationError
from daily_journal.domain.goals import Goals
from daily_journal.services import stats

TODAY = date(2024, 10, 18)
STAMP = datetime(2024, 10, 18, 9, 0, tzinfo=UTC)


def _entry(calories: float, protein: float, workout: bool = False) -> Entry:
    return Entry(
        recorded_at=STAMP, calories=calories, protein=protein, workout=workout
    )


def _combo(
    combo_id: str, completed: bool = False, times: list[float] | None = None
) -> Combo:
    first, second = combo_id.split("-")
    return Combo(
        id=combo_id,
        station1=first,
        station2=second,
        completed=completed,
        times=tuple(times or ()),
        created_at=STAMP,
    )


def test_summarize_series() -> None:
    summary = stats.summarize([10.0, 8.0, 9.0])

    assert summary.total == 27
    assert summary.average == 9
    assert summary.minimum == 8
    assert summary.maximum == 10
    assert summary.count == 3


def test_summarize_empty_series() -> None:
    assert stats.summarize([]).count == 0


def test_daily_totals() -> None:
    totals = stats.daily_totals("2024-10-18", [_entry(500, 40), _entry(300, 20, True)])

    assert totals.calories.total == 800
    assert totals.calories.average == 400
    assert totals.calories.minimum == 300
    assert totals.calories.maximum == 500
    assert totals.protein.total == 60
    assert totals.protein.average == 30
    assert totals.protein.minimum == 20
    assert totals.protein.maximum == 40
    assert totals.count == 2
    assert totals.workout is True


def test_streak_stops_at_first_gap() -> None:
    archive = {
        "2024-10-17": [_entry(500, 40)],
        "2024-10-16": [_entry(400, 30)],
        "2024-10-14": [_entry(300, 20)],
    }

    assert stats.streak(archive, [_entry(100, 5)], TODAY) == 3


def test_streak_counts_archived_today() -> None:
    archive = {
        "2024-10-18": [_entry(500, 40)],
        "2024-10-17": [_entry(500, 40)],
        "2024-10-16": [_entry(500, 40)],
        "2024-10-15": [],
    }

    assert stats.streak(archive, [], TODAY) == 3


def test_streak_is_zero_when_today_is_empty() -> None:
    archive = {"2024-10-17": [_entry(500, 40)]}

    assert stats.streak(archive, [], TODAY) == 0


def test_combo_stats_reports_improvement_from_first_to_last() -> None:
    result = stats.combo_stats([10.0, 8.0, 9.0])

    assert result is not None
    assert result.fastest == 8.0
    assert result.slowest == 10.0
    assert result.average == 9.0
    assert result.improvement == pytest.approx(10.0)
    assert result.count == 3


def test_combo_stats_single_time_has_no_improvement() -> None:
    result = stats.combo_stats([12.5])

    assert result is not None
    assert result.improvement is None
    assert stats.combo_stats([]) is None


def test_combo_stats_zero_first_time_has_no_improvement() -> None:
    result = stats.combo_stats([0.0, 5.0])

    assert result is not None
    assert result.improvement is None
    assert result.fastest == 0.0


def test_completion_percent() -> None:
    combos = [
        _combo("A-B", completed=True),
        _combo("A-C"),
        _combo("B-A"),
    ]

    assert stats.completion_percent([]) == 0
    assert stats.completion_percent(combos) == 33
    assert stats.completion_percent(combos[:2]) == 50


def test_filter_days() -> None:
    archive = {
        "2024-10-18": [_entry(500, 40)],
        "2024-10-11": [_entry(500, 40, True)],
        "2024-10-10": [_entry(500, 40)],
        "2024-09-30": [_entry(500, 40, True)],
    }

    assert stats.filter_days(archive, "all", TODAY) == [
        "2024-10-18",
        "2024-10-11",
        "2024-10-10",
        "2024-09-30",
    ]
    assert stats.filter_days(archive, "week", TODAY) == ["2024-10-18", "2024-10-11"]
    assert stats.filter_days(archive, "month", TODAY) == [
        "2024-10-18",
        "2024-10-11",
        "2024-10-10",
    ]
    assert stats.filter_days(archive, "workout", TODAY) == [
        "2024-10-11",
        "2024-09-30",
    ]


def test_filter_days_rejects_unknown_name() -> None:
    with pytest.raises(ValidationError):
        stats.filter_days({}, "yesterday", TODAY)


def test_filter_combos() -> None:
    combos = [_combo("A-B", completed=True), _combo("B-A")]

    assert [c.id for c in stats.filter_combos(combos, "completed")] == ["A-B"]
    assert [c.id for c in stats.filter_combos(combos, "pending")] == ["B-A"]
    assert len(stats.filter_combos(combos, "all")) == 2
    with pytest.raises(ValidationError):
        stats.filter_combos(combos, "done")


def test_log_stats_rounds_averages() -> None:
    archive = {
        "2024-10-17": [_entry(500, 40, True), _entry(301, 20)],
        "2024-10-16": [_entry(400, 31)],
    }

    result = stats.log_stats(archive)

    assert result.total_days == 2
    assert result.workout_days == 1
    assert result.avg_calories == 601
    assert result.avg_protein == 46


def test_log_stats_empty_archive() -> None:
    result = stats.log_stats({})

    assert result.total_days == 0
    assert result.avg_calories == 0


def test_combo_overview() -> None:
    combos = [
        _combo("A-B", completed=True, times=[10.0, 8.0, 9.0]),
        _combo("B-A", times=[6.0]),
        _combo("A-C"),
    ]

    overview = stats.combo_overview(combos)

    assert overview.total == 3
    assert overview.completed == 1
    assert overview.completion_percent == 33
    assert overview.total_time == 15.0
    assert overview.total_attempts == 4
    assert overview.total_training_time == 33.0


@pytest.mark.parametrize(
    ("total", "status"),
    [(1000, "under"), (1600, "warning"), (2000, "exceeded"), (2500, "exceeded")],
)
def test_goal_progress_status(total: float, status: str) -> None:
    progress = stats.goal_progress(
        EntryTotals(calories=total, protein=0), Goals(2000, 150, 300)
    )

    assert progress.calories.status == status
    assert progress.calories.percent <= 100
    assert progress.calories.remaining == 2000 - total
    assert progress.net_calories == total - 300


def test_round_half_up() -> None:
    assert stats.round_half_up(2.5) == 3
    assert stats.round_half_up(3.5) == 4
    assert stats.round_half_up(2.49) == 2
