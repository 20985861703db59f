"""One-way JSON export snapshots."""

import json
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime

from daily_journal.domain.combos import Combo, ComboOverview
from daily_journal.domain.commands import ExportDocument
from daily_journal.domain.entries import Entry
from daily_journal.domain.goals import Goals
from daily_journal.domain.stats import LogStats
from daily_journal.services.records import archive_to_record, combo_to_record

COMBO_EXPORT_VERSION = "1.0"


def export_log(
    archive: Mapping[str, Sequence[Entry]],
    goals: Goals,
    stats: LogStats,
    exported_at: datetime,
    day: str,
) -> ExportDocument:
    """Build the macro log export for the given day."""
    payload = {
        "archive": archive_to_record(
            {key: list(entries) for key, entries in archive.items()}
        ),
        "goals": {
            "DAILY_CAL_GOAL": goals.calories,
            "DAILY_PROTEIN_GOAL": goals.protein,
            "DAILY_BURN": goals.burn,
        },
        "stats": {
            "totalDays": stats.total_days,
            "workoutDays": stats.workout_days,
            "avgCal": stats.avg_calories,
            "avgPro": stats.avg_protein,
        },
        "exportDate": _iso(exported_at),
    }
    return ExportDocument(
        filename=f"macro-tracker-log-{day}.json",
        content=json.dumps(payload, indent=2),
    )


def export_combos(
    combos: Sequence[Combo],
    overview: ComboOverview,
    exported_at: datetime,
    day: str,
) -> ExportDocument:
    """Build the combo export for the given day."""
    payload = {
        "version": COMBO_EXPORT_VERSION,
        "exportDate": _iso(exported_at),
        "combos": [combo_to_record(combo) for combo in combos],
        "stats": {
            "totalCombos": overview.total,
            "completed": overview.completed,
            "totalAttempts": overview.total_attempts,
            "totalTrainingTime": overview.total_training_time,
        },
    }
    return ExportDocument(
        filename=f"hyrox-relay-data-{day}.json",
        content=json.dumps(payload, indent=2),
    )


def _iso(value: datetime) -> str:
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")
