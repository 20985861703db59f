"""Tests for JSON exports."""

import json
from datetime import UTC, datetime

from daily_journal.domain.combos import ComboOverview
from daily_journal.domain.entries import Entry
from daily_journal.domain.goals import Goals
from daily_journal.domain.stats import LogStats
from daily_journal.services.combos import generate_combos
from daily_journal.services.export import export_combos, export_log

EXPORTED_AT = datetime(2024, 10, 18, 9, 30, tzinfo=UTC)


def test_export_log_document() -> None:
    archive = {
        "2024-10-17": [
            Entry(recorded_at=EXPORTED_AT, calories=500, protein=40, workout=True)
        ]
    }

    document = export_log(
        archive,
        Goals(calories=2000, protein=150, burn=300),
        LogStats(total_days=1, workout_days=1, avg_calories=500, avg_protein=40),
        exported_at=EXPORTED_AT,
        day="2024-10-18",
    )

    assert document.filename == "macro-tracker-log-2024-10-18.json"
    assert document.media_type == "application/json"
    payload = json.loads(document.content)
    assert payload["archive"]["2024-10-17"][0]["cal"] == 500
    assert payload["goals"] == {
        "DAILY_CAL_GOAL": 2000,
        "DAILY_PROTEIN_GOAL": 150,
        "DAILY_BURN": 300,
    }
    assert payload["stats"] == {
        "totalDays": 1,
        "workoutDays": 1,
        "avgCal": 500,
        "avgPro": 40,
    }
    assert payload["exportDate"] == "2024-10-18T09:30:00Z"


def test_export_combos_document() -> None:
    combos = generate_combos(["A", "B"], EXPORTED_AT)
    overview = ComboOverview(
        total=2,
        completed=0,
        completion_percent=0,
        total_time=0,
        total_attempts=0,
        total_training_time=0,
    )

    document = export_combos(
        combos, overview, exported_at=EXPORTED_AT, day="2024-10-18"
    )

    assert document.filename == "hyrox-relay-data-2024-10-18.json"
    payload = json.loads(document.content)
    assert payload["version"] == "1.0"
    assert [combo["id"] for combo in payload["combos"]] == ["A-B", "B-A"]
    assert payload["combos"][0]["createdAt"] == int(EXPORTED_AT.timestamp() * 1000)
    assert payload["stats"]["totalCombos"] == 2
    assert document.content.startswith("{\n  ")
