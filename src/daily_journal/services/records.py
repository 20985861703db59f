"""Conversion between domain models and stored JSON records."""

from datetime import UTC, datetime

from daily_journal.domain.combos import Combo
from daily_journal.domain.entries import Entry
from daily_journal.domain.goals import Preset

_EPOCH = datetime.fromtimestamp(0, tz=UTC)


def entry_to_record(entry: Entry) -> dict[str, object]:
    """Serialize an entry in the stored log format."""
    return {
        "cal": _number(entry.calories),
        "protein": _number(entry.protein),
        "time": _to_millis(entry.recorded_at),
        "workout": entry.workout,
    }


def entry_from_record(row: dict[str, object]) -> Entry:
    """Parse a stored entry row."""
    return Entry(
        recorded_at=_from_millis(row.get("time")),
        calories=_to_float(row.get("cal")),
        protein=_to_float(row.get("protein")),
        workout=bool(row.get("workout", False)),
    )


def entries_from_records(rows: object) -> list[Entry]:
    """Parse a stored list of entries, skipping malformed rows."""
    if not isinstance(rows, list):
        return []
    return [entry_from_record(row) for row in rows if isinstance(row, dict)]


def archive_to_record(archive: dict[str, list[Entry]]) -> dict[str, object]:
    """Serialize the archive map."""
    return {
        day: [entry_to_record(entry) for entry in entries]
        for day, entries in archive.items()
    }


def archive_from_record(raw: object) -> dict[str, list[Entry]]:
    """Parse the archive map, dropping days that are not entry lists."""
    if not isinstance(raw, dict):
        return {}
    archive: dict[str, list[Entry]] = {}
    for day, rows in raw.items():
        if isinstance(rows, list):
            archive[str(day)] = entries_from_records(rows)
    return archive


def combo_to_record(combo: Combo) -> dict[str, object]:
    """Serialize a combo."""
    return {
        "id": combo.id,
        "station1": combo.station1,
        "station2": combo.station2,
        "completed": combo.completed,
        "times": [_number(value) for value in combo.times],
        "createdAt": _to_millis(combo.created_at),
    }


def combo_from_record(row: dict[str, object], now: datetime) -> Combo:
    """Parse a stored combo, filling in fields missing from older data."""
    station1 = str(row.get("station1", ""))
    station2 = str(row.get("station2", ""))
    times = row.get("times")
    created_raw = row.get("createdAt")
    return Combo(
        id=str(row.get("id") or f"{station1}-{station2}"),
        station1=station1,
        station2=station2,
        completed=bool(row.get("completed", False)),
        times=tuple(_to_float(value) for value in times)
        if isinstance(times, list)
        else (),
        created_at=_from_millis(created_raw) if created_raw else now,
    )


def preset_to_record(preset: Preset) -> dict[str, object]:
    """Serialize a preset."""
    return {
        "name": preset.name,
        "cal": _number(preset.calories),
        "protein": _number(preset.protein),
    }


def preset_from_record(row: dict[str, object]) -> Preset:
    """Parse a stored preset."""
    return Preset(
        name=str(row.get("name", "")),
        calories=_to_float(row.get("cal")),
        protein=_to_float(row.get("protein")),
    )


def _to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def _from_millis(value: object) -> datetime:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    return _EPOCH


def _to_float(value: object) -> float:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _number(value: float) -> int | float:
    if float(value).is_integer():
        return int(value)
    return value
