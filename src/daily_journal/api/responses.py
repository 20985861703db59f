"""Helpers turning engine results into HTTP responses."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, Response, status

from daily_journal.domain.combos import Combo
from daily_journal.domain.commands import CommandResult, CommandStatus, ExportDocument
from daily_journal.domain.entries import Entry
from daily_journal.services.journal import ComboView
from daily_journal.services.stats import combo_stats

if TYPE_CHECKING:
    from daily_journal.containers import AppContainer
    from daily_journal.domain.goals import Goals, Preset
    from daily_journal.services.journal import JournalEngine, TodayView

_ERROR_CODES = {
    CommandStatus.INVALID: status.HTTP_400_BAD_REQUEST,
    CommandStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CommandStatus.STORAGE_ERROR: status.HTTP_507_INSUFFICIENT_STORAGE,
}


def get_engine(request: Request) -> JournalEngine:
    """Return the engine held by the application container."""
    container: AppContainer = request.app.state.container
    return container.engine


def command_response(result: CommandResult, **data: object) -> dict[str, object]:
    """Return the JSON body of a successful command or raise its HTTP error."""
    if not result.ok:
        raise HTTPException(
            status_code=_ERROR_CODES[result.status],
            detail=result.message or "Not found",
        )
    return {"status": "ok", "message": result.message, **data}


def export_response(result: CommandResult) -> Response:
    """Return an export document as a JSON attachment."""
    command_response(result)
    document = result.data
    if not isinstance(document, ExportDocument):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


def serialize_entry(entry: Entry) -> dict[str, object]:
    """Serialize an entry."""
    return {
        "recorded_at": entry.recorded_at.isoformat(),
        "calories": entry.calories,
        "protein": entry.protein,
        "workout": entry.workout,
    }


def serialize_goals(goals: Goals) -> dict[str, object]:
    """Serialize goals."""
    return asdict(goals)


def serialize_preset(preset: Preset) -> dict[str, object]:
    """Serialize a preset."""
    return asdict(preset)


def serialize_today(view: TodayView) -> dict[str, object]:
    """Serialize the live day view."""
    return {
        "day": view.day,
        "entries": [serialize_entry(entry) for entry in view.entries],
        "totals": asdict(view.totals),
        "workout_done": view.workout_done,
        "goals": serialize_goals(view.goals),
        "progress": asdict(view.progress),
        "undo_available": view.undo_available,
    }


def serialize_combo(view: ComboView) -> dict[str, object]:
    """Serialize a combo with its statistics."""
    combo = view.combo
    return {
        "id": combo.id,
        "station1": combo.station1,
        "station2": combo.station2,
        "completed": combo.completed,
        "times": list(combo.times),
        "stats": asdict(view.stats) if view.stats else None,
    }


def entry_data(data: object) -> dict[str, object] | None:
    """Serialize command data when it is an entry."""
    return serialize_entry(data) if isinstance(data, Entry) else None


def combo_data(data: object) -> dict[str, object] | None:
    """Serialize command data, with statistics, when it is a combo."""
    if not isinstance(data, Combo):
        return None
    return serialize_combo(ComboView(data, combo_stats(data.times)))
