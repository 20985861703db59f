"""Workout combo endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query, Request, Response, status

from daily_journal.api.models import ComboTime, FilterUpdate
from daily_journal.api.responses import (
    combo_data,
    command_response,
    export_response,
    get_engine,
    serialize_combo,
)
from daily_journal.domain.errors import ValidationError

router = APIRouter(tags=["combos"])


@router.get("/combos")
async def list_combos(
    request: Request, filter_name: str | None = Query(default=None, alias="filter")
) -> dict[str, object]:
    """Return combos matching a filter along with overall totals."""
    engine = get_engine(request)
    try:
        views = engine.combos(filter_name)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {
        "filter": filter_name or engine.combo_filter,
        "combos": [serialize_combo(view) for view in views],
        "overview": asdict(engine.combo_overview()),
    }


@router.put("/combos/filter")
async def set_combo_filter(body: FilterUpdate, request: Request) -> dict[str, object]:
    """Select the default combo filter."""
    result = get_engine(request).set_filter(body.name, view="combos")
    return command_response(result, filter=result.data)


@router.post("/combos/{combo_id}/toggle")
async def toggle_combo(combo_id: str, request: Request) -> dict[str, object]:
    """Flip a combo's completed flag."""
    result = get_engine(request).toggle_combo(combo_id)
    return command_response(result, combo=combo_data(result.data))


@router.post("/combos/{combo_id}/times")
async def add_time(
    combo_id: str, body: ComboTime, request: Request
) -> dict[str, object]:
    """Record an attempt time in minutes."""
    result = get_engine(request).add_combo_time(combo_id, body.minutes)
    return command_response(result, combo=combo_data(result.data))


@router.delete("/combos/{combo_id}/times/{index}")
async def remove_time(
    combo_id: str, index: int, request: Request
) -> dict[str, object]:
    """Delete a recorded attempt time."""
    result = get_engine(request).remove_combo_time(combo_id, index)
    return command_response(result, removed=result.data)


@router.get("/export/combos")
async def export_combos(request: Request) -> Response:
    """Download combos and their totals."""
    return export_response(get_engine(request).export_combos())
