"""Archive log endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query, Request, Response, status

from daily_journal.api.models import FilterUpdate
from daily_journal.api.responses import (
    command_response,
    entry_data,
    export_response,
    get_engine,
    serialize_entry,
)
from daily_journal.domain.errors import ValidationError

router = APIRouter(tags=["log"])


@router.get("/log")
async def list_days(
    request: Request, filter_name: str | None = Query(default=None, alias="filter")
) -> dict[str, object]:
    """Return archived days matching a filter, newest first."""
    engine = get_engine(request)
    try:
        days = engine.log_days(filter_name)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    archive = engine.archive_service.days()
    payload = []
    for totals in days:
        entries = [serialize_entry(entry) for entry in archive[totals.day]]
        payload.append({**asdict(totals), "entries": entries})
    return {"filter": filter_name or engine.log_filter, "days": payload}


@router.put("/log/filter")
async def set_log_filter(body: FilterUpdate, request: Request) -> dict[str, object]:
    """Select the default log filter."""
    result = get_engine(request).set_filter(body.name, view="log")
    return command_response(result, filter=result.data)


@router.get("/log/stats")
async def log_stats(request: Request) -> dict[str, object]:
    """Return all-time archive statistics and the current streak."""
    engine = get_engine(request)
    return {**asdict(engine.log_stats()), "streak": engine.streak()}


@router.delete("/log/{day}/{index}")
async def delete_archived_entry(
    day: str, index: int, request: Request
) -> dict[str, object]:
    """Delete one entry from a past day."""
    result = get_engine(request).delete_archived_entry(day, index)
    return command_response(result, entry=entry_data(result.data))


@router.get("/export/log")
async def export_log(request: Request) -> Response:
    """Download the archive, goals and stats."""
    return export_response(get_engine(request).export_log())
