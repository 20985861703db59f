"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from daily_journal.api.combos import router as combos_router
from daily_journal.api.log import router as log_router
from daily_journal.api.models import EntryCreate, GoalUpdate, PresetCreate, ThemeUpdate
from daily_journal.api.responses import (
    command_response,
    entry_data,
    get_engine,
    serialize_goals,
    serialize_preset,
    serialize_today,
)
from daily_journal.app_logging import configure_logging
from daily_journal.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        result = state_container.engine.start()
        if result.ok:
            if result.message:
                logger.info(result.message)
        else:
            logger.error("Journal startup check failed: %s", result.message)
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(log_router)
    app.include_router(combos_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/today")
    async def today(request: Request) -> dict[str, object]:
        """Return today's entries, totals and goal progress."""
        engine = get_engine(request)
        return {**serialize_today(engine.today()), "streak": engine.streak()}

    @app.post("/entries")
    async def add_entry(body: EntryCreate, request: Request) -> dict[str, object]:
        """Add an entry to today's log."""
        result = get_engine(request).add_entry(
            body.calories, body.protein, body.workout
        )
        return command_response(result, entry=entry_data(result.data))

    @app.post("/entries/undo")
    async def undo_delete(request: Request) -> dict[str, object]:
        """Restore the last deleted entry during the undo window."""
        result = get_engine(request).undo_delete()
        return command_response(result, entry=entry_data(result.data))

    @app.delete("/entries/{index}")
    async def delete_entry(index: int, request: Request) -> dict[str, object]:
        """Delete an entry by position."""
        result = get_engine(request).delete_entry(index)
        return command_response(result, entry=entry_data(result.data))

    @app.post("/entries/{index}/edit")
    async def edit_entry(index: int, request: Request) -> dict[str, object]:
        """Remove an entry and return its values for re-entry."""
        result = get_engine(request).edit_entry(index)
        return command_response(result, entry=entry_data(result.data))

    @app.post("/workout/toggle")
    async def toggle_workout(request: Request) -> dict[str, object]:
        """Flip today's workout flag."""
        result = get_engine(request).toggle_workout()
        return command_response(result, workout_done=result.data)

    @app.get("/goals")
    async def get_goals(request: Request) -> dict[str, object]:
        """Return the current goals."""
        return serialize_goals(get_engine(request).settings_service.get_goals())

    @app.put("/goals/{metric}")
    async def set_goal(
        metric: str, body: GoalUpdate, request: Request
    ) -> dict[str, object]:
        """Update a goal: calories, protein or burn."""
        result = get_engine(request).set_goal(metric, body.value)
        goals = serialize_goals(result.data) if result.ok else None
        return command_response(result, goals=goals)

    @app.get("/presets")
    async def list_presets(request: Request) -> dict[str, object]:
        """Return the quick-add presets."""
        presets = get_engine(request).presets()
        return {"presets": [serialize_preset(preset) for preset in presets]}

    @app.post("/presets")
    async def add_preset(body: PresetCreate, request: Request) -> dict[str, object]:
        """Create a quick-add preset."""
        result = get_engine(request).add_preset(body.name, body.calories, body.protein)
        preset = serialize_preset(result.data) if result.ok else None
        return command_response(result, preset=preset)

    @app.delete("/presets/{index}")
    async def delete_preset(index: int, request: Request) -> dict[str, object]:
        """Delete a quick-add preset."""
        return command_response(get_engine(request).delete_preset(index))

    @app.post("/presets/{index}/add")
    async def quick_add(index: int, request: Request) -> dict[str, object]:
        """Add today's entry from a preset."""
        result = get_engine(request).quick_add(index)
        return command_response(result, entry=entry_data(result.data))

    @app.get("/theme")
    async def get_theme(request: Request) -> dict[str, str]:
        """Return the theme preference."""
        return {"theme": get_engine(request).settings_service.get_theme()}

    @app.put("/theme")
    async def set_theme(body: ThemeUpdate, request: Request) -> dict[str, object]:
        """Set the theme preference."""
        result = get_engine(request).set_theme(body.theme)
        return command_response(result, theme=result.data)

    @app.post("/reset")
    async def reset_all(request: Request) -> dict[str, object]:
        """Erase entries, archive and combo progress."""
        return command_response(get_engine(request).reset_all())

    return app
