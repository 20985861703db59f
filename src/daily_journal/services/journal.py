"""Journal engine: the callbacks and queries used by the presentation layer."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TypeVar

from daily_journal.domain.combos import Combo, ComboOverview, ComboStats
from daily_journal.domain.commands import CommandResult, CommandStatus
from daily_journal.domain.entries import Entry, EntryTotals
from daily_journal.domain.errors import NotFound, StorageError, ValidationError
from daily_journal.domain.goals import Goals, Preset
from daily_journal.domain.stats import DailyTotals, DayProgress, LogStats
from daily_journal.services import export, stats
from daily_journal.services.archive import ArchiveService
from daily_journal.services.combos import ComboService
from daily_journal.services.days import Clock, utc_now
from daily_journal.services.entries import EntryService
from daily_journal.services.presets import PresetService
from daily_journal.services.rollover import RolloverResult, RolloverService
from daily_journal.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORAGE_FAILURE_MESSAGE = (
    "Failed to save data. Storage may be full or unavailable; "
    "changes are kept and will be saved on the next successful write."
)
FILTER_VIEWS = ("log", "combos")


@dataclass(frozen=True)
class TodayView:
    """Snapshot of the live day."""

    day: str
    entries: list[Entry]
    totals: EntryTotals
    workout_done: bool
    goals: Goals
    progress: DayProgress
    undo_available: bool


@dataclass(frozen=True)
class ComboView:
    """A combo with its statistics."""

    combo: Combo
    stats: ComboStats | None


@dataclass
class JournalEngine:
    """Single owner of all journal state for the process."""

    entry_service: EntryService
    archive_service: ArchiveService
    rollover_service: RolloverService
    combo_service: ComboService
    settings_service: UserSettingsService
    preset_service: PresetService
    clock: Clock = utc_now
    log_filter: str = "all"
    combo_filter: str = "all"

    def start(self) -> CommandResult:
        """Run the process-start day check and make sure combos exist."""

        def run() -> RolloverResult:
            result = self.rollover_service.check()
            self.combo_service.ensure_generated()
            return result

        def describe(result: RolloverResult) -> str | None:
            if result.archived_entries:
                return (
                    "Yesterday's data archived! "
                    f"Started fresh for {_short_date(result.today)}"
                )
            return None

        return self._run(run, describe)

    def today_key(self) -> str:
        """Return today's day key."""
        return self.rollover_service.today()

    def today(self) -> TodayView:
        """Return the live day with totals and goal progress."""
        totals = self.entry_service.totals()
        goals = self.settings_service.get_goals()
        return TodayView(
            day=self.today_key(),
            entries=self.entry_service.entries(),
            totals=totals,
            workout_done=self.entry_service.workout_done,
            goals=goals,
            progress=stats.goal_progress(totals, goals),
            undo_available=self.entry_service.pending_undo() is not None,
        )

    def log_days(self, filter_name: str | None = None) -> list[DailyTotals]:
        """Return archived days matching a filter, newest first."""
        archive = self.archive_service.days()
        keys = stats.filter_days(
            archive, filter_name or self.log_filter, self._today_date()
        )
        return [stats.daily_totals(key, archive[key]) for key in keys]

    def log_stats(self) -> LogStats:
        """Return all-time archive statistics."""
        return stats.log_stats(self.archive_service.days())

    def streak(self) -> int:
        """Return the current streak of days with entries."""
        return stats.streak(
            self.archive_service.days(),
            self.entry_service.entries(),
            self._today_date(),
        )

    def combos(self, filter_name: str | None = None) -> list[ComboView]:
        """Return combos matching a filter with their statistics."""
        selected = stats.filter_combos(
            self.combo_service.combos(), filter_name or self.combo_filter
        )
        return [ComboView(combo, stats.combo_stats(combo.times)) for combo in selected]

    def combo_overview(self) -> ComboOverview:
        """Return totals across all combos."""
        return stats.combo_overview(self.combo_service.combos())

    def presets(self) -> list[Preset]:
        """Return the quick-add presets."""
        return self.preset_service.list_presets()

    def add_entry(
        self, calories: object, protein: object, workout: bool | None = None
    ) -> CommandResult:
        """Add an entry to today's log."""
        return self._run(
            lambda: self.entry_service.add(calories, protein, workout),
            _added_message,
        )

    def delete_entry(self, index: int) -> CommandResult:
        """Delete an entry; it can be restored during the undo window."""
        seconds = self.entry_service.undo_window.total_seconds()
        return self._run(
            lambda: self.entry_service.delete(index),
            lambda _entry: f"Entry deleted. Undo within {seconds:g} seconds.",
        )

    def undo_delete(self) -> CommandResult:
        """Restore the last deleted entry."""
        return self._run(self.entry_service.undo, lambda _entry: "Entry restored.")

    def edit_entry(self, index: int) -> CommandResult:
        """Remove an entry and return its values for re-entry."""
        return self._run(
            lambda: self.entry_service.edit(index),
            lambda _entry: "Edit the values and add the entry again.",
        )

    def toggle_workout(self) -> CommandResult:
        """Flip today's workout flag."""
        return self._run(
            self.entry_service.toggle_workout,
            lambda done: f"Workout: {'done' if done else 'not done'}",
        )

    def delete_archived_entry(self, day: str, index: int) -> CommandResult:
        """Delete one entry from a past day."""
        return self._run(
            lambda: self.archive_service.delete_entry(day, index),
            lambda _entry: "Entry deleted!",
        )

    def set_goal(self, metric: str, value: object) -> CommandResult:
        """Update a goal or the daily burn."""
        return self._run(
            lambda: self.settings_service.set_goal(metric, value),
            lambda goals: (
                f"Goals updated! Calories: {goals.calories:g}, "
                f"Protein: {goals.protein:g}g, Burn: {goals.burn:g}"
            ),
        )

    def set_theme(self, theme: str) -> CommandResult:
        """Set the theme preference."""
        return self._run(
            lambda: self.settings_service.set_theme(theme),
            lambda value: f"{value.capitalize()} mode enabled",
        )

    def add_preset(self, name: str, calories: object, protein: object) -> CommandResult:
        """Create a quick-add preset."""
        return self._run(
            lambda: self.preset_service.add(name, calories, protein),
            lambda preset: f'Preset "{preset.name}" created!',
        )

    def delete_preset(self, index: int) -> CommandResult:
        """Delete a quick-add preset."""
        return self._run(
            lambda: self.preset_service.delete(index),
            lambda preset: f'Preset "{preset.name}" deleted.',
        )

    def quick_add(self, index: int) -> CommandResult:
        """Add an entry from a preset."""

        def run() -> Entry:
            preset = self.preset_service.get(index)
            return self.entry_service.add(preset.calories, preset.protein)

        return self._run(run, _added_message)

    def set_filter(self, name: str, view: str = "log") -> CommandResult:
        """Select the default filter for the log or combo view."""

        def run() -> str:
            if view not in FILTER_VIEWS:
                raise ValidationError(f"Unknown view: {view}")
            allowed = stats.DAY_FILTERS if view == "log" else stats.COMBO_FILTERS
            if name not in allowed:
                raise ValidationError(f"Unknown filter: {name}")
            if view == "log":
                self.log_filter = name
            else:
                self.combo_filter = name
            return name

        return self._run(run, lambda _name: None)

    def toggle_combo(self, combo_id: str) -> CommandResult:
        """Flip a combo's completed flag."""
        return self._run(
            lambda: self.combo_service.toggle_complete(combo_id),
            lambda combo: (
                "Combo marked as completed! 🎉"
                if combo.completed
                else "Combo marked as pending"
            ),
        )

    def add_combo_time(self, combo_id: str, minutes: object) -> CommandResult:
        """Record an attempt time for a combo."""
        return self._run(
            lambda: self.combo_service.add_time(combo_id, minutes),
            lambda combo: f"Time added: {combo.times[-1]:.1f} minutes",
        )

    def remove_combo_time(self, combo_id: str, index: int) -> CommandResult:
        """Delete a recorded attempt time."""
        return self._run(
            lambda: self.combo_service.remove_time(combo_id, index),
            lambda _value: "Time deleted",
        )

    def reset_all(self) -> CommandResult:
        """Erase entries, archive and combo progress; settings are kept."""

        def run() -> None:
            failure: StorageError | None = None
            for step in (
                self.entry_service.clear,
                self.archive_service.clear,
                self.combo_service.reset,
            ):
                try:
                    step()
                except StorageError as exc:
                    failure = failure or exc
            if failure is not None:
                raise failure

        return self._run(run, lambda _none: "All data has been reset")

    def export_log(self) -> CommandResult:
        """Export the archive, goals and stats as a JSON document."""
        return self._run(
            lambda: export.export_log(
                self.archive_service.days(),
                self.settings_service.get_goals(),
                self.log_stats(),
                exported_at=self.clock(),
                day=self.today_key(),
            ),
            lambda _doc: "Log data exported successfully!",
        )

    def export_combos(self) -> CommandResult:
        """Export combos and their totals as a JSON document."""
        return self._run(
            lambda: export.export_combos(
                self.combo_service.combos(),
                self.combo_overview(),
                exported_at=self.clock(),
                day=self.today_key(),
            ),
            lambda _doc: "Data exported successfully! 📥",
        )

    def _today_date(self) -> date:
        return date.fromisoformat(self.today_key())

    @staticmethod
    def _run(
        action: Callable[[], T], describe: Callable[[T], str | None]
    ) -> CommandResult:
        try:
            data = action()
        except ValidationError as exc:
            return CommandResult(CommandStatus.INVALID, message=str(exc))
        except NotFound:
            return CommandResult(CommandStatus.NOT_FOUND)
        except StorageError:
            logger.warning("Command completed in memory but was not persisted")
            return CommandResult(
                CommandStatus.STORAGE_ERROR, message=STORAGE_FAILURE_MESSAGE
            )
        return CommandResult(CommandStatus.OK, message=describe(data), data=data)


def _added_message(entry: Entry) -> str:
    return f"Added {entry.calories:g} cal, {entry.protein:g}g protein"


def _short_date(day: str) -> str:
    parsed = datetime.strptime(day, "%Y-%m-%d")
    return f"{parsed:%b} {parsed.day}"
