"""Goals, daily burn and theme preference."""

from dataclasses import dataclass, field, replace

from daily_journal.domain.errors import ValidationError
from daily_journal.domain.goals import Goals
from daily_journal.services.storage import (
    BURN_KEY,
    CALORIE_GOAL_KEY,
    PROTEIN_GOAL_KEY,
    THEME_KEY,
    JournalStorage,
)
from daily_journal.services.validation import parse_number

GOAL_METRICS = ("calories", "protein", "burn")
THEMES = ("light", "dark")


@dataclass
class UserSettingsService:
    """Service for goals and display preferences."""

    storage: JournalStorage
    defaults: Goals = field(default_factory=lambda: Goals(2000, 150, 0))
    _goals: Goals = field(init=False, repr=False)
    _theme: str = field(default="light", init=False, repr=False)

    def __post_init__(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Load goals and theme, falling back to defaults for bad values."""
        self._goals = Goals(
            calories=_stored_goal(
                self.storage.load(CALORIE_GOAL_KEY, None), self.defaults.calories
            ),
            protein=_stored_goal(
                self.storage.load(PROTEIN_GOAL_KEY, None), self.defaults.protein
            ),
            burn=_stored_goal(
                self.storage.load(BURN_KEY, None), self.defaults.burn, allow_zero=True
            ),
        )
        theme = self.storage.load(THEME_KEY, "light")
        self._theme = theme if theme in THEMES else "light"

    def get_goals(self) -> Goals:
        """Return the current goals."""
        return self._goals

    def set_goal(self, metric: str, value: object) -> Goals:
        """Update one goal; calories and protein must be positive."""
        if metric not in GOAL_METRICS:
            raise ValidationError(f"Unknown goal: {metric}")
        if metric == "burn":
            number = parse_number(value, "Please enter a valid positive number.")
            if number < 0:
                raise ValidationError("Please enter a valid positive number.")
            self._goals = replace(self._goals, burn=number)
            self.storage.save(BURN_KEY, number)
            return self._goals

        number = parse_number(value, "Please enter valid positive numbers for goals.")
        if number <= 0:
            raise ValidationError("Please enter valid positive numbers for goals.")
        if metric == "calories":
            self._goals = replace(self._goals, calories=number)
            self.storage.save(CALORIE_GOAL_KEY, number)
        else:
            self._goals = replace(self._goals, protein=number)
            self.storage.save(PROTEIN_GOAL_KEY, number)
        return self._goals

    def get_theme(self) -> str:
        """Return the theme preference."""
        return self._theme

    def set_theme(self, theme: str) -> str:
        """Persist the theme preference."""
        if theme not in THEMES:
            raise ValidationError(f"Unknown theme: {theme}")
        self._theme = theme
        self.storage.save(THEME_KEY, theme)
        return theme

    def toggle_theme(self) -> str:
        """Switch between light and dark."""
        return self.set_theme("light" if self._theme == "dark" else "dark")


def _stored_goal(raw: object, default: float, allow_zero: bool = False) -> float:
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        return default
    if raw < 0 or (raw == 0 and not allow_zero):
        return default
    return float(raw)
