"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field


class EntryCreate(BaseModel):
    """New entry values."""

    calories: float = 0
    protein: float = 0
    workout: bool | None = None


class GoalUpdate(BaseModel):
    """New value for a goal."""

    value: float


class PresetCreate(BaseModel):
    """New quick-add preset."""

    name: str = Field(min_length=1)
    calories: float
    protein: float


class ThemeUpdate(BaseModel):
    """Theme preference."""

    theme: str


class FilterUpdate(BaseModel):
    """Default filter selection."""

    name: str


class ComboTime(BaseModel):
    """Attempt time in minutes."""

    minutes: float
