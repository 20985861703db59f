"""Domain models for goals and presets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Goals:
    """Daily targets and the estimated daily burn."""

    calories: float
    protein: float
    burn: float


@dataclass(frozen=True)
class Preset:
    """Named quick-add entry."""

    name: str
    calories: float
    protein: float
