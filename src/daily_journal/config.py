"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = "file"
    storage_dir: str = ".journal"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "journal_kv"
    timezone: str = "UTC"
    undo_window_seconds: float = 5.0
    day_close_strategy: str = "last_checked"
    stations: str = "Sled,SkiErg,Row,Burpee,WallBall"
    default_calorie_goal: float = 2000
    default_protein_goal: float = 150
    default_daily_burn: float = 0
    max_entry_calories: float = 20000
    max_entry_protein: float = 2000
    max_combo_minutes: float = 999
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_stations(raw: str) -> tuple[str, ...]:
    """Parse a comma-separated station list, dropping blanks and repeats."""
    stations: list[str] = []
    for chunk in raw.split(","):
        name = chunk.strip()
        if name and name not in stations:
            stations.append(name)
    return tuple(stations)
