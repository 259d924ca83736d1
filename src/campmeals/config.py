"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/campmeals.db"),
        description="SQLite database holding persisted meal-time settings.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for authenticated endpoints.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )
    default_breakfast_time: str = Field(
        default="09:00",
        description="Breakfast cutoff used until a value is saved in the settings store.",
    )
    default_lunch_time: str = Field(
        default="13:00",
        description="Lunch cutoff used until a value is saved in the settings store.",
    )
    default_dinner_time: str = Field(
        default="18:00",
        description="Dinner cutoff used until a value is saved in the settings store.",
    )

    model_config = ConfigDict(frozen=True)


def _as_flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Environment variable -> (settings field, converter).
ENV_OVERRIDES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "CAMPMEALS_DATABASE_PATH": ("database_path", Path),
    "CAMPMEALS_API_TOKEN": ("api_token", str),
    "CAMPMEALS_LOG_LEVEL": ("log_level", str),
    "CAMPMEALS_LOG_FORMAT": ("log_format", str),
    "CAMPMEALS_LOG_REQUESTS": ("log_requests", _as_flag),
    "CAMPMEALS_DEFAULT_BREAKFAST": ("default_breakfast_time", str),
    "CAMPMEALS_DEFAULT_LUNCH": ("default_lunch_time", str),
    "CAMPMEALS_DEFAULT_DINNER": ("default_dinner_time", str),
}


def _read_env_file(path: Path) -> dict[str, str]:
    """Parse ``KEY=value`` lines, skipping blanks and comments."""

    if not path.is_file():
        return {}
    entries: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, value = line.split("=", 1)
            entries[key.strip()] = value.strip()
    return entries


def _collect_overrides() -> dict[str, Any]:
    """Settings overrides from the process environment, then ``.env`` files."""

    file_values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        file_values.update(_read_env_file(candidate))

    overrides: dict[str, Any] = {}
    for env_name, (field_name, convert) in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name) or file_values.get(env_name)
        if raw:
            overrides[field_name] = convert(raw)
    return overrides


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_collect_overrides())
