"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    openai_api_key: str
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_max_output_tokens: int = 4000
    plan_days: int = 7
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_workout_days(raw: str | list[str] | None) -> list[str]:
    """Normalize weekday names from a comma-separated string or list."""
    if raw is None:
        return []
    chunks = raw.split(",") if isinstance(raw, str) else raw
    days: list[str] = []
    for chunk in chunks:
        value = chunk.strip().capitalize()
        if value in WEEKDAYS and value not in days:
            days.append(value)
    return days
