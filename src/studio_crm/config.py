"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str
    database_echo: bool = False
    auto_create_schema: bool = True
    api_token: str
    openai_api_key: str
    openai_model: str = "gpt-4o"
    studio_name: str = "New Age Fotografie"
    studio_email: str = "hallo@newagefotografie.com"
    studio_phone: str | None = None
    currency: str = "EUR"
    default_tax_rate: float = 20.0
    invoice_due_days: int = 30
    working_hours_start: int = 9
    working_hours_end: int = 18
    high_value_threshold: float = 500.0
    recent_client_days: int = 30
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_database_url(raw: str) -> str:
    """Map provider-style Postgres URLs onto the psycopg2 dialect."""
    cleaned = raw.strip()
    for prefix in ("postgres://", "postgresql://"):
        if cleaned.startswith(prefix):
            return "postgresql+psycopg2://" + cleaned[len(prefix) :]
    return cleaned
