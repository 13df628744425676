"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    llm_timeout_seconds: float = 20.0
    fdc_api_key: str
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_timeout_seconds: float = 8.0
    fuzzy_threshold: float = 0.5
    max_fallback_queries: int = 2
    external_limit_max: int = 50
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def clamp_external_limit(raw: int | None, maximum: int, default: int = 10) -> int:
    """Clamp a requested external result count into [1, maximum]."""
    if raw is None:
        return min(default, maximum)
    return max(1, min(int(raw), maximum))
