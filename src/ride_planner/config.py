"""Configuration settings for the Ride Planner."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/ride_planner/config.py
# .parent.parent.parent = project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = ""

    # Model selection
    llm_model_fast: str = "gpt-4o-mini"  # Per-workout coaching notes
    llm_model_smart: str = "gpt-4o"  # Full plan generation
    llm_max_retries: int = 2

    # Time bounds for advisor calls (seconds)
    ai_plan_timeout_seconds: float = 30.0
    ai_coaching_timeout_seconds: float = 15.0

    # Plan constants
    base_weekly_load: int = 200
    km_per_hour: float = 25.0

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
