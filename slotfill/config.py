"""Configuration for the slot-filling engine."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from SLOTFILL_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SLOTFILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Service settings
    service_name: str = "slotfill"
    environment: Literal["development", "production", "test"] = "development"
    log_level: str = "info"
    log_format: Literal["json", "console"] = "console"

    # Brain
    brain_backend: Literal["memory", "redis"] = "memory"
    bot_id: str = "slotfill-bot"
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "slotfill"
    conversation_ttl_seconds: int = 86400  # 24 hours, 0 disables expiry

    # Dimension carrying yes/no answers from the extractor
    boolean_dimension: str = "system:boolean"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
