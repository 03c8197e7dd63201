"""
Centralized configuration using Pydantic BaseSettings.
All environment variables are loaded here - no hardcoded values.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Private YouTube Feed"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Telemetry
    ENABLE_OTEL: bool = False  # Default to False to prevent gRPC errors in dev
    ENABLE_PROMETHEUS: bool = True

    # Circuit Breaker (channel video fetches)
    CIRCUIT_BREAKER_FAILURE_THRESHOLD: int = 5
    CIRCUIT_BREAKER_RECOVERY_TIMEOUT_SEC: int = 30

    # Subscription feed
    DEFAULT_FEED_LIMIT: int = 30
    MAX_FEED_LIMIT: int = 100
    FEED_SHUFFLE_SEED: Optional[int] = None  # Fixed seed makes the shuffle reproducible
    CHANNEL_CACHE_TTL_SEC: float = 300  # 0 disables the channel video cache

    # Storage (key-value JSON file; in-memory when unset)
    STORAGE_FILE: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - singleton pattern."""
    return Settings()
