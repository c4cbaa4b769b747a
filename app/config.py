"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Investment Projection Service"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Calculator bounds (reference currency units)
    min_investment: float = 100_000
    max_investment: float = 100_000_000
    investment_slider_step: float = 50_000
    default_investment: float = 500_000

    # Timeline and returns
    min_timeline_years: int = 1
    max_timeline_years: int = 15
    default_timeline_years: int = 5
    min_return_percent: float = 10
    max_return_percent: float = 30
    default_return_percent: float = 18
    baseline_return_percent: float = 3

    # Exchange rates (Frankfurter, ECB reference rates)
    exchange_rate_api_url: str = "https://api.frankfurter.dev/v1/latest"
    exchange_rate_timeout_seconds: float = 10
    exchange_rate_cache_ttl_seconds: int = 300

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
