"""
Application configuration — loaded from environment / .env file.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ──
    app_name: str = "dashly-calc-engine"
    app_env: str = "development"
    log_level: str = "INFO"
    engine_version: str = "1.0"

    # ── Display defaults ──
    default_currency: str = "ZMW"
    default_country: Optional[str] = None  # drives the default discount rate lookup

    # ── HTTP ──
    cors_allow_origins: list[str] = ["*"]
    metrics_enabled: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
