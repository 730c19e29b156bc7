from datetime import time
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from ``PTO_``-prefixed environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "PTO Accrual"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    database_url: str = "postgresql+asyncpg://pto_accrual:pto_accrual@db:5432/pto_accrual"
    create_tables_on_startup: bool = True
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8000"]

    # Daily accrual schedule
    accrual_timezone: str = "UTC"
    accrual_run_time: time = time(0, 5)
    run_accrual_worker: bool = False

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.upper()


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
