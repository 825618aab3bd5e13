"""
Configuration management for the order ledger service
"""


import threading
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.infrastructure.utilities.constants import PaginationSettings, ReportSettings


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database configuration
    database_url: str = Field("sqlite+aiosqlite:///data/orders.db")
    sql_echo: bool = Field(False)

    # Application settings
    log_level: str = Field("INFO")
    log_dir: str = Field("logs")
    environment: str = Field("development")

    # Listing defaults
    default_page_size: int = Field(PaginationSettings.DEFAULT_PAGE_SIZE, ge=1)

    # Database-side report functions
    costs_by_birthday_function: str = Field(ReportSettings.COSTS_BY_BIRTHDAY_FUNCTION)
    avg_cost_by_hour_function: str = Field(ReportSettings.AVG_COST_BY_HOUR_FUNCTION)


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next get_config() re-reads the environment."""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
