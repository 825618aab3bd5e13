"""
Logging Infrastructure

Structured logging setup and operation timing helpers.
"""

from .logger_config import (
    LoggingConfig,
    LoggingConfigOptions,
    PerformanceLogger,
    get_structured_logger,
    setup_logging,
)

__all__ = [
    "LoggingConfig",
    "LoggingConfigOptions",
    "PerformanceLogger",
    "get_structured_logger",
    "setup_logging",
]
