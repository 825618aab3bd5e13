"""
Application constants for the order ledger service

Centralizes magic numbers and hard-coded values used across the
infrastructure and service layers.
"""

from typing import Final


# Database configuration constants
class DatabaseSettings:
    """Database connection and pool configuration"""

    POOL_RECYCLE_SECONDS: Final[int] = 3600  # 1 hour
    CONNECTION_TIMEOUT_SECONDS: Final[int] = 30

    # Production settings
    PRODUCTION_POOL_SIZE: Final[int] = 20
    PRODUCTION_MAX_OVERFLOW: Final[int] = 30

    # Development settings
    DEVELOPMENT_POOL_SIZE: Final[int] = 5
    DEVELOPMENT_MAX_OVERFLOW: Final[int] = 10

    IN_MEMORY_SQLITE_MARKER: Final[str] = ":memory:"


# Pagination constants
class PaginationSettings:
    """Defaults for paged order listings"""

    DEFAULT_PAGE: Final[int] = 1
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MIN_PAGE: Final[int] = 1
    MIN_PAGE_SIZE: Final[int] = 1


# Report function names as defined in the database
class ReportSettings:
    """Names of the database-side report functions"""

    COSTS_BY_BIRTHDAY_FUNCTION: Final[str] = "get_costs_bdays"
    AVG_COST_BY_HOUR_FUNCTION: Final[str] = "get_avg_costs_by_hour"


# Logging configuration constants
class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    MAIN_LOG_BACKUP_COUNT: Final[int] = 10
    ERROR_LOG_BACKUP_COUNT: Final[int] = 10

    MAIN_LOG_FILE: Final[str] = "order_ledger.log"
    ERROR_LOG_FILE: Final[str] = "errors.log"
    JSON_LOG_FILE: Final[str] = "order_ledger.json.log"


# Performance monitoring constants
class PerformanceSettings:
    """Performance thresholds and monitoring settings"""

    SLOW_QUERY_THRESHOLD_MS: Final[int] = 1000
    STATEMENT_PREVIEW_LENGTH: Final[int] = 200


# Error codes
class ErrorCodes:
    """Machine-readable error codes carried by application exceptions"""

    GENERAL_ERROR: Final[str] = "GENERAL_ERROR"
    VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"
    DATABASE_ERROR: Final[str] = "DATABASE_ERROR"
    CONCURRENCY_CONFLICT: Final[str] = "CONCURRENCY_CONFLICT"
