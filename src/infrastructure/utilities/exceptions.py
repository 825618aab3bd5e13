"""
Custom exceptions for the order ledger service
"""

from typing import Optional

from src.infrastructure.utilities.constants import ErrorCodes


class OrderLedgerError(Exception):
    """Base exception for the order ledger service"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.user_message = user_message or "An error occurred. Please try again."
        self.error_code = error_code or ErrorCodes.GENERAL_ERROR


class ValidationError(OrderLedgerError):
    """Input validation errors"""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message, message, ErrorCodes.VALIDATION_ERROR  # Validation errors are user-friendly
        )
        self.field = field


class DatabaseError(OrderLedgerError):
    """Database-related errors"""

    def __init__(self, message: str, operation: str = None, error_code: str = None):
        super().__init__(
            message,
            "Sorry, there was a problem with our system. Please try again in a moment.",
            error_code or ErrorCodes.DATABASE_ERROR,
        )
        self.operation = operation


class DatabaseOperationError(DatabaseError):
    """A schema or maintenance operation against the database failed"""


class ConcurrencyConflictError(DatabaseError):
    """
    A write targeted a row that was changed or removed by another writer
    after it was read.
    """

    def __init__(self, order_id: Optional[int], reason: str = None):
        message = f"Concurrent modification of order {order_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            operation="save_changes",
            error_code=ErrorCodes.CONCURRENCY_CONFLICT,
        )
        self.order_id = order_id
        self.user_message = (
            f"Order #{order_id} was modified by someone else. Reload it and try again."
        )
