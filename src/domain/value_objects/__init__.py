"""
Domain value objects package

Contains immutable value objects that represent concepts in the business domain.
"""

from .order_status import OrderStatus

__all__ = [
    "OrderStatus",
]
