"""Business-logic service layer."""

from .order_service import OrderService, UpdateResult

__all__ = [
    "OrderService",
    "UpdateResult",
]
