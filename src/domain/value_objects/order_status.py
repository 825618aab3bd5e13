"""Order status value object"""

from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    """
    Lifecycle states of an order.

    Values are stored as text and compared by name, so the value of each
    member equals the name clients send over the wire.
    """

    CREATED = "Created"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["OrderStatus"]:
        """Return the status named exactly ``value``, or None if there is none"""
        if value is None:
            return None
        for member in cls:
            if member.value == value:
                return member
        return None

    def __str__(self) -> str:
        return self.value
