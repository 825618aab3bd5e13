"""
Order DTOs

Data Transfer Objects for order-related operations.
"""

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from src.domain.entities.order_entity import Client, Order
from src.infrastructure.configuration.config import get_config
from src.infrastructure.utilities.constants import PaginationSettings
from src.infrastructure.utilities.exceptions import ValidationError


@dataclass
class OrderWriteRequest:
    """
    Request body for creating or replacing an order.

    ``status`` is the raw status name sent by the caller; it is parsed by
    the service, which rejects names that are not order statuses.
    """

    cost: Decimal
    date: dt.date
    time: dt.time
    client_id: int
    status: str


@dataclass
class OrderFilter:
    """Optional equality filters for order listings"""

    cost: Optional[Decimal] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    client_id: Optional[int] = None
    status: Optional[str] = None


@dataclass
class Pagination:
    """1-based page window"""

    page: int = PaginationSettings.DEFAULT_PAGE
    page_size: int = field(default_factory=lambda: get_config().default_page_size)

    def __post_init__(self):
        if self.page < PaginationSettings.MIN_PAGE:
            raise ValidationError(f"Page must be at least {PaginationSettings.MIN_PAGE}", "page")
        if self.page_size < PaginationSettings.MIN_PAGE_SIZE:
            raise ValidationError(
                f"Page size must be at least {PaginationSettings.MIN_PAGE_SIZE}", "page_size"
            )

    @property
    def offset(self) -> int:
        """Number of rows skipped before this page"""
        return (self.page - 1) * self.page_size


@dataclass
class ClientInfo:
    """Client details embedded in the extended order shape"""

    id: int
    name: str
    phone_number: Optional[str] = None
    birthday: Optional[dt.date] = None

    @classmethod
    def from_entity(cls, client: Client) -> "ClientInfo":
        """Create ClientInfo from a domain client."""
        return cls(
            id=client.id,
            name=client.name,
            phone_number=client.phone_number,
            birthday=client.birthday,
        )


@dataclass
class OrderSummary:
    """Order information returned by listings and writes"""

    id: int
    cost: Decimal
    date: dt.date
    time: dt.time
    client_id: int
    status: str

    @classmethod
    def from_entity(cls, order: Order) -> "OrderSummary":
        """Create OrderSummary from a domain order."""
        return cls(
            id=order.id,
            cost=order.cost,
            date=order.date,
            time=order.time,
            client_id=order.client_id,
            status=order.status.value,
        )


@dataclass
class OrderWithClient(OrderSummary):
    """Order information together with the client who placed it"""

    client: Optional[ClientInfo] = None

    @classmethod
    def from_entity(cls, order: Order) -> "OrderWithClient":
        """Create OrderWithClient from a domain order loaded with its client."""
        return cls(
            id=order.id,
            cost=order.cost,
            date=order.date,
            time=order.time,
            client_id=order.client_id,
            status=order.status.value,
            client=ClientInfo.from_entity(order.client) if order.client else None,
        )
