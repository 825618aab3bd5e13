"""
Order domain entities

Represents orders and the clients that place them.
"""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from src.domain.value_objects.order_status import OrderStatus


@dataclass
class Client:
    """Client who places orders"""

    id: Optional[int]
    name: str
    phone_number: Optional[str] = None
    birthday: Optional[dt.date] = None


@dataclass
class Order:
    """
    Order domain entity

    ``version`` is the optimistic-concurrency counter of the stored row;
    it is None for orders that have not been persisted yet. ``client`` is
    only populated when the order was loaded together with its client.
    """

    id: Optional[int]
    cost: Decimal
    date: dt.date
    time: dt.time
    client_id: int
    status: OrderStatus
    version: Optional[int] = None
    client: Optional[Client] = None
