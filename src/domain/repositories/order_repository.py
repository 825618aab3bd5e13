"""
Order repository interface

Defines the contract for order data access operations. Implementations
are request-scoped units of work: ``add``, ``replace`` and ``remove``
stage changes that ``save_changes`` commits.
"""

import datetime as dt
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from ..entities.order_entity import Order
from ..entities.order_reports import BirthdayCostSum, HourlyAverageCost
from ..value_objects.order_status import OrderStatus


@dataclass(frozen=True)
class OrderCriteria:
    """Equality predicates for an order query; None means no predicate"""

    cost: Optional[Decimal] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    client_id: Optional[int] = None
    status: Optional[OrderStatus] = None


class OrderRepository(ABC):
    """Repository interface for order operations"""

    @abstractmethod
    async def find_all(self) -> List[Order]:
        """Get every order in storage order"""
        pass

    @abstractmethod
    async def find_by_id(
        self, order_id: int, include_client: bool = False
    ) -> Optional[Order]:
        """Get order by ID, optionally with its client loaded"""
        pass

    @abstractmethod
    async def find_page(
        self, criteria: OrderCriteria, offset: int, limit: int
    ) -> List[Order]:
        """Get orders matching every predicate, ordered by ID, windowed"""
        pass

    @abstractmethod
    async def add(self, order: Order) -> None:
        """Stage a new order; its ID is assigned by save_changes"""
        pass

    @abstractmethod
    async def replace(self, order: Order) -> None:
        """
        Stage a full replacement of the stored order with ``order.id``.

        Raises:
            ConcurrencyConflictError: If no row with that ID exists.
        """
        pass

    @abstractmethod
    async def remove(self, order: Order) -> None:
        """Stage removal of an order"""
        pass

    @abstractmethod
    async def save_changes(self) -> None:
        """
        Commit staged changes.

        Raises:
            ConcurrencyConflictError: If a staged write targets a row that
                was changed or removed since it was read.
        """
        pass

    @abstractmethod
    async def exists(self, order_id: int) -> bool:
        """Check whether an order with this ID is stored"""
        pass

    @abstractmethod
    async def client_exists(self, client_id: int) -> bool:
        """Check whether a client with this ID is stored"""
        pass

    @abstractmethod
    async def costs_by_birthday(self) -> List[BirthdayCostSum]:
        """Rows of the cost-by-birthday report"""
        pass

    @abstractmethod
    async def avg_cost_by_hour(self) -> List[HourlyAverageCost]:
        """Rows of the average-cost-by-hour report"""
        pass
