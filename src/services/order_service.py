"""
Order service for order data-access operations.

Expected failures (missing orders, invalid input, an order deleted while
being updated) come back as return values: None, False or a negative
UpdateResult. Only an update that loses a race against another update
raises.
"""

import logging
from enum import IntEnum
from typing import List, Optional, Union

from src.application.dtos.order_dtos import (
    OrderFilter,
    OrderSummary,
    OrderWithClient,
    OrderWriteRequest,
    Pagination,
)
from src.domain.entities.order_entity import Order
from src.domain.entities.order_reports import BirthdayCostSum, HourlyAverageCost
from src.domain.repositories.order_repository import OrderCriteria, OrderRepository
from src.domain.value_objects.order_status import OrderStatus
from src.infrastructure.utilities.exceptions import ConcurrencyConflictError


class UpdateResult(IntEnum):
    """Outcome codes of a full order replacement"""

    OK = 0
    INVALID_STATUS = -1
    GONE = -2
    UNKNOWN_CLIENT = -3


class OrderService:
    """Service for order CRUD operations and order reports"""

    def __init__(self, order_repository: OrderRepository):
        self._order_repository = order_repository
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_orders(self) -> List[OrderSummary]:
        """Get every order, unfiltered and unpaged"""
        orders = await self._order_repository.find_all()
        return [OrderSummary.from_entity(order) for order in orders]

    async def get_order(
        self, order_id: int, include_client: bool = False
    ) -> Optional[Union[OrderSummary, OrderWithClient]]:
        """Get one order; None when it does not exist"""
        order = await self._order_repository.find_by_id(order_id, include_client)
        if order is None:
            return None

        if include_client:
            return OrderWithClient.from_entity(order)
        return OrderSummary.from_entity(order)

    async def list_orders_filtered(
        self, order_filter: OrderFilter, pagination: Pagination
    ) -> List[OrderSummary]:
        """
        Get one page of the orders matching every given filter, by ID.

        A status that is not an order status name is ignored rather than
        rejected. Pages past the end are empty.
        """
        criteria = OrderCriteria(
            cost=order_filter.cost,
            date=order_filter.date,
            time=order_filter.time,
            client_id=order_filter.client_id,
            status=OrderStatus.parse(order_filter.status),
        )
        if order_filter.status is not None and criteria.status is None:
            self._logger.info("🔎 Ignoring unknown status filter: %r", order_filter.status)

        orders = await self._order_repository.find_page(
            criteria, pagination.offset, pagination.page_size
        )
        return [OrderSummary.from_entity(order) for order in orders]

    async def get_costs_by_birthday(self) -> List[BirthdayCostSum]:
        """Order cost sums grouped by client birthday"""
        return await self._order_repository.costs_by_birthday()

    async def get_avg_cost_by_hour(self) -> List[HourlyAverageCost]:
        """Average order cost per hour of the day"""
        return await self._order_repository.avg_cost_by_hour()

    async def create_order(self, request: OrderWriteRequest) -> Optional[OrderSummary]:
        """Create an order; None when the status or the client is invalid"""
        status = OrderStatus.parse(request.status)
        if status is None:
            self._logger.warning("❌ CREATE ORDER rejected: invalid status %r", request.status)
            return None

        if not await self._order_repository.client_exists(request.client_id):
            self._logger.warning("❌ CREATE ORDER rejected: unknown client %s", request.client_id)
            return None

        order = Order(
            id=None,
            cost=request.cost,
            date=request.date,
            time=request.time,
            client_id=request.client_id,
            status=status,
        )
        await self._order_repository.add(order)
        await self._order_repository.save_changes()

        self._logger.info("🆕 ORDER CREATED: ID=%s, client=%s", order.id, order.client_id)
        return OrderSummary.from_entity(order)

    async def update_order(self, order_id: int, request: OrderWriteRequest) -> UpdateResult:
        """
        Replace every field of an order.

        Nothing is merged: fields come from the request as given.

        Returns:
            UpdateResult.OK on success, INVALID_STATUS or UNKNOWN_CLIENT when
            the request is rejected, GONE when the order no longer exists.

        Raises:
            ConcurrencyConflictError: If the order still exists but was
                changed by another writer since it was read.
        """
        status = OrderStatus.parse(request.status)
        if status is None:
            self._logger.warning("❌ UPDATE ORDER %s rejected: invalid status %r", order_id, request.status)
            return UpdateResult.INVALID_STATUS

        if not await self._order_repository.client_exists(request.client_id):
            self._logger.warning("❌ UPDATE ORDER %s rejected: unknown client %s", order_id, request.client_id)
            return UpdateResult.UNKNOWN_CLIENT

        replacement = Order(
            id=order_id,
            cost=request.cost,
            date=request.date,
            time=request.time,
            client_id=request.client_id,
            status=status,
        )

        try:
            await self._order_repository.replace(replacement)
            await self._order_repository.save_changes()
        except ConcurrencyConflictError:
            if not await self.order_exists(order_id):
                self._logger.info("📭 ORDER GONE during update: ID %s", order_id)
                return UpdateResult.GONE
            self._logger.error("💥 CONCURRENT UPDATE of order %s", order_id)
            raise

        self._logger.info("✅ ORDER UPDATED: ID %s -> %s", order_id, status)
        return UpdateResult.OK

    async def delete_order(self, order_id: int) -> bool:
        """Delete an order; False when it does not exist"""
        order = await self._order_repository.find_by_id(order_id)
        if order is None:
            self._logger.warning("📭 ORDER NOT FOUND for deletion: %s", order_id)
            return False

        await self._order_repository.remove(order)
        await self._order_repository.save_changes()

        self._logger.info("🗑️ ORDER DELETED: ID %s", order_id)
        return True

    async def order_exists(self, order_id: int) -> bool:
        """Check whether an order with this ID exists"""
        return await self._order_repository.exists(order_id)
