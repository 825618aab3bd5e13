"""
SQLAlchemy Order Repository

Concrete implementation of OrderRepository over a request-scoped
AsyncSession.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import exists as sql_exists
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from src.domain.entities.order_entity import Client, Order
from src.domain.entities.order_reports import BirthdayCostSum, HourlyAverageCost
from src.domain.repositories.order_repository import OrderCriteria, OrderRepository
from src.infrastructure.configuration.config import Settings, get_config
from src.infrastructure.database.models import Client as ClientModel
from src.infrastructure.database.models import Order as OrderModel
from src.infrastructure.utilities.exceptions import ConcurrencyConflictError

# Every column a full replacement overwrites
REPLACED_FIELDS = ("cost", "date", "time", "client_id", "status")


class SQLAlchemyOrderRepository(OrderRepository):
    """SQLAlchemy implementation of OrderRepository"""

    def __init__(self, session: AsyncSession, config: Optional[Settings] = None):
        self._session = session
        self._config = config or get_config()
        self._logger = logging.getLogger(self.__class__.__name__)
        self._added: List[Tuple[Order, OrderModel]] = []
        self._staged_ids: List[int] = []

    async def find_all(self) -> List[Order]:
        """Get every order in storage order"""
        self._logger.info("📋 GET ALL ORDERS")

        try:
            result = await self._session.scalars(select(OrderModel))
            orders = [self._to_entity(row) for row in result]
        except SQLAlchemyError as e:
            self._logger.error("💥 DATABASE ERROR getting all orders: %s", e)
            raise

        self._logger.info("✅ FOUND %d ORDERS", len(orders))
        return orders

    async def find_by_id(
        self, order_id: int, include_client: bool = False
    ) -> Optional[Order]:
        """Get order by ID, optionally joining its client"""
        self._logger.info("🔍 GET ORDER BY ID: %s (client=%s)", order_id, include_client)

        stmt = select(OrderModel).where(OrderModel.id == order_id)
        if include_client:
            stmt = stmt.options(joinedload(OrderModel.client))

        try:
            result = await self._session.execute(stmt)
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self._logger.error("💥 DATABASE ERROR getting order by ID: %s", e)
            raise

        if row is None:
            self._logger.info("📭 ORDER NOT FOUND: ID %s", order_id)
            return None

        return self._to_entity(row, include_client=include_client)

    async def find_page(
        self, criteria: OrderCriteria, offset: int, limit: int
    ) -> List[Order]:
        """Get orders matching every predicate, ordered by ID, windowed"""
        conditions = []
        if criteria.cost is not None:
            conditions.append(OrderModel.cost == criteria.cost)
        if criteria.date is not None:
            conditions.append(OrderModel.date == criteria.date)
        if criteria.time is not None:
            conditions.append(OrderModel.time == criteria.time)
        if criteria.client_id is not None:
            conditions.append(OrderModel.client_id == criteria.client_id)
        if criteria.status is not None:
            conditions.append(OrderModel.status == criteria.status)

        self._logger.info(
            "📋 GET ORDER PAGE (predicates=%d, offset=%d, limit=%d)",
            len(conditions),
            offset,
            limit,
        )

        stmt = (
            select(OrderModel)
            .where(*conditions)
            .order_by(OrderModel.id)
            .offset(offset)
            .limit(limit)
        )

        try:
            result = await self._session.scalars(stmt)
            return [self._to_entity(row) for row in result]
        except SQLAlchemyError as e:
            self._logger.error("💥 DATABASE ERROR getting order page: %s", e)
            raise

    async def add(self, order: Order) -> None:
        """Stage a new order"""
        row = OrderModel(
            cost=order.cost,
            date=order.date,
            time=order.time,
            client_id=order.client_id,
            status=order.status,
        )
        self._session.add(row)
        self._added.append((order, row))

    async def replace(self, order: Order) -> None:
        """
        Stage a full replacement of every column of the stored order.

        The version read here is the one checked at commit; a version
        carried by ``order`` is ignored.
        """
        self._logger.info("🔄 REPLACE ORDER: ID %s", order.id)

        row = await self._session.get(OrderModel, order.id, populate_existing=True)
        if row is None:
            self._logger.warning("📭 ORDER NOT FOUND for replacement: %s", order.id)
            raise ConcurrencyConflictError(order.id, "row does not exist")

        for field in REPLACED_FIELDS:
            setattr(row, field, getattr(order, field))
            # Emit every column even when a value is unchanged
            flag_modified(row, field)

        self._staged_ids.append(order.id)

    async def remove(self, order: Order) -> None:
        """Stage removal of an order"""
        row = await self._session.get(OrderModel, order.id)
        if row is not None:
            await self._session.delete(row)
            self._staged_ids.append(order.id)

    async def save_changes(self) -> None:
        """Commit staged changes"""
        try:
            await self._session.commit()
        except StaleDataError as e:
            await self._session.rollback()
            order_id = self._staged_ids[0] if self._staged_ids else None
            self._logger.warning("⚠️ CONCURRENCY CONFLICT saving order %s: %s", order_id, e)
            self._reset_staging()
            raise ConcurrencyConflictError(order_id, str(e)) from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            self._logger.error("💥 DATABASE ERROR saving changes: %s", e)
            self._reset_staging()
            raise

        for order, row in self._added:
            order.id = row.id
            order.version = row.version
        self._reset_staging()

    async def exists(self, order_id: int) -> bool:
        """Check whether an order with this ID is stored"""
        return bool(
            await self._session.scalar(
                select(sql_exists().where(OrderModel.id == order_id))
            )
        )

    async def client_exists(self, client_id: int) -> bool:
        """Check whether a client with this ID is stored"""
        return bool(
            await self._session.scalar(
                select(sql_exists().where(ClientModel.id == client_id))
            )
        )

    async def costs_by_birthday(self) -> List[BirthdayCostSum]:
        """Rows of the cost-by-birthday report function"""
        self._logger.info("📊 REPORT: costs by birthday")
        stmt = self._report_query(
            self._config.costs_by_birthday_function, "birthday", "total_cost"
        )

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            self._logger.error("💥 DATABASE ERROR running birthday report: %s", e)
            raise

        return [
            BirthdayCostSum(birthday=row.birthday, total_cost=row.total_cost)
            for row in result
        ]

    async def avg_cost_by_hour(self) -> List[HourlyAverageCost]:
        """Rows of the average-cost-by-hour report function"""
        self._logger.info("📊 REPORT: average cost by hour")
        stmt = self._report_query(
            self._config.avg_cost_by_hour_function, "hour", "average_cost"
        )

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            self._logger.error("💥 DATABASE ERROR running hourly report: %s", e)
            raise

        return [
            HourlyAverageCost(hour=row.hour, average_cost=row.average_cost)
            for row in result
        ]

    @staticmethod
    def _report_query(function_name: str, *columns: str):
        """SELECT the named columns FROM a table-valued report function"""
        report = getattr(func, function_name)().table_valued(*columns)
        return select(*(report.c[column] for column in columns))

    def _reset_staging(self) -> None:
        self._added.clear()
        self._staged_ids.clear()

    @staticmethod
    def _to_entity(row: OrderModel, include_client: bool = False) -> Order:
        client = None
        if include_client and row.client is not None:
            client = Client(
                id=row.client.id,
                name=row.client.name,
                phone_number=row.client.phone_number,
                birthday=row.client.birthday,
            )
        return Order(
            id=row.id,
            cost=row.cost,
            date=row.date,
            time=row.time,
            client_id=row.client_id,
            status=row.status,
            version=row.version,
            client=client,
        )
