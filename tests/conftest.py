"""
Test configuration and fixtures for the order ledger service
"""

import dataclasses
import datetime as dt
import os
from decimal import Decimal
from typing import Awaitable, Callable, Dict, List, Optional
from unittest.mock import patch

import pytest
import pytest_asyncio

from src.application.dtos.order_dtos import OrderWriteRequest
from src.domain.entities.order_entity import Client, Order
from src.domain.entities.order_reports import BirthdayCostSum, HourlyAverageCost
from src.domain.repositories.order_repository import OrderCriteria, OrderRepository
from src.domain.value_objects.order_status import OrderStatus
from src.infrastructure.configuration.config import Settings, reset_config
from src.infrastructure.database.models import Client as ClientModel
from src.infrastructure.database.operations import DatabaseManager
from src.infrastructure.repositories.session_handler import managed_session
from src.infrastructure.repositories.sqlalchemy_order_repository import (
    SQLAlchemyOrderRepository,
)
from src.infrastructure.utilities.exceptions import ConcurrencyConflictError


# Mock environment variables for testing
@pytest.fixture(autouse=True)
def mock_env():
    """Mock environment variables for testing"""
    test_env = {
        'DATABASE_URL': 'sqlite+aiosqlite:///:memory:',
        'ENVIRONMENT': 'test',
        'LOG_LEVEL': 'DEBUG',
    }

    reset_config()
    with patch.dict(os.environ, test_env, clear=True):
        yield test_env
    reset_config()


class InMemoryOrderRepository(OrderRepository):
    """
    Dict-backed OrderRepository.

    Staged writes are applied by save_changes, which first runs the
    optional ``before_save`` hook so tests can play a concurrent writer.
    """

    def __init__(self):
        self.orders: Dict[int, Order] = {}
        self.clients: Dict[int, Client] = {}
        self.birthday_rows: List[BirthdayCostSum] = []
        self.hourly_rows: List[HourlyAverageCost] = []
        self.before_save: Optional[Callable[[], None]] = None
        self.save_count = 0
        self._pending = []
        self._next_id = 1

    def store(self, order: Order) -> Order:
        """Put an order straight into storage, as another writer would"""
        if order.id is None:
            order.id = self._next_id
        self._next_id = max(self._next_id, order.id + 1)
        order.version = order.version or 1
        self.orders[order.id] = dataclasses.replace(order, client=None)
        return order

    async def find_all(self) -> List[Order]:
        return [dataclasses.replace(order) for order in self.orders.values()]

    async def find_by_id(self, order_id: int, include_client: bool = False) -> Optional[Order]:
        stored = self.orders.get(order_id)
        if stored is None:
            return None
        client = self.clients.get(stored.client_id) if include_client else None
        return dataclasses.replace(stored, client=client)

    async def find_page(self, criteria: OrderCriteria, offset: int, limit: int) -> List[Order]:
        matches = [
            order
            for order in sorted(self.orders.values(), key=lambda o: o.id)
            if all(
                wanted is None or getattr(order, field) == wanted
                for field, wanted in dataclasses.asdict(criteria).items()
            )
        ]
        return [dataclasses.replace(order) for order in matches[offset:offset + limit]]

    async def add(self, order: Order) -> None:
        self._pending.append(("add", order, None))

    async def replace(self, order: Order) -> None:
        stored = self.orders.get(order.id)
        if stored is None:
            raise ConcurrencyConflictError(order.id, "row does not exist")
        self._pending.append(("replace", order, stored.version))

    async def remove(self, order: Order) -> None:
        self._pending.append(("remove", order, order.version))

    async def save_changes(self) -> None:
        if self.before_save is not None:
            hook, self.before_save = self.before_save, None
            hook()

        pending, self._pending = self._pending, []
        self.save_count += 1
        for operation, order, version in pending:
            if operation == "add":
                self.store(order)
                continue

            stored = self.orders.get(order.id)
            if stored is None or stored.version != version:
                raise ConcurrencyConflictError(order.id)
            if operation == "replace":
                self.orders[order.id] = dataclasses.replace(order, version=version + 1, client=None)
            else:
                del self.orders[order.id]

    async def exists(self, order_id: int) -> bool:
        return order_id in self.orders

    async def client_exists(self, client_id: int) -> bool:
        return client_id in self.clients

    async def costs_by_birthday(self) -> List[BirthdayCostSum]:
        return list(self.birthday_rows)

    async def avg_cost_by_hour(self) -> List[HourlyAverageCost]:
        return list(self.hourly_rows)


@pytest.fixture
def make_order():
    """Factory for order entities with sensible defaults"""

    def _build(order_id: Optional[int] = None, **overrides) -> Order:
        values = {
            "id": order_id,
            "cost": Decimal("25.00"),
            "date": dt.date(2024, 3, 1),
            "time": dt.time(12, 30),
            "client_id": 1,
            "status": OrderStatus.CREATED,
        }
        values.update(overrides)
        return Order(**values)

    return _build


@pytest.fixture
def fake_repository():
    """In-memory repository with two known clients"""
    repository = InMemoryOrderRepository()
    repository.clients[1] = Client(id=1, name="Dana Levi", phone_number="0501234567",
                                   birthday=dt.date(1990, 5, 17))
    repository.clients[2] = Client(id=2, name="Omar Haddad", birthday=dt.date(1985, 11, 2))
    return repository


@pytest.fixture
def order_request():
    """Factory for valid order write requests"""

    def _build(**overrides) -> OrderWriteRequest:
        values = {
            "cost": Decimal("42.50"),
            "date": dt.date(2024, 6, 1),
            "time": dt.time(9, 15),
            "client_id": 1,
            "status": "Created",
        }
        values.update(overrides)
        return OrderWriteRequest(**values)

    return _build


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a throwaway SQLite file"""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}",
        environment="test",
    )


@pytest_asyncio.fixture
async def db_manager(test_settings):
    """Database manager with freshly created tables"""
    manager = DatabaseManager(test_settings)
    await manager.create_tables()
    try:
        yield manager
    finally:
        await manager.drop_tables()
        await manager.close()


@pytest_asyncio.fixture
async def client_ids(db_manager) -> List[int]:
    """Two stored clients"""
    async with managed_session(db_manager) as session:
        clients = [
            ClientModel(name="Dana Levi", phone_number="0501234567", birthday=dt.date(1990, 5, 17)),
            ClientModel(name="Omar Haddad", birthday=dt.date(1985, 11, 2)),
        ]
        session.add_all(clients)
        await session.commit()
        return [client.id for client in clients]


@pytest_asyncio.fixture
async def db_session(db_manager):
    """Request-scoped session on the test database"""
    async with managed_session(db_manager) as session:
        yield session


@pytest.fixture
def sql_repository(db_session, test_settings):
    """SQLAlchemy repository bound to the test session"""
    return SQLAlchemyOrderRepository(db_session, test_settings)


@pytest.fixture
def run_in_other_session(db_manager) -> Callable[[Callable], Awaitable[None]]:
    """Run a coroutine function against a second, independently committed session"""

    async def _run(work) -> None:
        async with managed_session(db_manager) as other:
            await work(other)
            await other.commit()

    return _run
