#!/usr/bin/env python3
"""
Test data generation script.

Seeds the configured database with clients and then creates orders for
them through the order service, so every generated order passes the same
status and client checks as production writes.
"""

import argparse
import asyncio
import logging
import random
import sys
from decimal import Decimal
from pathlib import Path
from typing import List

# Make the project root importable when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from faker import Faker

from src.application.dtos.order_dtos import OrderWriteRequest
from src.domain.value_objects.order_status import OrderStatus
from src.infrastructure.container.dependency_injection import DependencyContainer
from src.infrastructure.database.models import Client
from src.infrastructure.logging.logger_config import LoggingConfigOptions, setup_logging
from src.infrastructure.repositories.session_handler import managed_session

fake = Faker()

# Realistic status distribution
STATUS_WEIGHTS = {
    OrderStatus.CREATED: 0.15,
    OrderStatus.PROCESSING: 0.2,
    OrderStatus.SHIPPED: 0.2,
    OrderStatus.DELIVERED: 0.4,
    OrderStatus.CANCELLED: 0.05,
}

logger = logging.getLogger("generate_test_data")


async def create_clients(container: DependencyContainer, count: int) -> List[int]:
    """Insert ``count`` clients and return their IDs"""
    async with managed_session(container.db_manager) as session:
        clients = [
            Client(
                name=fake.name(),
                phone_number=fake.numerify("05########"),
                birthday=fake.date_of_birth(minimum_age=18, maximum_age=80),
            )
            for _ in range(count)
        ]
        session.add_all(clients)
        await session.commit()
        return [client.id for client in clients]


def generate_order_request(client_id: int) -> OrderWriteRequest:
    """Generate one realistic order write request"""
    placed_at = fake.date_time_between(start_date="-1y", end_date="now")
    status = random.choices(list(STATUS_WEIGHTS), weights=list(STATUS_WEIGHTS.values()))[0]
    return OrderWriteRequest(
        cost=Decimal(random.randint(500, 50000)) / 100,
        date=placed_at.date(),
        time=placed_at.time().replace(microsecond=0),
        client_id=client_id,
        status=status.value,
    )


async def generate(client_count: int, order_count: int) -> None:
    """Create clients, then orders spread across them"""
    container = DependencyContainer()
    try:
        await container.db_manager.create_tables()

        client_ids = await create_clients(container, client_count)
        logger.info("👥 Created %d clients", len(client_ids))

        created = 0
        async with container.order_service() as service:
            for _ in range(order_count):
                order = await service.create_order(
                    generate_order_request(random.choice(client_ids))
                )
                if order is not None:
                    created += 1

        logger.info("📦 Created %d orders", created)
    finally:
        await container.shutdown()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the order ledger database")
    parser.add_argument("--clients", type=int, default=50)
    parser.add_argument("--orders", type=int, default=500)
    args = parser.parse_args()

    setup_logging(LoggingConfigOptions(enable_file=False, enable_json=False))
    asyncio.run(generate(args.clients, args.orders))


if __name__ == "__main__":
    main()
