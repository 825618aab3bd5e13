#!/usr/bin/env python3
"""
Entry point for the order ledger service

Prepares the database for the web application that hosts the order
service: configures logging, creates missing tables, checks connectivity
and reports the current state of the orders table.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from src.infrastructure.configuration.config import get_config
from src.infrastructure.container.dependency_injection import get_container
from src.infrastructure.logging.logger_config import LoggingConfigOptions, setup_logging
from src.infrastructure.utilities.exceptions import OrderLedgerError


async def run() -> int:
    """Initialize the database and log a short status report"""
    logger = logging.getLogger(__name__)
    config = get_config()
    container = get_container()

    try:
        await container.db_manager.create_tables()

        health = await container.db_manager.health_check()
        if health["status"] != "healthy":
            logger.critical("Database is not reachable: %s", health.get("error"))
            return 1

        async with container.order_service() as service:
            orders = await service.list_orders()

        logger.info(
            "🚀 Order ledger ready (%s) - %d orders stored",
            config.environment,
            len(orders),
        )
        return 0

    except OrderLedgerError as e:
        logger.critical("Startup failed: %s", e, exc_info=True)
        return 1

    finally:
        await container.shutdown()


def main() -> None:
    """Configure logging and run the startup sequence"""
    config = get_config()
    setup_logging(
        LoggingConfigOptions(
            log_level=config.log_level,
            log_dir=config.log_dir,
            enable_json=config.environment == "production",
        )
    )
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
