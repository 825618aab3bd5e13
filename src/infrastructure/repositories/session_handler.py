"""
Context manager for handling request-scoped database sessions.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.operations import DatabaseManager, get_db_manager
from src.infrastructure.utilities.exceptions import OrderLedgerError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def managed_session(
    db_manager: Optional[DatabaseManager] = None,
) -> AsyncIterator[AsyncSession]:
    """
    Context manager yielding one session for one logical request.

    Repositories commit their own unit of work; anything left pending when
    the block raises is rolled back, and the session is always closed.

    Yields:
        AsyncSession: The SQLAlchemy session object.

    Raises:
        SQLAlchemyError: If a database-related error occurs.
        OrderLedgerError: Application errors raised inside the block.
    """
    session = (db_manager or get_db_manager()).get_session()
    try:
        yield session
    except SQLAlchemyError as e:
        logger.error("💥 DATABASE ERROR: %s", e)
        await session.rollback()
        raise
    except OrderLedgerError as e:
        logger.warning("⚠️ APPLICATION ERROR: %s", e)
        await session.rollback()
        raise
    finally:
        await session.close()
