"""
Dependency Injection Container

Wires the database manager, repositories and services. Repositories and
services are request-scoped, so the container hands them out inside a
session scope instead of caching instances.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from ...services.order_service import OrderService
from ..configuration.config import Settings, get_config
from ..database.operations import DatabaseManager
from ..repositories.session_handler import managed_session
from ..repositories.sqlalchemy_order_repository import SQLAlchemyOrderRepository

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency injection container

    Owns the long-lived database manager and builds one repository and
    one service per logical request.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        db_manager: Optional[DatabaseManager] = None,
    ):
        self._config = config or get_config()
        self._db_manager = db_manager or DatabaseManager(self._config)
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def db_manager(self) -> DatabaseManager:
        """The database manager shared by every request"""
        return self._db_manager

    @asynccontextmanager
    async def order_service(self) -> AsyncIterator[OrderService]:
        """Yield an OrderService bound to a fresh session"""
        async with managed_session(self._db_manager) as session:
            repository = SQLAlchemyOrderRepository(session, self._config)
            yield OrderService(repository)

    async def shutdown(self) -> None:
        """Release database connections"""
        await self._db_manager.close()
        self._logger.info("Dependency container shut down")


# Global container instance
_container: Optional[DependencyContainer] = None


def get_container() -> DependencyContainer:
    """Get the global dependency container"""
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container
