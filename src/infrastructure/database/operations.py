"""
Database engine and session management

Owns the async SQLAlchemy engine and the session factory used to open one
session per logical request.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import event, make_url, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.infrastructure.configuration.config import Settings, get_config
from src.infrastructure.database.models import Base
from src.infrastructure.logging.logger_config import PerformanceLogger
from src.infrastructure.utilities.constants import (
    DatabaseSettings,
    ErrorCodes,
    PerformanceSettings,
)
from src.infrastructure.utilities.exceptions import DatabaseOperationError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Async database manager with slow-query monitoring"""

    def __init__(self, config: Optional[Settings] = None):
        """Initialize database manager with configuration"""
        self.config = config or get_config()
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self.logger = logging.getLogger(__name__)

    def get_engine(self) -> AsyncEngine:
        """Get database engine with proper configuration"""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        """Create database engine with environment-specific settings"""
        database_url = self.config.database_url

        engine_kwargs: Dict[str, Any] = {
            "pool_pre_ping": True,
            "echo": self.config.sql_echo,
        }

        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {
                "timeout": DatabaseSettings.CONNECTION_TIMEOUT_SECONDS,
            }
            # An in-memory database lives as long as its single connection
            if DatabaseSettings.IN_MEMORY_SQLITE_MARKER in database_url:
                engine_kwargs["poolclass"] = StaticPool
            else:
                database_path = make_url(database_url).database
                if database_path:
                    Path(database_path).parent.mkdir(parents=True, exist_ok=True)
        else:
            if self.config.environment == "production":
                pool_size = DatabaseSettings.PRODUCTION_POOL_SIZE
                max_overflow = DatabaseSettings.PRODUCTION_MAX_OVERFLOW
            else:
                pool_size = DatabaseSettings.DEVELOPMENT_POOL_SIZE
                max_overflow = DatabaseSettings.DEVELOPMENT_MAX_OVERFLOW
            engine_kwargs.update({
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_recycle": DatabaseSettings.POOL_RECYCLE_SECONDS,
            })

        engine = create_async_engine(database_url, **engine_kwargs)

        # Add performance monitoring
        self._setup_engine_events(engine)

        return engine

    def _setup_engine_events(self, engine: AsyncEngine) -> None:
        """Setup SQLAlchemy events for performance monitoring"""

        @event.listens_for(engine.sync_engine, "before_cursor_execute")
        def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            context._query_start_time = time.time()

        @event.listens_for(engine.sync_engine, "after_cursor_execute")
        def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            total_time_ms = (time.time() - context._query_start_time) * 1000
            preview = PerformanceSettings.STATEMENT_PREVIEW_LENGTH

            if total_time_ms > PerformanceSettings.SLOW_QUERY_THRESHOLD_MS:
                self.logger.warning(
                    "🐢 Slow query detected (%.1fms)",
                    total_time_ms,
                    extra={
                        "query_time_ms": total_time_ms,
                        "statement": statement[:preview] + "..." if len(statement) > preview else statement,
                    }
                )

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get session factory"""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.get_engine(),
                expire_on_commit=False,
            )
        return self._session_factory

    def get_session(self) -> AsyncSession:
        """Get a new request-scoped database session"""
        return self.get_session_factory()()

    async def create_tables(self) -> None:
        """Create all database tables"""
        try:
            with PerformanceLogger("create_tables", self.logger):
                async with self.get_engine().begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
                self.logger.info("Database tables created successfully")
        except SQLAlchemyError as e:
            self.logger.error("Failed to create database tables: %s", e, exc_info=True)
            raise DatabaseOperationError(
                f"Failed to create database tables: {e}",
                operation="create_tables",
                error_code=ErrorCodes.DATABASE_ERROR,
            ) from e

    async def drop_tables(self) -> None:
        """Drop all database tables"""
        try:
            with PerformanceLogger("drop_tables", self.logger):
                async with self.get_engine().begin() as conn:
                    await conn.run_sync(Base.metadata.drop_all)
                self.logger.info("Database tables dropped successfully")
        except SQLAlchemyError as e:
            self.logger.error("Failed to drop database tables: %s", e, exc_info=True)
            raise DatabaseOperationError(
                f"Failed to drop database tables: {e}",
                operation="drop_tables",
                error_code=ErrorCodes.DATABASE_ERROR,
            ) from e

    async def health_check(self) -> Dict[str, Any]:
        """Perform database health check"""
        try:
            with PerformanceLogger("db_health_check", self.logger):
                async with self.get_session() as session:
                    result = await session.scalar(select(1))

            if result == 1:
                return {
                    "status": "healthy",
                    "environment": self.config.environment,
                }
            return {
                "status": "unhealthy",
                "error": "Health check query returned unexpected result",
            }
        except SQLAlchemyError as e:
            self.logger.error("Database health check failed: %s", e, exc_info=True)
            return {
                "status": "unhealthy",
                "error": str(e),
            }

    async def close(self) -> None:
        """Close database connections"""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
        self._session_factory = None
        self.logger.info("Database connections closed")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get global database manager instance"""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_db_session() -> AsyncSession:
    """Get database session - convenience function"""
    return get_db_manager().get_session()


async def init_db() -> None:
    """Initialize database tables"""
    await get_db_manager().create_tables()
    logger.info("Database initialized")


async def close_db() -> None:
    """Dispose the global engine"""
    global _db_manager
    if _db_manager is not None:
        await _db_manager.close()
        _db_manager = None
