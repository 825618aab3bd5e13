"""
Repository Infrastructure

SQLAlchemy implementations of the domain repository interfaces.
"""

from .session_handler import managed_session
from .sqlalchemy_order_repository import SQLAlchemyOrderRepository

__all__ = [
    "managed_session",
    "SQLAlchemyOrderRepository",
]
