"""
Database Infrastructure

Contains SQLAlchemy models and engine/session management.
"""

from .models import Base
from .models import Client as ClientModel
from .models import Order as OrderModel
from .operations import DatabaseManager, close_db, get_db_manager, get_db_session, init_db

__all__ = [
    "Base",
    "ClientModel",
    "OrderModel",
    "DatabaseManager",
    "init_db",
    "close_db",
    "get_db_manager",
    "get_db_session",
]
