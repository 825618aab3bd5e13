"""
Domain repository interfaces

Contains abstract repository interfaces that define contracts for data access.
These follow the Repository pattern and Dependency Inversion principle.
"""

from .order_repository import OrderCriteria, OrderRepository

__all__ = [
    'OrderCriteria',
    'OrderRepository'
]
