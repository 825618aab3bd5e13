"""
Domain entities package

Contains the core business entities of the order ledger.
These represent the fundamental business concepts and rules.
"""

from .order_entity import Client, Order
from .order_reports import BirthdayCostSum, HourlyAverageCost

__all__ = ["Client", "Order", "BirthdayCostSum", "HourlyAverageCost"]
