"""
Order report rows

Read-only rows produced by the database-side report functions.
"""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BirthdayCostSum:
    """Total order cost for the clients sharing one birthday"""

    birthday: dt.date
    total_cost: Decimal


@dataclass(frozen=True)
class HourlyAverageCost:
    """Average order cost for one hour of the day"""

    hour: int
    average_cost: Decimal
