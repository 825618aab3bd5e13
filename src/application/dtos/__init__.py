"""
DTOs

Data Transfer Objects exchanged between the service layer and its callers.
"""

from .order_dtos import (
    ClientInfo,
    OrderFilter,
    OrderSummary,
    OrderWithClient,
    OrderWriteRequest,
    Pagination,
)

__all__ = [
    "ClientInfo",
    "OrderFilter",
    "OrderSummary",
    "OrderWithClient",
    "OrderWriteRequest",
    "Pagination",
]
