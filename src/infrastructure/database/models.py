# pylint: disable=too-few-public-methods
"""
SQLAlchemy database models for the order ledger

Orders carry a ``version`` column that the mapper uses for optimistic
concurrency: every UPDATE or DELETE is qualified by the version that was
read, and a mismatch raises ``StaleDataError`` at flush time.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Optional, Type

from sqlalchemy import Date, Enum, ForeignKey, Integer, Numeric, String, Time
from sqlalchemy.orm import declarative_base, DeclarativeMeta, relationship, Mapped, mapped_column

from src.domain.value_objects.order_status import OrderStatus

# Create declarative base with proper type annotation
_Base = declarative_base()

# Type alias for mypy
Base: Type[DeclarativeMeta] = _Base


class Client(Base):
    """Client model"""
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    birthday: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)

    # Relationships
    orders: Mapped[List["Order"]] = relationship("Order", back_populates="client")


class Order(Base):
    """Order model"""
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id"), index=True, nullable=False
    )
    # Stored as the status text so it stays comparable by name
    status: Mapped[OrderStatus] = mapped_column(
        Enum(
            OrderStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    client: Mapped["Client"] = relationship("Client", back_populates="orders")

    __mapper_args__ = {"version_id_col": version}
