"""
Tests for the order status, entities and DTOs
"""

import datetime as dt
from decimal import Decimal

import pytest

from src.application.dtos.order_dtos import (
    ClientInfo,
    OrderFilter,
    OrderSummary,
    OrderWithClient,
    Pagination,
)
from src.domain.entities.order_entity import Client, Order
from src.domain.value_objects.order_status import OrderStatus
from src.infrastructure.configuration.config import reset_config
from src.infrastructure.utilities.exceptions import ValidationError


class TestOrderStatus:
    """Test OrderStatus parsing"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Created", OrderStatus.CREATED),
            ("Processing", OrderStatus.PROCESSING),
            ("Shipped", OrderStatus.SHIPPED),
            ("Delivered", OrderStatus.DELIVERED),
            ("Cancelled", OrderStatus.CANCELLED),
        ],
    )
    def test_parse_known_names(self, name, expected):
        """Test every status name parses to its member"""
        assert OrderStatus.parse(name) is expected

    @pytest.mark.parametrize("name", ["NOT_A_STATUS", "", "shipped", "SHIPPED", "2", None])
    def test_parse_unknown_names(self, name):
        """Test anything else parses to None without raising"""
        assert OrderStatus.parse(name) is None

    def test_str_is_name(self):
        """Test a status renders as its wire name"""
        assert str(OrderStatus.DELIVERED) == "Delivered"
        assert OrderStatus.DELIVERED == "Delivered"


class TestPagination:
    """Test Pagination validation"""

    def test_defaults(self):
        """Test the first page of ten"""
        pagination = Pagination()

        assert pagination.page == 1
        assert pagination.page_size == 10
        assert pagination.offset == 0

    def test_default_page_size_from_settings(self, monkeypatch):
        """Test the default page size follows the configured setting"""
        # Setup
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "3")
        reset_config()

        # Execute
        pagination = Pagination(page=2)

        # Verify
        assert pagination.page_size == 3
        assert pagination.offset == 3

    def test_explicit_page_size_wins(self, monkeypatch):
        """Test an explicit page size overrides the setting"""
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "3")
        reset_config()

        assert Pagination(page_size=7).page_size == 7

    @pytest.mark.parametrize(
        "page, page_size, offset",
        [(1, 5, 0), (2, 2, 2), (3, 10, 20)],
    )
    def test_offset(self, page, page_size, offset):
        """Test offset skips the earlier pages"""
        assert Pagination(page=page, page_size=page_size).offset == offset

    @pytest.mark.parametrize("page", [0, -1])
    def test_rejects_page_below_one(self, page):
        """Test pages start at 1"""
        with pytest.raises(ValidationError) as exc_info:
            Pagination(page=page)

        assert exc_info.value.field == "page"

    @pytest.mark.parametrize("page_size", [0, -5])
    def test_rejects_empty_page_size(self, page_size):
        """Test a page holds at least one order"""
        with pytest.raises(ValidationError) as exc_info:
            Pagination(page_size=page_size)

        assert exc_info.value.field == "page_size"


class TestOrderDtos:
    """Test entity to DTO mapping"""

    @pytest.fixture
    def order(self):
        """Order loaded together with its client"""
        return Order(
            id=7,
            cost=Decimal("12.30"),
            date=dt.date(2024, 1, 15),
            time=dt.time(8, 45),
            client_id=3,
            status=OrderStatus.PROCESSING,
            version=4,
            client=Client(id=3, name="Noa Katz", phone_number="0529876543", birthday=dt.date(2000, 2, 29)),
        )

    def test_order_summary(self, order):
        """Test the summary carries the status name and no client"""
        summary = OrderSummary.from_entity(order)

        assert summary == OrderSummary(
            id=7,
            cost=Decimal("12.30"),
            date=dt.date(2024, 1, 15),
            time=dt.time(8, 45),
            client_id=3,
            status="Processing",
        )
        assert not hasattr(summary, "client")

    def test_order_with_client(self, order):
        """Test the extended shape embeds the client"""
        extended = OrderWithClient.from_entity(order)

        assert extended.status == "Processing"
        assert extended.client == ClientInfo(
            id=3, name="Noa Katz", phone_number="0529876543", birthday=dt.date(2000, 2, 29)
        )

    def test_order_with_client_not_loaded(self, order):
        """Test the extended shape tolerates a missing client"""
        order.client = None

        assert OrderWithClient.from_entity(order).client is None

    def test_filter_defaults_to_no_predicates(self):
        """Test an empty filter sets nothing"""
        order_filter = OrderFilter()

        assert order_filter.cost is None
        assert order_filter.date is None
        assert order_filter.time is None
        assert order_filter.client_id is None
        assert order_filter.status is None
