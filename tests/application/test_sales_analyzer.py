"""Tests for SalesAnalyzer queries."""
import logging
from decimal import Decimal

import pytest

from sales_core.application.services.sales_analyzer import SalesAnalyzer, distinct_orders
from sales_core.domain.entities import Order
from sales_core.domain.enums import OrderStatus
from sales_core.domain.exceptions import EmptyOrderError
from sales_core.domain.value_objects import OrderId, uuid7_from


@pytest.fixture
def scenario(build):
    """Two orders: NEW with P-1 x2 and SHIPPED with P-2 x1, P-3 x2."""
    o1 = build.order("o-1", OrderStatus.NEW, build.line(build.product("P-1", "10.00"), 2))
    o2 = build.order(
        "o-2",
        OrderStatus.SHIPPED,
        build.line(build.product("P-2", "20.00"), 1),
        build.line(build.product("P-3", "7.50"), 2),
    )
    return o1, o2


def _copy(order: Order) -> Order:
    """Field-for-field identical, separately constructed order."""
    return Order(
        id=order.id,
        status=order.status,
        line_map=dict(order.line_map),
        primary_line_for_key=dict(order.primary_line_for_key),
        version=order.version,
    )


class TestDistinctOrders:
    """Structural de-duplication."""

    def test_identical_records_collapse(self, scenario):
        o1, o2 = scenario
        assert distinct_orders([o1, _copy(o1), o2]) == [o1, o2]

    def test_keeps_first_seen_order(self, scenario):
        o1, o2 = scenario
        result = distinct_orders([o2, o1, o2])
        assert [order.id for order in result] == [o2.id, o1.id]

    def test_same_id_with_different_contents_is_kept(self, scenario, build, ids):
        o1, _ = scenario
        revised = o1.add(build.product("P-9", "1.00"), 1, id_source=ids)
        assert len(distinct_orders([o1, revised])) == 2

    def test_same_lines_in_different_order_collapse(self, build):
        a = build.line(build.product("P-1", "5.00"), 1, name="a")
        b = build.line(build.product("P-2", "10.00"), 1, name="b")
        first = build.order("o-1", OrderStatus.NEW, a, b)
        resubmitted = build.order("o-1", OrderStatus.NEW, b, a)

        assert distinct_orders([first, resubmitted]) == [first]
        assert SalesAnalyzer.count_orders_by_status([first, resubmitted], OrderStatus.NEW) == 1
        assert SalesAnalyzer.calculate_total_revenue([first, resubmitted]) == Decimal("15.00")

    def test_accepts_any_iterable(self, scenario):
        o1, o2 = scenario
        assert len(distinct_orders(iter([o1, o2, o1]))) == 2

    def test_logs_dropped_duplicates(self, scenario, caplog):
        o1, _ = scenario
        with caplog.at_level(logging.DEBUG, logger="sales_core.application.services.sales_analyzer"):
            distinct_orders([o1, o1])
        assert "Dropped 1 duplicate" in caplog.text


class TestCountOrdersByStatus:
    """countOrdersByStatus counts distinct orders only."""

    def test_counts_duplicates_once(self, build):
        new_order = build.order("o-1", OrderStatus.NEW, build.line(build.product("P-1", "10.00"), 1, name="l1"))
        duplicate = build.order("o-1", OrderStatus.NEW, build.line(build.product("P-1", "10.00"), 1, name="l1"))
        shipped = build.order("o-2", OrderStatus.SHIPPED, build.line(build.product("P-2", "20.00"), 2))
        orders = [new_order, duplicate, shipped]

        assert SalesAnalyzer.count_orders_by_status(orders, OrderStatus.NEW) == 1
        assert SalesAnalyzer.count_orders_by_status(orders, OrderStatus.SHIPPED) == 1
        assert SalesAnalyzer.count_orders_by_status(orders, OrderStatus.PAID) == 0

    def test_same_data_on_different_days_counts_twice(self, build):
        book = build.product("P-1", "10.00")
        first_day = Order.create(
            order_id=OrderId(uuid7_from(1_767_225_600_000)),
            lines=[build.line(book, 1, name="l1")],
        )
        second_day = Order.create(
            order_id=OrderId(uuid7_from(1_767_312_000_000)),
            lines=[build.line(book, 1, name="l1")],
        )
        assert SalesAnalyzer.count_orders_by_status([first_day, second_day], OrderStatus.NEW) == 2

    def test_empty_input(self):
        assert SalesAnalyzer.count_orders_by_status([], OrderStatus.NEW) == 0


class TestCalculateTotalRevenue:
    """calculateTotalRevenue sums distinct non-empty orders."""

    def test_scenario_total(self, scenario):
        assert SalesAnalyzer.calculate_total_revenue(list(scenario)) == Decimal("55.00")

    def test_duplicates_do_not_change_total(self, scenario):
        o1, o2 = scenario
        assert SalesAnalyzer.calculate_total_revenue([o1, _copy(o1), o2]) == (
            SalesAnalyzer.calculate_total_revenue([o1, o2])
        )

    def test_empty_orders_are_skipped(self, scenario, ids):
        empty = Order.create(order_id=ids.order_id("empty"))
        assert SalesAnalyzer.calculate_total_revenue([*scenario, empty]) == Decimal("55.00")

    def test_empty_input_is_zero(self):
        assert SalesAnalyzer.calculate_total_revenue([]) == Decimal("0")


class TestGetDistinctProductsSold:
    """Distinct snapshots in first-seen order."""

    def test_scenario_products(self, scenario):
        products = SalesAnalyzer.get_distinct_products_sold(list(scenario))
        assert [str(p.sku) for p in products] == ["P-1", "P-2", "P-3"]

    def test_equal_snapshots_collapse(self, build):
        book = build.product("P-1", "10.00")
        laptop = build.product("P-2", "900.00")
        equal_laptop = build.product("P-2", "900.00")
        first = build.order("o-1", OrderStatus.NEW, build.line(book, 1), build.line(laptop, 1))
        second = build.order("o-2", OrderStatus.SHIPPED, build.line(book, 3), build.line(equal_laptop, 2))

        assert SalesAnalyzer.get_distinct_products_sold([first, second]) == [book, laptop]

    def test_same_sku_at_different_prices_is_two_products(self, build):
        order = build.order(
            "o-1",
            OrderStatus.NEW,
            build.line(build.product("P-1", "10.00"), 1),
            build.line(build.product("P-1", "9.00"), 1),
        )
        assert len(SalesAnalyzer.get_distinct_products_sold([order])) == 2


class TestGroupOrderIdsByStatus:
    """Grouping never allocates empty groups."""

    def test_scenario_groups(self, scenario):
        o1, o2 = scenario
        assert SalesAnalyzer.group_order_ids_by_status([o1, o2]) == {
            OrderStatus.NEW: [o1.id],
            OrderStatus.SHIPPED: [o2.id],
        }

    def test_missing_statuses_are_absent(self, scenario):
        groups = SalesAnalyzer.group_order_ids_by_status(list(scenario))
        assert OrderStatus.PAID not in groups
        assert OrderStatus.RECEIVED not in groups

    def test_ids_keep_first_seen_order(self, build):
        product = build.product("P-1", "1.00")
        orders = [build.order(name, OrderStatus.PAID, build.line(product, 1)) for name in ("c", "a", "b")]
        groups = SalesAnalyzer.group_order_ids_by_status(orders)
        assert groups[OrderStatus.PAID] == [o.id for o in orders]

    def test_empty_input(self):
        assert SalesAnalyzer.group_order_ids_by_status([]) == {}


class TestCalculateRevenueByStatus:
    """Per-status revenue fails on empty orders."""

    def test_scenario_revenue(self, scenario):
        assert SalesAnalyzer.calculate_revenue_by_status(list(scenario)) == {
            OrderStatus.NEW: Decimal("20.00"),
            OrderStatus.SHIPPED: Decimal("35.00"),
        }

    def test_sums_within_status(self, build):
        product = build.product("P-1", "5.00")
        orders = [
            build.order("a", OrderStatus.PAID, build.line(product, 1)),
            build.order("b", OrderStatus.PAID, build.line(product, 3)),
        ]
        assert SalesAnalyzer.calculate_revenue_by_status(orders) == {OrderStatus.PAID: Decimal("20.00")}

    def test_empty_input(self):
        assert SalesAnalyzer.calculate_revenue_by_status([]) == {}

    def test_empty_order_fails_whole_batch(self, scenario, ids):
        empty = Order.create(order_id=ids.order_id("empty"))
        with pytest.raises(EmptyOrderError):
            SalesAnalyzer.calculate_revenue_by_status([*scenario, empty])
