"""
Sales analyzer.

Stateless aggregation queries over collections of orders.

Every query first drops structurally identical orders: two orders are
duplicates only if id, status, version and lines are all equal. This is
deliberately stricter than ``Order.__eq__`` (id only): the same order id
recorded with different contents is two different facts for reporting,
while a re-submitted identical record is counted once.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from sales_core.domain.entities import Order
from sales_core.domain.enums import OrderStatus
from sales_core.domain.value_objects import OrderId, ProductSnapshot


logger = logging.getLogger(__name__)


def distinct_orders(orders: Iterable[Order]) -> List[Order]:
    """
    Structurally distinct orders, in first-seen order.

    Args:
        orders: Orders to de-duplicate

    Returns:
        List keeping the first occurrence of each distinct order state
    """
    seen = set()
    result: List[Order] = []
    dropped = 0
    for order in orders:
        state = order.state_tuple()
        if state in seen:
            dropped += 1
            continue
        seen.add(state)
        result.append(order)

    if dropped:
        logger.debug(f"Dropped {dropped} duplicate order record(s), {len(result)} distinct")
    return result


class SalesAnalyzer:
    """Aggregation queries. Has no state; all methods are static."""

    @staticmethod
    def count_orders_by_status(orders: Iterable[Order], status: OrderStatus) -> int:
        """
        Count distinct orders with the given status.

        Args:
            orders: Orders to inspect
            status: Status to count

        Returns:
            Number of distinct orders in ``status``
        """
        return sum(1 for order in distinct_orders(orders) if order.status == status)

    @staticmethod
    def calculate_total_revenue(orders: Iterable[Order]) -> Decimal:
        """
        Gross revenue of all distinct, non-empty orders.

        Orders without lines are skipped, so this never raises EmptyOrderError.
        """
        return sum(
            (
                order.total_before_discount().amount
                for order in distinct_orders(orders)
                if not order.is_empty()
            ),
            Decimal(0),
        )

    @staticmethod
    def get_distinct_products_sold(orders: Iterable[Order]) -> List[ProductSnapshot]:
        """Distinct product snapshots across all lines, in first-seen order."""
        lines = dict.fromkeys(
            line for order in distinct_orders(orders) for line in order.lines
        )
        products = dict.fromkeys(line.key.product_snapshot for line in lines)
        return list(products)

    @staticmethod
    def group_order_ids_by_status(orders: Iterable[Order]) -> Dict[OrderStatus, List[OrderId]]:
        """
        Order ids of distinct orders partitioned by status.

        Statuses without orders are absent from the result. Within a status,
        ids keep first-seen order.
        """
        groups: Dict[OrderStatus, List[OrderId]] = {}
        for order in distinct_orders(orders):
            groups.setdefault(order.status, []).append(order.id)
        return groups

    @staticmethod
    def calculate_revenue_by_status(orders: Iterable[Order]) -> Dict[OrderStatus, Decimal]:
        """
        Gross revenue per status across distinct orders.

        Unlike ``calculate_total_revenue`` this does not skip empty orders:
        a single distinct order without lines fails the whole call.

        Raises:
            EmptyOrderError: If any distinct order has no lines
        """
        revenue: Dict[OrderStatus, Decimal] = {}
        for order in distinct_orders(orders):
            amount = order.total_before_discount().amount
            revenue[order.status] = revenue.get(order.status, Decimal(0)) + amount
        return revenue
