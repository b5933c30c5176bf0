"""Application service for sales reporting."""

import logging
from typing import Iterable, List, Optional

from sales_core.application.dtos.sales_dto import (
    ProductSnapshotDTO,
    SalesSummaryDTO,
    StatusBreakdownDTO,
)
from sales_core.application.services.sales_analyzer import SalesAnalyzer, distinct_orders
from sales_core.domain.entities import Order
from sales_core.domain.enums import OrderStatus
from sales_core.domain.exceptions import CurrencyMismatchError, EmptyOrderError
from sales_core.domain.value_objects import ProductSnapshot
from sales_core.settings import AppSettings, get_app_settings


logger = logging.getLogger(__name__)


class SalesReportService:
    """
    Application service for building sales summaries.

    Responsibilities:
    - Run the analyzer queries over one de-duplicated batch
    - Refuse batches that mix currencies
    - Transform results into DTOs
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        """Initialize sales report service.

        Args:
            settings: Application settings (cached app settings if omitted)
        """
        self._settings = settings or get_app_settings()

    def build_summary(self, orders: Iterable[Order]) -> SalesSummaryDTO:
        """Build a sales summary for a batch of orders.

        Args:
            orders: Orders to summarize; duplicates are dropped

        Returns:
            SalesSummaryDTO with per-status rows in lifecycle order

        Raises:
            EmptyOrderError: If a distinct order in the batch has no lines
            CurrencyMismatchError: If products are priced in several currencies
        """
        batch = distinct_orders(orders)
        logger.info(f"Building sales summary for {len(batch)} distinct order(s)")

        products = SalesAnalyzer.get_distinct_products_sold(batch)
        currency = self._report_currency(products)

        try:
            revenue_by_status = SalesAnalyzer.calculate_revenue_by_status(batch)
        except EmptyOrderError as e:
            logger.error(f"Sales summary aborted: {e}")
            raise

        groups = SalesAnalyzer.group_order_ids_by_status(batch)
        statuses = [
            StatusBreakdownDTO(
                status=status,
                order_count=len(groups[status]),
                order_ids=[str(order_id) for order_id in groups[status]],
                revenue=revenue_by_status[status],
            )
            for status in OrderStatus
            if status in groups
        ]

        return SalesSummaryDTO(
            currency=currency,
            distinct_order_count=len(batch),
            total_revenue=SalesAnalyzer.calculate_total_revenue(batch),
            statuses=statuses,
            products=[
                ProductSnapshotDTO(
                    sku=str(product.sku),
                    unit_price_amount=product.unit_price.amount,
                    unit_price_currency=product.currency,
                )
                for product in products
            ],
        )

    def _report_currency(self, products: List[ProductSnapshot]) -> str:
        currencies = sorted({product.currency for product in products})
        if len(currencies) > 1:
            logger.error(f"Sales summary aborted: mixed currencies {currencies}")
            raise CurrencyMismatchError(currencies[0], currencies[1])
        if currencies:
            return currencies[0]
        return self._settings.currency.default_currency
