"""Application DTOs for sales reporting."""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from sales_core.domain.enums import OrderStatus


class ProductSnapshotDTO(BaseModel):
    """DTO for a product sold."""

    sku: str = Field(..., description="Product SKU")
    unit_price_amount: Decimal = Field(..., ge=0, description="Unit price amount")
    unit_price_currency: str = Field(..., description="Currency code")

    model_config = {"frozen": True}


class StatusBreakdownDTO(BaseModel):
    """DTO for the orders and revenue of one status."""

    status: OrderStatus = Field(..., description="Order status")
    order_count: int = Field(..., ge=0, description="Distinct orders in this status")
    order_ids: List[str] = Field(default_factory=list, description="Order ids, first-seen order")
    revenue: Decimal = Field(..., ge=0, description="Gross revenue before discount")

    model_config = {"frozen": True}


class SalesSummaryDTO(BaseModel):
    """Response DTO for a sales summary."""

    currency: str = Field(..., description="Currency of all amounts")
    distinct_order_count: int = Field(..., ge=0, description="Orders after de-duplication")
    total_revenue: Decimal = Field(..., ge=0, description="Gross revenue before discount")
    statuses: List[StatusBreakdownDTO] = Field(default_factory=list, description="Per-status rows")
    products: List[ProductSnapshotDTO] = Field(default_factory=list, description="Distinct products sold")

    model_config = {"frozen": True}
