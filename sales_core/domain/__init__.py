"""Domain layer - pure domain models, value objects and errors."""

from .entities import Order
from .enums import OrderStatus
from .exceptions import (
    CurrencyMismatchError,
    DomainError,
    EmptyOrderError,
    InvalidArgumentError,
    LineNotFoundError,
    OrderInvariantError,
)
from .value_objects import (
    DiscountId,
    LineId,
    LineKey,
    Money,
    OrderId,
    OrderLine,
    ProductSnapshot,
    Sku,
)

__all__ = [
    "Order",
    "OrderStatus",
    "CurrencyMismatchError",
    "DomainError",
    "EmptyOrderError",
    "InvalidArgumentError",
    "LineNotFoundError",
    "OrderInvariantError",
    "DiscountId",
    "LineId",
    "LineKey",
    "Money",
    "OrderId",
    "OrderLine",
    "ProductSnapshot",
    "Sku",
]
