"""Domain value objects."""

from .currency import (
    CurrencyMetadataSource,
    CurrencyRegistry,
    get_currency_metadata,
    set_currency_metadata,
)
from .identifiers import (
    DiscountId,
    IdentifierSource,
    LineId,
    OrderId,
    TimeOrderedIdSource,
    default_id_source,
    uuid7_from,
)
from .value_objects import Money
from .sku import Sku
from .product_snapshot import ProductSnapshot
from .order_line import LineKey, OrderLine

__all__ = [
    "CurrencyMetadataSource",
    "CurrencyRegistry",
    "get_currency_metadata",
    "set_currency_metadata",
    "DiscountId",
    "IdentifierSource",
    "LineId",
    "OrderId",
    "TimeOrderedIdSource",
    "default_id_source",
    "uuid7_from",
    "Money",
    "Sku",
    "ProductSnapshot",
    "LineKey",
    "OrderLine",
]
