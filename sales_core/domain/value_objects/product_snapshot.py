"""Product snapshot value object."""
from dataclasses import dataclass

from ..exceptions import InvalidArgumentError
from .sku import Sku
from .value_objects import Money


@dataclass(frozen=True)
class ProductSnapshot:
    """
    Product data captured at the moment a line is added.

    A snapshot is a copy, not a catalog reference: later price changes in a
    live catalog never reach lines that already hold a snapshot.
    """
    sku: Sku
    unit_price: Money

    def __post_init__(self):
        if isinstance(self.sku, str):
            object.__setattr__(self, 'sku', Sku(self.sku))
        if not isinstance(self.sku, Sku):
            raise InvalidArgumentError("sku is required")
        if not isinstance(self.unit_price, Money):
            raise InvalidArgumentError("unit_price is required")
        self.unit_price.require_non_negative("Unit price cannot be negative")

    @property
    def currency(self) -> str:
        return self.unit_price.currency
