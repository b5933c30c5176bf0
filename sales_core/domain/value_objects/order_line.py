"""Order line value objects: the merge key and the line itself."""
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InvalidArgumentError
from .identifiers import DiscountId, LineId
from .product_snapshot import ProductSnapshot
from .value_objects import Money


def require_positive_quantity(quantity: int, label: str = "Quantity") -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidArgumentError(f"{label} must be an integer, got: {quantity!r}")
    if quantity <= 0:
        raise InvalidArgumentError(f"{label} must be positive", context={label.lower(): quantity})


@dataclass(frozen=True)
class LineKey:
    """
    Composite identity of an order line.

    Two additions land on the same line iff their keys are equal: same
    product snapshot (SKU and unit price) and same discount.
    """
    product_snapshot: ProductSnapshot
    discount_id: Optional[DiscountId] = None  # None => no discount

    def __post_init__(self):
        if not isinstance(self.product_snapshot, ProductSnapshot):
            raise InvalidArgumentError("product_snapshot is required")
        if self.discount_id is not None and not isinstance(self.discount_id, DiscountId):
            raise InvalidArgumentError(
                f"discount_id must be a DiscountId, got: {type(self.discount_id).__name__}"
            )


@dataclass(frozen=True)
class OrderLine:
    """One line of an order. Quantity is always positive."""
    id: LineId
    key: LineKey
    quantity: int

    def __post_init__(self):
        if not isinstance(self.id, LineId):
            raise InvalidArgumentError("id must not be None")
        if not isinstance(self.key, LineKey):
            raise InvalidArgumentError("key is required")
        require_positive_quantity(self.quantity)

    def increase_by(self, delta: int) -> 'OrderLine':
        """Return a new line with quantity increased by ``delta``."""
        require_positive_quantity(delta, "Delta")
        return OrderLine(id=self.id, key=self.key, quantity=self.quantity + delta)

    def with_quantity(self, new_quantity: int) -> 'OrderLine':
        """Return a new line with the given absolute quantity."""
        require_positive_quantity(new_quantity)
        return OrderLine(id=self.id, key=self.key, quantity=new_quantity)

    def total_before_discount(self) -> Money:
        """Gross amount of the line before any discount rules are applied."""
        return self.key.product_snapshot.unit_price.multiply(self.quantity)
