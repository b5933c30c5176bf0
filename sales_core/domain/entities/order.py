"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- pydantic
- pydantic_settings

An Order never changes in place. ``add``, ``set_quantity``, ``with_status``
and ``with_version`` all return a successor Order built through the same
constructor, so every successor is validated exactly like a fresh one and
the receiver stays a valid historic snapshot.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from functools import reduce
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ..enums import OrderStatus
from ..exceptions import (
    EmptyOrderError,
    InvalidArgumentError,
    LineNotFoundError,
    OrderInvariantError,
)
from ..value_objects import (
    DiscountId,
    IdentifierSource,
    LineId,
    LineKey,
    Money,
    OrderId,
    OrderLine,
    ProductSnapshot,
)
from ..value_objects.order_line import require_positive_quantity


def _coerce_status(status: Any) -> OrderStatus:
    if isinstance(status, OrderStatus):
        return status
    try:
        return OrderStatus(status)
    except ValueError:
        raise InvalidArgumentError(f"Invalid order status: {status!r}") from None


def _require_version(version: Any) -> int:
    if isinstance(version, bool) or not isinstance(version, int):
        raise InvalidArgumentError(f"version must be an integer, got: {version!r}")
    if version < 0:
        raise InvalidArgumentError("version must be >= 0", context={"version": version})
    return version


@dataclass(frozen=True, eq=False)
class Order:
    """
    Order aggregate root.

    Owns its lines (insertion-ordered, keyed by LineId) plus an index from
    LineKey to the line that currently represents that key. Adding a
    product/discount pair that is already present merges into the existing
    line instead of creating a second one.

    ``version`` is carried for an outer persistence layer doing optimistic
    concurrency checks; the aggregate neither bumps nor compares it.

    Equality and hashing use the OrderId only: two revisions of the same
    order are equal. Use ``version`` or ``same_state_as`` to detect changes.
    """
    id: OrderId
    status: OrderStatus
    line_map: Mapping[LineId, OrderLine] = field(default_factory=dict)
    primary_line_for_key: Mapping[LineKey, LineId] = field(default_factory=dict)
    version: int = 0

    def __post_init__(self):
        if not isinstance(self.id, OrderId):
            raise InvalidArgumentError("Order ID is required")
        object.__setattr__(self, 'status', _coerce_status(self.status))
        _require_version(self.version)

        lines = dict(self.line_map or {})
        index = dict(self.primary_line_for_key or {})
        self._check_consistency(lines, index)

        if not lines and self.status is OrderStatus.SHIPPED:
            raise OrderInvariantError(
                "A shipped order must have at least one line",
                context={"order_id": str(self.id)},
            )

        object.__setattr__(self, 'line_map', MappingProxyType(lines))
        object.__setattr__(self, 'primary_line_for_key', MappingProxyType(index))

    def _check_consistency(
        self, lines: Dict[LineId, OrderLine], index: Dict[LineKey, LineId]
    ) -> None:
        """Lines and key index must describe the same set of lines."""
        for line_id, line in lines.items():
            if not isinstance(line, OrderLine) or line.id != line_id:
                raise OrderInvariantError(
                    f"Line map entry {line_id} does not hold its own line",
                    context={"order_id": str(self.id)},
                )

        for key, line_id in index.items():
            line = lines.get(line_id)
            if line is None:
                raise OrderInvariantError(
                    f"Key index points at missing line {line_id}",
                    context={"order_id": str(self.id)},
                )
            if line.key != key:
                raise OrderInvariantError(
                    f"Key index entry does not match line {line_id}",
                    context={"order_id": str(self.id)},
                )

        if len(index) != len(lines):
            raise OrderInvariantError(
                "Every line must be the primary line of exactly one key",
                context={"order_id": str(self.id), "lines": len(lines), "keys": len(index)},
            )

    # =========================================================================
    # FACTORY
    # =========================================================================

    @classmethod
    def create(
        cls,
        status: OrderStatus = OrderStatus.NEW,
        lines: Iterable[OrderLine] = (),
        order_id: Optional[OrderId] = None,
        version: int = 0,
        id_source: Optional[IdentifierSource] = None,
    ) -> 'Order':
        """
        Factory method to create an Order from ready-made lines.

        Args:
            status: Initial status (SHIPPED requires at least one line)
            lines: Initial lines; their keys must be distinct
            order_id: Identifier to use (a fresh one is generated if omitted)
            version: Initial optimistic-concurrency version
            id_source: Identifier source for the generated OrderId

        Returns:
            New Order instance
        """
        line_map: Dict[LineId, OrderLine] = {}
        index: Dict[LineKey, LineId] = {}
        for line in lines:
            if not isinstance(line, OrderLine):
                raise InvalidArgumentError(
                    f"Expected OrderLine, got: {type(line).__name__}"
                )
            if line.id in line_map:
                raise OrderInvariantError(f"Duplicate line id: {line.id}")
            if line.key in index:
                raise OrderInvariantError(
                    f"Duplicate line key for SKU {line.key.product_snapshot.sku}"
                )
            line_map[line.id] = line
            index[line.key] = line.id

        return cls(
            id=order_id or OrderId.generate(id_source),
            status=status,
            line_map=line_map,
            primary_line_for_key=index,
            version=version,
        )

    # =========================================================================
    # MUTATION ALGEBRA (every method returns a new Order)
    # =========================================================================

    def add(
        self,
        product_snapshot: ProductSnapshot,
        quantity: int,
        discount_id: Optional[DiscountId] = None,
        *,
        id_source: Optional[IdentifierSource] = None,
    ) -> 'Order':
        """
        Add ``quantity`` units of a product, merging by line key.

        Args:
            product_snapshot: Product data captured now
            quantity: Units to add (must be > 0)
            discount_id: Discount applied to the line, None for no discount
            id_source: Identifier source for a newly allocated LineId

        Returns:
            Successor Order; id, status and version are unchanged

        Raises:
            InvalidArgumentError: If quantity <= 0 or the product is missing
        """
        require_positive_quantity(quantity)
        key = LineKey(product_snapshot, discount_id)

        lines = dict(self.line_map)
        index = dict(self.primary_line_for_key)

        existing_id = index.get(key)
        if existing_id is not None:
            lines[existing_id] = lines[existing_id].increase_by(quantity)
        else:
            line_id = LineId.generate(id_source)
            lines[line_id] = OrderLine(id=line_id, key=key, quantity=quantity)
            index[key] = line_id

        return replace(self, line_map=lines, primary_line_for_key=index)

    def set_quantity(
        self,
        product_snapshot: ProductSnapshot,
        quantity: int,
        discount_id: Optional[DiscountId] = None,
    ) -> 'Order':
        """
        Set the absolute quantity of an existing line.

        A quantity of zero or less removes the line (and its key). Removing
        the last line of a SHIPPED order is rejected like any other attempt
        to build an empty shipped order.

        Raises:
            LineNotFoundError: If no line matches (product_snapshot, discount_id)
            OrderInvariantError: If the result would be an empty SHIPPED order
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidArgumentError(f"Quantity must be an integer, got: {quantity!r}")
        key = LineKey(product_snapshot, discount_id)

        lines = dict(self.line_map)
        index = dict(self.primary_line_for_key)

        line_id = index.get(key)
        if line_id is None:
            raise self._line_not_found(key)

        if quantity <= 0:
            del lines[line_id]
            del index[key]
        else:
            lines[line_id] = lines[line_id].with_quantity(quantity)

        return replace(self, line_map=lines, primary_line_for_key=index)

    def with_status(self, status: OrderStatus) -> 'Order':
        """Successor with a different status. Transition policy belongs to the caller."""
        return replace(self, status=_coerce_status(status))

    def with_version(self, version: int) -> 'Order':
        """Successor carrying ``version``. Bump policy belongs to the caller."""
        return replace(self, version=_require_version(version))

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def lines(self) -> Tuple[OrderLine, ...]:
        """Current lines in insertion order."""
        return tuple(self.line_map.values())

    @property
    def line_count(self) -> int:
        return len(self.line_map)

    def is_empty(self) -> bool:
        return not self.line_map

    def line_for(
        self, product_snapshot: ProductSnapshot, discount_id: Optional[DiscountId] = None
    ) -> OrderLine:
        """
        Look up the line for a product/discount pair.

        Raises:
            LineNotFoundError: If the order has no such line
        """
        key = LineKey(product_snapshot, discount_id)
        line_id = self.primary_line_for_key.get(key)
        if line_id is None:
            raise self._line_not_found(key)
        return self.line_map[line_id]

    def total_before_discount(self) -> Money:
        """
        Sum of unit price x quantity over all lines, in line order.

        Raises:
            EmptyOrderError: If the order has no lines
            CurrencyMismatchError: If lines are priced in different currencies
        """
        if not self.line_map:
            raise EmptyOrderError(
                "Cannot total an empty order", context={"order_id": str(self.id)}
            )
        return reduce(Money.add, (line.total_before_discount() for line in self.lines))

    def creation_instant(self) -> datetime:
        """Creation instant encoded in the order identifier."""
        return self.id.creation_instant()

    def state_tuple(self) -> tuple:
        """Hashable view of every observable field. Line order does not matter."""
        return (self.id, self.status, self.version, frozenset(self.line_map.items()))

    def same_state_as(self, other: 'Order') -> bool:
        """Field-for-field comparison, unlike ``==`` which compares ids only."""
        return isinstance(other, Order) and self.state_tuple() == other.state_tuple()

    # =========================================================================
    # IDENTITY
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"Order(id={self.id}, status={self.status.value}, "
            f"version={self.version}, lines={len(self.line_map)})"
        )

    def _line_not_found(self, key: LineKey) -> LineNotFoundError:
        return LineNotFoundError(
            f"Line not found for SKU {key.product_snapshot.sku}",
            context={
                "order_id": str(self.id),
                "sku": str(key.product_snapshot.sku),
                "discount_id": str(key.discount_id) if key.discount_id else None,
            },
        )
