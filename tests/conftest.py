"""Shared fixtures: deterministic identifiers and order builders."""
from typing import Dict, Optional
from uuid import UUID

import pytest

from sales_core.domain.entities import Order
from sales_core.domain.enums import OrderStatus
from sales_core.domain.value_objects import (
    CurrencyRegistry,
    DiscountId,
    LineId,
    LineKey,
    Money,
    OrderId,
    OrderLine,
    ProductSnapshot,
    Sku,
    set_currency_metadata,
    uuid7_from,
)
from sales_core.settings import get_app_settings


# 2026-01-01T00:00:00Z
START_MS = 1_767_225_600_000


class FixtureIdSource:
    """
    Deterministic UUIDv7 source.

    ``next_id`` hands out ids one millisecond apart; ``named`` returns the
    same id for the same fixture name.
    """

    def __init__(self, start_ms: int = START_MS) -> None:
        self._next_ms = start_ms
        self._by_name: Dict[str, UUID] = {}

    def next_id(self) -> UUID:
        value = uuid7_from(self._next_ms, 0, self._next_ms)
        self._next_ms += 1
        return value

    def named(self, name: str) -> UUID:
        if name not in self._by_name:
            self._by_name[name] = self.next_id()
        return self._by_name[name]

    def order_id(self, name: str) -> OrderId:
        return OrderId(self.named(f"order:{name}"))

    def line_id(self, name: str) -> LineId:
        return LineId(self.named(f"line:{name}"))

    def discount_id(self, name: str) -> DiscountId:
        return DiscountId(self.named(f"discount:{name}"))


class OrderBuilder:
    """Small helper for building snapshots, lines and orders in tests."""

    def __init__(self, ids: FixtureIdSource) -> None:
        self.ids = ids

    def product(self, sku: str, price: str, currency: str = "USD") -> ProductSnapshot:
        return ProductSnapshot(Sku(sku), Money.of(price, currency))

    def line(
        self,
        product: ProductSnapshot,
        quantity: int,
        name: Optional[str] = None,
        discount: Optional[DiscountId] = None,
    ) -> OrderLine:
        line_id = self.ids.line_id(name) if name else LineId(self.ids.next_id())
        return OrderLine(line_id, LineKey(product, discount), quantity)

    def order(self, name: str, status: OrderStatus, *lines: OrderLine, version: int = 0) -> Order:
        return Order.create(
            status=status,
            lines=lines,
            order_id=self.ids.order_id(name),
            version=version,
        )


@pytest.fixture
def ids() -> FixtureIdSource:
    return FixtureIdSource()


@pytest.fixture
def build(ids) -> OrderBuilder:
    return OrderBuilder(ids)


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Every test starts with ISO 4217 defaults and fresh settings."""
    previous = set_currency_metadata(CurrencyRegistry())
    get_app_settings.cache_clear()
    yield
    set_currency_metadata(previous)
    get_app_settings.cache_clear()
