"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..exceptions import CurrencyMismatchError, InvalidArgumentError
from .currency import get_currency_metadata, normalize_currency_code


AmountLike = Union[Decimal, int, str, float]


def _to_decimal(amount: AmountLike) -> Decimal:
    if amount is None or isinstance(amount, bool):
        raise InvalidArgumentError("amount is required")
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            # Through str() so 10.005 stays 10.005 instead of its binary expansion
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise InvalidArgumentError(f"Invalid amount: {amount!r}") from None
    if not value.is_finite():
        raise InvalidArgumentError(f"Amount must be finite, got: {amount!r}")
    return value


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value with currency.

    The amount is always stored at the currency's canonical scale, rounded
    half-up at construction:
    - Money("10.005", "USD") -> 10.01 USD
    - Money("1500.4", "JPY") -> 1500 JPY

    CRITICAL: Always use Decimal, never float!
    """
    amount: Decimal
    currency: str

    def __post_init__(self):
        currency = normalize_currency_code(self.currency)
        digits = get_currency_metadata().fraction_digits(currency)
        value = _to_decimal(self.amount)
        try:
            value = value.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise InvalidArgumentError(
                f"Amount {value} cannot be represented in {currency}"
            ) from None

        object.__setattr__(self, 'currency', currency)
        object.__setattr__(self, 'amount', value)

    @classmethod
    def of(cls, amount: AmountLike, currency: str) -> 'Money':
        """Factory method to create money from amount and currency values."""
        return cls(amount=amount, currency=currency)

    @classmethod
    def zero(cls, currency: str) -> 'Money':
        return cls(amount=Decimal(0), currency=currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: 'Money') -> 'Money':
        """Add another money value in the same currency."""
        self._require_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def multiply(self, factor: int) -> 'Money':
        """Multiply by a non-negative integer factor."""
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise InvalidArgumentError(f"factor must be an integer, got: {factor!r}")
        if factor < 0:
            raise InvalidArgumentError("factor must be >= 0", context={"factor": factor})
        return Money(amount=self.amount * factor, currency=self.currency)

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __mul__(self, factor: int) -> 'Money':
        if isinstance(factor, bool) or not isinstance(factor, int):
            return NotImplemented
        return self.multiply(factor)

    __rmul__ = __mul__

    def require_non_negative(self, message: str) -> 'Money':
        """Return self, or raise with ``message`` when the amount is negative."""
        if self.is_negative():
            raise InvalidArgumentError(message, context={"amount": str(self.amount)})
        return self

    def is_negative(self) -> bool:
        """Check if amount is negative."""
        return self.amount < 0

    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.amount == 0

    def _require_same_currency(self, other: 'Money') -> None:
        if not isinstance(other, Money):
            raise InvalidArgumentError(f"Expected Money, got: {type(other).__name__}")
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)
