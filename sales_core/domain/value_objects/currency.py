"""
Currency metadata source.

Money needs to know how many fraction digits a currency uses before it can
normalize an amount. The active source is replaceable so an outer layer can
install a registry built from configuration.

CRITICAL: This file must contain ZERO imports from:
- pydantic
- pydantic_settings
"""
import re
import threading
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Protocol

from ..exceptions import InvalidArgumentError


CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")

# ISO 4217 minor units. Anything not listed here is unknown until an
# override registers it.
ISO_4217_FRACTION_DIGITS: Mapping[str, int] = MappingProxyType({
    # Zero-decimal currencies
    "CLP": 0, "ISK": 0, "JPY": 0, "KRW": 0, "PYG": 0, "UGX": 0,
    "VND": 0, "XAF": 0, "XOF": 0,
    # Three-decimal currencies
    "BHD": 3, "IQD": 3, "JOD": 3, "KWD": 3, "LYD": 3, "OMR": 3, "TND": 3,
    # Two-decimal currencies
    "AED": 2, "AUD": 2, "BRL": 2, "CAD": 2, "CHF": 2, "CNY": 2, "CZK": 2,
    "DKK": 2, "EGP": 2, "EUR": 2, "GBP": 2, "HKD": 2, "HUF": 2, "IDR": 2,
    "ILS": 2, "INR": 2, "MXN": 2, "MYR": 2, "NOK": 2, "NZD": 2, "PHP": 2,
    "PLN": 2, "RON": 2, "RUB": 2, "SAR": 2, "SEK": 2, "SGD": 2, "THB": 2,
    "TRY": 2, "TWD": 2, "UAH": 2, "USD": 2, "ZAR": 2,
})


def normalize_currency_code(code: str) -> str:
    """
    Trim and uppercase a currency code and check its shape.

    Raises:
        InvalidArgumentError: If the code is not three ASCII letters
    """
    if not isinstance(code, str):
        raise InvalidArgumentError(
            f"Currency must be 3-letter ISO code, got: {code!r}"
        )
    normalized = code.strip().upper()
    if not CURRENCY_CODE_PATTERN.match(normalized):
        raise InvalidArgumentError(
            f"Currency must be 3-letter ISO code, got: {code!r}"
        )
    return normalized


class CurrencyMetadataSource(Protocol):
    """Anything that can tell how many fraction digits a currency uses."""

    def fraction_digits(self, code: str) -> int:
        ...


class CurrencyRegistry:
    """
    In-memory currency table.

    Negative digit counts are clamped to zero when read, so a sloppy
    override cannot produce a negative quantization exponent.
    """

    def __init__(self, digits: Optional[Mapping[str, int]] = None) -> None:
        table = ISO_4217_FRACTION_DIGITS if digits is None else digits
        self._digits: Dict[str, int] = {
            normalize_currency_code(code): int(value) for code, value in table.items()
        }

    def fraction_digits(self, code: str) -> int:
        normalized = normalize_currency_code(code)
        try:
            return max(self._digits[normalized], 0)
        except KeyError:
            raise InvalidArgumentError(
                f"Unknown currency: {normalized}", context={"currency": normalized}
            ) from None

    def with_overrides(self, overrides: Mapping[str, int]) -> "CurrencyRegistry":
        """Return a new registry with the given entries added or replaced."""
        merged = dict(self._digits)
        for code, value in overrides.items():
            merged[normalize_currency_code(code)] = int(value)
        return CurrencyRegistry(merged)

    def known_currencies(self) -> frozenset:
        return frozenset(self._digits)


_lock = threading.Lock()
_active_source: CurrencyMetadataSource = CurrencyRegistry()


def get_currency_metadata() -> CurrencyMetadataSource:
    """Return the currency metadata source Money consults."""
    return _active_source


def set_currency_metadata(source: CurrencyMetadataSource) -> CurrencyMetadataSource:
    """
    Install a new currency metadata source.

    Args:
        source: Replacement source

    Returns:
        The previously active source, so callers can restore it
    """
    global _active_source
    with _lock:
        previous = _active_source
        _active_source = source
    return previous
