from __future__ import annotations

from typing import Dict

from pydantic import Field, field_validator

from sales_core.settings.base import SalesBaseSettings


class CurrencySettings(SalesBaseSettings):
    """
    Currency metadata settings.

    The built-in ISO 4217 table covers the common currencies; anything
    missing or different is supplied as JSON, e.g.
        SALES_CURRENCY_FRACTION_DIGITS='{"BTC": 8, "JPY": 0}'
    """

    default_currency: str = Field(default="USD", alias="SALES_DEFAULT_CURRENCY")
    currency_fraction_digits: Dict[str, int] = Field(
        default_factory=dict, alias="SALES_CURRENCY_FRACTION_DIGITS"
    )

    @field_validator("default_currency")
    @classmethod
    def normalize_default_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError(f"Currency must be 3-letter ISO code, got: {v}")
        return v

    @field_validator("currency_fraction_digits")
    @classmethod
    def validate_fraction_digits(cls, v: Dict[str, int]) -> Dict[str, int]:
        normalized: Dict[str, int] = {}
        for code, digits in v.items():
            if digits < 0:
                raise ValueError(f"Fraction digits for {code} cannot be negative: {digits}")
            normalized[code.strip().upper()] = digits
        return normalized
