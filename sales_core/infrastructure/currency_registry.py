"""
Currency metadata adapter.

Builds the currency registry Money consults from application settings.
"""
from typing import Optional

from sales_core.domain.exceptions import InvalidArgumentError
from sales_core.domain.value_objects import CurrencyRegistry, set_currency_metadata
from sales_core.infrastructure.logging import get_logger
from sales_core.settings import AppSettings, get_app_settings


def build_currency_registry(settings: Optional[AppSettings] = None) -> CurrencyRegistry:
    """
    Create an ISO 4217 registry with configured overrides applied.

    Args:
        settings: Application settings (cached app settings if omitted)

    Returns:
        CurrencyRegistry that also knows the configured default currency

    Raises:
        InvalidArgumentError: If the default currency has no fraction digits
    """
    settings = settings or get_app_settings()
    registry = CurrencyRegistry().with_overrides(settings.currency.currency_fraction_digits)

    default = settings.currency.default_currency
    if default not in registry.known_currencies():
        raise InvalidArgumentError(
            f"Default currency {default} has no fraction digits configured; "
            f"add it to SALES_CURRENCY_FRACTION_DIGITS"
        )
    return registry


def configure_currency_metadata(settings: Optional[AppSettings] = None) -> CurrencyRegistry:
    """Build the registry from settings and make Money use it."""
    settings = settings or get_app_settings()
    logger = get_logger(__name__, settings)

    registry = build_currency_registry(settings)
    set_currency_metadata(registry)

    overrides = settings.currency.currency_fraction_digits
    if overrides:
        logger.info(f"Currency registry configured with overrides: {sorted(overrides)}")
    else:
        logger.debug("Currency registry configured with ISO 4217 defaults")
    return registry
