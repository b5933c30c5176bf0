from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from sales_core.settings.modules.currency_settings import CurrencySettings
from sales_core.settings.modules.logging_settings import LoggingSettings


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Each section reads its own environment variables when instantiated.
    """

    model_config = ConfigDict(extra="ignore")

    currency: CurrencySettings
    logging: LoggingSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings(
        currency=CurrencySettings(),
        logging=LoggingSettings(),
    )
