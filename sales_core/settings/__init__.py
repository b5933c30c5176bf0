# Settings package
from sales_core.settings.modules import (
    AppSettings,
    CurrencySettings,
    LoggingSettings,
    get_app_settings,
)

__all__ = ["get_app_settings", "AppSettings", "CurrencySettings", "LoggingSettings"]
