# Settings modules
from .app_settings import AppSettings, get_app_settings
from .currency_settings import CurrencySettings
from .logging_settings import LoggingSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "CurrencySettings",
    "LoggingSettings",
]
