"""Infrastructure layer - logging and collaborator adapters."""

from .currency_registry import build_currency_registry, configure_currency_metadata
from .logging import get_logger

__all__ = ["build_currency_registry", "configure_currency_metadata", "get_logger"]
