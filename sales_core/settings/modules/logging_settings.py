from __future__ import annotations

from pydantic import Field, field_validator

from sales_core.settings.base import SalesBaseSettings


_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class LoggingSettings(SalesBaseSettings):
    """Logging settings (SALES_LOG_LEVEL)."""

    log_level: str = Field(default="INFO", alias="SALES_LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in _LEVELS:
            raise ValueError(f"log_level must be one of {_LEVELS}, got: {v}")
        return v
