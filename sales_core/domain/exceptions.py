"""
Domain exceptions and error hierarchy.

Every failure in the core is local and synchronous: the offending call
raises, and all previously constructed values stay valid.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base exception for sales domain errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class InvalidArgumentError(DomainError, ValueError):
    """A value object or operation received an argument it cannot accept."""
    pass


class CurrencyMismatchError(InvalidArgumentError):
    """Money arithmetic across two different currencies."""

    def __init__(self, left: str, right: str):
        super().__init__(
            f"Currency mismatch: {left} vs {right}",
            context={"left": left, "right": right},
        )
        self.left = left
        self.right = right


class OrderInvariantError(DomainError, ValueError):
    """An Order would end up in a state its invariants forbid."""
    pass


class EmptyOrderError(OrderInvariantError):
    """A total was requested for an order that has no lines."""
    pass


class LineNotFoundError(DomainError, LookupError):
    """No line in the order matches the requested line key."""
    pass
