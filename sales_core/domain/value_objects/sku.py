"""Stock keeping unit value object."""
import re
from dataclasses import dataclass

from ..exceptions import InvalidArgumentError


SKU_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9_-]{1,63}$")


@dataclass(frozen=True)
class Sku:
    """
    Product SKU.

    Input is trimmed and uppercased before validation, so " p-1 " and "P-1"
    are the same SKU.
    Format: starts with a letter or digit, then 1-63 of [A-Z0-9_-]
    Examples:
    - P-1
    - BOOK_0042
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidArgumentError("sku is required")

        normalized = self.value.strip().upper()
        if not SKU_PATTERN.match(normalized):
            raise InvalidArgumentError(
                f"Invalid SKU format: {self.value!r}", context={"sku": normalized}
            )
        object.__setattr__(self, 'value', normalized)

    def __str__(self) -> str:
        return self.value
