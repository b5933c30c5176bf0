"""
Time-ordered identifiers.

OrderId and LineId wrap a version-7 UUID: the top 48 bits carry the Unix
timestamp in milliseconds, the next 12 bits a per-millisecond counter, and the
remainder is random. Values generated by one source compare strictly in
creation order, and the creation instant can be read back from the id alone.

The generator is injectable: anything with a ``next_id() -> UUID`` method can
stand in for the default source (tests use a deterministic one).
"""
import secrets
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol, Union
from uuid import UUID

from ..exceptions import InvalidArgumentError


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MAX_TIMESTAMP_MS = (1 << 48) - 1
_MAX_COUNTER = (1 << 12) - 1
_RANDOM_MASK = (1 << 62) - 1


def uuid7_from(unix_ms: int, counter: int = 0, random_bits: int = 0) -> UUID:
    """
    Assemble a version-7 UUID from its parts.

    Args:
        unix_ms: Milliseconds since the Unix epoch (48 bits)
        counter: Sequence within the millisecond (12 bits)
        random_bits: Trailing random payload (62 bits)

    Returns:
        UUID with version 7 and the RFC 4122 variant
    """
    if not 0 <= unix_ms <= _MAX_TIMESTAMP_MS:
        raise InvalidArgumentError(f"Timestamp out of range: {unix_ms}")
    if not 0 <= counter <= _MAX_COUNTER:
        raise InvalidArgumentError(f"Counter out of range: {counter}")

    value = unix_ms << 80
    value |= 0x7 << 76
    value |= counter << 64
    value |= 0b10 << 62
    value |= random_bits & _RANDOM_MASK
    return UUID(int=value)


def timestamp_ms_of(value: UUID) -> int:
    """Milliseconds since the epoch encoded in a version-7 UUID."""
    return value.int >> 80


def instant_of(value: UUID) -> datetime:
    """Creation instant (UTC, millisecond precision) of a version-7 UUID."""
    return _EPOCH + timedelta(milliseconds=timestamp_ms_of(value))


class IdentifierSource(Protocol):
    """Produces globally unique, time-ordered UUIDs on demand."""

    def next_id(self) -> UUID:
        ...


def _system_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class TimeOrderedIdSource:
    """
    Thread-safe version-7 UUID generator.

    Ids are strictly increasing per source even when the wall clock stalls or
    steps backwards: the source keeps the last (millisecond, counter) pair and
    only ever moves forward from it. When the 12-bit counter is exhausted the
    logical millisecond advances by one.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        random_bits: Optional[Callable[[], int]] = None,
    ) -> None:
        self._clock = clock or _system_clock_ms
        self._random_bits = random_bits or (lambda: secrets.randbits(62))
        self._lock = threading.Lock()
        self._last_ms = -1
        self._counter = 0

    def next_id(self) -> UUID:
        with self._lock:
            now = self._clock()
            if now > self._last_ms:
                self._last_ms = now
                self._counter = 0
            else:
                self._counter += 1
                if self._counter > _MAX_COUNTER:
                    self._last_ms += 1
                    self._counter = 0
            return uuid7_from(self._last_ms, self._counter, self._random_bits())


_default_source = TimeOrderedIdSource()


def default_id_source() -> IdentifierSource:
    return _default_source


def _coerce_uuid(value: Union[UUID, str], label: str) -> UUID:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            raise InvalidArgumentError(f"{label} is not a valid UUID: {value!r}") from None
    raise InvalidArgumentError(f"{label} is required")


@dataclass(frozen=True, order=True)
class _TimeOrderedId:
    """Shared behaviour of OrderId and LineId."""

    value: UUID

    def __post_init__(self):
        label = type(self).__name__
        uuid_value = _coerce_uuid(self.value, label)
        if uuid_value.version != 7:
            raise InvalidArgumentError(
                f"{label} must be a UUIDv7", context={"value": str(uuid_value)}
            )
        object.__setattr__(self, "value", uuid_value)

    @classmethod
    def generate(cls, source: Optional[IdentifierSource] = None):
        """Allocate a fresh identifier from ``source`` (default generator if omitted)."""
        return cls((source or default_id_source()).next_id())

    @classmethod
    def from_string(cls, value: str):
        return cls(_coerce_uuid(value, cls.__name__))

    def creation_instant(self) -> datetime:
        """Return the creation instant encoded in the identifier."""
        return instant_of(self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class OrderId(_TimeOrderedId):
    """Identifier of an Order aggregate."""


@dataclass(frozen=True, order=True)
class LineId(_TimeOrderedId):
    """Identifier of a line inside an Order."""


@dataclass(frozen=True)
class DiscountId:
    """Opaque discount reference. Absence (None) means no discount."""

    value: UUID

    def __post_init__(self):
        object.__setattr__(self, "value", _coerce_uuid(self.value, "DiscountId"))

    @classmethod
    def of(cls, value: Union[UUID, str]) -> "DiscountId":
        return cls(value)

    @classmethod
    def generate(cls, source: Optional[IdentifierSource] = None) -> "DiscountId":
        return cls((source or default_id_source()).next_id())

    def __str__(self) -> str:
        return str(self.value)
