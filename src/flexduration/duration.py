"""Compact duration type written as weeks, days, hours, minutes and seconds.

A `FlexDuration` is stored as whole seconds plus a nanosecond remainder. The
text form lists each unit at most once, largest first, without separators:

    1w6d23h49m59s   # 1 week, 6 days, 23 hours, 49 minutes and 59 seconds
    1h23m           # 1 hour and 23 minutes
    ""              # zero

The text form never carries sub-second precision; `nanos` is only populated
through `FlexDuration.from_ns`.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator
from pydantic_core import PydanticCustomError

logger = logging.getLogger(__name__)

SECS_PER_MINUTE = 60
SECS_PER_HOUR = 60 * SECS_PER_MINUTE
SECS_PER_DAY = 24 * SECS_PER_HOUR
SECS_PER_WEEK = 7 * SECS_PER_DAY

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MICRO = 1_000

MAX_SECONDS = 2**63 - 1
MIN_SECONDS = -(2**63)

EXPECTED_FORMAT = (
    "a String with the format weeks (w), days (d), hours (h), minutes (m) "
    "and/or seconds (s), in order"
)

# (group name, unit letter, span in seconds), largest unit first
UNITS: tuple[tuple[str, str, int], ...] = (
    ("weeks", "w", SECS_PER_WEEK),
    ("days", "d", SECS_PER_DAY),
    ("hours", "h", SECS_PER_HOUR),
    ("minutes", "m", SECS_PER_MINUTE),
    ("seconds", "s", 1),
)

GRAMMAR = re.compile(
    "".join(f"(?:(?P<{name}>[0-9]+){letter})?" for name, letter, _ in UNITS),
    re.ASCII,
)

# Anything longer cannot fit in MAX_SECONDS, even as plain seconds.
_MAX_DIGITS = len(str(MAX_SECONDS))


class FlexDurationError(ValueError):
    """Base exception for duration text that cannot be turned into a value."""

    def __init__(self, value: Any, message: str) -> None:
        super().__init__(message)
        self.value = value


class InvalidFormatError(FlexDurationError):
    """Raised when text does not match the `[Nw][Nd][Nh][Nm][Ns]` grammar."""

    def __init__(self, value: Any) -> None:
        super().__init__(value, f"invalid duration {value!r}, expected {EXPECTED_FORMAT}")


class OutOfRangeError(FlexDurationError, OverflowError):
    """Raised when a well-formed duration overflows a signed 64-bit second count."""

    def __init__(self, value: Any, component: str | None = None) -> None:
        detail = f" ({component} overflows)" if component else ""
        super().__init__(value, f"duration {value!r} is out of range{detail}")
        self.component = component


def parse_seconds(text: str) -> int:
    """Parse duration text into a total number of whole seconds.

    Raises:
        InvalidFormatError: If `text` is not a string matching the grammar.
        OutOfRangeError: If a unit or the total exceeds `MAX_SECONDS`.
    """
    if not isinstance(text, str):
        raise InvalidFormatError(text)

    match = GRAMMAR.fullmatch(text)
    if match is None:
        logger.debug(f"Rejected duration text {text!r}")
        raise InvalidFormatError(text)

    total = 0
    for name, letter, span in UNITS:
        digits = match.group(name)
        if digits is None:
            continue
        digits = digits.lstrip("0") or "0"
        if len(digits) > _MAX_DIGITS:
            raise OutOfRangeError(text, f"{digits}{letter}")
        component = int(digits) * span
        if component > MAX_SECONDS:
            raise OutOfRangeError(text, f"{digits}{letter}")
        total += component

    if total > MAX_SECONDS:
        raise OutOfRangeError(text)

    logger.debug(f"Parsed duration {text!r} as {total} seconds")
    return total


def decompose(seconds: int) -> list[tuple[str, str, int]]:
    """Split a non-negative second count into (name, letter, magnitude) per unit."""
    if seconds < 0:
        raise ValueError("Cannot decompose a negative second count")

    remaining = seconds
    parts = []
    for name, letter, span in UNITS:
        magnitude = remaining // span
        remaining -= magnitude * span
        parts.append((name, letter, magnitude))
    return parts


def format_seconds(seconds: int) -> str:
    """Render a second count in canonical form, skipping zero units.

    Zero renders as the empty string. Negative counts get a leading `-`,
    which the parser does not accept.
    """
    if seconds < 0:
        return "-" + format_seconds(-seconds)
    return "".join(f"{magnitude}{letter}" for _, letter, magnitude in decompose(seconds) if magnitude)


class FlexDuration(BaseModel):
    """Signed whole seconds plus a nanosecond remainder, written as `1w2d3h4m5s`.

    Instances are immutable. Build them with `parse`, `from_timedelta` or
    `from_ns`. Within other pydantic models the value serializes to its
    canonical text and validates from text, `timedelta` or another instance.

    Arithmetic converts to `timedelta` first and delegates:

        FlexDuration.parse("1d") + datetime(2024, 1, 1)   # datetime(2024, 1, 2)
        datetime(2024, 1, 2) - FlexDuration.parse("1d")   # datetime(2024, 1, 1)
        FlexDuration.parse("1h") + timedelta(minutes=5)   # timedelta(seconds=3900)
    """

    model_config = ConfigDict(frozen=True)

    seconds: int = Field(default=0, ge=MIN_SECONDS, le=MAX_SECONDS, description="Whole seconds")
    nanos: int = Field(default=0, ge=0, lt=NANOS_PER_SECOND, description="Sub-second remainder in nanoseconds")

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, data: Any) -> Any:
        if isinstance(data, str):
            try:
                return {"seconds": parse_seconds(data), "nanos": 0}
            except FlexDurationError as e:
                raise PydanticCustomError(
                    "flex_duration",
                    "invalid value '{value}', expected {expected}",
                    {"value": data, "expected": EXPECTED_FORMAT},
                ) from e
        if isinstance(data, timedelta):
            return {"seconds": _truncate_seconds(data), "nanos": 0}
        return data

    @model_serializer(mode="plain")
    def serialize_text(self) -> str:
        return format_seconds(self.seconds)

    @classmethod
    def parse(cls, text: str) -> FlexDuration:
        """Parse duration text such as `1w2d` or `5s`."""
        return cls(seconds=parse_seconds(text))

    @classmethod
    def zero(cls) -> FlexDuration:
        return cls()

    @classmethod
    def from_timedelta(cls, value: timedelta) -> FlexDuration:
        """Create from a timedelta, truncating toward zero to whole seconds.

        This is lossy: the sub-second part of `value` is discarded.
        """
        return cls(seconds=_truncate_seconds(value))

    @classmethod
    def from_ns(cls, nanos: int) -> FlexDuration:
        """Create from a non-negative nanosecond count, keeping the remainder."""
        if nanos < 0:
            raise ValueError("Duration cannot be negative")
        seconds, remainder = divmod(nanos, NANOS_PER_SECOND)
        return cls(seconds=seconds, nanos=remainder)

    def as_ns(self) -> int:
        """Get duration as nanoseconds.

        Raises:
            ValueError: If the duration is negative.
        """
        if self.seconds < 0:
            raise ValueError("Negative duration cannot be expressed as unsigned nanoseconds")
        return self.seconds * NANOS_PER_SECOND + self.nanos

    def to_timedelta(self) -> timedelta:
        """Convert to a timedelta; nanoseconds are truncated to microseconds.

        Raises:
            OverflowError: If the value exceeds the timedelta range.
        """
        return timedelta(seconds=self.seconds, microseconds=self.nanos // NANOS_PER_MICRO)

    def total_seconds(self) -> float:
        return self.seconds + self.nanos / NANOS_PER_SECOND

    def components(self) -> dict[str, int]:
        """Per-unit magnitudes of the canonical form, zeros included."""
        return {name: magnitude for name, _, magnitude in decompose(abs(self.seconds))}

    def is_zero(self) -> bool:
        return self.seconds == 0 and self.nanos == 0

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __neg__(self) -> FlexDuration:
        """Negate the value.

        Raises:
            OverflowError: If the result does not fit a signed 64-bit second count.
        """
        if self.seconds == MIN_SECONDS and not self.nanos:
            raise OverflowError("Cannot negate the minimum duration")
        if self.nanos:
            return FlexDuration(seconds=-self.seconds - 1, nanos=NANOS_PER_SECOND - self.nanos)
        return FlexDuration(seconds=-self.seconds)

    def __add__(self, other: Any) -> Any:
        if isinstance(other, FlexDuration):
            return self.to_timedelta() + other.to_timedelta()
        if isinstance(other, (datetime, timedelta)):
            return other + self.to_timedelta()
        return NotImplemented

    def __radd__(self, other: Any) -> Any:
        if isinstance(other, (datetime, timedelta)):
            return other + self.to_timedelta()
        return NotImplemented

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, FlexDuration):
            return self.to_timedelta() - other.to_timedelta()
        if isinstance(other, timedelta):
            return self.to_timedelta() - other
        return NotImplemented

    def __rsub__(self, other: Any) -> Any:
        if isinstance(other, (datetime, timedelta)):
            return other - self.to_timedelta()
        return NotImplemented

    def _key(self) -> tuple[int, int]:
        return (self.seconds, self.nanos)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, FlexDuration):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, FlexDuration):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, FlexDuration):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, FlexDuration):
            return NotImplemented
        return self._key() >= other._key()

    def __str__(self) -> str:
        return format_seconds(self.seconds)

    def __repr__(self) -> str:
        if self.nanos or self.seconds < 0:
            return f"FlexDuration(seconds={self.seconds}, nanos={self.nanos})"
        return f"FlexDuration({str(self)!r})"


def _truncate_seconds(value: timedelta) -> int:
    micros = (value.days * SECS_PER_DAY + value.seconds) * 1_000_000 + value.microseconds
    seconds = abs(micros) // 1_000_000
    return -seconds if micros < 0 else seconds


def parse_duration(text: str) -> FlexDuration:
    """Parse duration text, raising `InvalidFormatError` or `OutOfRangeError`."""
    return FlexDuration.parse(text)


def format_duration(value: FlexDuration) -> str:
    """Render a duration in canonical form (`""` for zero)."""
    return format_seconds(value.seconds)
