"""
Signed, nanosecond-resolution time span with a bounded range.

The lowest-level value used by Measurement. Stores a single integer
nanosecond count and keeps it inside [MIN, MAX], where MAX is
2**63 - 1 milliseconds. Checked arithmetic returns None instead of
leaving the range; constructors raise OverflowError.
"""

from dataclasses import dataclass
from typing import Optional

NS_PER_US = 1_000
NS_PER_MS = 1_000_000
NS_PER_SEC = 1_000_000_000
NS_PER_MIN = 60 * NS_PER_SEC
NS_PER_HOUR = 60 * NS_PER_MIN
NS_PER_DAY = 24 * NS_PER_HOUR
NS_PER_WEEK = 7 * NS_PER_DAY

I64_MAX = 2**63 - 1
I64_MIN = -(2**63)

_MAX_NS = I64_MAX * NS_PER_MS
_MIN_NS = -_MAX_NS


def _in_range(ns: int) -> bool:
    return _MIN_NS <= ns <= _MAX_NS


def _trunc_div(ns: int, unit: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(ns) // unit
    return -quotient if ns < 0 else quotient


@dataclass(frozen=True, order=True)
class Duration:
    """
    Immutable signed time span.

    Ordering and equality compare the nanosecond count.
    """

    _nanos: int = 0

    def __post_init__(self):
        if not _in_range(self._nanos):
            raise OverflowError(f"Duration of {self._nanos} ns out of bounds")

    @classmethod
    def _from_units(cls, count: int, unit_ns: int, unit_name: str) -> "Duration":
        nanos = count * unit_ns
        if not _in_range(nanos):
            raise OverflowError(f"Duration.{unit_name} out of bounds: {count}")
        return cls(nanos)

    @classmethod
    def weeks(cls, count: int) -> "Duration":
        return cls._from_units(count, NS_PER_WEEK, "weeks")

    @classmethod
    def days(cls, count: int) -> "Duration":
        return cls._from_units(count, NS_PER_DAY, "days")

    @classmethod
    def hours(cls, count: int) -> "Duration":
        return cls._from_units(count, NS_PER_HOUR, "hours")

    @classmethod
    def minutes(cls, count: int) -> "Duration":
        return cls._from_units(count, NS_PER_MIN, "minutes")

    @classmethod
    def seconds(cls, count: int) -> "Duration":
        return cls._from_units(count, NS_PER_SEC, "seconds")

    @classmethod
    def milliseconds(cls, count: int) -> "Duration":
        return cls._from_units(count, NS_PER_MS, "milliseconds")

    @classmethod
    def microseconds(cls, count: int) -> "Duration":
        return cls._from_units(count, NS_PER_US, "microseconds")

    @classmethod
    def nanoseconds(cls, count: int) -> "Duration":
        return cls._from_units(count, 1, "nanoseconds")

    @classmethod
    def zero(cls) -> "Duration":
        return cls(0)

    def checked_add(self, other: "Duration") -> Optional["Duration"]:
        """Return self + other, or None if the sum is out of range."""
        nanos = self._nanos + other._nanos
        return Duration(nanos) if _in_range(nanos) else None

    def checked_sub(self, other: "Duration") -> Optional["Duration"]:
        """Return self - other, or None if the difference is out of range."""
        nanos = self._nanos - other._nanos
        return Duration(nanos) if _in_range(nanos) else None

    def num_nanoseconds(self) -> Optional[int]:
        """
        Return the total nanosecond count.

        Returns None when the count does not fit a signed 64-bit integer,
        which happens for spans longer than roughly 292 years.
        """
        if I64_MIN <= self._nanos <= I64_MAX:
            return self._nanos
        return None

    def num_microseconds(self) -> int:
        return _trunc_div(self._nanos, NS_PER_US)

    def num_milliseconds(self) -> int:
        return _trunc_div(self._nanos, NS_PER_MS)

    def num_seconds(self) -> int:
        return _trunc_div(self._nanos, NS_PER_SEC)

    def num_minutes(self) -> int:
        return _trunc_div(self._nanos, NS_PER_MIN)

    def num_hours(self) -> int:
        return _trunc_div(self._nanos, NS_PER_HOUR)

    def num_days(self) -> int:
        return _trunc_div(self._nanos, NS_PER_DAY)

    def num_weeks(self) -> int:
        return _trunc_div(self._nanos, NS_PER_WEEK)

    def __neg__(self) -> "Duration":
        return Duration(-self._nanos)

    def __abs__(self) -> "Duration":
        return Duration(abs(self._nanos))

    def __bool__(self) -> bool:
        return self._nanos != 0

    def __repr__(self) -> str:
        return f"Duration(nanoseconds={self._nanos})"


Duration.MAX = Duration(_MAX_NS)
Duration.MIN = Duration(_MIN_NS)
