"""
Measurement: the elapsed-time value produced by every timing interface.

A Measurement wraps a single Duration and never changes after
construction. Arithmetic is checked and raises instead of wrapping.
"""

from dataclasses import dataclass, field

from .duration import Duration
from .errors import MeasureOverflow, MeasureUnderflow


@dataclass(frozen=True, order=True)
class Measurement:
    """
    Immutable wall-clock elapsed time.

    Equality, hashing and ordering are those of the wrapped Duration.

    Example:
        total = Measurement.from_duration(Duration.hours(3)) \\
            + Measurement.from_duration(Duration.minutes(3))
        str(total)        # "3 h 3 m"
        total.to_iso()    # "P0DT3H3M0S"
    """

    duration: Duration = field(default_factory=Duration.zero)

    def __post_init__(self):
        if not isinstance(self.duration, Duration):
            raise TypeError(
                f"Measurement wraps a Duration, got {type(self.duration).__name__}"
            )

    @classmethod
    def zero(cls) -> "Measurement":
        """Return the additive identity."""
        return cls(Duration.zero())

    @classmethod
    def from_duration(cls, duration: Duration) -> "Measurement":
        return cls(duration)

    @classmethod
    def between(cls, pre_ns: int, post_ns: int) -> "Measurement":
        """
        Wrap the span between two clock readings taken in nanoseconds.

        Args:
            pre_ns: Reading taken before the measured work
            post_ns: Reading taken after the measured work

        Raises:
            MeasureOverflow: If the span is outside the representable range
        """
        try:
            return cls(Duration.nanoseconds(post_ns - pre_ns))
        except OverflowError as exc:
            raise MeasureOverflow(f"span {post_ns} - {pre_ns} ns is out of range") from exc

    @classmethod
    def from_iso(cls, text: str) -> "Measurement":
        """Decode a P<date>T<time> duration string."""
        from .codec import decode
        return decode(text)

    def to_iso(self) -> str:
        """Encode as a canonical P<d>DT<h>H<m>M<s>S string."""
        from .codec import encode
        return encode(self)

    def __add__(self, other: "Measurement") -> "Measurement":
        if not isinstance(other, Measurement):
            return NotImplemented
        duration = self.duration.checked_add(other.duration)
        if duration is None:
            raise MeasureOverflow(f"{self!r} + {other!r} is out of range")
        return Measurement(duration)

    def __sub__(self, other: "Measurement") -> "Measurement":
        if not isinstance(other, Measurement):
            return NotImplemented
        duration = self.duration.checked_sub(other.duration)
        if duration is None:
            raise MeasureUnderflow(f"{self!r} - {other!r} is out of range")
        return Measurement(duration)

    def __str__(self) -> str:
        from ..output.formatter import format_measurement
        return format_measurement(self)
