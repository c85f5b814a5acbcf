"""
Textual duration codec.

Encodes a Measurement as ``P<days>DT<hours>H<minutes>M<seconds>S`` and
decodes the same family of strings back. The decoder accepts a wider
grammar than the encoder emits:

    Duration := "P" (Count Unit)* "T" (Count Unit)*
    Count    := ASCII digits
    Unit     := W | D | H | M | S

Unit letters may appear in either section, in any order and any number
of times; every token is added to a running total with checked
arithmetic. Sub-second precision is not representable and is truncated
by the encoder.
"""

import logging
import re

from .duration import Duration
from .errors import DurationSyntaxError, MeasureError, MeasureOverflow, parse_i64
from .measurement import Measurement

logger = logging.getLogger(__name__)

DESIGNATOR_PERIOD = "P"
DESIGNATOR_TIME = "T"

# Leading run of ASCII digits; compiled once, read-only afterwards.
_COUNT_PATTERN = re.compile(r"[0-9]*", re.ASCII)

# Emitted fields in order: (unit letter, constructor, whole-unit count).
_ENCODE_DATE_UNITS = (("D", Duration.days, Duration.num_days),)
_ENCODE_TIME_UNITS = (
    ("H", Duration.hours, Duration.num_hours),
    ("M", Duration.minutes, Duration.num_minutes),
    ("S", Duration.seconds, Duration.num_seconds),
)

_DECODE_UNITS = {
    "W": Duration.weeks,
    "D": Duration.days,
    "H": Duration.hours,
    "M": Duration.minutes,
    "S": Duration.seconds,
}


def _decompose(remaining: Duration, units) -> tuple[str, Duration]:
    """
    Peel whole units off a duration, largest first.

    Returns the rendered fields and what is left over. Counts truncate
    toward zero, so every field keeps the sign of the input.
    """
    parts = []
    for letter, constructor, whole_units in units:
        count = whole_units(remaining)
        remaining = remaining.checked_sub(constructor(count))
        parts.append(f"{count}{letter}")
    return "".join(parts), remaining


def encode(measurement: Measurement) -> str:
    """
    Render a Measurement in canonical form, e.g. ``P0DT3H3M0S``.

    Every field is always present; sub-second remainder is dropped.
    """
    date_part, remaining = _decompose(measurement.duration, _ENCODE_DATE_UNITS)
    time_part, _ = _decompose(remaining, _ENCODE_TIME_UNITS)
    return f"{DESIGNATOR_PERIOD}{date_part}{DESIGNATOR_TIME}{time_part}"


def _read_token(text: str, pos: int) -> tuple[Measurement, int]:
    """
    Parse one ``<digits><unit>`` token starting at pos.

    Returns the token's value and the position just past it.
    """
    match = _COUNT_PATTERN.match(text, pos)
    digits = match.group()
    end = match.end()

    # The count is checked before the unit, so "XH" is a numeric failure.
    count = parse_i64(digits)

    if end >= len(text):
        raise DurationSyntaxError(f"missing unit letter after {digits!r}", text)

    unit = text[end]
    constructor = _DECODE_UNITS.get(unit)
    if constructor is None:
        raise DurationSyntaxError(f"unknown unit letter {unit!r}", text)

    try:
        partial = constructor(count)
    except OverflowError as exc:
        raise MeasureOverflow(f"{digits}{unit} is out of range") from exc
    return Measurement(partial), end + 1


def _read_section(text: str, pos: int, stop_at_time: bool,
                  total: Measurement) -> tuple[Measurement, int]:
    """Fold tokens into total until the end of text, or a 'T' if stop_at_time."""
    while pos < len(text):
        if stop_at_time and text[pos] == DESIGNATOR_TIME:
            break
        partial, pos = _read_token(text, pos)
        total = total + partial
    return total, pos


def _decode(text: str) -> Measurement:
    if not text.startswith(DESIGNATOR_PERIOD):
        raise DurationSyntaxError(f"expected leading {DESIGNATOR_PERIOD!r}", text)

    total, pos = _read_section(text, 1, True, Measurement.zero())

    if pos >= len(text) or text[pos] != DESIGNATOR_TIME:
        raise DurationSyntaxError(
            f"expected {DESIGNATOR_TIME!r} after date components", text
        )

    total, _ = _read_section(text, pos + 1, False, total)
    return total


def decode(text: str) -> Measurement:
    """
    Parse a ``P<date>T<time>`` duration string into a Measurement.

    Raises:
        DurationSyntaxError: Missing 'P' or 'T', or a missing/unknown unit letter
        ParseIntError: A count is empty, malformed, or outside 64-bit range
        MeasureOverflow: The accumulated total leaves the representable range
    """
    try:
        return _decode(text)
    except MeasureError as exc:
        logger.debug("Rejected duration string %r: %s", text, exc)
        raise
