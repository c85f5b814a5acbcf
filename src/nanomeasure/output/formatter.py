"""
Human-readable rendering and persistence for measurements.

Handles both console output and file persistence.
All formatting decisions are centralized here.
Color output uses ANSI codes via colorama for Windows compatibility.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

import colorama

from ..core.codec import encode
from ..core.duration import (
    NS_PER_HOUR,
    NS_PER_MIN,
    NS_PER_MS,
    NS_PER_SEC,
    NS_PER_US,
    Duration,
)
from ..core.errors import MeasureOverflow, parse_i64
from ..core.measurement import Measurement

colorama.init(autoreset=True)

logger = logging.getLogger(__name__)

OVERFLOW = "overflow"


class _Color:
    """ANSI color constants."""

    RESET   = colorama.Style.RESET_ALL
    DIM     = colorama.Style.DIM
    CYAN    = colorama.Fore.CYAN
    GREEN   = colorama.Fore.GREEN
    YELLOW  = colorama.Fore.YELLOW
    RED     = colorama.Fore.RED


# (exclusive upper bound, unit size, label, finer unit size, finer label)
# in ascending order; None marks the unbounded last bucket.
_SCALES = (
    (NS_PER_US,   1,           "ns", None,       None),
    (NS_PER_MS,   NS_PER_US,   "µs", 1,          "ns"),
    (NS_PER_SEC,  NS_PER_MS,   "ms", NS_PER_US,  "µs"),
    (NS_PER_MIN,  NS_PER_SEC,  "s",  NS_PER_MS,  "ms"),
    (NS_PER_HOUR, NS_PER_MIN,  "m",  NS_PER_SEC, "s"),
    (None,        NS_PER_HOUR, "h",  NS_PER_MIN, "m"),
)

_THRESHOLD_FAST_NS   = 1_000_000        # under 1 ms   -> green
_THRESHOLD_MEDIUM_NS = 10_000_000       # under 10 ms  -> yellow
                                        # 10 ms and above -> red


def _format_nanos(nanos: int) -> str:
    """Render a non-negative nanosecond count using at most two units."""
    for bound, unit, label, finer, finer_label in _SCALES:
        if bound is not None and nanos >= bound:
            continue
        primary = nanos // unit
        secondary = (nanos % unit) // finer if finer else 0
        if secondary:
            return f"{primary} {label} {secondary} {finer_label}"
        return f"{primary} {label}"
    raise AssertionError("unreachable: last scale is unbounded")


def format_measurement(measurement: Measurement) -> str:
    """
    Return a string such as "3 h 3 m" or "999 ns".

    Only the two coarsest non-empty units are shown. Never raises:
    a span whose nanosecond count does not fit 64 bits renders as
    "overflow".
    """
    nanos = measurement.duration.num_nanoseconds()
    if nanos is None:
        return OVERFLOW
    if nanos < 0:
        return f"-{_format_nanos(-nanos)}"
    return _format_nanos(nanos)


def _color_for(measurement: Measurement) -> str:
    """Return the appropriate color code based on how slow the measurement is."""
    nanos = measurement.duration.num_nanoseconds()
    if nanos is None:
        return _Color.RED
    if nanos < _THRESHOLD_FAST_NS:
        return _Color.GREEN
    if nanos < _THRESHOLD_MEDIUM_NS:
        return _Color.YELLOW
    return _Color.RED


def print_measurement(name: str, measurement: Measurement) -> None:
    """Print a single named measurement to stdout as a compact colored line."""
    name_str = f"{_Color.CYAN}{name:<40}{_Color.RESET}"
    value_str = f"{_color_for(measurement)}{format_measurement(measurement):>12}{_Color.RESET}"
    iso_str = f"{_Color.DIM}{encode(measurement)}{_Color.RESET}"
    print(f"  {name_str} {value_str}  {iso_str}")


def to_nanos_string(measurement: Measurement) -> str:
    """
    Serialize as a decimal nanosecond count, e.g. "10980000000000".

    Spans that do not fit 64 bits serialize as "overflow".
    """
    nanos = measurement.duration.num_nanoseconds()
    if nanos is None:
        return OVERFLOW
    return str(nanos)


def from_nanos_string(text: str) -> Measurement:
    """
    Reverse to_nanos_string.

    Raises:
        MeasureOverflow: If text is the "overflow" marker
        ParseIntError: If text is not a 64-bit decimal integer
    """
    if text == OVERFLOW:
        raise MeasureOverflow("Failed to serialize Duration: overflow")
    return Measurement(Duration.nanoseconds(parse_i64(text)))


def save_to_file(measurements: dict[str, Measurement], path: str) -> None:
    """
    Persist named measurements to a JSON file.

    Args:
        measurements: Mapping of label to Measurement
        path: File path to write (will overwrite if exists)
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "generated_at": datetime.now().isoformat(),
        "total_measurements": len(measurements),
        "measurements": {
            name: {
                "nanoseconds": to_nanos_string(m),
                "iso": encode(m),
                "human": format_measurement(m),
            }
            for name, m in measurements.items()
        },
    }

    with open(output_path, "w", encoding="utf-8") as file:
        json.dump(payload, file, indent=2, ensure_ascii=False)

    logger.debug("Wrote %d measurements to %s", len(measurements), output_path)
    print(f"  {_Color.GREEN}[nanomeasure] Results saved -> {output_path.resolve()}{_Color.RESET}")


def load_from_file(path: str) -> dict[str, Measurement]:
    """
    Read named measurements back from a file written by save_to_file.

    Values are restored from the lossless nanosecond strings.
    """
    with open(path, encoding="utf-8") as file:
        payload = json.load(file)

    measurements = {
        name: from_nanos_string(entry["nanoseconds"])
        for name, entry in payload["measurements"].items()
    }
    logger.debug("Read %d measurements from %s", len(measurements), path)
    return measurements
