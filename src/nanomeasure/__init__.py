"""
nanomeasure - Elapsed-time measurements you can add, print and persist.

Provides:
  - Measurement          : immutable elapsed time with checked + and -
  - Duration             : the bounded nanosecond span it wraps
  - measure_call()       : time one call, returns (result, Measurement)
  - @measure             : function/method decorator
  - measure_block()      : context manager for code blocks
  - Timer                : manual start/stop timer
  - encode() / decode()  : "P0DT3H3M0S" duration strings
  - format_measurement() : "3 h 3 m" display strings
  - save() / load()      : persist named measurements to a JSON file

All failures raise a MeasureError subclass.
"""

from .core.duration import Duration
from .core.errors import (
    DurationSyntaxError,
    IntErrorKind,
    MeasureError,
    MeasureOverflow,
    MeasureUnderflow,
    ParseIntError,
)
from .core.measurement import Measurement
from .core.codec import decode, encode
from .core.timer import Timer

from .interfaces.decorators import measure, measure_block, measure_call

from .output.formatter import (
    format_measurement,
    from_nanos_string,
    load_from_file,
    print_measurement,
    save_to_file,
    to_nanos_string,
)


def save(measurements: dict[str, Measurement], path: str) -> None:
    """
    Save named measurements to a JSON file.

    Args:
        measurements: Mapping of label to Measurement
        path: Output file path (e.g. "timings.json")
    """
    save_to_file(measurements, path)


def load(path: str) -> dict[str, Measurement]:
    """Load named measurements from a file written by save()."""
    return load_from_file(path)


__all__ = [
    "Duration",
    "Measurement",
    "MeasureError",
    "MeasureOverflow",
    "MeasureUnderflow",
    "ParseIntError",
    "IntErrorKind",
    "DurationSyntaxError",
    "Timer",
    "measure",
    "measure_block",
    "measure_call",
    "encode",
    "decode",
    "format_measurement",
    "print_measurement",
    "to_nanos_string",
    "from_nanos_string",
    "save",
    "load",
]
