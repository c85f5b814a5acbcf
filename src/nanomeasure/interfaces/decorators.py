"""
Function and block timing interfaces: decorator, call helper, context manager.

Usage:
    result, elapsed = measure_call(load, "data.csv")   # (result, Measurement)

    @measure                          # uses default name (function name)
    def my_function(): ...

    @measure("custom label", on_measure=store)
    def my_function(): ...

    with measure_block("db query") as timer:          # inline block timing
        rows = db.query(...)
    timer.measurement
"""

import functools
import inspect
from contextlib import contextmanager
from typing import Callable, Optional

from ..core.measurement import Measurement
from ..core.timer import Clock, Timer
from ..output.formatter import print_measurement

OnMeasure = Callable[[str, Measurement], None]

DEFAULT_BLOCK_LABEL = "block"


def _report(name: str, measurement: Measurement, on_measure: Optional[OnMeasure],
            echo: bool) -> None:
    if echo:
        print_measurement(name, measurement)
    if on_measure is not None:
        on_measure(name, measurement)


def _make_wrapper(fn: Callable, name: str, on_measure: Optional[OnMeasure],
                  echo: bool, clock: Optional[Clock]) -> Callable:
    """Wrap a callable to time each invocation and report the result."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        timer = Timer(clock).start()
        try:
            return fn(*args, **kwargs)
        finally:
            _report(name, timer.stop(), on_measure, echo)

    return wrapper


def _make_async_wrapper(fn: Callable, name: str, on_measure: Optional[OnMeasure],
                        echo: bool, clock: Optional[Clock]) -> Callable:
    """Wrap an async callable to time each invocation."""

    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        timer = Timer(clock).start()
        try:
            return await fn(*args, **kwargs)
        finally:
            _report(name, timer.stop(), on_measure, echo)

    return wrapper


def measure(arg=None, *, name: Optional[str] = None,
            on_measure: Optional[OnMeasure] = None, echo: bool = True,
            clock: Optional[Clock] = None):
    """
    Decorator that times a function or coroutine function on every call.

    Supported usage patterns:
        @measure
        @measure("custom name")
        @measure(name="custom name", on_measure=callback)

    Args:
        arg: Either the decorated function (bare @measure) or a string label
        name: Keyword-only custom label
        on_measure: Called with (label, Measurement) after every call
        echo: Print each measurement to stdout
        clock: Nanosecond clock; defaults to time.perf_counter_ns
    """

    def decorator(fn: Callable) -> Callable:
        label = (arg if isinstance(arg, str) else None) or name or fn.__qualname__
        if inspect.iscoroutinefunction(fn):
            return _make_async_wrapper(fn, label, on_measure, echo, clock)
        return _make_wrapper(fn, label, on_measure, echo, clock)

    if callable(arg):
        return decorator(arg)
    return decorator


def measure_call(fn: Callable, *args, clock: Optional[Clock] = None, **kwargs):
    """
    Time a single function call and return ``(result, Measurement)``.

    Useful when you don't control the source of the function. Nothing
    is printed; if fn raises, the exception propagates untimed.

    Args:
        fn: The callable to time
        *args: Positional arguments forwarded to fn
        clock: Nanosecond clock; defaults to time.perf_counter_ns
        **kwargs: Keyword arguments forwarded to fn
    """
    timer = Timer(clock).start()
    result = fn(*args, **kwargs)
    return result, timer.stop()


@contextmanager
def measure_block(name: Optional[str] = None, *, on_measure: Optional[OnMeasure] = None,
                  clock: Optional[Clock] = None):
    """
    Context manager for timing an inline block of code.

    Yields the running Timer; its ``measurement`` is set on exit. When
    a name is given the measurement is also printed. on_measure is
    always called, with DEFAULT_BLOCK_LABEL for unnamed blocks.

    Example:
        with measure_block("parse json") as timer:
            data = json.loads(raw)
    """
    timer = Timer(clock).start()
    try:
        yield timer
    finally:
        measurement = timer.stop()
        _report(name or DEFAULT_BLOCK_LABEL, measurement, on_measure,
                echo=name is not None)
