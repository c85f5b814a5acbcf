"""
nanomeasure demo script.

Run this directly to see all interfaces in action:
    python demo.py
"""

import asyncio
import time

import nanomeasure
from nanomeasure import (
    Duration,
    Measurement,
    MeasureError,
    measure,
    measure_block,
    measure_call,
)

collected: dict[str, Measurement] = {}


def keep(name, measurement):
    """Remember the latest measurement for each label."""
    collected[name] = measurement


# --- 1. Function decorator ---------------------------------------------------

@measure("sum of range", on_measure=keep)
def heavy_sum(limit):
    """Sum a large range."""
    return sum(range(limit))


# --- 2. Async decorator ------------------------------------------------------

@measure("async fetch simulation", on_measure=keep)
async def fake_fetch(url):
    """Simulate an async HTTP request."""
    await asyncio.sleep(0.005)
    return f"response from {url}"


# --- run everything ----------------------------------------------------------

def main():
    """Execute all demos and print a final summary."""
    print("\n--- decorator ---")
    heavy_sum(1_000_000)
    heavy_sum(5_000_000)

    print("\n--- async ---")
    asyncio.run(fake_fetch("https://api.example.com/data"))

    print("\n--- measure_block ---")
    with measure_block("sleep simulation", on_measure=keep):
        time.sleep(0.002)

    print("\n--- measure_call ---")
    result, elapsed = measure_call(sorted, [3, 1, 4, 1, 5, 9])
    print(f"  sorted -> {result} in {elapsed}")

    print("\n--- arithmetic and duration strings ---")
    shift = Measurement(Duration.hours(3)) + Measurement(Duration.minutes(3))
    print(f"  {shift}  ->  {shift.to_iso()}")
    print(f"  P1WT90M  ->  {nanomeasure.decode('P1WT90M')}")
    try:
        nanomeasure.decode("P0DT0Z0M0S")
    except MeasureError as exc:
        print(f"  rejected: {exc}")

    print("\n--- saving to file ---")
    nanomeasure.save(collected, "perf_results.json")


if __name__ == "__main__":
    main()
