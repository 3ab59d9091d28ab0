"""Execution time and memory figures printed after a command."""

import sys
import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TimeRecord:
    """Elapsed wall-clock time in seconds."""

    value: float

    def in_seconds(self, decimals: int = 2) -> str:
        return f"{self.value:.{decimals}f}s"


class Stopwatch:
    """Measures time since construction."""

    def __init__(self):
        self._start = time.perf_counter()

    def lap(self) -> TimeRecord:
        return TimeRecord(time.perf_counter() - self._start)


def peak_memory_bytes() -> int | None:
    """
    Peak resident set size of this process, or None where unavailable.

    ``ru_maxrss`` is reported in kilobytes on Linux and bytes on macOS.
    """
    if sys.platform == "win32":
        return None

    import resource

    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    return peak if sys.platform == "darwin" else peak * 1024


def format_execution_time(record: TimeRecord, section: str | None = None) -> str:
    prefix = f"[{section}] " if section else ""
    return f"{prefix}Execution time: {record.in_seconds()}"


def format_memory_usage(peak_bytes: int, section: str | None = None) -> str:
    prefix = f"[{section}] " if section else ""
    return f"{prefix}Memory usage: {peak_bytes / 1024 / 1024:.2f} MB"
