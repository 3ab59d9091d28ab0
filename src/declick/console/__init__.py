"""Console input/output adapters, prompting and diagnostics."""

from .diagnostics import Stopwatch, TimeRecord, peak_memory_bytes
from .io import ConsoleInput, ConsoleOutput
from .prompts import prompt_missing_arguments, resolve_question

__all__ = [
    "ConsoleInput",
    "ConsoleOutput",
    "Stopwatch",
    "TimeRecord",
    "peak_memory_bytes",
    "prompt_missing_arguments",
    "resolve_question",
]
