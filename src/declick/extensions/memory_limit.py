"""Cap the address space of the process while a command runs."""

import logging
import re
import sys
from collections.abc import Callable, Iterator
from typing import Any

from declick.exceptions import HookConfigurationError
from declick.models.enums import HookStage

logger = logging.getLogger(__name__)

_UNITS = {"": 1, "K": 1024, "M": 1024**2, "G": 1024**3}
_LIMIT_PATTERN = re.compile(r"^\s*(-1|\d+)\s*([KMG]?)\s*$", re.IGNORECASE)


def parse_memory_limit(limit: str) -> int | None:
    """
    Parse ``"512M"``-style limits into bytes.

    Returns:
        Number of bytes, or None for ``"-1"`` (unlimited)

    Raises:
        HookConfigurationError: If the string is not a valid limit
    """
    match = _LIMIT_PATTERN.match(limit)
    if match is None or (match.group(1) == "-1" and match.group(2)):
        raise HookConfigurationError(
            f"Invalid memory limit {limit!r}.",
            recovery_hint='Use a byte count with an optional K/M/G suffix, or "-1"',
        )

    amount, unit = match.groups()
    if amount == "-1":
        return None
    return int(amount) * _UNITS[unit.upper()]


class MemoryLimit:
    """
    Hook bundle that sets the soft RLIMIT_AS for the duration of a command.

    Usage: ``@with_hooks(MemoryLimit("512M"))`` on the command class. The
    previous soft limit is restored at shutdown.
    """

    def __init__(self, limit: str):
        self.limit = limit
        self.limit_bytes = parse_memory_limit(limit)

    def get_hooks(self) -> Iterator[tuple[HookStage, Callable[..., Any]]]:
        yield HookStage.STARTUP, self._apply

    def _apply(self) -> Callable[[], None]:
        if sys.platform == "win32":
            raise HookConfigurationError("Memory limits are not supported on Windows.")

        import resource

        soft, hard = resource.getrlimit(resource.RLIMIT_AS)
        new_soft = resource.RLIM_INFINITY if self.limit_bytes is None else self.limit_bytes
        if hard != resource.RLIM_INFINITY and (new_soft == resource.RLIM_INFINITY or new_soft > hard):
            new_soft = hard

        resource.setrlimit(resource.RLIMIT_AS, (new_soft, hard))
        logger.debug(f"Memory limit set to {self.limit} (soft={new_soft})")

        def restore() -> None:
            resource.setrlimit(resource.RLIMIT_AS, (soft, hard))

        return restore
