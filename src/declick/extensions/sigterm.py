"""Advisory SIGTERM handling for long-running commands."""

import logging
import signal
from collections.abc import Callable, Iterator
from typing import Any

from declick.models.enums import HookStage

logger = logging.getLogger(__name__)


class SigtermListener:
    """
    Hook bundle that turns SIGTERM into a flag the command can poll.

    The signal does not interrupt anything: business logic checks
    ``Command.is_terminating()`` between units of work and stops cleanly.
    The previous handler is restored at shutdown.
    """

    def __init__(self):
        self.terminating = False

    def get_hooks(self) -> Iterator[tuple[HookStage, Callable[..., Any]]]:
        yield HookStage.STARTUP, self._install

    def _handle(self, signum: int, frame: Any) -> None:
        logger.info("SIGTERM received; command will stop at the next check")
        self.terminating = True

    def _install(self) -> Callable[[], None]:
        if not hasattr(signal, "SIGTERM"):
            raise RuntimeError("SIGTERM is not available on this platform.")

        self.terminating = False
        previous = signal.signal(signal.SIGTERM, self._handle)

        def restore() -> None:
            # None means the old handler was not installed from Python
            signal.signal(signal.SIGTERM, signal.SIG_DFL if previous is None else previous)

        return restore
