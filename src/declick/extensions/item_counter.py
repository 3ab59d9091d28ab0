"""Count processed items and report them when the command ends."""

from collections.abc import Callable, Iterator
from typing import Any

from declick.models.enums import HookStage


class ItemCounter:
    """
    Hook bundle that prints per-section item counts at shutdown.

    Example:
        ```python
        def __init__(self):
            super().__init__()
            self.counter = ItemCounter()
            self.hook_subscribers.append(self.counter)

        def invoke(self, input, output):
            for row in rows:
                ...
                self.counter.increment("rows")
        ```

    Prints ``Processed 42 rows.`` once the command has finished.
    """

    def __init__(self):
        self.counts: dict[str, int] = {}

    def increment(self, section: str = "items", by: int = 1) -> None:
        self.counts[section] = self.counts.get(section, 0) + by

    def get_hooks(self) -> Iterator[tuple[HookStage, Callable[..., Any]]]:
        yield HookStage.STARTUP, self._start

    def _start(self, console_input: Any, output: Any) -> Callable[..., None]:
        self.counts = {}

        def report() -> None:
            for section, count in self.counts.items():
                output.writeln(
                    f"Processed {output.style(str(count), 'info')} "
                    f"{output.style(section, 'comment')}."
                )

        return report
