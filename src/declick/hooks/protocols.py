"""Protocol for reusable hook bundles."""

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from declick.models.enums import HookStage


@runtime_checkable
class HookSubscriber(Protocol):
    """
    A capability object that contributes hook units to a command.

    Subscribers are attached either to the class (``@with_hooks(...)``) or to
    the instance (``self.hook_subscribers`` in the constructor). They let
    behaviour such as item counting or signal handling be reused across
    commands without inheritance.
    """

    def get_hooks(self) -> Iterable[tuple[HookStage, Callable[..., Any]]]:
        """
        Produce ``(stage, callback)`` pairs.

        Pairs run in the order they are produced, after the command's own
        hook methods.
        """
        ...
