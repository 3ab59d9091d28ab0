"""Decorators that mark command methods as hook units."""

from collections.abc import Callable
from typing import Any, TypeVar

from declick.models.enums import HookStage

F = TypeVar("F", bound=Callable[..., Any])

HOOK_ATTR = "__console_hook__"


def console_hook(stage: HookStage = HookStage.STARTUP) -> Callable[[F], F]:
    """
    Mark a public method as a hook unit for ``stage``.

    Startup hooks receive ``(input, output)`` and may return a callable that
    runs at shutdown. Exception hooks receive ``(error, input, output)`` and
    may return an exit code to resolve the failure. Either may accept fewer
    parameters.

    Example:
        @console_hook()
        def open_connection(self, input, output):
            self.conn = connect()
            return self.conn.close

        @console_hook(HookStage.EXCEPTION)
        def on_timeout(self, error):
            if isinstance(error, TimeoutError):
                return 3
    """
    def decorator(func: F) -> F:
        setattr(func, HOOK_ATTR, stage)
        return func
    return decorator


def get_hook_stage(member: Any) -> HookStage | None:
    """Return the stage marker of a class attribute, if any."""
    if isinstance(member, (staticmethod, classmethod)):
        member = member.__func__
    return getattr(member, HOOK_ATTR, None)


# Convenient stage aliases
on_startup = console_hook(HookStage.STARTUP)
on_exception = console_hook(HookStage.EXCEPTION)
