"""Run discovered hook units stage by stage."""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from declick.models.enums import HookStage

from .registry import HookRegistration, discover_hooks

logger = logging.getLogger(__name__)


def _positional_capacity(callback: Callable[..., Any]) -> int | None:
    """Number of positional parameters, or None when it takes ``*args``."""
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return None

    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def invoke_hook(callback: Callable[..., Any], *context: Any) -> Any:
    """Call ``callback`` with as many leading context values as it accepts."""
    capacity = _positional_capacity(callback)
    return callback(*(context if capacity is None else context[:capacity]))


class HookRunner:
    """
    Executes the hook units of one command instance.

    Hooks are discovered on construction, so a misdeclared hook fails before
    any of them runs. One runner serves exactly one invocation.
    """

    def __init__(self, target: object):
        self.target = target
        self.hooks: list[HookRegistration] = discover_hooks(target)

    def for_stage(self, stage: HookStage) -> list[HookRegistration]:
        return [hook for hook in self.hooks if hook.stage is stage]

    def startup(self, console_input: Any, output: Any) -> list[Callable[..., Any]]:
        """
        Run every startup hook in order.

        Returns:
            Shutdown callbacks (callable return values), in registration order
        """
        callbacks: list[Callable[..., Any]] = []
        for hook in self.for_stage(HookStage.STARTUP):
            logger.debug(f"Running startup hook {hook.source}")
            try:
                result = invoke_hook(hook.callback, console_input, output)
            except Exception:
                # Release what earlier hooks acquired before giving up
                logger.error(
                    f"Startup hook {hook.source} failed; "
                    f"running {len(callbacks)} shutdown callbacks"
                )
                self.shutdown(callbacks, console_input, output)
                raise

            if callable(result):
                callbacks.append(result)

        return callbacks

    def exception(self, error: BaseException, console_input: Any, output: Any) -> Any:
        """
        Offer a failure to the exception hooks.

        Returns:
            The first non-None result, or None if no hook resolved the failure
        """
        for hook in self.for_stage(HookStage.EXCEPTION):
            code = invoke_hook(hook.callback, error, console_input, output)
            if code is not None:
                logger.info(
                    f"{type(error).__name__} resolved by {hook.source} with exit code {code}"
                )
                return code

        return None

    @staticmethod
    def shutdown(
        callbacks: list[Callable[..., Any]], console_input: Any, output: Any
    ) -> None:
        """
        Run shutdown callbacks in registration order.

        The first failing callback stops the rest and its error propagates.
        """
        for index, callback in enumerate(callbacks):
            try:
                invoke_hook(callback, console_input, output)
            except Exception:
                skipped = len(callbacks) - index - 1
                if skipped:
                    logger.warning(f"Shutdown callback failed; skipping {skipped} remaining")
                raise
