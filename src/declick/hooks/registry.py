"""Discover hook units on a command instance."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from declick.command import Command
from declick.exceptions import HookConfigurationError
from declick.models.enums import HookStage
from declick.models.metadata import get_class_subscribers

from .markers import get_hook_stage
from .protocols import HookSubscriber

logger = logging.getLogger(__name__)

# Never treated as hooks, even when marked
_SPECIAL_METHODS = frozenset({"__init__", "__del__", "__call__"})


@dataclass(frozen=True, slots=True)
class HookRegistration:
    """A callback bound to one lifecycle stage."""

    callback: Callable[..., Any]
    stage: HookStage
    source: str  # where it was found, for logs


def _method_hooks(target: object) -> list[HookRegistration]:
    cls = type(target)
    excluded = frozenset(Command.__mro__)
    seen: set[str] = set()
    hooks: list[HookRegistration] = []

    for klass in cls.__mro__:
        if klass in excluded:
            continue

        for name, member in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)

            if name in _SPECIAL_METHODS:
                continue

            stage = get_hook_stage(member)
            if stage is None:
                continue

            if not isinstance(stage, HookStage):
                raise HookConfigurationError(
                    f"Method {klass.__qualname__}.{name} has an invalid hook stage {stage!r}."
                )

            if name.startswith("_"):
                raise HookConfigurationError(
                    f"Method {klass.__qualname__}.{name} must be public.",
                    recovery_hint="Rename the hook method so it does not start with an underscore",
                )

            hooks.append(HookRegistration(getattr(target, name), stage, f"{klass.__qualname__}.{name}"))

    return hooks


def _subscriber_hooks(subscriber: Any) -> list[HookRegistration]:
    source = type(subscriber).__qualname__
    if not isinstance(subscriber, HookSubscriber):
        raise HookConfigurationError(
            f"Hook subscriber {source} must provide get_hooks().",
        )

    hooks: list[HookRegistration] = []
    for pair in subscriber.get_hooks():
        try:
            stage, callback = pair
        except (TypeError, ValueError) as e:
            raise HookConfigurationError(
                f"Hook subscriber {source} produced {pair!r}; expected a (stage, callback) pair."
            ) from e

        if not isinstance(stage, HookStage) or not callable(callback):
            raise HookConfigurationError(
                f"Hook subscriber {source} produced an invalid hook for stage {stage!r}."
            )
        hooks.append(HookRegistration(callback, stage, source))

    return hooks


def discover_hooks(target: object) -> list[HookRegistration]:
    """
    Find every hook unit of ``target`` in run order.

    Marked methods come first (most derived class first, class-body order
    within a class), then class-level subscribers, then the subscribers in
    ``target.hook_subscribers``.

    Raises:
        HookConfigurationError: If a hook method is not public or a
            subscriber is malformed
    """
    hooks = _method_hooks(target)

    subscribers = [
        *get_class_subscribers(type(target)),
        *getattr(target, "hook_subscribers", ()),
    ]
    for subscriber in subscribers:
        hooks.extend(_subscriber_hooks(subscriber))

    logger.debug(f"Discovered {len(hooks)} hooks on {type(target).__qualname__}")
    return hooks
