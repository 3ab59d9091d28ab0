"""Lifecycle hook discovery and execution."""

from .markers import console_hook, on_exception, on_startup
from .protocols import HookSubscriber
from .registry import HookRegistration, discover_hooks
from .runner import HookRunner, invoke_hook

__all__ = [
    "HookRegistration",
    "HookRunner",
    "HookSubscriber",
    "console_hook",
    "discover_hooks",
    "invoke_hook",
    "on_exception",
    "on_startup",
]
