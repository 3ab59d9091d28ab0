"""Command lifecycle orchestration."""

from .lifecycle import CommandLifecycle, resolve_exit_code

__all__ = ["CommandLifecycle", "resolve_exit_code"]
