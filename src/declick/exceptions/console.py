"""Per-invocation input errors.

These abort a single command invocation before its business logic runs,
but leave the process (and the registered command) intact:
- ConsoleError: Base class for input problems
- InvalidValueError: A raw value cannot be coerced to the field type
- MissingArgumentError: A required argument was not supplied
- UnknownInputError: An argument or option name is not defined
"""

from collections.abc import Sequence
from typing import Any, Optional

from .base import DeclickError


class ConsoleError(DeclickError):
    """Raw console input is unusable for this invocation."""
    pass


class InvalidValueError(ConsoleError, ValueError):
    """A raw value cannot be coerced to the declared field type."""

    def __init__(
        self,
        name: str,
        value: Any,
        reason: Optional[str] = None,
        allowed: Optional[Sequence[Any]] = None,
    ):
        """
        Initialize invalid value error.

        Args:
            name: Argument or option name the value was supplied for
            value: The raw value
            reason: Why the value was rejected (used when ``allowed`` is empty)
            allowed: Allowed values, in declaration order
        """
        if allowed:
            listed = "`, `".join(str(item) for item in allowed)
            user_msg = f"Wrong value for `{name}`. Allowed values: `{listed}`."
        else:
            user_msg = f"Invalid value for `{name}`: {reason or 'conversion failed'}"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Coercion failed for {name}={value!r}: {user_msg}",
            recoverable=True,
            recovery_hint=f"Run the command with --help to see what `{name}` accepts",
        )
        self.name = name
        self.value = value
        self.allowed = tuple(allowed or ())


class MissingArgumentError(ConsoleError):
    """A required argument was not supplied and cannot be prompted for."""

    def __init__(self, name: str):
        super().__init__(
            user_message=f"Not enough arguments (missing: `{name}`).",
            recoverable=True,
            recovery_hint="Pass the argument on the command line or drop --no-interaction",
        )
        self.name = name


class UnknownInputError(ConsoleError, KeyError):
    """An argument or option that the command does not define was requested."""

    def __init__(self, kind: str, name: str):
        super().__init__(user_message=f'The "{name}" {kind} does not exist.')
        self.kind = kind
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return self.user_message
