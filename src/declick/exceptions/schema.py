"""Declaration errors.

These are raised while a command class is registered or its hooks are
discovered. They always point at a mistake in the command's declaration,
so they are never recoverable:
- SchemaError: Class or field metadata cannot be compiled into a definition
- HookConfigurationError: A hook unit or hook subscriber is unusable
"""

from typing import Optional

from .base import DeclickError


class SchemaError(DeclickError):
    """Command metadata is missing or malformed."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        field: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        """
        Initialize schema error.

        Args:
            message: What is wrong with the declaration
            command: Qualified name of the command class (optional)
            field: Name of the offending field (optional)
            recovery_hint: How to fix the declaration (optional)
        """
        location = command or "<unknown command>"
        if field:
            location += f".{field}"

        super().__init__(
            user_message=message,
            technical_message=f"Invalid command declaration {location}: {message}",
            recoverable=False,
            recovery_hint=recovery_hint,
        )
        self.command = command
        self.field = field


class HookConfigurationError(DeclickError):
    """A hook unit cannot be registered or invoked."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        super().__init__(
            user_message=message,
            technical_message=f"Hook configuration error: {message}",
            recoverable=False,
            recovery_hint=recovery_hint,
        )
