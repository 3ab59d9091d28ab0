"""Enumerations for command metadata."""

from enum import Enum, IntFlag


class HookStage(str, Enum):
    """Lifecycle points at which hook units run."""

    STARTUP = "startup"  # Before business logic; may return a shutdown callback
    EXCEPTION = "exception"  # After business logic raised; may return an exit code


class OptionMode(IntFlag):
    """
    How an option takes its value.

    ``IS_ARRAY`` combines with ``REQUIRED`` or ``OPTIONAL``; ``NONE`` and
    ``NEGATABLE`` are boolean-only flag modes.
    """

    NONE = 1  # --flag, no value
    REQUIRED = 2  # --opt VALUE
    OPTIONAL = 4  # --opt [VALUE]
    IS_ARRAY = 8  # --opt A --opt B
    NEGATABLE = 16  # --flag / --no-flag

    @property
    def is_flag(self) -> bool:
        """True for boolean-only modes."""
        return bool(self & (OptionMode.NONE | OptionMode.NEGATABLE))


class ValueKind(str, Enum):
    """Value types a command field may declare."""

    INTEGER = "int"
    STRING = "str"
    BOOLEAN = "bool"
    FLOAT = "float"
    ARRAY = "array"
    ENUM = "enum"

    @property
    def is_scalar(self) -> bool:
        """Check if values of this kind are single scalars."""
        return self in (ValueKind.INTEGER, ValueKind.STRING, ValueKind.BOOLEAN, ValueKind.FLOAT)
