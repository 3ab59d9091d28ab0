"""Compiled command schema.

These records are produced once per command class by the schema compiler
and handed to Click by ``declick.cli.builder``. They are frozen: nothing
mutates a definition after registration.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import OptionMode


class ArgumentSpec(BaseModel):
    """A positional argument."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    required: bool = True
    is_variadic: bool = False
    description: str = ""
    default: Any = None
    suggested_values: tuple[str, ...] = ()


class OptionSpec(BaseModel):
    """A named option."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    shortcut: tuple[str, ...] = ()
    mode: OptionMode = OptionMode.OPTIONAL
    description: str = ""
    default: Any = None
    suggested_values: tuple[str, ...] = ()

    @property
    def is_flag(self) -> bool:
        """Boolean-only option (NONE or NEGATABLE)."""
        return self.mode.is_flag

    @property
    def is_negatable(self) -> bool:
        return bool(self.mode & OptionMode.NEGATABLE)

    @property
    def is_array(self) -> bool:
        return bool(self.mode & OptionMode.IS_ARRAY)

    @property
    def accepts_value(self) -> bool:
        """Check if the option takes a value on the command line."""
        return bool(self.mode & (OptionMode.REQUIRED | OptionMode.OPTIONAL))


class CommandDefinition(BaseModel):
    """Everything the CLI toolkit needs to register a command."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str | None = None
    help: str | None = None
    aliases: tuple[str, ...] = ()
    hidden: bool = False
    arguments: tuple[ArgumentSpec, ...] = ()
    options: tuple[OptionSpec, ...] = ()

    def argument(self, name: str) -> ArgumentSpec | None:
        """Look up an argument by name."""
        return next((arg for arg in self.arguments if arg.name == name), None)

    def option(self, name: str) -> OptionSpec | None:
        """Look up an option by name."""
        return next((opt for opt in self.options if opt.name == name), None)
