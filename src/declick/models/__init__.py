"""Declarative metadata and compiled schema records."""

from .config import ConsoleConfig
from .definition import ArgumentSpec, CommandDefinition, OptionSpec
from .enums import HookStage, OptionMode, ValueKind
from .metadata import (
    Argument,
    CommandHelp,
    CommandIdentity,
    Option,
    Question,
    command,
    command_help,
    question,
    with_hooks,
)

__all__ = [
    "Argument",
    "ArgumentSpec",
    "CommandDefinition",
    "CommandHelp",
    "CommandIdentity",
    "ConsoleConfig",
    "HookStage",
    "Option",
    "OptionMode",
    "OptionSpec",
    "Question",
    "ValueKind",
    "command",
    "command_help",
    "question",
    "with_hooks",
]
