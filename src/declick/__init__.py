"""declick: declarative console commands on top of Click."""

__version__ = "0.1.0"

# Declaring commands
from .command import Command
from .hooks import HookSubscriber, console_hook, on_exception, on_startup
from .models import (
    Argument,
    ConsoleConfig,
    HookStage,
    Option,
    OptionMode,
    Question,
    command,
    command_help,
    question,
    with_hooks,
)

# Running commands
from .cli.app import ConsoleApplication
from .cli.builder import CommandBuilder
from .orchestration import CommandLifecycle

__all__ = [
    "Argument",
    "Command",
    "CommandBuilder",
    "CommandLifecycle",
    "ConsoleApplication",
    "ConsoleConfig",
    "HookStage",
    "HookSubscriber",
    "Option",
    "OptionMode",
    "Question",
    "command",
    "command_help",
    "console_hook",
    "on_exception",
    "on_startup",
    "question",
    "with_hooks",
]
