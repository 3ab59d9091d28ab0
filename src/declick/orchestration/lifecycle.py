"""
Command lifecycle orchestration.

One ``CommandLifecycle`` exists per command class. Each call to ``run`` is
one invocation:

    bind -> startup hooks -> invoke -> (exception hooks) -> shutdown -> diagnostics
"""

import logging
from typing import Any, Optional

from declick.command import Command
from declick.console.diagnostics import (
    Stopwatch,
    format_execution_time,
    format_memory_usage,
    peak_memory_bytes,
)
from declick.console.io import ConsoleInput, ConsoleOutput
from declick.exceptions import TerminateCommand
from declick.hooks.runner import HookRunner
from declick.models.config import ConsoleConfig
from declick.models.definition import CommandDefinition
from declick.schema.binder import bind
from declick.schema.compiler import compile_definition

logger = logging.getLogger(__name__)

DIAGNOSTICS_OPTION = "diagnostics"


def resolve_exit_code(value: Any, config: ConsoleConfig) -> int:
    """
    Map the value returned by a command to a process exit code.

    ``bool`` is checked before ``int`` since it is a subclass of it.
    """
    if isinstance(value, bool):
        return config.success_exit_code if value else config.failure_exit_code
    if isinstance(value, int):
        return value
    return config.success_exit_code


class CommandLifecycle:
    """
    Runs commands of one class.

    Args:
        command_cls: Class decorated with ``@command``
        config: Process-wide settings (defaults when omitted)

    Raises:
        SchemaError: If the class is not a valid command declaration
    """

    def __init__(self, command_cls: type[Command], config: Optional[ConsoleConfig] = None):
        self.command_cls = command_cls
        self.config = config or ConsoleConfig()
        self.definition: CommandDefinition = compile_definition(command_cls)
        logger.debug(f"Compiled command '{self.definition.name}' from {command_cls.__qualname__}")

    def diagnostics_enabled(self, console_input: ConsoleInput) -> bool:
        if self.config.default_diagnostics:
            return True
        return bool(console_input.options.get(DIAGNOSTICS_OPTION))

    def run(
        self,
        console_input: ConsoleInput,
        output: ConsoleOutput,
        command: Optional[Command] = None,
    ) -> int:
        """
        Execute one invocation and return its exit code.

        Args:
            console_input: Raw values parsed from the command line
            output: Sink for command and diagnostic output
            command: Instance to run (a fresh one is created when omitted)

        Raises:
            ConsoleError: If a raw value cannot be bound to its field
            HookConfigurationError: If a hook is declared incorrectly
            Exception: Any failure of the command no exception hook resolved
        """
        if command is None:
            command = self.command_cls()

        stopwatch = Stopwatch()
        command.attach(console_input, output)
        bind(command, console_input)

        runner = HookRunner(command)
        callbacks = runner.startup(console_input, output)
        logger.info(
            f"Running '{self.definition.name}' "
            f"({len(runner.hooks)} hooks, {len(callbacks)} shutdown callbacks)"
        )

        try:
            try:
                result = command.invoke(console_input, output)
            except TerminateCommand as terminate:
                logger.info(f"'{self.definition.name}' terminated with exit code {terminate.exit_code}")
                result = terminate.exit_code
            except Exception as error:
                result = runner.exception(error, console_input, output)
                if result is None:
                    logger.debug(f"No exception hook resolved {type(error).__name__}")
                    raise
        finally:
            HookRunner.shutdown(callbacks, console_input, output)

        exit_code = resolve_exit_code(result, self.config)

        if self.diagnostics_enabled(console_input):
            output.writeln(format_execution_time(stopwatch.lap()))
            peak = peak_memory_bytes()
            if peak is not None:
                output.writeln(format_memory_usage(peak))

        logger.info(f"'{self.definition.name}' finished with exit code {exit_code}")
        return exit_code
