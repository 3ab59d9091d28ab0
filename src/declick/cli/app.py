"""Console application: a Click group of declarative commands."""

import logging
import sys
from collections.abc import Sequence
from typing import Any, NoReturn, Optional

import click

from declick.command import Command
from declick.exceptions import ErrorContext, format_error_for_display
from declick.models.config import ConsoleConfig

from .builder import CommandBuilder

logger = logging.getLogger(__name__)


def report_unhandled_error(error: BaseException, log_hint: Optional[str] = None) -> None:
    """Print a failure no command handled, without a traceback."""
    logger.exception("Unhandled error while running command")

    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)
    if log_hint:
        click.echo(f"\n{log_hint}", err=True)


class ConsoleApplication(click.Group):
    """
    Click group that registers command classes.

    Example:
        ```python
        app = ConsoleApplication("tools", config=ConsoleConfig(default_diagnostics=False))
        app.add(Greet)
        app.add(Import)

        if __name__ == "__main__":
            app.run()
        ```
    """

    def __init__(
        self,
        name: Optional[str] = None,
        config: Optional[ConsoleConfig] = None,
        **attrs: Any,
    ):
        super().__init__(name=name, **attrs)
        self.config = config or ConsoleConfig()
        self.aliases: dict[str, str] = {}

    def add(self, command_cls: type[Command]) -> click.Command:
        """
        Compile and register a command class.

        Raises:
            SchemaError: If the class is not a valid command declaration
        """
        with ErrorContext(f"register {command_cls.__qualname__}", logger_instance=logger):
            builder = CommandBuilder(command_cls, self.config)
            built = builder.build()
        self.add_command(built)

        for alias in builder.definition.aliases:
            self.aliases[alias] = built.name
        logger.debug(f"Registered command '{built.name}' ({command_cls.__qualname__})")
        return built

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def run(self, args: Optional[Sequence[str]] = None, prog_name: Optional[str] = None) -> NoReturn:
        """
        Run the application and exit the process.

        Usage errors exit with Click's code (2). Failures no exception hook
        resolved are logged, printed without a traceback and exit with 1.
        """
        try:
            exit_code = self.main(
                args=list(args) if args is not None else None,
                prog_name=prog_name,
                standalone_mode=False,
            )
        except click.ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except click.Abort:
            # Click turns Ctrl+C and EOF into Abort
            logger.info("Command interrupted by user")
            click.echo("Aborted!", err=True)
            sys.exit(1)
        except Exception as e:
            report_unhandled_error(e)
            sys.exit(1)

        sys.exit(exit_code if isinstance(exit_code, int) else 0)
