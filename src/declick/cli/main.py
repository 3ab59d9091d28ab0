"""Main CLI entry point."""

import importlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from declick import __version__
from declick.exceptions import ConfigurationError, DeclickError
from declick.models.config import ConsoleConfig
from declick.schema.compiler import compile_definition

from .app import report_unhandled_error
from .builder import CommandBuilder
from .logging import setup_logging

logger = logging.getLogger(__name__)


def load_command_class(target: str) -> type:
    """
    Import a command class from ``module:Class`` or ``path/to/file.py:Class``.

    Raises:
        click.BadParameter: If the module or class can't be found
    """
    module_ref, sep, class_name = target.rpartition(":")
    if not sep or not module_ref or not class_name:
        raise click.BadParameter(
            f"'{target}' is not of the form module:Class", param_hint="TARGET"
        )

    try:
        if module_ref.endswith(".py"):
            path = Path(module_ref)
            spec = importlib.util.spec_from_file_location(path.stem, path)
            if spec is None or spec.loader is None or not path.exists():
                raise click.BadParameter(f"File not found: {path}", param_hint="TARGET")
            module = importlib.util.module_from_spec(spec)
            sys.modules[spec.name] = module
            spec.loader.exec_module(module)
        else:
            module = importlib.import_module(module_ref)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import '{module_ref}': {e}", param_hint="TARGET") from e

    command_cls = getattr(module, class_name, None)
    if not isinstance(command_cls, type):
        raise click.BadParameter(
            f"'{module_ref}' has no class named '{class_name}'", param_hint="TARGET"
        )
    return command_cls


def _show_declaration_error(error: DeclickError) -> None:
    click.echo(f"Error: {error.user_message}", err=True)
    if error.recovery_hint:
        click.echo(f"Hint: {error.recovery_hint}", err=True)


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="declick")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./declick-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='JSON console configuration file'
)
def cli(
    ctx,
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str,
    config_path: Optional[Path],
):
    """
    declick - declarative console commands on top of Click.

    \b
    Examples:
      # Show the compiled definition of a command class
      declick inspect myapp.commands:Greet

      # Run a command class with arguments
      declick run myapp.commands:Greet alice --shout

      # Run a command defined in a file, with debug logging
      declick --debug run ./greet.py:Greet alice
    """
    setup_logging(verbose, debug, log_file, log_level)

    try:
        config = ConsoleConfig.load_or_default(config_path)
    except ConfigurationError as e:
        _show_declaration_error(e)
        ctx.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbosity"] = 1 + verbose


@cli.command(name="inspect")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Print the definition as JSON")
def inspect_command(target: str, as_json: bool):
    """Show the compiled definition of a command class (module:Class)."""
    command_cls = load_command_class(target)

    try:
        definition = compile_definition(command_cls)
    except DeclickError as e:
        _show_declaration_error(e)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(definition.model_dump(mode="json"), indent=2))
        return

    click.echo(f"\nCommand: {definition.name}")
    click.echo("=" * 60)
    if definition.description:
        click.echo(f"  Description: {definition.description}")
    if definition.aliases:
        click.echo(f"  Aliases: {', '.join(definition.aliases)}")
    if definition.hidden:
        click.echo("  Hidden: yes")

    click.echo("\nArguments:")
    if not definition.arguments:
        click.echo("  (none)")
    for argument in definition.arguments:
        flags = ["required" if argument.required else "optional"]
        if argument.is_variadic:
            flags.append("variadic")
        line = f"  {argument.name} [{', '.join(flags)}]"
        if argument.default is not None:
            line += f" (default: {argument.default})"
        click.echo(line)

    click.echo("\nOptions:")
    if not definition.options:
        click.echo("  (none)")
    for option in definition.options:
        names = [f"--{option.name}", *(f"-{alias}" for alias in option.shortcut)]
        line = f"  {', '.join(names)} [{option.mode.name}]"
        if option.default is not None:
            line += f" (default: {option.default})"
        click.echo(line)
    click.echo("")


@cli.command(
    name="run",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    add_help_option=False,
)
@click.argument("target")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run_command(ctx, target: str, args: tuple[str, ...]):
    """Run a command class (module:Class), passing ARGS to it."""
    command_cls = load_command_class(target)
    config = ctx.obj["config"]

    try:
        built = CommandBuilder(command_cls, config).build()
    except DeclickError as e:
        _show_declaration_error(e)
        sys.exit(1)

    logger.info(f"Running {target}")
    try:
        exit_code = built.main(
            args=list(args),
            prog_name=f"declick run {target}",
            standalone_mode=False,
            obj=ctx.obj,
        )
    except (click.ClickException, click.Abort):
        # Click reports these itself
        raise
    except Exception as e:
        report_unhandled_error(e, "For logging options, run: declick --help")
        sys.exit(1)

    ctx.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    cli()
