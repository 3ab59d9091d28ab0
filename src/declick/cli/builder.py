"""Build Click commands from compiled command definitions.

A ``CommandDefinition`` carries everything Click needs: arguments become
``click.Argument`` parameters, options become ``click.Option`` parameters,
and the callback hands the parsed values to the command lifecycle.

Option modes map onto Click as follows:

| Mode                 | Click option                                     |
|----------------------|--------------------------------------------------|
| ``NONE``             | ``--name`` (``is_flag=True``)                    |
| ``NEGATABLE``        | ``--name/--no-name``                             |
| ``REQUIRED``         | ``--name VALUE``                                 |
| ``OPTIONAL``         | ``--name VALUE`` (may be left out)               |
| ``... | IS_ARRAY``   | ``--name VALUE`` repeatable (``multiple=True``)  |

Example Usage:
    ```python
    builder = CommandBuilder(Greet)
    greet = builder.build()
    greet.main(["alice", "--shout"])
    ```
"""

import logging
from typing import Any, Optional

import click
from click.shell_completion import CompletionItem

from declick.command import Command
from declick.console.io import VERBOSITY_NORMAL, ConsoleInput, ConsoleOutput
from declick.console.prompts import prompt_missing_arguments
from declick.exceptions import ConsoleError, SchemaError
from declick.models.config import ConsoleConfig
from declick.models.definition import ArgumentSpec, OptionSpec
from declick.orchestration.lifecycle import DIAGNOSTICS_OPTION, CommandLifecycle
from declick.schema.introspection import FieldBinding, iter_field_bindings
from declick.schema.types import TypeMapper

logger = logging.getLogger(__name__)

NO_INTERACTION_OPTION = "no-interaction"

# Added to every command; user options may not reuse these names
RESERVED_OPTIONS = {DIAGNOSTICS_OPTION, NO_INTERACTION_OPTION, "help"}
RESERVED_SHORTCUTS = {"n"}


def _identifier(prefix: str, name: str) -> str:
    """Python identifier Click stores a parameter value under."""
    cleaned = "".join(char if char.isalnum() else "_" for char in name)
    return f"{prefix}_{cleaned}"


def _suggestions(values: tuple[str, ...]):
    """Shell completion callback offering ``values``."""

    def complete(ctx: click.Context, param: click.Parameter, incomplete: str) -> list[CompletionItem]:
        return [CompletionItem(value) for value in values if value.startswith(incomplete)]

    return complete


class CommandBuilder:
    """
    Turns one command class into a ``click.Command``.

    The class is compiled once, here. Every invocation of the built command
    creates a fresh command instance.

    Args:
        command_cls: Class decorated with ``@command``
        config: Process-wide settings (defaults when omitted)

    Raises:
        SchemaError: If the class is not a valid command declaration or
            declares an option reserved for the built-in ones
    """

    def __init__(self, command_cls: type[Command], config: Optional[ConsoleConfig] = None):
        self.command_cls = command_cls
        self.config = config or ConsoleConfig()
        self.lifecycle = CommandLifecycle(command_cls, self.config)
        self.definition = self.lifecycle.definition

        bindings = iter_field_bindings(command_cls)
        self._arguments_by_name: dict[str, FieldBinding] = {
            b.input_name: b for b in bindings if b.argument is not None
        }
        self._options_by_name: dict[str, FieldBinding] = {
            b.input_name: b for b in bindings if b.option is not None
        }

        # Click parameter name -> ("argument" | "option", input name)
        self._params: dict[str, tuple[str, str]] = {}

        self._check_reserved()

    def _check_reserved(self) -> None:
        for option in self.definition.options:
            names = {option.name}
            if option.is_negatable:
                names.add(f"no-{option.name}")
            taken = names & RESERVED_OPTIONS
            if taken:
                raise SchemaError(
                    f"Option `{option.name}` uses the reserved name `--{taken.pop()}`.",
                    command=self.definition.name,
                    recovery_hint=f"Reserved options: {', '.join(sorted(RESERVED_OPTIONS))}",
                )
            clash = RESERVED_SHORTCUTS.intersection(option.shortcut)
            if clash:
                raise SchemaError(
                    f"Shortcut `-{clash.pop()}` of option `{option.name}` is reserved.",
                    command=self.definition.name,
                )

    def _register_param(self, kind: str, name: str) -> str:
        param_name = _identifier("arg" if kind == "argument" else "opt", name)
        if param_name in self._params:
            raise SchemaError(
                f"{kind.capitalize()} `{name}` clashes with `{self._params[param_name][1]}`.",
                command=self.definition.name,
            )
        self._params[param_name] = (kind, name)
        return param_name

    def _click_type(self, binding: Optional[FieldBinding]) -> click.ParamType:
        if binding is None:
            return click.STRING
        if binding.element_kind is not None:
            return TypeMapper.to_click_type(binding.element_kind)
        return TypeMapper.to_click_type(binding.kind)

    def _argument_to_param(self, spec: ArgumentSpec) -> click.Argument:
        """
        Convert an argument spec to a Click argument.

        Click never enforces presence: missing required arguments are
        prompted for (or reported) after parsing.
        """
        param_name = self._register_param("argument", spec.name)
        metavar = spec.name.upper() + ("..." if spec.is_variadic else "")
        kwargs: dict[str, Any] = {
            "required": False,
            "metavar": metavar if spec.required else f"[{metavar}]",
            "nargs": -1 if spec.is_variadic else 1,
            "type": self._click_type(self._arguments_by_name.get(spec.name)),
        }
        if spec.suggested_values:
            kwargs["shell_complete"] = _suggestions(spec.suggested_values)
        return click.Argument([param_name], **kwargs)

    def _option_to_param(self, spec: OptionSpec) -> click.Option:
        """Convert an option spec to a Click option."""
        param_name = self._register_param("option", spec.name)
        shortcuts = [f"-{alias}" for alias in spec.shortcut]

        if spec.is_negatable:
            decls = [f"--{spec.name}/--no-{spec.name}", *shortcuts, param_name]
        else:
            decls = [f"--{spec.name}", *shortcuts, param_name]

        help_text = spec.description
        kwargs: dict[str, Any] = {"help": help_text}

        if spec.is_flag:
            kwargs["is_flag"] = True
            if spec.default is not None:
                kwargs["default"] = spec.default
        else:
            kwargs["type"] = self._click_type(self._options_by_name.get(spec.name))
            kwargs["multiple"] = spec.is_array
            kwargs["default"] = spec.default
            # None means "not provided by user"
            kwargs["show_default"] = spec.default not in (None, [], ())

        if spec.suggested_values:
            kwargs["shell_complete"] = _suggestions(spec.suggested_values)

        return click.Option(decls, **kwargs)

    def _global_options(self) -> list[click.Option]:
        return [
            click.Option(
                [f"--{DIAGNOSTICS_OPTION}", "diagnostics"],
                is_flag=True,
                help="Print execution time and memory usage",
            ),
            click.Option(
                [f"--{NO_INTERACTION_OPTION}", "-n", "no_interaction"],
                is_flag=True,
                help="Do not ask any interactive question",
            ),
        ]

    def _help_text(self) -> Optional[str]:
        """Command help followed by the argument descriptions Click can't show."""
        parts = [text for text in (self.definition.description, self.definition.help) if text]
        described = [arg for arg in self.definition.arguments if arg.description]
        if described:
            lines = ["\b", "Arguments:"]
            lines.extend(f"  {arg.name.upper():<16} {arg.description}" for arg in described)
            parts.append("\n".join(lines))
        return "\n\n".join(parts) or None

    def _split_values(self, params: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        arguments: dict[str, Any] = {}
        options: dict[str, Any] = {}

        for param_name, value in params.items():
            if param_name not in self._params:
                continue
            kind, name = self._params[param_name]
            if kind == "option":
                if value == () and self.definition.option(name).default is None:
                    # Absent array option keeps its None default
                    value = None
                options[name] = list(value) if isinstance(value, tuple) else value
                continue

            spec = self.definition.argument(name)
            if spec.is_variadic:
                value = list(value or ())
                if not value and spec.default is not None:
                    value = list(spec.default)
            elif value is None:
                value = spec.default
            arguments[name] = value

        return arguments, options

    def _invoke(self, **params: Any) -> None:
        ctx = click.get_current_context()
        arguments, options = self._split_values(params)

        no_interaction = params.get("no_interaction", False)
        options[DIAGNOSTICS_OPTION] = params.get("diagnostics", False)
        options[NO_INTERACTION_OPTION] = no_interaction

        settings = ctx.find_object(dict) or {}
        console_input = ConsoleInput(
            arguments,
            options,
            interactive=self.config.interactive and not no_interaction,
        )
        output = ConsoleOutput(verbosity=settings.get("verbosity", VERBOSITY_NORMAL))

        logger.debug(f"Invoking '{self.definition.name}' with {console_input!r}")
        try:
            prompt_missing_arguments(self.command_cls, self.definition, console_input, output)
            exit_code = self.lifecycle.run(console_input, output)
        except ConsoleError as e:
            raise click.UsageError(e.user_message, ctx=ctx) from e

        ctx.exit(exit_code)

    def build(self) -> click.Command:
        """
        Build the Click command.

        Returns:
            A ``click.Command`` that runs the command class when invoked
        """
        self._params = {}
        params: list[click.Parameter] = [
            self._argument_to_param(spec) for spec in self.definition.arguments
        ]
        params.extend(self._option_to_param(spec) for spec in self.definition.options)
        params.extend(self._global_options())

        return click.Command(
            name=self.definition.name,
            callback=self._invoke,
            params=params,
            help=self._help_text(),
            short_help=self.definition.description,
            hidden=self.definition.hidden,
        )
