"""Compile command class metadata into a CommandDefinition.

The inference rules are plain functions over ``FieldBinding`` so they can be
checked without building a whole command class:

| Field                          | Argument                  | Option (no explicit mode)  |
|--------------------------------|---------------------------|----------------------------|
| ``bool``                       | required unless optional  | NEGATABLE                  |
| ``list[...]``                  | variadic, moved last      | REQUIRED/OPTIONAL+IS_ARRAY |
| default or ``X | None``        | optional                  | OPTIONAL                   |
| anything else                  | required                  | REQUIRED                   |
"""

import logging

from declick.exceptions import SchemaError
from declick.models.definition import ArgumentSpec, CommandDefinition, OptionSpec
from declick.models.enums import OptionMode, ValueKind
from declick.models.metadata import get_help, get_identity

from .introspection import FieldBinding, iter_field_bindings
from .normalize import normalize_default

logger = logging.getLogger(__name__)

_VALID_MODE_BITS = (
    OptionMode.NONE
    | OptionMode.REQUIRED
    | OptionMode.OPTIONAL
    | OptionMode.IS_ARRAY
    | OptionMode.NEGATABLE
)


def argument_required(binding: FieldBinding) -> bool:
    """An argument is required unless it has a default or accepts None."""
    return not binding.is_optional


def argument_variadic(binding: FieldBinding) -> bool:
    """An array-typed argument swallows all remaining positionals."""
    return binding.kind is ValueKind.ARRAY


def infer_option_mode(binding: FieldBinding) -> OptionMode:
    """Guess the option mode from the field's type and optionality."""
    if binding.kind is ValueKind.BOOLEAN:
        return OptionMode.NEGATABLE

    value_mode = OptionMode.OPTIONAL if binding.is_optional else OptionMode.REQUIRED
    if binding.kind is ValueKind.ARRAY:
        return value_mode | OptionMode.IS_ARRAY
    return value_mode


def split_shortcut(shortcut: str | tuple[str, ...] | None) -> tuple[str, ...]:
    """Normalize ``"v"``, ``"v|x"``, ``"-v"`` or ``("v", "x")`` to ``("v", "x")``."""
    if shortcut is None:
        return ()
    parts = shortcut.split("|") if isinstance(shortcut, str) else shortcut
    return tuple(part.strip().lstrip("-") for part in parts)


def _qualname(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _compile_arguments(cls: type, bindings: list[FieldBinding]) -> tuple[ArgumentSpec, ...]:
    command = _qualname(cls)
    result: list[ArgumentSpec] = []
    variadic: ArgumentSpec | None = None

    for binding in bindings:
        if binding.argument is None:
            continue

        name = binding.input_name
        if not name:
            raise SchemaError("Argument name cannot be empty!", command, binding.field_name)

        required = argument_required(binding)
        spec = ArgumentSpec(
            name=name,
            required=required,
            is_variadic=argument_variadic(binding),
            description=binding.argument.description or "",
            default=(
                normalize_default(binding.default, command, binding.field_name)
                if binding.has_default and not required
                else None
            ),
            suggested_values=binding.argument.suggested_values,
        )

        if spec.is_variadic:
            if variadic is not None:
                raise SchemaError(
                    "There must be only one array argument!",
                    command,
                    binding.field_name,
                    recovery_hint=f"`{variadic.name}` already collects the remaining arguments",
                )
            # Kept aside: the greedy argument has to come last
            variadic = spec
            continue

        result.append(spec)

    if variadic is not None:
        result.append(variadic)

    return tuple(result)


def _compile_options(cls: type, bindings: list[FieldBinding]) -> tuple[OptionSpec, ...]:
    command = _qualname(cls)
    result: list[OptionSpec] = []

    for binding in bindings:
        if binding.option is None:
            continue

        name = binding.input_name
        if not name:
            raise SchemaError("Option name cannot be empty!", command, binding.field_name)

        explicit = binding.option.option_mode
        mode = explicit if explicit is not None else infer_option_mode(binding)

        value_bits = int(_VALID_MODE_BITS) & ~int(OptionMode.IS_ARRAY)
        if int(mode) & ~int(_VALID_MODE_BITS) or not int(mode) & value_bits:
            raise SchemaError(
                f"Option mode {int(mode)} is not valid.", command, binding.field_name
            )

        if mode.is_flag:
            if binding.kind is not ValueKind.BOOLEAN:
                raise SchemaError(
                    "Options with mode `NONE` or `NEGATABLE` must be bool!",
                    command,
                    binding.field_name,
                )
            if mode & OptionMode.IS_ARRAY:
                raise SchemaError(
                    "Flag options cannot accept an array of values.",
                    command,
                    binding.field_name,
                )

        shortcut = split_shortcut(binding.option.shortcut)
        if any(not alias for alias in shortcut):
            raise SchemaError("Option shortcut cannot be empty!", command, binding.field_name)

        keep_default = explicit != OptionMode.NONE and binding.has_default
        result.append(
            OptionSpec(
                name=name,
                shortcut=shortcut,
                mode=mode,
                description=binding.option.description or "",
                default=(
                    normalize_default(binding.default, command, binding.field_name)
                    if keep_default
                    else None
                ),
                suggested_values=binding.option.suggested_values,
            )
        )

    return tuple(result)


def _check_unique(cls: type, kind: str, names: list[str]) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise SchemaError(f"Duplicate {kind} name `{name}`.", _qualname(cls))
        seen.add(name)


def compile_definition(cls: type) -> CommandDefinition:
    """
    Compile the metadata of a command class.

    Args:
        cls: A class decorated with ``@command``

    Returns:
        The immutable command definition

    Raises:
        SchemaError: If the class metadata is missing or malformed
    """
    identity = get_identity(cls)
    if identity is None:
        raise SchemaError(
            "Command must be declared with the `@command` decorator!",
            _qualname(cls),
            recovery_hint='Decorate the class with @command("name")',
        )

    if not identity.name:
        raise SchemaError("Command name cannot be empty!", _qualname(cls))

    bindings = iter_field_bindings(cls)
    arguments = _compile_arguments(cls, bindings)
    options = _compile_options(cls, bindings)

    _check_unique(cls, "argument", [arg.name for arg in arguments])
    _check_unique(cls, "option", [opt.name for opt in options])
    _check_unique(cls, "shortcut", [alias for opt in options for alias in opt.shortcut])

    help_ = get_help(cls)
    definition = CommandDefinition(
        name=identity.name,
        description=identity.description or None,
        help=help_.help if help_ else None,
        aliases=identity.aliases,
        hidden=identity.hidden,
        arguments=arguments,
        options=options,
    )

    logger.debug(
        f"Compiled command '{definition.name}': "
        f"{len(arguments)} arguments, {len(options)} options"
    )
    return definition
