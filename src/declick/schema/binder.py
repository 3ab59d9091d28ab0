"""Bind raw console input onto a command instance."""

import logging
from enum import Enum
from typing import Any

import click

from declick.console.io import ConsoleInput
from declick.exceptions import InvalidValueError
from declick.models.enums import ValueKind

from .introspection import FieldBinding, iter_field_bindings
from .types import TypeMapper

logger = logging.getLogger(__name__)


def _resolve_enum(value: Any, enum_type: type[Enum], name: str) -> Enum:
    if isinstance(value, enum_type):
        return value

    # CLI input arrives as text, so "2" must find an int-valued member too
    for member in enum_type:
        if member.value == value or str(member.value) == str(value):
            return member

    raise InvalidValueError(name, value, allowed=[member.value for member in enum_type])


def _coerce_scalar(
    value: Any, kind: ValueKind | None, enum_type: type[Enum] | None, name: str
) -> Any:
    if value is None or kind is None:
        return value

    if kind is ValueKind.ENUM and enum_type is not None:
        return _resolve_enum(value, enum_type, name)

    try:
        return TypeMapper.to_click_type(kind).convert(value, None, None)
    except click.BadParameter as e:
        raise InvalidValueError(name, value, reason=e.message) from e
    except (TypeError, ValueError) as e:
        raise InvalidValueError(name, value, reason=str(e)) from e


def coerce(value: Any, binding: FieldBinding) -> Any:
    """
    Convert a raw value to the field's declared kind.

    None is returned unchanged.

    Raises:
        InvalidValueError: If the value cannot be converted
    """
    if value is None:
        return None

    name = binding.input_name

    if binding.kind is ValueKind.ARRAY:
        items = list(value) if isinstance(value, (list, tuple, set, frozenset)) else [value]
        return [
            _coerce_scalar(item, binding.element_kind, binding.element_enum_type, name)
            for item in items
        ]

    return _coerce_scalar(value, binding.kind, binding.enum_type, name)


def bind(instance: object, console_input: ConsoleInput) -> None:
    """
    Assign coerced input values to the instance's fields.

    Arguments present in the input are always assigned. Options are assigned
    only when the coerced value is not None or the field accepts None, so an
    absent optional value never overwrites a field default.

    Raises:
        InvalidValueError: If a value cannot be coerced
    """
    bindings = iter_field_bindings(type(instance))

    for binding in bindings:
        if binding.argument is None or not console_input.has_argument(binding.input_name):
            continue
        value = coerce(console_input.get_argument(binding.input_name), binding)
        setattr(instance, binding.field_name, value)

    for binding in bindings:
        if binding.option is None or not console_input.has_option(binding.input_name):
            continue
        value = coerce(console_input.get_option(binding.input_name), binding)
        if value is not None or binding.nullable:
            setattr(instance, binding.field_name, value)

    logger.debug(f"Bound input onto {type(instance).__qualname__}")
