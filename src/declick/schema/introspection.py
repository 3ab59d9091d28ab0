"""Read field metadata off a command class.

Every annotated field carrying ``Argument`` or ``Option`` metadata becomes a
``FieldBinding``: the field's resolved value kind, nullability and declared
default. Bindings are rebuilt on each call; the compiler and the binder both
start from them.
"""

import collections.abc
import logging
import types
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from declick.exceptions import SchemaError
from declick.models.enums import ValueKind
from declick.models.metadata import Argument, Option, Question, get_class_questions

logger = logging.getLogger(__name__)

_SCALAR_KINDS: dict[type, ValueKind] = {
    int: ValueKind.INTEGER,
    str: ValueKind.STRING,
    bool: ValueKind.BOOLEAN,
    float: ValueKind.FLOAT,
}

_ARRAY_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
)


@dataclass(frozen=True, slots=True)
class FieldBinding:
    """Resolved metadata of one argument- or option-tagged field."""

    field_name: str
    kind: ValueKind
    nullable: bool
    has_default: bool
    default: Any = None
    enum_type: type[Enum] | None = None
    element_kind: ValueKind | None = None  # array element kind, when known
    element_enum_type: type[Enum] | None = None
    argument: Argument | None = None
    option: Option | None = None
    questions: tuple[Question, ...] = ()

    @property
    def input_name(self) -> str:
        """Name of the argument/option the field is bound to."""
        meta = self.argument or self.option
        if meta is not None and meta.name is not None:
            return meta.name
        return self.field_name

    @property
    def is_optional(self) -> bool:
        """A field may be left out when it has a default or accepts None."""
        return self.has_default or self.nullable


def _is_union(hint: Any) -> bool:
    origin = get_origin(hint)
    return origin is Union or origin is types.UnionType


def _split_annotated(hint: Any) -> tuple[Any, list[Any]]:
    """Separate ``Annotated`` metadata from the type, also inside ``X | None``."""
    if get_origin(hint) is Annotated:
        base, *extras = get_args(hint)
        return base, extras

    if _is_union(hint):
        members: list[Any] = []
        extras: list[Any] = []
        for member in get_args(hint):
            if get_origin(member) is Annotated:
                inner, *more = get_args(member)
                members.append(inner)
                extras.extend(more)
            else:
                members.append(member)
        if extras:
            return Union[tuple(members)], extras

    return hint, []


def _scalar_or_enum(hint: Any) -> tuple[ValueKind, type[Enum] | None] | None:
    if hint in _SCALAR_KINDS:
        return _SCALAR_KINDS[hint], None
    if isinstance(hint, type) and issubclass(hint, Enum):
        return ValueKind.ENUM, hint
    return None


def _array_element(hint: Any) -> tuple[ValueKind | None, type[Enum] | None]:
    args = [arg for arg in get_args(hint) if arg is not Ellipsis]
    if len(set(args)) != 1:
        # Bare list or heterogeneous tuple: elements pass through
        return None, None
    resolved = _scalar_or_enum(args[0])
    if resolved is None:
        return None, None
    return resolved


def resolve_value_type(
    hint: Any, command: str, field: str
) -> tuple[ValueKind, bool, type[Enum] | None, ValueKind | None, type[Enum] | None]:
    """
    Resolve a field annotation to its value kind.

    Returns:
        Tuple of (kind, nullable, enum_type, element_kind, element_enum_type)

    Raises:
        SchemaError: If the annotation is not one of the supported kinds
    """
    nullable = False
    if _is_union(hint):
        members = get_args(hint)
        nullable = type(None) in members
        candidates = [member for member in members if member is not type(None)]
    else:
        candidates = [hint]

    # With several members the first resolvable one wins
    for candidate in candidates:
        resolved = _scalar_or_enum(candidate)
        if resolved is not None:
            kind, enum_type = resolved
            return kind, nullable, enum_type, None, None

        if candidate in _ARRAY_ORIGINS or get_origin(candidate) in _ARRAY_ORIGINS:
            element_kind, element_enum = _array_element(candidate)
            return ValueKind.ARRAY, nullable, None, element_kind, element_enum

    raise SchemaError(
        f"Invalid type for the `{field}` field.",
        command=command,
        field=field,
        recovery_hint="Use int, str, bool, float, an Enum, or a list of those",
    )


def _lookup_default(cls: type, field_name: str) -> tuple[bool, Any]:
    for klass in cls.__mro__:
        if field_name in vars(klass):
            return True, vars(klass)[field_name]
    return False, None


def iter_field_bindings(cls: type) -> list[FieldBinding]:
    """
    Build bindings for every argument/option field of ``cls``.

    Fields are returned in declaration order, base-class fields first.

    Raises:
        SchemaError: On unresolvable annotations or conflicting metadata
    """
    command = cls.__qualname__
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise SchemaError(
            f"Cannot resolve field annotations: {e}", command=command
        ) from e

    bindings: list[FieldBinding] = []
    for field_name, hint in hints.items():
        base, extras = _split_annotated(hint)
        argument = next((item for item in extras if isinstance(item, Argument)), None)
        option = next((item for item in extras if isinstance(item, Option)), None)
        if argument is None and option is None:
            continue

        if argument is not None and option is not None:
            raise SchemaError(
                f"Field `{field_name}` cannot be both an argument and an option.",
                command=command,
                field=field_name,
            )

        kind, nullable, enum_type, element_kind, element_enum = resolve_value_type(
            base, command, field_name
        )
        has_default, default = _lookup_default(cls, field_name)

        bindings.append(
            FieldBinding(
                field_name=field_name,
                kind=kind,
                nullable=nullable,
                has_default=has_default,
                default=default,
                enum_type=enum_type,
                element_kind=element_kind,
                element_enum_type=element_enum,
                argument=argument,
                option=option,
                questions=tuple(item for item in extras if isinstance(item, Question)),
            )
        )

    logger.debug(f"Introspected {len(bindings)} fields on {command}")
    return bindings


def collect_questions(cls: type) -> dict[str, str]:
    """
    Map argument names to prompt texts.

    Class-level questions take precedence over field-level ones.
    """
    questions: dict[str, str] = {}
    for entry in get_class_questions(cls):
        if entry.argument is None:
            raise SchemaError(
                "A class-level question must name the argument it asks for.",
                command=cls.__qualname__,
            )
        questions.setdefault(entry.argument, entry.text)

    for binding in iter_field_bindings(cls):
        if binding.argument is None:
            continue
        for entry in binding.questions:
            questions.setdefault(entry.argument or binding.input_name, entry.text)

    return questions
