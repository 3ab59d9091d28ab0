"""Normalize declared field defaults into values Click can carry."""

from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from declick.exceptions import SchemaError

_SCALARS = (str, int, float, bool)


def normalize_default(value: Any, command: str | None = None, field: str | None = None) -> Any:
    """
    Reduce a default value to scalars, lists, dicts and None.

    Enum members become their value, collections are normalized element-wise
    and date/time values become ISO 8601 strings.

    Raises:
        SchemaError: If the value has no such representation
    """
    # Checked first: str and int mixin enums are scalars too
    if isinstance(value, Enum):
        return normalize_default(value.value, command, field)

    if value is None or isinstance(value, _SCALARS):
        return value

    if isinstance(value, (list, tuple, set, frozenset)):
        return [normalize_default(item, command, field) for item in value]

    if isinstance(value, Mapping):
        return {key: normalize_default(item, command, field) for key, item in value.items()}

    # datetime is a date subclass; both share isoformat()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    raise SchemaError(
        f"Invalid value type: {type(value).__name__}",
        command=command,
        field=field,
        recovery_hint="Defaults must be scalars, enums, dates or collections of those",
    )
