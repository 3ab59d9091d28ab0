"""Map field value kinds to Click parameter types."""

import logging

import click

from declick.models.enums import ValueKind

logger = logging.getLogger(__name__)


class TypeMapper:
    """Maps value kinds to Click parameter types."""

    # Enums stay strings on the Click side; the binder resolves them so the
    # error lists the allowed values
    MAPPINGS: dict[ValueKind, click.ParamType] = {
        ValueKind.INTEGER: click.INT,
        ValueKind.STRING: click.STRING,
        ValueKind.FLOAT: click.FLOAT,
        ValueKind.BOOLEAN: click.BOOL,
        ValueKind.ENUM: click.STRING,
    }

    @classmethod
    def to_click_type(cls, kind: ValueKind | None) -> click.ParamType:
        """
        Convert a value kind to a Click parameter type.

        Args:
            kind: Scalar kind of a field, or of an array's elements

        Returns:
            Corresponding Click parameter type (STRING when unknown)
        """
        if kind is None:
            return click.STRING

        click_type = cls.MAPPINGS.get(kind)
        if click_type:
            return click_type

        logger.warning(f"No Click type for {kind}, defaulting to click.STRING")
        return click.STRING
