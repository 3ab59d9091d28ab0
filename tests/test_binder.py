"""Tests for binding raw console values onto command fields."""

from enum import Enum
from typing import Annotated, Optional

import pytest

from declick import Argument, Command, Option, command
from declick.exceptions import ConsoleError, InvalidValueError
from declick.schema import bind, coerce, compile_definition, iter_field_bindings


class Color(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


class Level(Enum):
    LOW = 1
    HIGH = 2


@command("greet")
class Greet(Command):
    name: Annotated[str, Argument()]
    verbose: Annotated[bool, Option()] = False

    def invoke(self, console_input, output):
        pass


@command("paint")
class Paint(Command):
    color: Annotated[Color, Argument()]
    level: Annotated[Level, Option()] = Level.LOW
    count: Annotated[int, Option()] = 1
    ratio: Annotated[float, Option()] = 0.5
    tags: Annotated[list[int], Option()] = [1, 2]
    note: Annotated[Optional[str], Option()] = "keep"
    extras: Annotated[list, Option()] = []

    def invoke(self, console_input, output):
        pass


def _binding(cls, field_name):
    return next(b for b in iter_field_bindings(cls) if b.field_name == field_name)


class TestBind:
    """Test bind() on whole instances."""

    @pytest.mark.unit
    def test_scenario_required_argument_and_bool_option(self, make_input):
        greet = Greet()
        bind(greet, make_input({"name": "alice"}))

        assert greet.name == "alice"
        assert greet.verbose is False

    @pytest.mark.unit
    def test_option_values_assigned(self, make_input):
        greet = Greet()
        bind(greet, make_input({"name": "bob"}, {"verbose": True}))
        assert greet.verbose is True

    @pytest.mark.unit
    def test_absent_option_keeps_default(self, make_input):
        paint = Paint()
        bind(paint, make_input({"color": "red"}, {"count": None, "note": None}))

        assert paint.count == 1
        # Nullable fields do take the None
        assert paint.note is None

    @pytest.mark.unit
    def test_missing_input_names_are_skipped(self, make_input):
        paint = Paint()
        bind(paint, make_input({"color": "blue"}))

        assert paint.color is Color.BLUE
        assert paint.level is Level.LOW
        assert paint.note == "keep"

    @pytest.mark.unit
    def test_argument_none_assigned(self, make_input):
        @command("maybe")
        class Maybe(Command):
            target: Annotated[Optional[str], Argument()] = "default"

            def invoke(self, console_input, output):
                pass

        maybe = Maybe()
        bind(maybe, make_input({"target": None}))
        assert maybe.target is None

    @pytest.mark.unit
    def test_round_trip_of_normalized_defaults(self, make_input):
        definition = compile_definition(Paint)
        options = {
            spec.name: spec.default
            for spec in definition.options
            if spec.name in ("level", "count", "ratio", "tags")
        }

        paint = Paint()
        bind(paint, make_input({"color": "red"}, options))

        assert paint.level is Level.LOW
        assert paint.count == 1
        assert paint.ratio == 0.5
        assert paint.tags == [1, 2]

    @pytest.mark.unit
    def test_invalid_enum_aborts_binding(self, make_input):
        paint = Paint()
        with pytest.raises(InvalidValueError) as exc_info:
            bind(paint, make_input({"color": "purple"}))

        error = exc_info.value
        assert isinstance(error, ValueError)
        assert isinstance(error, ConsoleError)
        assert error.allowed == ("red", "green", "blue")
        assert str(error) == "Wrong value for `color`. Allowed values: `red`, `green`, `blue`."


class TestCoerce:
    """Test value-type directed coercion."""

    @pytest.mark.unit
    def test_none_never_coerced(self):
        assert coerce(None, _binding(Paint, "count")) is None

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "field_name,raw,expected",
        [
            ("count", "42", 42),
            ("ratio", "1.25", 1.25),
            ("note", 7, "7"),
        ],
    )
    def test_scalars(self, field_name, raw, expected):
        assert coerce(raw, _binding(Paint, field_name)) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("raw,expected", [("yes", True), ("false", False), (True, True)])
    def test_boolean(self, raw, expected):
        assert coerce(raw, _binding(Greet, "verbose")) is expected

    @pytest.mark.unit
    def test_enum_from_text_of_int_value(self):
        assert coerce("2", _binding(Paint, "level")) is Level.HIGH
        assert coerce(2, _binding(Paint, "level")) is Level.HIGH
        assert coerce(Level.LOW, _binding(Paint, "level")) is Level.LOW

    @pytest.mark.unit
    def test_enum_error_lists_each_value_once_in_order(self):
        with pytest.raises(InvalidValueError) as exc_info:
            coerce("3", _binding(Paint, "level"))
        assert exc_info.value.allowed == (1, 2)
        assert "`1`, `2`" in exc_info.value.user_message

    @pytest.mark.unit
    def test_invalid_integer(self):
        with pytest.raises(InvalidValueError, match="Invalid value for `count`"):
            coerce("abc", _binding(Paint, "count"))

    @pytest.mark.unit
    def test_arrays(self):
        tags = _binding(Paint, "tags")
        assert coerce(("1", "2", "3"), tags) == [1, 2, 3]
        assert coerce("4", tags) == [4]

    @pytest.mark.unit
    def test_untyped_array_passes_elements_through(self):
        items = [object(), "x"]
        assert coerce(items, _binding(Paint, "extras")) == items
