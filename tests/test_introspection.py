"""Tests for field introspection, default normalization and class metadata."""

from collections.abc import Sequence
from datetime import date, time
from enum import Enum, IntEnum
from typing import Annotated, Optional

import pytest

from declick import Argument, Command, Option, OptionMode, Question, command, question, with_hooks
from declick.exceptions import SchemaError
from declick.models.enums import ValueKind
from declick.models.metadata import (
    get_class_subscribers,
    get_help,
    get_identity,
)
from declick.schema import collect_questions, iter_field_bindings, normalize_default
from declick.schema.introspection import resolve_value_type


class Size(Enum):
    SMALL = "s"
    LARGE = "l"


class TestResolveValueType:
    """Test mapping annotations to value kinds."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "hint,kind",
        [
            (int, ValueKind.INTEGER),
            (str, ValueKind.STRING),
            (bool, ValueKind.BOOLEAN),
            (float, ValueKind.FLOAT),
            (Size, ValueKind.ENUM),
            (list[str], ValueKind.ARRAY),
            (tuple[int, ...], ValueKind.ARRAY),
            (Sequence[str], ValueKind.ARRAY),
            (list, ValueKind.ARRAY),
        ],
    )
    def test_kinds(self, hint, kind):
        resolved_kind, nullable, *_ = resolve_value_type(hint, "Cmd", "field")
        assert resolved_kind is kind
        assert nullable is False

    @pytest.mark.unit
    def test_nullable(self):
        kind, nullable, *_ = resolve_value_type(Optional[int], "Cmd", "field")
        assert kind is ValueKind.INTEGER
        assert nullable is True

        kind, nullable, *_ = resolve_value_type(str | None, "Cmd", "field")
        assert kind is ValueKind.STRING
        assert nullable is True

    @pytest.mark.unit
    def test_enum_and_array_elements(self):
        _, _, enum_type, _, _ = resolve_value_type(Size, "Cmd", "field")
        assert enum_type is Size

        _, _, _, element_kind, element_enum = resolve_value_type(list[Size], "Cmd", "field")
        assert element_kind is ValueKind.ENUM
        assert element_enum is Size

        _, _, _, element_kind, _ = resolve_value_type(list[int], "Cmd", "field")
        assert element_kind is ValueKind.INTEGER

    @pytest.mark.unit
    def test_bare_list_has_no_element_kind(self):
        _, _, _, element_kind, element_enum = resolve_value_type(list, "Cmd", "field")
        assert element_kind is None
        assert element_enum is None

    @pytest.mark.unit
    @pytest.mark.parametrize("hint", [dict, dict[str, int], bytes, object])
    def test_unsupported(self, hint):
        with pytest.raises(SchemaError, match="Invalid type for the `field` field"):
            resolve_value_type(hint, "Cmd", "field")


class TestFieldBindings:
    """Test bindings built from a class."""

    @pytest.mark.unit
    def test_only_tagged_fields(self):
        class Plain(Command):
            name: Annotated[str, Argument()]
            cache: dict = {}
            limit: Annotated[int, Option()] = 10

            def invoke(self, console_input, output):
                pass

        bindings = iter_field_bindings(Plain)
        assert [b.field_name for b in bindings] == ["name", "limit"]

        limit = bindings[1]
        assert limit.kind is ValueKind.INTEGER
        assert limit.has_default is True
        assert limit.default == 10
        assert limit.is_optional is True

    @pytest.mark.unit
    def test_inherited_fields(self):
        class Base(Command):
            name: Annotated[str, Argument()]

            def invoke(self, console_input, output):
                pass

        class Child(Base):
            force: Annotated[bool, Option()] = False

        assert [b.field_name for b in iter_field_bindings(Child)] == ["name", "force"]

    @pytest.mark.unit
    def test_annotated_inside_optional(self):
        class Cmd(Command):
            label: Optional[Annotated[str, Option(name="label-text")]] = None

            def invoke(self, console_input, output):
                pass

        (binding,) = iter_field_bindings(Cmd)
        assert binding.nullable is True
        assert binding.input_name == "label-text"


class TestNormalizeDefault:
    """Test default normalization."""

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "x", 1, 1.5, True])
    def test_scalars_unchanged(self, value):
        assert normalize_default(value) == value

    @pytest.mark.unit
    def test_enum_reduced_to_value(self):
        assert normalize_default(Size.LARGE) == "l"

    @pytest.mark.unit
    def test_mixin_enum_reduced_to_plain_value(self):
        class Mode(str, Enum):
            FAST = "fast"

        class Priority(IntEnum):
            HIGH = 2

        assert type(normalize_default(Mode.FAST)) is str
        assert normalize_default(Mode.FAST) == "fast"
        assert type(normalize_default(Priority.HIGH)) is int
        assert normalize_default([Mode.FAST, Priority.HIGH]) == ["fast", 2]

    @pytest.mark.unit
    def test_collections_element_wise(self):
        assert normalize_default((Size.SMALL, 2)) == ["s", 2]
        assert normalize_default({"size": Size.SMALL, "when": [date(2024, 5, 1)]}) == {
            "size": "s",
            "when": ["2024-05-01"],
        }

    @pytest.mark.unit
    def test_time_isoformat(self):
        assert normalize_default(time(12, 30)) == "12:30:00"

    @pytest.mark.unit
    def test_nested_composite_rejected(self):
        with pytest.raises(SchemaError, match="Invalid value type: bytes"):
            normalize_default([b"raw"], command="Cmd", field="data")


class TestClassMetadata:
    """Test class-level decorators and lookups."""

    @pytest.mark.unit
    def test_command_identity(self):
        @command("deploy", description="Deploy", aliases=("ship",), hidden=True)
        class Deploy(Command):
            def invoke(self, console_input, output):
                pass

        identity = get_identity(Deploy)
        assert identity.name == "deploy"
        assert identity.aliases == ("ship",)
        assert identity.hidden is True
        assert get_help(Deploy) is None

    @pytest.mark.unit
    def test_option_mode_property(self):
        option = Option(mode=OptionMode.REQUIRED | OptionMode.IS_ARRAY)
        assert option.option_mode == OptionMode.REQUIRED | OptionMode.IS_ARRAY
        assert Option().option_mode is None

    @pytest.mark.unit
    def test_question_accepts_positional_text(self):
        entry = Question("Who?", "name")
        assert entry.text == "Who?"
        assert entry.argument == "name"

    @pytest.mark.unit
    def test_subscribers_base_first(self):
        first, second = object(), object()

        @with_hooks(first)
        class Base(Command):
            def invoke(self, console_input, output):
                pass

        @with_hooks(second)
        class Child(Base):
            pass

        assert get_class_subscribers(Child) == [first, second]


class TestCollectQuestions:
    """Test prompt text lookup."""

    @pytest.mark.unit
    def test_class_questions_take_precedence(self):
        @command("ask")
        @question("Which file?", argument="file")
        class Ask(Command):
            file: Annotated[str, Argument(), Question("Field-level file?")]
            user: Annotated[str, Argument(), Question("Which user?")]
            host: Annotated[str, Argument()]

            def invoke(self, console_input, output):
                pass

        questions = collect_questions(Ask)
        assert questions == {"file": "Which file?", "user": "Which user?"}

    @pytest.mark.unit
    def test_class_questions_in_source_order(self):
        @question("First?", argument="a")
        @question("Second?", argument="b")
        class Ask(Command):
            def invoke(self, console_input, output):
                pass

        assert list(collect_questions(Ask)) == ["a", "b"]
