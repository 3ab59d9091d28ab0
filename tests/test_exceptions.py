"""Tests for the exception hierarchy and error handling utilities."""

import logging

import pytest
from pydantic import BaseModel, ValidationError

from declick.exceptions import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    ConsoleError,
    DeclickError,
    ErrorContext,
    HookConfigurationError,
    InvalidValueError,
    MissingArgumentError,
    SchemaError,
    TerminateCommand,
    UnknownInputError,
    format_error_for_display,
    wrap_pydantic_error,
)


class Limits(BaseModel):
    retries: int = 0
    timeout: float = 1.0


class TestHierarchy:
    """Test exception base classes."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error_cls,base",
        [
            (SchemaError, DeclickError),
            (HookConfigurationError, DeclickError),
            (ConsoleError, DeclickError),
            (InvalidValueError, ConsoleError),
            (InvalidValueError, ValueError),
            (MissingArgumentError, ConsoleError),
            (UnknownInputError, ConsoleError),
            (UnknownInputError, KeyError),
            (ConfigFileInvalidError, ConfigurationError),
            (ConfigValidationError, ConfigurationError),
        ],
    )
    def test_subclasses(self, error_cls, base):
        assert issubclass(error_cls, base)

    @pytest.mark.unit
    def test_terminate_is_not_a_declick_error(self):
        error = TerminateCommand(4)
        assert not isinstance(error, DeclickError)
        assert error.exit_code == 4
        assert TerminateCommand().exit_code == 0


class TestMessages:
    """Test user and technical messages."""

    @pytest.mark.unit
    def test_base_error(self):
        error = DeclickError("Something broke", recovery_hint="Try again")
        assert str(error) == "Something broke"
        assert error.technical_message == "Something broke"
        assert error.get_full_message() == "Something broke\n\nSuggestion: Try again"

    @pytest.mark.unit
    def test_schema_error_location(self):
        error = SchemaError("Argument name cannot be empty!", "app.Greet", "name")
        assert error.user_message == "Argument name cannot be empty!"
        assert error.technical_message == (
            "Invalid command declaration app.Greet.name: Argument name cannot be empty!"
        )
        assert not error.recoverable

    @pytest.mark.unit
    def test_schema_error_without_command(self):
        error = SchemaError("Bad")
        assert "<unknown command>" in error.technical_message

    @pytest.mark.unit
    def test_invalid_value_with_allowed(self):
        error = InvalidValueError("mode", "medium", allowed=["fast", "slow"])
        assert str(error) == "Wrong value for `mode`. Allowed values: `fast`, `slow`."
        assert error.allowed == ("fast", "slow")
        assert error.recoverable

    @pytest.mark.unit
    def test_invalid_value_with_reason(self):
        error = InvalidValueError("count", "x", reason="not an integer")
        assert str(error) == "Invalid value for `count`: not an integer"

    @pytest.mark.unit
    def test_unknown_input_not_quoted(self):
        error = UnknownInputError("option", "force")
        assert str(error) == 'The "force" option does not exist.'

    @pytest.mark.unit
    def test_missing_argument(self):
        error = MissingArgumentError("env")
        assert str(error) == "Not enough arguments (missing: `env`)."
        assert "--no-interaction" in error.recovery_hint


class TestFormatErrorForDisplay:
    """Test format_error_for_display()."""

    @pytest.mark.unit
    def test_declick_error(self):
        error = MissingArgumentError("env")
        assert format_error_for_display(error) == (error.user_message, error.recovery_hint)

    @pytest.mark.unit
    def test_other_error(self):
        assert format_error_for_display(RuntimeError("boom")) == ("RuntimeError: boom", None)


class TestErrorContext:
    """Test ErrorContext."""

    @pytest.mark.unit
    def test_success_logs_completion(self, caplog):
        with caplog.at_level(logging.DEBUG):
            with ErrorContext("compile greet"):
                pass

        assert "Completed: compile greet" in caplog.text

    @pytest.mark.unit
    def test_declick_error_logged_with_technical_message(self, caplog):
        with pytest.raises(SchemaError):
            with ErrorContext("register greet"):
                raise SchemaError("Bad", "app.Greet")

        assert "Failed to register greet: Invalid command declaration app.Greet" in caplog.text

    @pytest.mark.unit
    def test_other_error_logged_with_traceback(self, caplog):
        with pytest.raises(OSError):
            with ErrorContext("cleanup"):
                raise OSError("disk gone")

        [record] = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert record.getMessage() == "Failed to cleanup: disk gone"
        assert record.exc_info is not None


class TestWrapPydanticError:
    """Test wrap_pydantic_error()."""

    @pytest.mark.unit
    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            Limits.model_validate_json("{oops")

        error = wrap_pydantic_error(exc_info.value, "limits.json")
        assert isinstance(error, ConfigFileInvalidError)
        assert error.file_path == "limits.json"
        assert not error.parse_error.startswith("Invalid JSON")
        assert error.user_message.endswith(error.parse_error)

    @pytest.mark.unit
    def test_single_field(self):
        with pytest.raises(ValidationError) as exc_info:
            Limits.model_validate({"retries": "many"})

        error = wrap_pydantic_error(exc_info.value, "limits.json")
        assert isinstance(error, ConfigValidationError)
        assert error.field == "retries"
        assert error.value == "many"
        assert error.recovery_hint == "Change 'retries' in limits.json"

    @pytest.mark.unit
    def test_multiple_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            Limits.model_validate({"retries": "many", "timeout": "never"})

        error = wrap_pydantic_error(exc_info.value, "limits.json")
        assert error.field == "multiple fields"
        assert "retries" in error.user_message
        assert "timeout" in error.user_message
