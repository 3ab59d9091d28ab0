"""Console configuration errors.

Raised while ``ConsoleConfig`` reads its JSON file:
- ConfigurationError: Base class for configuration errors
- ConfigFileInvalidError: The file is empty or is not valid JSON
- ConfigValidationError: A setting has a value ``ConsoleConfig`` rejects
"""

from typing import Any, Optional

from .base import DeclickError


class ConfigurationError(DeclickError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """Configuration file cannot be parsed."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the config file
            parse_error: What the JSON parser reported
        """
        super().__init__(
            user_message=f"Configuration file is not valid JSON: {parse_error}",
            technical_message=f"Cannot parse {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=f"Fix {file_path}, or delete it to use the default settings",
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A setting has a value of the wrong type or out of range."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Initialize config validation error.

        Args:
            field: The setting that failed validation
            value: The rejected value
            error_msg: Why the value was rejected
            file_path: Path to the config file (optional)
        """
        recovery = f"Change '{field}' in {file_path or 'the configuration'}"
        if field.endswith("exit_code"):
            recovery += " to an integer between 0 and 255"

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.field = field
        self.value = value
        self.file_path = file_path
