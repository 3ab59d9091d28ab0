"""
Centralized error handling utilities.

Errors travel up through three layers, each translating them for the next:

```
┌─────────────────────────────────────────┐
│  PROCESS BOUNDARY (ConsoleApplication)  │
│  - Formats error.user_message           │
│  - Shows error.recovery_hint            │
│  - Turns uncaught failures into exit 1  │
└─────────────────────────────────────────┘
                  ↑
                  │ DeclickError / business failure
                  │
┌─────────────────────────────────────────┐
│  LIFECYCLE (CommandLifecycle)           │
│  - Binds input (ConsoleError)           │
│  - Gives failures to exception hooks    │
│  - Re-raises what no hook resolved      │
└─────────────────────────────────────────┘
                  ↑
                  │ SchemaError / HookConfigurationError
                  │
┌─────────────────────────────────────────┐
│  DECLARATION (compiler, hook registry)  │
│  - Fails fast on malformed metadata     │
└─────────────────────────────────────────┘
```

## Quick Reference

| Pattern | Code |
|---------|------|
| Critical section with auto-logging | `with ErrorContext("compile greet"): ...` |
| Show an error to the user | `message, hint = format_error_for_display(error)` |
| Convert a pydantic error | `raise wrap_pydantic_error(e, str(path)) from e` |
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from .base import DeclickError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError


logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Log a failing operation, then let the error propagate.

    Declick errors are logged with their technical message; anything else is
    logged with its traceback.

    Example:
        ```python
        with ErrorContext("register greet", logger_instance=logger):
            builder = CommandBuilder(Greet)
        ```
    """

    def __init__(self, operation: str, logger_instance: Optional[logging.Logger] = None):
        self.operation = operation
        self.logger = logger_instance or logger

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
        elif isinstance(exc_val, DeclickError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)
        return False


def _location(error: dict[str, Any]) -> str:
    return ".".join(str(part) for part in error.get("loc", ())) or "unknown"


def wrap_pydantic_error(error: ValidationError, file_path: str) -> ConfigurationError:
    """
    Convert a failed ``model_validate_json`` into a configuration error.

    Args:
        error: The pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        ConfigFileInvalidError for malformed JSON, ConfigValidationError
        for rejected values
    """
    errors = error.errors()

    for err in errors:
        if err["type"] == "json_invalid":
            parse_error = (err.get("ctx") or {}).get("error", err["msg"])
            return ConfigFileInvalidError(file_path, str(parse_error))

    if len(errors) == 1:
        (err,) = errors
        return ConfigValidationError(
            field=_location(err),
            value=err.get("input"),
            error_msg=err["msg"],
            file_path=file_path,
        )

    error_lines = [f"  - {_location(err)}: {err['msg']}" for err in errors]
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
        file_path=file_path,
    )


def format_error_for_display(error: BaseException) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, DeclickError):
        return error.user_message, error.recovery_hint

    return f"{type(error).__name__}: {error}", None
