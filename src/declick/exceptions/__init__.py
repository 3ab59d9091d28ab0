"""
Custom exception hierarchy for declick.

## Exception Hierarchy

```
DeclickError (base)
├── SchemaError
├── HookConfigurationError
├── ConsoleError
│   ├── InvalidValueError      (also a ValueError)
│   ├── MissingArgumentError
│   └── UnknownInputError      (also a KeyError)
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError

TerminateCommand               (control flow, not an error)
```

All custom exceptions inherit from `DeclickError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

`SchemaError` and `HookConfigurationError` mean the command is declared
incorrectly; they are never caught inside the library. `ConsoleError`
aborts one invocation. See `declick.exceptions.handlers` for the utilities
used at the process boundary.
"""

from .base import DeclickError, TerminateCommand
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .console import ConsoleError, InvalidValueError, MissingArgumentError, UnknownInputError
from .handlers import ErrorContext, format_error_for_display, wrap_pydantic_error
from .schema import HookConfigurationError, SchemaError

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Console
    "ConsoleError",
    # Base
    "DeclickError",
    # Handlers
    "ErrorContext",
    "HookConfigurationError",
    "InvalidValueError",
    "MissingArgumentError",
    # Declaration
    "SchemaError",
    "TerminateCommand",
    "UnknownInputError",
    "format_error_for_display",
    "wrap_pydantic_error",
]
