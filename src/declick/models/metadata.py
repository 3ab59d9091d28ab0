"""Declarative metadata attached to command classes and their fields.

Class-level metadata is applied with decorators, field-level metadata with
``typing.Annotated``:

```python
@command("greet", description="Say hello")
@command_help("Greets someone by name.")
class Greet(Command):
    name: Annotated[str, Argument(description="Who to greet"), Question("Who?")]
    shout: Annotated[bool, Option(shortcut="s")] = False
```

Everything here is plain data; the schema compiler and the hook registry
give it meaning.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .enums import OptionMode

C = TypeVar("C", bound=type)

COMMAND_ATTR = "__console_command__"
HELP_ATTR = "__console_help__"
QUESTIONS_ATTR = "__console_questions__"
SUBSCRIBERS_ATTR = "__console_subscribers__"


class Argument(BaseModel):
    """Marks a field as a positional argument."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Argument name (field name by default)")
    description: str | None = Field(default=None, description="Argument description")
    suggested_values: tuple[str, ...] = Field(
        default=(), description="Values offered by shell completion"
    )


class Option(BaseModel):
    """Marks a field as a named option."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Option name (field name by default)")
    shortcut: str | tuple[str, ...] | None = Field(
        default=None, description="Short alias, 'a|b' string or a sequence of aliases"
    )
    description: str | None = Field(default=None, description="Option description")
    # Plain int so combined flags (REQUIRED | IS_ARRAY) validate; see option_mode
    mode: int | None = Field(
        default=None, description="Explicit OptionMode value (inferred from the field type if unset)"
    )
    suggested_values: tuple[str, ...] = Field(
        default=(), description="Values offered by shell completion"
    )

    @property
    def option_mode(self) -> OptionMode | None:
        """Explicit mode as an OptionMode, if one was declared."""
        return None if self.mode is None else OptionMode(self.mode)


class Question(BaseModel):
    """Prompt text used when a required argument is missing."""

    model_config = ConfigDict(frozen=True)

    text: str
    argument: str | None = None

    def __init__(self, text: str, argument: str | None = None, **data: Any):
        super().__init__(text=text, argument=argument, **data)


class CommandIdentity(BaseModel):
    """Name and short description of a command."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    aliases: tuple[str, ...] = ()
    hidden: bool = False


class CommandHelp(BaseModel):
    """Long help text of a command."""

    model_config = ConfigDict(frozen=True)

    help: str


def command(
    name: str,
    description: str | None = None,
    *,
    aliases: tuple[str, ...] = (),
    hidden: bool = False,
) -> Callable[[C], C]:
    """
    Declare a class as a console command.

    The identity belongs to the decorated class only; subclasses must be
    decorated again to become commands of their own.
    """
    identity = CommandIdentity(
        name=name, description=description, aliases=tuple(aliases), hidden=hidden
    )

    def decorator(cls: C) -> C:
        setattr(cls, COMMAND_ATTR, identity)
        return cls

    return decorator


def command_help(text: str) -> Callable[[C], C]:
    """Attach long help text to a command class."""
    help_ = CommandHelp(help=text)

    def decorator(cls: C) -> C:
        setattr(cls, HELP_ATTR, help_)
        return cls

    return decorator


def question(text: str, argument: str) -> Callable[[C], C]:
    """Declare the prompt used for a missing required argument."""
    entry = Question(text, argument=argument)

    def decorator(cls: C) -> C:
        # Decorators apply bottom-up; prepend to keep source order
        setattr(cls, QUESTIONS_ATTR, (entry, *vars(cls).get(QUESTIONS_ATTR, ())))
        return cls

    return decorator


def with_hooks(*subscribers: Any) -> Callable[[C], C]:
    """
    Attach reusable hook bundles to a command class.

    Each subscriber must provide ``get_hooks()`` (see
    ``declick.hooks.HookSubscriber``). Subclasses inherit them.
    """

    def decorator(cls: C) -> C:
        setattr(cls, SUBSCRIBERS_ATTR, (*subscribers, *vars(cls).get(SUBSCRIBERS_ATTR, ())))
        return cls

    return decorator


def get_identity(cls: type) -> CommandIdentity | None:
    """Return the identity declared on ``cls`` itself."""
    return vars(cls).get(COMMAND_ATTR)


def get_help(cls: type) -> CommandHelp | None:
    """Return the help text declared on ``cls`` itself."""
    return vars(cls).get(HELP_ATTR)


def get_class_questions(cls: type) -> tuple[Question, ...]:
    """Return the class-level questions declared on ``cls`` itself."""
    return vars(cls).get(QUESTIONS_ATTR, ())


def get_class_subscribers(cls: type) -> list[Any]:
    """Return class-level hook subscribers, base classes first."""
    subscribers: list[Any] = []
    for klass in reversed(cls.__mro__):
        subscribers.extend(vars(klass).get(SUBSCRIBERS_ATTR, ()))
    return subscribers
