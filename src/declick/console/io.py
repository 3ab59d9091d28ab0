"""Narrow input/output adapters over Click.

``ConsoleInput`` is what hooks and business logic read raw values from;
``ConsoleOutput`` is the line-oriented sink they write to. Both are thin:
Click does the parsing, rendering and prompting.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import IO, Any, Optional

import click

from declick.exceptions import UnknownInputError

# Style name -> click.style keyword arguments
STYLES: dict[str, dict[str, Any]] = {
    "info": {"fg": "green"},
    "comment": {"fg": "yellow"},
    "question": {"fg": "black", "bg": "cyan"},
    "error": {"fg": "white", "bg": "red"},
    "warning": {"fg": "yellow"},
}

VERBOSITY_QUIET = 0
VERBOSITY_NORMAL = 1
VERBOSITY_VERBOSE = 2
VERBOSITY_VERY_VERBOSE = 3
VERBOSITY_DEBUG = 4


class ConsoleInput:
    """Parsed argument and option values of one invocation."""

    def __init__(
        self,
        arguments: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
        interactive: bool = True,
    ):
        self._arguments = dict(arguments or {})
        self._options = dict(options or {})
        self.interactive = interactive

    @property
    def arguments(self) -> dict[str, Any]:
        return dict(self._arguments)

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    def has_argument(self, name: str) -> bool:
        return name in self._arguments

    def get_argument(self, name: str) -> Any:
        if name not in self._arguments:
            raise UnknownInputError("argument", name)
        return self._arguments[name]

    def set_argument(self, name: str, value: Any) -> None:
        if name not in self._arguments:
            raise UnknownInputError("argument", name)
        self._arguments[name] = value

    def has_option(self, name: str) -> bool:
        return name in self._options

    def get_option(self, name: str) -> Any:
        if name not in self._options:
            raise UnknownInputError("option", name)
        return self._options[name]

    def __repr__(self) -> str:
        return f"ConsoleInput(arguments={self._arguments!r}, options={self._options!r})"


class ConsoleOutput:
    """
    Line-oriented output sink backed by ``click.echo``.

    Args:
        file: Stream to write to (stdout by default)
        verbosity: One of the VERBOSITY_* levels
        color: Force or disable ANSI styling (Click decides by default)
    """

    def __init__(
        self,
        file: Optional[IO[str]] = None,
        verbosity: int = VERBOSITY_NORMAL,
        color: Optional[bool] = None,
    ):
        self.file = file
        self.verbosity = verbosity
        self.color = color

    def is_quiet(self) -> bool:
        return self.verbosity <= VERBOSITY_QUIET

    def is_verbose(self) -> bool:
        return self.verbosity >= VERBOSITY_VERBOSE

    def is_debug(self) -> bool:
        return self.verbosity >= VERBOSITY_DEBUG

    def write(self, messages: str | Iterable[str], newline: bool = False) -> None:
        """Write one message or several messages."""
        if self.is_quiet():
            return
        if isinstance(messages, str):
            messages = [messages]
        for message in messages:
            click.echo(message, file=self.file, nl=newline, color=self.color)

    def writeln(self, messages: str | Iterable[str]) -> None:
        """Write messages, each followed by a newline."""
        self.write(messages, newline=True)

    def new_line(self, count: int = 1) -> None:
        self.write("\n" * count)

    def style(self, text: str, style: str) -> str:
        """Apply a named style (info, comment, question, error, warning)."""
        return click.style(text, **STYLES.get(style, {}))

    def line(self, text: str, style: Optional[str] = None) -> None:
        """Write a line, optionally styled."""
        self.writeln(self.style(text, style) if style else text)

    def info(self, text: str) -> None:
        self.line(text, "info")

    def comment(self, text: str) -> None:
        self.line(text, "comment")

    def question(self, text: str) -> None:
        self.line(text, "question")

    def error(self, text: str) -> None:
        self.line(text, "error")

    def warning(self, text: str) -> None:
        self.line(text, "warning")

    def alert(self, text: str) -> None:
        """Write text framed by a box of asterisks."""
        lines = text.splitlines() or [""]
        width = max(len(click.unstyle(line)) for line in lines) + 12
        self.comment("*" * width)
        for line in lines:
            padding = " " * (width - 12 - len(click.unstyle(line)))
            self.comment(f"*     {line}{padding}     *")
        self.comment("*" * width)
        self.new_line()

    def ask(self, question: str, default: Any = None) -> Any:
        """Ask a question and return the answer."""
        return click.prompt(question, default=default, show_default=default is not None)

    def confirm(self, question: str, default: bool = False) -> bool:
        return click.confirm(question, default=default)

    def choice(
        self,
        question: str,
        choices: Sequence[str],
        default: Optional[str] = None,
        multiselect: bool = False,
    ) -> str | list[str]:
        """
        Ask for one of ``choices``.

        With ``multiselect`` the answer is a comma separated list and every
        item must be a valid choice.
        """
        if not multiselect:
            return click.prompt(question, type=click.Choice(list(choices)), default=default)

        def _split(answer: str) -> list[str]:
            picked = [item.strip() for item in answer.split(",") if item.strip()]
            invalid = [item for item in picked if item not in choices]
            if invalid or not picked:
                raise click.BadParameter(
                    f"Choose from: {', '.join(choices)}", param_hint="answer"
                )
            return picked

        return click.prompt(question, default=default, value_proc=_split)

    def secret(self, question: str) -> str:
        """Ask a question without echoing the answer."""
        return click.prompt(question, hide_input=True)
