"""Base class for declarative console commands."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any, NoReturn, Optional

from declick.console.io import ConsoleInput, ConsoleOutput
from declick.exceptions import HookConfigurationError, TerminateCommand
from declick.extensions.sigterm import SigtermListener
from declick.models.metadata import get_class_subscribers


class Command(ABC):
    """
    Base class for commands.

    Subclasses declare their identity with ``@command``, their inputs as
    ``Annotated`` fields and implement ``invoke``. Hook methods and hook
    subscribers declared on this base class itself are never run.

    Example:
        ```python
        @command("greet", description="Say hello")
        class Greet(Command):
            name: Annotated[str, Argument(description="Who to greet")]
            shout: Annotated[bool, Option(shortcut="s")] = False

            def invoke(self, input, output):
                text = f"Hello {self.name}"
                output.writeln(text.upper() if self.shout else text)
        ```
    """

    def __init__(self):
        self.hook_subscribers: list[Any] = []
        self.console_input: Optional[ConsoleInput] = None
        self.console_output: Optional[ConsoleOutput] = None

    @abstractmethod
    def invoke(self, console_input: ConsoleInput, output: ConsoleOutput) -> Any:
        """
        Run the command's business logic.

        Returns:
            An exit code, a bool (success/failure) or None (success)
        """
        ...

    def attach(self, console_input: ConsoleInput, output: ConsoleOutput) -> None:
        """Give the helpers access to this invocation's input and output."""
        self.console_input = console_input
        self.console_output = output

    def add_hook_subscriber(self, subscriber: Any) -> None:
        """Compose a hook bundle into this instance."""
        self.hook_subscribers.append(subscriber)

    def get_input(self) -> ConsoleInput:
        if self.console_input is None:
            raise RuntimeError("ConsoleInput is not set.")
        return self.console_input

    def get_output(self) -> ConsoleOutput:
        if self.console_output is None:
            raise RuntimeError("ConsoleOutput is not set.")
        return self.console_output

    def terminate(self, exit_code: int = 0) -> NoReturn:
        """Stop the command with ``exit_code`` without it counting as a failure."""
        raise TerminateCommand(exit_code)

    def is_terminating(self) -> bool:
        """
        Check whether SIGTERM was received.

        Raises:
            HookConfigurationError: If no SigtermListener is attached
        """
        subscribers = [*get_class_subscribers(type(self)), *self.hook_subscribers]
        for subscriber in subscribers:
            if isinstance(subscriber, SigtermListener):
                return subscriber.terminating

        raise HookConfigurationError(
            "SIGTERM listener is not enabled for this command.",
            recovery_hint="Attach SigtermListener() with @with_hooks or add_hook_subscriber",
        )

    # Input helpers

    def has_argument(self, name: str) -> bool:
        return self.get_input().has_argument(name)

    def argument(self, name: str) -> Any:
        return self.get_input().get_argument(name)

    def has_option(self, name: str) -> bool:
        return self.get_input().has_option(name)

    def option(self, name: str) -> Any:
        return self.get_input().get_option(name)

    # Output helpers

    def is_verbose(self) -> bool:
        return self.get_output().is_verbose()

    def write(self, messages: str | Iterable[str], newline: bool = False) -> None:
        self.get_output().write(messages, newline=newline)

    def writeln(self, messages: str | Iterable[str]) -> None:
        self.get_output().writeln(messages)

    def line(self, text: str, style: Optional[str] = None) -> None:
        self.get_output().line(text, style)

    def new_line(self, count: int = 1) -> None:
        self.get_output().new_line(count)

    def info(self, text: str) -> None:
        self.get_output().info(text)

    def comment(self, text: str) -> None:
        self.get_output().comment(text)

    def question(self, text: str) -> None:
        self.get_output().question(text)

    def error(self, text: str) -> None:
        self.get_output().error(text)

    def warning(self, text: str) -> None:
        self.get_output().warning(text)

    def alert(self, text: str) -> None:
        self.get_output().alert(text)

    def ask(self, question: str, default: Any = None) -> Any:
        return self.get_output().ask(question, default)

    def confirm(self, question: str, default: bool = False) -> bool:
        return self.get_output().confirm(question, default)

    def choice(
        self,
        question: str,
        choices: Sequence[str],
        default: Optional[str] = None,
        multiselect: bool = False,
    ) -> str | list[str]:
        return self.get_output().choice(question, choices, default, multiselect)

    def secret(self, question: str) -> str:
        return self.get_output().secret(question)
