"""Prompt for required arguments missing from the command line."""

import logging

from declick.exceptions import MissingArgumentError
from declick.models.definition import ArgumentSpec, CommandDefinition
from declick.schema.introspection import collect_questions

from .io import ConsoleInput, ConsoleOutput

logger = logging.getLogger(__name__)

DEFAULT_QUESTION = "Please provide a value for the `{name}` argument"


def resolve_question(questions: dict[str, str], argument: ArgumentSpec) -> str:
    """Return the declared prompt for ``argument`` or the generic one."""
    return questions.get(argument.name, DEFAULT_QUESTION.format(name=argument.name))


def _is_missing(value: object) -> bool:
    return value is None or value == [] or value == ()


def prompt_missing_arguments(
    command_cls: type,
    definition: CommandDefinition,
    console_input: ConsoleInput,
    output: ConsoleOutput,
) -> None:
    """
    Ask for every required argument that has no value yet.

    Answers for a variadic argument are split on whitespace.

    Raises:
        MissingArgumentError: If a value is missing and input is not interactive
    """
    missing = [
        argument
        for argument in definition.arguments
        if argument.required and _is_missing(console_input.arguments.get(argument.name))
    ]
    if not missing:
        return

    if not console_input.interactive:
        raise MissingArgumentError(missing[0].name)

    questions = collect_questions(command_cls)
    for argument in missing:
        answer = output.ask(resolve_question(questions, argument))
        logger.debug(f"Prompted for missing argument '{argument.name}'")
        console_input.set_argument(
            argument.name, str(answer).split() if argument.is_variadic else answer
        )
