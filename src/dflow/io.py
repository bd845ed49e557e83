"""Console I/O helpers for user-facing messages and prompts."""

from __future__ import annotations

import sys
from typing import Callable, Sequence

import questionary

from .errors import PromptCancelledError

Validator = Callable[[str], "str | None"]


def _use_questionary() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def _ask(question: questionary.Question) -> object:
    value = question.ask()
    if value is None:
        raise PromptCancelledError()
    return value


def say(message: str) -> None:
    """Print a normal message to stdout.

    Args:
        message: Text to print.

    Returns:
        None.

    Example:
        >>> say("Hello")
        Hello
    """
    print(message)


def warn(message: str) -> None:
    """Print a warning message to stderr."""
    print(f"warning: {message}", file=sys.stderr)


def prompt(
    text: str,
    default: str | None = None,
    required: bool = False,
    validate: Validator | None = None,
) -> str:
    """Prompt the user for input, optionally enforcing a default or requirement.

    Args:
        text: Prompt label shown to the user.
        default: Default value used when the user enters an empty string.
        required: When true, keep prompting until a non-empty value is provided.
        validate: Optional callable returning an error message for bad input,
            or ``None`` when the value is acceptable.

    Returns:
        The user-provided or default string.

    Example:
        Main branch name [main]:
    """
    while True:
        if _use_questionary():
            question = questionary.text(
                text,
                default=default or "",
                validate=(lambda value: validate(value.strip()) or True)
                if validate
                else None,
            )
            value = str(_ask(question)).strip()
        else:
            if default is not None and default != "":
                value = input(f"{text} [{default}]: ").strip()
                if value == "":
                    value = default
            else:
                value = input(f"{text}: ").strip()
        if required and value == "":
            continue
        if validate is not None:
            problem = validate(value)
            if problem:
                warn(problem)
                continue
        return value


def confirm(text: str, default: bool = False) -> bool:
    """Prompt for a yes/no confirmation.

    Args:
        text: Prompt label shown to the user.
        default: Default answer when the user presses enter.

    Returns:
        ``True`` when the user confirms.
    """
    if _use_questionary():
        return bool(_ask(questionary.confirm(text, default=default)))
    suffix = "[Y/n]" if default else "[y/N]"
    response = input(f"{text} {suffix}: ").strip().lower()
    if response == "":
        return default
    return response in {"y", "yes"}


def select(text: str, choices: Sequence[str], default: str | None = None) -> str:
    """Prompt for one value out of ``choices``.

    Plain-input mode accepts either the choice text or its 1-based index.
    """
    if _use_questionary():
        return str(_ask(questionary.select(text, choices=list(choices), default=default)))
    for index, choice in enumerate(choices, start=1):
        say(f"  {index}) {choice}")
    while True:
        label = f"{text} [{default}]: " if default else f"{text}: "
        response = input(label).strip()
        if response == "" and default is not None:
            return default
        if response.isdigit() and 1 <= int(response) <= len(choices):
            return choices[int(response) - 1]
        if response in choices:
            return response


def checkbox(text: str, choices: Sequence[str]) -> list[str]:
    """Prompt for any number of values out of ``choices``.

    Plain-input mode takes a comma-separated list of choice names or indexes;
    an empty answer selects nothing.
    """
    if _use_questionary():
        selected = _ask(questionary.checkbox(text, choices=list(choices)))
        return [str(item) for item in selected]  # type: ignore[union-attr]
    for index, choice in enumerate(choices, start=1):
        say(f"  {index}) {choice}")
    while True:
        response = input(f"{text} (comma separated, empty for none): ").strip()
        if not response:
            return []
        picked: list[str] = []
        for token in (part.strip() for part in response.split(",")):
            if token.isdigit() and 1 <= int(token) <= len(choices):
                token = choices[int(token) - 1]
            if token not in choices:
                picked = []
                break
            if token not in picked:
                picked.append(token)
        if picked:
            return picked
