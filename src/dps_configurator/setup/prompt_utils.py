"""Terminal prompts for the configuration menu.

Free text goes through plain ``input()`` (Rich's ``Prompt.ask`` garbles line
editing on some terminals). Choices and secrets use questionary when stdin
and stderr are a TTY, and fall back to numbered ``input()`` / ``getpass``
otherwise so answers can be piped in.

Every label and menu line goes to stderr; stdout is left for the export
script.

With ``allow_cancel`` every prompt turns Ctrl+C or EOF into
``ConfigurationAborted``; without it the prompt returns its default.
"""

import getpass
import sys
from typing import Callable, Optional, Sequence

import questionary
from prompt_toolkit.output import create_output
from rich.console import Console
from rich.markup import escape

from dps_configurator.errors import ConfigurationAborted

console = Console(stderr=True)


def _cancelled(fallback: str, allow_cancel: bool) -> str:
    # Keep the next output off the interrupted prompt line
    print(file=sys.stderr)
    if allow_cancel:
        raise ConfigurationAborted()
    return fallback


def _input(text: str) -> str:
    # input() echoes its label to stdout when stdout is not a terminal
    sys.stderr.write(text)
    sys.stderr.flush()
    return input()


def _read(reader: Callable[[str], str], text: str, fallback: str, allow_cancel: bool) -> str:
    try:
        answer = reader(text)
    except (EOFError, KeyboardInterrupt):
        return _cancelled(fallback, allow_cancel)
    return answer or fallback


def safe_prompt(
    prompt: str,
    default: str = "",
    password: bool = False,
    show_default: bool = True,
    allow_cancel: bool = False,
) -> str:
    """
    Ask for one line of input.

    Args:
        prompt: Label shown before the cursor.
        default: Returned for blank input; shown as ``[default]``.
        password: Read without echo through ``getpass``.
        show_default: Include the default in the label.
        allow_cancel: Raise ``ConfigurationAborted`` on Ctrl+C / EOF.

    Returns:
        The stripped answer, or ``default`` when it is blank.
    """
    if password:
        return _read(getpass.getpass, f"{prompt}: ", default, allow_cancel)

    shown = f" [{default}]" if default and show_default else ""
    answer = _read(_input, f"{prompt}{shown}: ", "", allow_cancel)
    return answer.strip() or default


def is_interactive() -> bool:
    """True when stdin and stderr are both attached to a terminal."""
    return all(
        callable(getattr(stream, "isatty", None)) and stream.isatty()
        for stream in (sys.stdin, sys.stderr)
    )


def _numbered_select(
    message: str,
    values: list[str],
    default: Optional[str],
    allow_cancel: bool,
) -> str:
    """Print the options as a numbered list and read a number or a value."""
    console.print(f"\n[bold]{escape(message)}[/bold]")
    for number, value in enumerate(values, 1):
        suffix = " \\[default]" if value == default else ""
        console.print(f"  [{number}] {escape(value)}{suffix}")

    answer = safe_prompt("Enter number", default=default or "", allow_cancel=allow_cancel)
    if answer.isdigit() and 1 <= int(answer) <= len(values):
        return values[int(answer) - 1]
    # Values and anything unrecognised are handed back for the caller to validate
    return answer


def _prompt_output():
    return create_output(stdout=sys.stderr)


def _ask(question: "questionary.Question", fallback: str, allow_cancel: bool) -> str:
    try:
        answer = question.ask()
    except KeyboardInterrupt:
        return _cancelled(fallback, allow_cancel)
    if answer is None:
        # questionary swallows Ctrl+C and answers None
        if allow_cancel:
            raise ConfigurationAborted()
        return fallback
    return answer


def q_select(
    message: str,
    choices: Sequence[str],
    default: Optional[str] = None,
    allow_cancel: bool = False,
) -> Optional[str]:
    """Pick one of ``choices``; arrow-key menu on a TTY, numbered list otherwise."""
    values = [str(choice) for choice in choices]
    if not is_interactive():
        return _numbered_select(message, values, default, allow_cancel)

    question = questionary.select(
        message,
        choices=values,
        default=default if default in values else None,
        output=_prompt_output(),
    )
    return _ask(question, default, allow_cancel)


def q_password(message: str, allow_cancel: bool = False) -> str:
    """Read a secret without echo. An empty answer means "keep the current value"."""
    if not is_interactive():
        return safe_prompt(message, password=True, allow_cancel=allow_cancel)
    return _ask(questionary.password(message, output=_prompt_output()), "", allow_cancel)
