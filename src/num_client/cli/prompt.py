"""Line input for the interactive shell.

On a terminal the prompt is rendered by questionary; with redirected
stdin (pipes, files, tests) lines are read directly so scripted sessions
work without a TTY.  Either way ``None`` signals the end of input.
"""

from __future__ import annotations

import sys
from typing import Any

from num_client.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for terminal prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _read_from_terminal(prompt: str) -> str | None:
    questionary = _import_questionary()
    # ``ask`` returns None on Ctrl+C; Ctrl+D raises EOFError.
    try:
        answer: str | None = questionary.text(prompt, qmark="").ask()
    except EOFError:
        return None
    return answer


def _read_from_stream(prompt: str) -> str | None:
    sys.stdout.write(prompt)
    sys.stdout.flush()
    line = sys.stdin.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def read_line(prompt: str) -> str | None:
    """Show *prompt* and return one line of input, or ``None`` at end of input."""
    if sys.stdin.isatty():
        return _read_from_terminal(prompt)
    return _read_from_stream(prompt)
