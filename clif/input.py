"""Interactive prompts: questions, choices and confirmations."""

from __future__ import annotations

import re
import sys
from collections.abc import Callable, Mapping
from typing import TextIO

from clif.output import Output

__all__ = [
    "CONFIRM_NO_REGEX",
    "CONFIRM_REJECTION",
    "CONFIRM_YES_REGEX",
    "DefaultInput",
    "input_any",
    "input_empty_ok",
]

Check = Callable[[str], object]

CONFIRM_REJECTION = '<warn>Please respond with "yes" or "no"<reset>\n\n'
CONFIRM_YES_REGEX = re.compile(r"^y(es)?$", re.IGNORECASE)
CONFIRM_NO_REGEX = re.compile(r"^no?$", re.IGNORECASE)


def input_empty_ok(value: str) -> None:
    """Check that accepts any input, including empty input."""
    return None


def input_any(value: str) -> None:
    """Check that accepts any non-empty input."""
    if not value:
        raise ValueError("No input provided")


def _input_required(value: str) -> None:
    if not value:
        raise ValueError("Input required")


def _render_ask_question(question: str) -> str:
    return "<query>" + question.rstrip(" ") + "<reset> "


def _render_choose_question(question: str) -> str:
    return question + "\n"


def _render_choose_option(key: str, value: str, size: int) -> str:
    label = (key + ")").ljust(size + 1)
    return f"  <query>{label}<reset> {value}\n"


def _render_choose_query() -> str:
    return "Choose: "


class DefaultInput:
    """Reads answers line by line from a stream, prompting through an output.

    Checks are callables that raise ``ValueError`` to reject an answer; the
    message is shown to the user and the question is asked again.
    """

    def __init__(self, stream: TextIO | None, output: Output) -> None:
        self.stream = stream if stream is not None else sys.stdin
        self.output = output

    def _read_line(self) -> str:
        line = self.stream.readline()
        if line == "":
            raise EOFError("No more input available")
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line

    def ask(self, question: str, check: Check | None = None) -> str:
        """Ask until an answer passes the check (default: non-empty)."""
        check = check if check is not None else _input_required
        while True:
            self.output.printf(_render_ask_question(question))
            line = self._read_line()
            try:
                check(line)
            except ValueError as exc:
                self.output.printf("<warn>%s<reset>\n\n", exc)
            else:
                return line

    def ask_regex(self, question: str, pattern: str | re.Pattern[str]) -> str:
        """Ask until the answer matches the pattern."""
        rx = re.compile(pattern)

        def check(value: str) -> None:
            if not rx.search(value):
                raise ValueError("Input does not match criteria")

        return self.ask(question, check)

    def choose(self, question: str, choices: Mapping[str, str]) -> str:
        """List the choices and ask until one of their keys is entered."""
        keys = sorted(choices)
        size = max((len(key) for key in keys), default=0)
        prompt = _render_choose_question(question)
        prompt += "".join(_render_choose_option(key, choices[key], size) for key in keys)
        prompt += _render_choose_query()

        def check(value: str) -> None:
            if value not in choices:
                raise ValueError("Choose one of: " + ", ".join(keys))

        return self.ask(prompt, check)

    def confirm(self, question: str) -> bool:
        """Ask until the answer is yes/y or no/n (case insensitive)."""
        while True:
            answer = self.ask(question, input_empty_ok)
            if CONFIRM_YES_REGEX.match(answer):
                return True
            if CONFIRM_NO_REGEX.match(answer):
                return False
            self.output.printf(CONFIRM_REJECTION)