"""String helpers for styled terminal text and the default failure handler."""

from __future__ import annotations

import re
import sys
from typing import NoReturn

__all__ = [
    "CONTROL_CHARACTERS",
    "LINE_BREAK",
    "die",
    "is_control_char_start",
    "split_formatted_string",
    "string_length",
]

LINE_BREAK = "\n"

CONTROL_CHARACTERS = re.compile(r"\033\[[0-9;]+m")

_RESET = "\033[0m"


def string_length(text: str) -> int:
    """Length of a string in characters, not counting control sequences."""
    return len(CONTROL_CHARACTERS.sub("", text))


def _is_code_char(char: str) -> bool:
    return "0" <= char <= "9" or char == ";"


def split_formatted_string(text: str) -> list[str]:
    """Split styled text into lines.

    Active styles are reset at each line end and re-applied at the start of
    the following line, so each line renders on its own.
    """
    last = len(text) - 1
    seq = 0
    active = False
    cache = ""
    current = ""
    parts: list[str] = []
    for idx, char in enumerate(text):
        add = char
        if seq == 0 and is_control_char_start(char):
            seq = 1
            cache += char
            current = ""
        elif seq == 1 and char == "[":
            seq = 2
            cache += char
        elif seq == 2 and _is_code_char(char):
            seq = 3
            cache += char
            current += char
        elif seq == 3 and (_is_code_char(char) or char == "m"):
            cache += char
            if char == "m":
                seq = 0
                if current[-1] == "0":
                    cache = ""
                    current = ""
                    active = False
                else:
                    active = True
            else:
                current += char
        elif char == "\n" and active and idx != last:
            add = _RESET + char + cache
        elif active and idx == last:
            add = char + _RESET
        parts.append(add)
    return "".join(parts).split("\n")


def is_control_char_start(char: str) -> bool:
    """Whether the character is the escape character ``\\033``."""
    return char == "\033"


def die(msg: str, *args: object) -> NoReturn:
    """Print the message as an error on stderr and exit with status 1."""
    from clif.output import color_output

    color_output(sys.stderr).printf("<error>" + msg + "<reset>\n", *args)
    sys.exit(1)