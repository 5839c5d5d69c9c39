"""Style-token formatting for console messages.

Messages may carry style tokens such as ``<info>`` or ``<reset>``. A formatter
replaces them with terminal control sequences, or strips them.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping

__all__ = [
    "DEBUG_STYLES",
    "DEFAULT_STYLES",
    "SUNBURN_STYLES",
    "TOKEN_REGEX",
    "WINTER_STYLES",
    "DefaultFormatter",
    "Formatter",
]

TOKEN_REGEX = re.compile(r"(<[^>]+>)")

_ESCAPED_PLACEHOLDER = "~~~~#~~~~"

_STYLE_NAMES = (
    "error",
    "warn",
    "info",
    "success",
    "debug",
    "headline",
    "subline",
    "important",
    "query",
    "reset",
)


def _theme(*sgr_codes: str) -> dict[str, str]:
    """Build a style map from SGR parameters, in the order of ``_STYLE_NAMES``.

    Every style also gets a closing ``/name`` token, rendering as ``reset``.
    """
    styles = {name: f"\033[{code}m" for name, code in zip(_STYLE_NAMES, sgr_codes)}
    closing = {f"/{name}": styles["reset"] for name in styles}
    return {**styles, **closing}


DEFAULT_STYLES: dict[str, str] = _theme(
    "31;1", "33", "34", "32", "30;1",
    "4;1", "4", "47;30;1", "36", "0",
)

SUNBURN_STYLES: dict[str, str] = _theme(
    "97;48;5;196;1", "30;48;5;208;2", "38;5;142;2", "38;5;2;2", "38;5;242;2",
    "38;5;226;1", "38;5;228;1", "38;5;15;2;4", "38;5;77", "0",
)

WINTER_STYLES: dict[str, str] = _theme(
    "97;48;5;89;1", "30;48;5;97;2", "38;5;69;2", "38;5;45;1", "38;5;239;2",
    "38;5;21;1", "38;5;27;1", "38;5;15;2;4", "38;5;111", "0",
)

DEBUG_STYLES: dict[str, str] = {
    name: f"{letter}:" for name, letter in zip(_STYLE_NAMES, "EWISDHUPQR")
}


def _hide_escaped(msg: str) -> str:
    return msg.replace("\\<", _ESCAPED_PLACEHOLDER)


class Formatter(ABC):
    """Renders style tokens in messages."""

    @abstractmethod
    def escape(self, msg: str) -> str:
        """Escape tokens so they are not interpolated (``<foo>`` -> ``\\<foo>``)."""

    @abstractmethod
    def format(self, msg: str) -> str:
        """Render the message by applying its style tokens."""


class DefaultFormatter(Formatter):
    """Replaces tokens with the given styles.

    Without styles, every token known from ``DEFAULT_STYLES`` is stripped.
    Unknown tokens are always left untouched.
    """

    def __init__(self, styles: Mapping[str, str] | None = None) -> None:
        self.styles = styles

    def escape(self, msg: str) -> str:
        msg = _hide_escaped(msg)
        msg = TOKEN_REGEX.sub(lambda match: "\\" + match.group(0), msg)
        return msg.replace(_ESCAPED_PLACEHOLDER, "\\<")

    def format(self, msg: str) -> str:
        msg = _hide_escaped(msg)
        msg = TOKEN_REGEX.sub(self._replace_token, msg)
        return msg.replace(_ESCAPED_PLACEHOLDER, "<")

    def _replace_token(self, match: re.Match[str]) -> str:
        token = match.group(0)
        style = token[1:-1]
        if self.styles is None:
            return "" if style in DEFAULT_STYLES else token
        return self.styles.get(style, token)