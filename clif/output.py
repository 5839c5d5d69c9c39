"""Styled output written to a text stream."""

from __future__ import annotations

import sys
from typing import TextIO

from clif.formatter import DEBUG_STYLES, DEFAULT_STYLES, DefaultFormatter, Formatter

__all__ = ["Output", "color_output", "debug_output", "monochrome_output"]


class Output:
    """Formats messages with a formatter and writes them to a stream."""

    def __init__(self, stream: TextIO | None, formatter: Formatter) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.formatter = formatter

    def escape(self, msg: str) -> str:
        """Escape style tokens so they are printed literally."""
        return self.formatter.escape(msg)

    def printf(self, msg: str, *args: object) -> None:
        """Interpolate, render styles and write to the stream."""
        self.stream.write(self.sprintf(msg, *args))

    def sprintf(self, msg: str, *args: object) -> str:
        """Interpolate and render styles, returning the result."""
        if args:
            msg = msg % args
        return self.formatter.format(msg)

    def set_formatter(self, formatter: Formatter) -> Output:
        """Replace the formatter; returns this output."""
        self.formatter = formatter
        return self

    def writer(self) -> TextIO:
        """The stream this output writes to."""
        return self.stream


def monochrome_output(stream: TextIO | None = None) -> Output:
    """Output that strips all known style tokens."""
    return Output(stream, DefaultFormatter(None))


def color_output(stream: TextIO | None = None) -> Output:
    """Output that renders style tokens with the default colours."""
    return Output(stream, DefaultFormatter(DEFAULT_STYLES))


def debug_output(stream: TextIO | None = None) -> Output:
    """Output that renders style tokens as short readable markers."""
    return Output(stream, DefaultFormatter(DEBUG_STYLES))