"""Help texts for a cli and for single commands."""

from __future__ import annotations

import os
import sys
from collections import defaultdict
from typing import TYPE_CHECKING

from clif.command import Command, Parameter

if TYPE_CHECKING:
    from clif.cli import Cli

__all__ = ["describe_cli", "describe_command"]


def _entry(label: str, width: int, text: str) -> str:
    return f"  <info>{label.ljust(width)}<reset>  {text}"


def _details(param: Parameter) -> str:
    info = []
    if param.multiple:
        info.append("<debug>mult<reset>")
    if param.required:
        info.append("<important>req<reset>")
    if param.env:
        info.append(f"env: <debug>{param.env}<reset>")
    if param.default:
        info.append(f'default: <debug>"{param.default}"<reset>')
    if not info:
        return param.usage
    return f"{param.usage} ({', '.join(info)})"


def describe_cli(cli: Cli, prog: str | None = None) -> str:
    """Render the overview of a cli: name, usage and all commands.

    ``prog`` is the program name shown in the usage line; it defaults to the
    base name of the running program.
    """
    if prog is None:
        prog = os.path.basename(sys.argv[0])

    headline = f"<headline>{cli.name}<reset>"
    if cli.version:
        headline += f" <debug>({cli.version})<reset>"
    lines = [headline]
    if cli.description:
        lines.append(f"<info>{cli.description}<reset>\n")
    lines.append(f"<subline>Usage:<reset>\n  {prog} command [arg ..] [--opt val ..]\n")
    lines.append("<subline>Available commands:<reset>")

    width = max((len(command.name) for command in cli.commands.values()), default=0)
    groups: dict[str, list[Command]] = defaultdict(list)
    for command in cli.commands.values():
        prefix = command.name.split(":", 1)[0] if ":" in command.name else ""
        groups[prefix].append(command)

    for prefix in sorted(groups):
        if prefix:
            lines.append(f" <subline>{prefix}<reset>")
        for command in sorted(groups[prefix], key=lambda c: c.name):
            lines.append(_entry(command.name, width, command.usage))

    return "\n".join(lines) + "\n"


def describe_command(command: Command) -> str:
    """Render the help of a single command with its arguments and options."""
    lines = [f"Command: <headline>{command.name}<reset>"]
    if command.description:
        lines.extend([f"<info>{command.description}<reset>", ""])
    elif command.usage:
        lines.extend([f"<info>{command.usage}<reset>", ""])

    lines.append("<subline>Usage:<reset>")
    usage = [command.name]

    arguments: list[tuple[str, str]] = []
    for argument in command.arguments:
        short = argument.name
        if argument.multiple:
            short += " ..."
        if not argument.required:
            short = f"[{short}]"
        usage.append(short)
        arguments.append((argument.name, _details(argument)))

    options: list[tuple[str, str]] = []
    for option in command.options:
        long = f"--{option.name}"
        if option.alias:
            long += f"|-{option.alias}"
        if not option.flag:
            long += " val"
        short = long
        if option.multiple:
            short += " ..."
        if not option.required:
            short = f"[{short}]"
        usage.append(short)
        options.append((long, _details(option)))

    lines.append("  " + " ".join(usage))
    lines.append("")

    for title, entries in (("Arguments", arguments), ("Options", options)):
        if not entries:
            continue
        width = max(len(label) for label, _ in entries)
        lines.append(f"<subline>{title}:<reset>")
        lines.extend(_entry(label, width, text) for label, text in entries)
        lines.append("")

    return "\n".join(lines) + "\n"