"""Commands with their arguments and options, and command-line parsing."""

from __future__ import annotations

import os
import re
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any

__all__ = [
    "DEFAULT_HELP_OPTION",
    "DEFAULT_OPTIONS",
    "Argument",
    "Command",
    "Option",
    "Parameter",
    "ParseError",
    "new_flag",
]

_FLAG_VALUE = re.compile(r"^(?:true|false|yes|no)$")

ParseCallback = Callable[[str, str], str]


class ParseError(ValueError):
    """Raised when command line input cannot be parsed or is invalid."""


@dataclass(kw_only=True)
class Parameter:
    """Common base of arguments and options.

    ``parse`` is called as ``parse(name, value)`` and returns the value to
    store; it raises ``ValueError`` to reject the value.
    """

    name: str
    usage: str = ""
    description: str = ""
    default: str = ""
    required: bool = False
    multiple: bool = False
    env: str = ""
    regex: re.Pattern[str] | None = None
    parse: ParseCallback | None = None
    values: list[str] = field(default_factory=list)

    def assign(self, value: str) -> None:
        """Validate and store a value."""
        if self.values and not self.multiple:
            raise ParseError(f'Parameter "{self.name}" does not support multiple values')
        if self.regex is not None and not self.regex.search(value):
            raise ParseError(f'Parameter "{self.name}" invalid: Does not match criteria')
        if self.parse is not None:
            try:
                value = self.parse(self.name, value)
            except ValueError as exc:
                raise ParseError(f'Parameter "{self.name}" invalid: {exc}') from exc
        self.values.append(value)

    def count(self) -> int:
        """Number of stored values."""
        return len(self.values)

    def set_env(self, env: str) -> Parameter:
        """Read the value from this environment variable when none is given."""
        self.env = env
        return self

    def set_parse(self, parse: ParseCallback) -> Parameter:
        """Set the callback that validates and transforms values."""
        self.parse = parse
        return self

    def string(self) -> str:
        """The first value, or an empty string."""
        return self.values[0] if self.values else ""

    def strings(self) -> list[str]:
        """All values."""
        return list(self.values)

    def boolean(self) -> bool:
        """Whether the first value reads as true."""
        return self.string().lower() in ("true", "yes")

    def integer(self) -> int:
        """The first value as an integer, 0 if missing or not a number."""
        try:
            return int(self.string())
        except ValueError:
            return 0


@dataclass(kw_only=True)
class Argument(Parameter):
    """A positional command line parameter."""


@dataclass(kw_only=True)
class Option(Parameter):
    """A named command line parameter, ``--name`` or ``-alias``."""

    alias: str = ""
    flag: bool = False

    def is_flag(self) -> Option:
        """Turn this option into a flag, which takes no value."""
        self.flag = True
        return self


def new_flag(name: str, alias: str, usage: str, multiple: bool) -> Option:
    """Create a flag option."""
    return Option(name=name, alias=alias, usage=usage, multiple=multiple, flag=True)


DEFAULT_HELP_OPTION = Option(
    name="help",
    usage="Display this help message",
    description="Display this help message",
    alias="h",
    flag=True,
)

DEFAULT_OPTIONS: list[Option] = [DEFAULT_HELP_OPTION]


def _require_callable(call: Any, label: str) -> None:
    if not callable(call):
        raise TypeError(f"{label} must be callable, but is {type(call).__name__}")


class Command:
    """A named callback with a set of arguments and options."""

    def __init__(self, name: str, usage: str, call: Callable[..., Any]) -> None:
        _require_callable(call, "Call")
        self.cli: Any = None
        self.name = name
        self.usage = usage
        self.description = ""
        self.options: list[Option] = [replace(opt, values=[]) for opt in DEFAULT_OPTIONS]
        self.arguments: list[Argument] = []
        self.call = call
        self.pre_call: Callable[..., Any] | None = None
        self.post_call: Callable[..., Any] | None = None

    def set_cli(self, cli: Any) -> Command:
        """Set the back-reference to the owning cli."""
        self.cli = cli
        return self

    def set_description(self, description: str) -> Command:
        self.description = description
        return self

    def set_pre_call(self, call: Callable[..., Any]) -> Command:
        """Set a callback run before the command callback."""
        _require_callable(call, "PreCall")
        self.pre_call = call
        return self

    def set_post_call(self, call: Callable[..., Any]) -> Command:
        """Set a callback run after the command callback."""
        _require_callable(call, "PostCall")
        self.post_call = call
        return self

    def parse(self, args: Iterable[str]) -> None:
        """Assign command line arguments to options and arguments.

        Raises ``ParseError`` on malformed, unknown, invalid or missing input.
        """
        pending = deque(args)
        arg_num = 0
        last_arg: Argument | None = None
        total = len(self.arguments)
        while pending:
            arg = pending.popleft()
            if arg.startswith("-"):
                name = arg.lstrip("-")
                value = ""
                has_value = False
                if "=" in name:
                    has_value = True
                    if name.startswith("="):
                        raise ParseError(f'Malformed option "{arg}"')
                    name, value = name.split("=", 1)
                option = self.option(name)
                if option is None:
                    raise ParseError(f'Unrecognized option "{arg}"')
                if not option.flag and not has_value:
                    if not pending or pending[0].startswith("-"):
                        raise ParseError(f'Missing value for option "{arg}"')
                    value = pending.popleft()
                elif option.flag and has_value and not _FLAG_VALUE.match(value):
                    raise ParseError(f'Flag "{arg}" cannot have value')
                elif option.flag:
                    value = "true"
                option.assign(value)
            else:
                if last_arg is None or not last_arg.multiple:
                    if arg_num + 1 > total:
                        raise ParseError(
                            f"Too many arguments. Expected (at most) {total}, got {arg_num + 1}"
                        )
                    last_arg = self.arguments[arg_num]
                last_arg.assign(arg)
                arg_num += 1

        for argument in self.arguments:
            self._finish_parameter(argument, "Argument")
        for option in self.options:
            self._finish_parameter(option, "Option")

    @staticmethod
    def _finish_parameter(param: Parameter, kind: str) -> None:
        if not param.values:
            value = os.environ.get(param.env, "") if param.env else ""
            if not value and param.default:
                value = param.default
            if value:
                param.assign(value)
        if param.required and param.count() == 0:
            raise ParseError(f'{kind} "{param.name}" is required but missing')

    def new_argument(
        self, name: str, usage: str, default: str, required: bool, multiple: bool
    ) -> Command:
        """Create and add an argument."""
        return self.add_argument(
            Argument(name=name, usage=usage, default=default, required=required, multiple=multiple)
        )

    def add_argument(self, argument: Argument) -> Command:
        """Add an argument; raises ``ValueError`` if it conflicts."""
        if self.arguments:
            prev = self.arguments[-1]
            if argument.required and not prev.required:
                raise ValueError("Cannot add required argument after optional argument")
            if prev.multiple:
                raise ValueError("Cannot add argument after multiple style argument")
        if self.argument(argument.name) is not None:
            raise ValueError(f'Argument with name "{argument.name}" already existing')
        if self.option(argument.name) is not None:
            raise ValueError(f'Option with name or alias "{argument.name}" already existing')
        self.arguments.append(argument)
        return self

    def new_flag(self, name: str, alias: str, usage: str, multiple: bool) -> Command:
        """Create and add a flag option."""
        return self.add_option(new_flag(name, alias, usage, multiple))

    def new_option(
        self,
        name: str,
        alias: str,
        usage: str,
        default: str,
        required: bool,
        multiple: bool,
    ) -> Command:
        """Create and add an option."""
        return self.add_option(
            Option(
                name=name,
                alias=alias,
                usage=usage,
                default=default,
                required=required,
                multiple=multiple,
            )
        )

    def add_option(self, option: Option) -> Command:
        """Add an option; raises ``ValueError`` if it conflicts."""
        if self.option(option.name) is not None:
            raise ValueError(f'Option with name or alias "{option.name}" already existing')
        if self.argument(option.name) is not None:
            raise ValueError(f'Argument with name "{option.name}" already existing')
        if option.alias:
            if self.option(option.alias) is not None:
                raise ValueError(f'Option with name or alias "{option.alias}" already existing')
            if self.argument(option.alias) is not None:
                raise ValueError(
                    f'Cannot use alias: Argument with name "{option.alias}" already existing'
                )
        self.options.append(option)
        return self

    def argument(self, name: str) -> Argument | None:
        """The argument with this name, if any."""
        return next((a for a in self.arguments if a.name == name), None)

    def option(self, name: str) -> Option | None:
        """The option with this name or alias, if any."""
        return next((o for o in self.options if name in (o.name, o.alias)), None)

    def input(self) -> dict[str, list[str]]:
        """All assigned values of options and arguments, by name."""
        result = {o.name: list(o.values) for o in self.options if o.values}
        result.update({a.name: list(a.values) for a in self.arguments if a.values})
        return result