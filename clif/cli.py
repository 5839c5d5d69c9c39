"""The cli application: command registry, dependency injection and running."""

from __future__ import annotations

import signal
import sys
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from clif.command import Command, Option, ParseError
from clif.common import die
from clif.describer import describe_cli, describe_command
from clif.input import DefaultInput
from clif.output import Output, color_output

__all__ = [
    "CallError",
    "Cli",
    "CliError",
    "NamedParameters",
    "new_help_command",
    "new_list_command",
]

_NAMED_PREFIX = "N:"

_MISSING = object()

Herald = Callable[["Cli"], Command]


class CallError(Exception):
    """Raised when a command callback (or its pre/post call) fails."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"Failure in execution: {error}")
        self.error = error


class CliError(Exception):
    """Raised when a callback cannot be invoked, e.g. a parameter is not injectable."""


class NamedParameters(dict):
    """Mapping of named registry values, injected into callbacks asking for it."""


def _type_name(annotation: Any) -> str:
    if isinstance(annotation, type):
        return f"{annotation.__module__}.{annotation.__qualname__}"
    return str(annotation)


def _names_type(name: str, key: type) -> bool:
    return name in (key.__name__, key.__qualname__, _type_name(key))


def _is_named(annotation: Any) -> bool:
    if annotation is NamedParameters:
        return True
    return isinstance(annotation, str) and _names_type(annotation, NamedParameters)


def _callback_parameters(func: Callable[..., Any]) -> Iterator[tuple[str, Any, bool]]:
    """Yield ``(name, annotation, keyword_only)`` for each injectable parameter."""
    target: Any = func
    skip = 0
    if hasattr(func, "__func__"):
        target, skip = func.__func__, 1
    code = getattr(target, "__code__", None)
    if code is None:
        call = getattr(type(func), "__call__", None)
        code = getattr(call, "__code__", None)
        if code is None:
            raise CliError(f"Cannot inspect callback {func!r}")
        target, skip = call, 1
    annotations = getattr(target, "__annotations__", None) or {}
    names = code.co_varnames
    positional = names[: code.co_argcount]
    keyword_only = names[code.co_argcount : code.co_argcount + code.co_kwonlyargcount]
    for name in positional[skip:]:
        yield name, annotations.get(name, _MISSING), False
    for name in keyword_only:
        yield name, annotations.get(name, _MISSING), True


def _as_tuple(result: Any) -> tuple[Any, ...]:
    if result is None:
        return ()
    if isinstance(result, tuple):
        return result
    return (result,)


def new_help_command() -> Command:
    """The default ``help`` command."""

    def show_help(command: Command, out: Output) -> None:
        name = command.argument("command").string()
        if not name:
            out.printf(describe_command(command))
            return
        target = command.cli.commands.get(name)
        if target is None:
            out.printf(describe_cli(command.cli))
            raise ValueError(f'Unknown command "{name}"')
        out.printf(describe_command(target))

    return Command("help", "Show this help", show_help).new_argument(
        "command", "Command to show help for", "", False, False
    )


def new_list_command() -> Command:
    """The default ``list`` command, listing all commands."""

    def list_commands(cli: Cli, out: Output) -> None:
        out.printf(describe_cli(cli))

    return Command("list", "List all available commands", list_commands)


class Cli:
    """A command line application.

    Command callbacks receive their parameters from the registry, looked up by
    the parameter's type annotation. A parameter annotated ``NamedParameters``
    receives all values registered with ``register_named``.
    """

    def __init__(self, name: str, version: str = "", description: str = "") -> None:
        self.name = name
        self.version = version
        self.description = description
        self.commands: dict[str, Command] = {}
        self.heralds: list[Herald] = []
        self.registry: dict[Any, Any] = {}
        self.default_options: list[Option] = []
        self.default_command = "list"
        self.pre_call: Callable[[Command], Any] | None = None
        self._on_interrupt: Callable[[], Any] | None = None
        self._interrupt_installed = False

        self.add(new_help_command(), new_list_command())
        out = color_output(sys.stdout)
        self.register_as(Cli, self).set_output(out).set_input(DefaultInput(sys.stdin, out))

    def add(self, *args: Command) -> Cli:
        """Add commands, replacing those of the same name."""
        for command in args:
            self.commands[command.name] = command.set_cli(self)
        return self

    def new_default_option(
        self,
        name: str,
        alias: str,
        usage: str,
        default: str,
        required: bool,
        multiple: bool,
    ) -> Cli:
        """Create an option that is added to all commands on run."""
        return self.add_default_options(
            Option(
                name=name,
                alias=alias,
                usage=usage,
                default=default,
                required=required,
                multiple=multiple,
            )
        )

    def add_default_options(self, *args: Option) -> Cli:
        """Add options that are added to all commands on run."""
        self.default_options.extend(args)
        return self

    def call(self, command: Command) -> tuple[Any, ...]:
        """Invoke the command (with its pre and post calls), injecting parameters.

        Returns the values the command callback returned; raises ``CallError``
        if a callback raised, ``CliError`` if a parameter cannot be injected.
        """
        self.registry[Command] = command
        if command.pre_call is not None:
            self._invoke(command.pre_call, command)
        result = self._invoke(command.call, command)
        if command.post_call is not None:
            self._invoke(command.post_call, command)
        return result

    def _lookup(self, annotation: Any) -> tuple[bool, Any]:
        try:
            if annotation in self.registry:
                return True, self.registry[annotation]
        except TypeError:
            return False, None
        if isinstance(annotation, str):
            for key, value in self.registry.items():
                if isinstance(key, type) and _names_type(annotation, key):
                    return True, value
        return False, None

    def _invoke(self, func: Callable[..., Any], command: Command) -> tuple[Any, ...]:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        named_seen = False
        for name, annotation, keyword_only in _callback_parameters(func):
            if _is_named(annotation):
                if named_seen:
                    raise CliError(
                        "Callback has more than the one allowed input parameter of type "
                        "NamedParameters, which is used to inject named parameters"
                    )
                named_seen = True
                value: Any = self._named_parameters()
            elif annotation is _MISSING:
                raise CliError(
                    f'Callback parameter "{name}" for command "{command.name}" '
                    "has no type annotation"
                )
            else:
                found, value = self._lookup(annotation)
                if not found:
                    raise CliError(
                        f"Callback parameter of type {_type_name(annotation)} for command "
                        f'"{command.name}" was not found in registry'
                    )
            if keyword_only:
                kwargs[name] = value
            else:
                args.append(value)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            raise CallError(exc) from exc
        return _as_tuple(result)

    def _named_parameters(self) -> NamedParameters:
        return NamedParameters(
            (key[len(_NAMED_PREFIX):], value)
            for key, value in self.registry.items()
            if isinstance(key, str) and key.startswith(_NAMED_PREFIX)
        )

    def herald(self, *args: Herald) -> Cli:
        """Register command constructors, which are called on run."""
        self.heralds.extend(args)
        return self

    def new(self, name: str, usage: str, call: Callable[..., Any]) -> Cli:
        """Create and add a command."""
        return self.add(Command(name, usage, call))

    def output(self) -> Output:
        """The currently registered output."""
        return self.registry[Output]

    def register(self, value: Any) -> Cli:
        """Register an object for injection under its own type."""
        self.registry[type(value)] = value
        return self

    def register_as(self, name: Any, value: Any) -> Cli:
        """Register an object for injection under the given key (type or name)."""
        self.registry[name] = value
        return self

    def register_named(self, name: str, value: Any) -> Cli:
        """Register a value for injection as a named parameter."""
        self.registry[_NAMED_PREFIX + name] = value
        return self

    def named(self, name: str) -> Any:
        """A named parameter, or None."""
        return self.registry.get(_NAMED_PREFIX + name)

    def run(self, argv: Iterable[str] | None = None) -> None:
        """Run with the given arguments, defaulting to the process arguments."""
        self.run_with(sys.argv[1:] if argv is None else argv)

    def run_with(self, args: Iterable[str] | None) -> None:
        """Run the command selected by the arguments; exits via ``die`` on failure."""
        args = list(args) if args is not None else []

        for herald in self.heralds:
            self.add(herald(self))
        self.heralds = []
        for command in self.commands.values():
            for option in self.default_options:
                if not any(existing is option for existing in command.options):
                    command.add_option(option)

        name, command_args = self.separate_args(args)
        command = self.commands.get(name)
        if command is None:
            if name == "" and args:
                name = args[0]
            die(f'Command "{name}" unknown')

        error: ParseError | None = None
        try:
            command.parse(command_args)
        except ParseError as exc:
            error = exc

        help_option = command.option("help")
        if help_option is not None and help_option.boolean():
            self.output().printf(describe_command(command))
            return
        if error is not None:
            self.output().printf(describe_command(command))
            die(f"Parse error: {error}")

        if self.pre_call is not None:
            try:
                self.pre_call(command)
            except Exception as exc:
                die(str(exc))

        try:
            self.call(command)
        except (CallError, CliError) as exc:
            die(str(exc))

    def separate_args(self, args: Iterable[str]) -> tuple[str, list[str]]:
        """Split arguments into the command name and the remaining arguments.

        The command name is the first argument not starting with ``-``.
        """
        args = list(args)
        if not args:
            return self.default_command, []
        if "list" in self.commands and args[0] in ("-h", "--help"):
            return "list", []

        name = ""
        rest: list[str] = []
        found = False
        for arg in args:
            if found or arg.startswith("-"):
                rest.append(arg)
            else:
                name = arg
                found = True
        return name, rest

    def set_default_command(self, name: str) -> Cli:
        """Set the command run when none is given."""
        self.default_command = name
        return self

    def set_description(self, description: str) -> Cli:
        self.description = description
        return self

    def set_input(self, input_: DefaultInput) -> Cli:
        """Replace the input injected into callbacks."""
        self.registry[DefaultInput] = input_
        return self

    def set_output(self, output: Output) -> Cli:
        """Replace the output injected into callbacks."""
        self.registry[Output] = output
        return self

    def set_on_interrupt(self, callback: Callable[[], Any]) -> Cli:
        """Run the callback on SIGINT, then exit with 0, or die if it raised."""
        self._on_interrupt = callback
        if not self._interrupt_installed:
            signal.signal(signal.SIGINT, self._handle_interrupt)
            self._interrupt_installed = True
        return self

    def _handle_interrupt(self, signum: int, frame: Any) -> None:
        try:
            if self._on_interrupt is not None:
                self._on_interrupt()
        except Exception as exc:
            die(str(exc))
        else:
            sys.exit(0)

    def set_pre_call(self, callback: Callable[[Command], Any]) -> Cli:
        """Set a callback run before any command; raising aborts the run."""
        self.pre_call = callback
        return self