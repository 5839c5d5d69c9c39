# clif

A small framework for building command line applications. You describe
commands with arguments and options, and clif parses the command line,
prints help, renders styled terminal output, asks interactive questions
and injects objects into your command callbacks.

It has no dependencies outside the standard library and supports
Python 3.10 and later.

## Installation

```
pip install .
```

## A first application

```python
from clif.cli import Cli
from clif.output import Output


def hello(out: Output) -> None:
    out.printf("Hello <info>World<reset>\n")


app = Cli("My App", "1.0.0", "An example application")
app.new("hello", "The obligatory hello world", hello)
app.run()
```

Running the script with `hello` prints the greeting. Without arguments the
default command, `list`, runs and shows every available command (change it
with `set_default_command`). `-h` or `--help` as first argument also runs
`list`; `help <command>` or `<command> --help` describes one command.

Commands whose names contain a colon, such as `db:migrate`, are grouped
by the part before the colon in the listing.

## Arguments and options

```python
from clif.command import Command
from clif.output import Output


def greet(command: Command, out: Output) -> None:
    out.printf("Hello %s\n", command.argument("name").string())
    if command.option("loud").boolean():
        out.printf("<important>LOUD<reset>\n")


cmd = (
    Command("greet", "Greet someone", greet)
    .new_argument("name", "Who to greet", "", True, False)
    .new_flag("loud", "l", "Shout it", False)
)
app.add(cmd)
```

- Options accept `--name value`, `--name=value` and the alias form `-l`.
  Flags take no value, or one of `true`, `false`, `yes`, `no` after `=`.
- An argument or option marked as multiple collects several values; a
  multiple argument must be the last one.
- When no value is given, a parameter falls back to the environment
  variable set with `set_env`, then to its default.
- `set_parse` installs a callback `parse(name, value)` that returns the
  value to store, or raises `ValueError` to reject it.
- Values are read with `string()`, `strings()`, `boolean()` and
  `integer()`; `Command.input()` returns all assigned values by name.

Missing required values, unknown or malformed options, flags with a value
and surplus arguments raise `clif.command.ParseError` from
`Command.parse`. When running through `Cli.run`, the command's help is
printed and the program exits with status 1.

`Cli.add_default_options` and `Cli.new_default_option` add options to
every command when the application runs.

## Injection

Callback parameters are filled from the application's registry, looked up
by their type annotation, so every parameter must be annotated. The
running `Command`, the `Cli`, the `Output` and the `DefaultInput` are
always available.

- `register(obj)` makes an object available under its own type.
- `register_as(key, obj)` registers it under a type or a type name.
- `register_named(name, value)` collects values into a mapping that is
  passed to a parameter annotated as `NamedParameters`; `named(name)`
  reads one back.

A parameter that cannot be filled raises `clif.cli.CliError`. An exception
raised by a callback is wrapped in `clif.cli.CallError`. `Cli.call`
returns the values the callback returned, as a tuple.

Commands may have a `set_pre_call` and `set_post_call` callback, injected
the same way. `Cli.set_pre_call` runs before any command; if it raises,
the run stops. `Cli.herald` registers functions that build commands when
the application runs. `Cli.set_on_interrupt` runs a callback on Ctrl+C and
then exits.

## Output and input

`clif.output.Output` renders style tokens such as `<info>`, `<error>`,
`<warn>`, `<success>`, `<debug>`, `<headline>`, `<subline>`,
`<important>`, `<query>` and `<reset>`, as well as closing forms like
`</info>`. `monochrome_output` strips them, `color_output` turns them
into terminal colours and `debug_output` into short markers. A token
written as `\<info>` is printed literally; `escape` does that for you.
Further colour themes live in `clif.formatter` (`SUNBURN_STYLES`,
`WINTER_STYLES`) for use with `DefaultFormatter`.

`clif.input.DefaultInput` offers `ask`, `ask_regex`, `choose` and
`confirm`. Checks passed to `ask` raise `ValueError` to reject an answer;
the message is shown and the question asked again.

`clif.common` provides `string_length`, which ignores colour control
sequences, and `split_formatted_string`, which splits styled text into
lines that each render on their own.

## What it does not do

clif has no table renderer and no progress bars; format such output
yourself and write it through `Output`.