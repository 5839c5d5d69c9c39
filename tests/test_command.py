import datetime
import re

import pytest

from clif.command import (
    DEFAULT_HELP_OPTION,
    DEFAULT_OPTIONS,
    Argument,
    Command,
    Option,
    ParseError,
    new_flag,
)


def _bar_parse(name, value):
    if "B" not in value:
        raise ValueError("Missing B")
    return value


def _init_command():
    c = Command("test", "", lambda: None)
    c.arguments = [
        Argument(name="foo", required=True, regex=re.compile(r"^a")),
        Argument(name="bar", multiple=True, parse=_bar_parse),
    ]
    c.options = [
        Option(name="baz", required=True),
        Option(name="bang", default="the default", multiple=True),
        Option(name="zoing", multiple=True, flag=True, alias="z"),
    ]
    return c


def test_command_creation_keeps_callback():
    def fn(foo, bar, baz):
        return "", 0, datetime.datetime.now(), None

    c = Command("name", "Usage", fn)
    assert c.call is fn
    assert c.name == "name"
    assert c.usage == "Usage"


@pytest.mark.parametrize("call,kind", [("foo", "str"), (datetime.datetime.now(), "datetime")])
def test_command_creation_requires_callable(call, kind):
    with pytest.raises(TypeError, match=f"Call must be callable, but is {kind}"):
        Command("name", "Usage", call)


PARSE_CASES = [
    ([], 'Argument "foo" is required but missing', None),
    (["first"], 'Parameter "foo" invalid: Does not match criteria', None),
    (["afirst"], 'Option "baz" is required but missing', None),
    (["afirst", "second"], 'Parameter "bar" invalid: Missing B', None),
    (["afirst", "second with B"], 'Option "baz" is required but missing', None),
    (
        ["afirst", "--baz=x"],
        None,
        {"foo": ["afirst"], "baz": ["x"], "bang": ["the default"]},
    ),
    (
        ["afirst", "--baz", "x"],
        None,
        {"foo": ["afirst"], "baz": ["x"], "bang": ["the default"]},
    ),
    (
        ["afirst", "--baz=x", "--baz=y"],
        'Parameter "baz" does not support multiple values',
        None,
    ),
    (["afirst", "--baz", "--baz", "x"], 'Missing value for option "--baz"', None),
    (
        ["afirst", "second with B", "--baz=x"],
        None,
        {"foo": ["afirst"], "bar": ["second with B"], "baz": ["x"], "bang": ["the default"]},
    ),
    (
        ["afirst", "second with B", "another bar param", "--baz=x"],
        'Parameter "bar" invalid: Missing B',
        None,
    ),
    (
        ["afirst", "second with B", "another Bar param", "--baz=x"],
        None,
        {
            "foo": ["afirst"],
            "bar": ["second with B", "another Bar param"],
            "baz": ["x"],
            "bang": ["the default"],
        },
    ),
    (
        ["afirst", "--baz=x", "second with B", "another Bar param"],
        None,
        {
            "foo": ["afirst"],
            "bar": ["second with B", "another Bar param"],
            "baz": ["x"],
            "bang": ["the default"],
        },
    ),
    (
        ["afirst", "--baz=x", "second with B", "another Bar param", "--bang", "Bang!"],
        None,
        {
            "foo": ["afirst"],
            "bar": ["second with B", "another Bar param"],
            "baz": ["x"],
            "bang": ["Bang!"],
        },
    ),
    (
        [
            "afirst",
            "--baz=x",
            "second with B",
            "another Bar param",
            "--bang",
            "Bang!",
            "--bang=Bang!!",
        ],
        None,
        {
            "foo": ["afirst"],
            "bar": ["second with B", "another Bar param"],
            "baz": ["x"],
            "bang": ["Bang!", "Bang!!"],
        },
    ),
    (
        ["afirst", "--baz=x", "second with B", "another Bar param", "--bang", "Bang!", "--zoing=z"],
        'Flag "--zoing=z" cannot have value',
        None,
    ),
    (
        ["afirst", "--baz=x", "second with B", "another Bar param", "--bang", "Bang!", "--zoing"],
        None,
        {
            "foo": ["afirst"],
            "bar": ["second with B", "another Bar param"],
            "baz": ["x"],
            "bang": ["Bang!"],
            "zoing": ["true"],
        },
    ),
    (
        [
            "afirst",
            "--baz=x",
            "second with B",
            "another Bar param",
            "--bang",
            "Bang!",
            "--zoing",
            "-z",
            "-z",
        ],
        None,
        {
            "foo": ["afirst"],
            "bar": ["second with B", "another Bar param"],
            "baz": ["x"],
            "bang": ["Bang!"],
            "zoing": ["true", "true", "true"],
        },
    ),
    (["-="], 'Malformed option "-="', None),
    (["--not-there"], 'Unrecognized option "--not-there"', None),
]


@pytest.mark.parametrize("args,error,values", PARSE_CASES)
def test_command_parse(args, error, values):
    c = _init_command()
    if error is not None:
        with pytest.raises(ParseError) as info:
            c.parse(args)
        assert str(info.value) == error
    else:
        c.parse(args)
        assert c.input() == values


def test_too_many_arguments():
    c = Command("cmd", "", lambda: None).new_argument("one", "", "", False, False)
    with pytest.raises(ParseError, match=r"Too many arguments. Expected \(at most\) 1, got 2"):
        c.parse(["a", "b"])


def test_parse_falls_back_to_defaults():
    c = (
        Command("command", "Usage", lambda: None)
        .new_argument("foo", "For fooing", "FOO", True, False)
        .new_option("bar", "b", "For baring", "BAR", True, False)
    )
    c.parse([])
    assert c.argument("foo").string() == "FOO"
    assert c.option("bar").string() == "BAR"


def test_parse_falls_back_to_env_before_default(monkeypatch):
    monkeypatch.setenv("the_foo", "FOO_ENV")
    monkeypatch.setenv("the_bar", "BAR_ENV")
    c = (
        Command("command", "Usage", lambda: None)
        .add_argument(
            Argument(name="foo", usage="For fooing", default="FOO", required=True).set_env(
                "the_foo"
            )
        )
        .add_option(
            Option(
                name="bar", alias="b", usage="For baring", default="BAR", required=True
            ).set_env("the_bar")
        )
    )
    c.parse([])
    assert c.argument("foo").string() == "FOO_ENV"
    assert c.option("bar").string() == "BAR_ENV"


def test_command_access():
    c = _init_command()
    assert c.argument("foo").name == "foo"
    assert c.argument("fooz") is None
    assert c.option("baz").name == "baz"
    assert c.option("bazz") is None
    assert c.option("z").name == "zoing"


def test_adding_single_argument():
    c = Command("foo", "Doing foo", lambda c: None)
    c.new_argument("bar", "A bar", "123", True, False)
    assert c.arguments == [Argument(name="bar", usage="A bar", default="123", required=True)]


def test_adding_argument_with_same_name_fails():
    c = Command("foo", "Doing foo", lambda c: None)
    c.new_argument("bar", "A bar", "123", True, False)
    c.new_argument("baz", "A baz", "", False, False)
    assert len(c.arguments) == 2
    with pytest.raises(ValueError, match='Argument with name "baz" already existing'):
        c.new_argument("baz", "A baz", "", False, False)


def test_cannot_add_argument_after_multiple():
    c = Command("foo", "Doing foo", lambda c: None)
    c.new_argument("bar", "A bar", "123", True, False)
    c.new_argument("baz", "A baz", "", False, True)
    assert len(c.arguments) == 2
    with pytest.raises(ValueError, match="Cannot add argument after multiple style argument"):
        c.new_argument("other", "A baz", "", False, False)


def test_cannot_add_required_after_optional():
    c = Command("foo", "", lambda: None).new_argument("a", "", "", False, False)
    with pytest.raises(ValueError, match="Cannot add required argument after optional argument"):
        c.new_argument("b", "", "", True, False)


def test_adding_argument_with_existing_option_fails():
    c = Command("foo", "Doing foo", lambda c: None)
    c.options = [Option(name="aaa"), Option(name="bbb", alias="b")]
    with pytest.raises(ValueError, match='Option with name or alias "aaa" already existing'):
        c.new_argument("aaa", "A baz", "", False, False)
    with pytest.raises(ValueError, match='Option with name or alias "b" already existing'):
        c.new_argument("b", "A baz", "", False, False)


def test_adding_single_option():
    c = Command("foo", "Doing foo", lambda c: None)
    c.new_option("bar", "b", "A bar", "123", True, False)
    assert c.options == [
        DEFAULT_HELP_OPTION,
        Option(name="bar", usage="A bar", default="123", required=True, alias="b"),
    ]
    assert len(c.options) == len(DEFAULT_OPTIONS) + 1


def test_adding_option_conflicts():
    c = Command("foo", "Doing foo", lambda c: None)
    c.new_option("bar", "b", "A bar", "123", True, False)
    c.new_option("baz", "", "A baz", "", False, False)
    assert len(c.options) == 3
    with pytest.raises(ValueError, match='Option with name or alias "baz" already existing'):
        c.new_option("baz", "", "A baz", "", False, False)
    with pytest.raises(ValueError, match='Option with name or alias "b" already existing'):
        c.new_option("bazz", "b", "A baz", "", False, False)


def test_adding_option_with_existing_argument_fails():
    c = Command("foo", "Doing foo", lambda c: None)
    c.arguments = [Argument(name="a")]
    with pytest.raises(ValueError, match='^Argument with name "a" already existing'):
        c.new_option("a", "", "A baz", "", False, False)
    with pytest.raises(
        ValueError, match='Cannot use alias: Argument with name "a" already existing'
    ):
        c.new_option("aaa", "a", "A baz", "", False, False)


def test_new_flag_and_help_flag():
    c = Command("foo", "", lambda: None).new_flag("verbose", "v", "Be loud", False)
    assert c.option("v").flag is True
    c.parse(["-v", "--help"])
    assert c.option("verbose").boolean() is True
    assert c.option("help").boolean() is True
    assert new_flag("x", "", "", True).multiple is True


def test_help_option_not_shared_between_commands():
    first = Command("a", "", lambda: None)
    second = Command("b", "", lambda: None)
    first.parse(["-h"])
    assert first.option("help").values == ["true"]
    assert second.option("help").values == []


def test_parameter_accessors():
    opt = Option(name="n", multiple=True)
    opt.assign("12")
    opt.assign("x")
    assert opt.count() == 2
    assert opt.string() == "12"
    assert opt.strings() == ["12", "x"]
    assert opt.integer() == 12
    assert Option(name="e").integer() == 0
    assert Option(name="e").string() == ""


def test_set_parse_transforms_value():
    arg = Argument(name="up").set_parse(lambda name, value: value.upper())
    arg.assign("abc")
    assert arg.values == ["ABC"]


def test_set_pre_and_post_call_require_callable():
    c = Command("foo", "", lambda: None)
    with pytest.raises(TypeError, match="PreCall must be callable"):
        c.set_pre_call(3)
    with pytest.raises(TypeError, match="PostCall must be callable"):
        c.set_post_call("x")
    hook = lambda: None  # noqa: E731
    assert c.set_pre_call(hook).pre_call is hook
    assert c.set_post_call(hook).post_call is hook