import io

import pytest

from clif.input import DefaultInput, input_any, input_empty_ok
from clif.output import monochrome_output


def _make(text):
    out_buf = io.StringIO()
    inp = DefaultInput(io.StringIO(text), monochrome_output(out_buf))
    return inp, out_buf


def test_ask_returns_non_empty_input():
    inp, out_buf = _make("Foo\n")
    assert inp.ask("Foo? ", None) == "Foo"
    assert out_buf.getvalue() == "Foo? "


def test_ask_with_check_retries_until_ok():
    inp, out_buf = _make("Foo\nBaz\nBar\n")

    def check(value):
        if value != "Bar":
            raise ValueError("Not Bar!")

    assert inp.ask("Foo? ", check) == "Bar"
    assert out_buf.getvalue() == "Foo? Not Bar!\n\nFoo? Not Bar!\n\nFoo? "


def test_ask_default_rejects_empty():
    inp, out_buf = _make("\nok\n")
    assert inp.ask("Q?") == "ok"
    assert out_buf.getvalue() == "Q? Input required\n\nQ? "


def test_ask_regex_retries_until_match():
    inp, out_buf = _make("Foo\nBaz\nBar\n")
    assert inp.ask_regex("Foo? ", "Bar") == "Bar"
    assert out_buf.getvalue() == (
        "Foo? Input does not match criteria\n\n"
        "Foo? Input does not match criteria\n\n"
        "Foo? "
    )


def test_choose_presents_options_and_returns_valid_choice():
    inp, out_buf = _make("Foo\nBaz\nthe bar\n")
    res = inp.choose(
        "Choose or loose!",
        {"foo": "Foo!!!", "the bar": "One bar please", "42": "Take that"},
    )
    assert res == "the bar"
    block = (
        "Choose or loose!\n"
        "  42)      Take that\n"
        "  foo)     Foo!!!\n"
        "  the bar) One bar please\n"
        "Choose: "
    )
    error = "Choose one of: 42, foo, the bar\n\n"
    assert out_buf.getvalue() == block + error + block + error + block


@pytest.mark.parametrize(
    "answer,expected",
    [("y", True), ("YES", True), ("n", False), ("No", False)],
)
def test_confirm_answers(answer, expected):
    inp, _ = _make(answer + "\n")
    assert inp.confirm("Sure?") is expected


def test_confirm_rejects_other_answers():
    inp, out_buf = _make("maybe\nyes\n")
    assert inp.confirm("Sure?") is True
    assert out_buf.getvalue() == 'Sure? Please respond with "yes" or "no"\n\nSure? '


def test_ask_raises_on_end_of_input():
    inp, _ = _make("")
    with pytest.raises(EOFError):
        inp.ask("Q?")


def test_ask_strips_carriage_return():
    inp, _ = _make("value\r\n")
    assert inp.ask("Q?") == "value"


def test_input_checks():
    assert input_empty_ok("") is None
    assert input_any("x") is None
    with pytest.raises(ValueError, match="No input provided"):
        input_any("")