import pytest

from switchyard.utils import is_number, is_switch_like, match_prefix, to_tuple_converter


@pytest.mark.parametrize(
    "token",
    ["-b", "--boolean", "/b", "/?", "-?", "/s:/tmp/file", "--path=/tmp/file", "-j", "-J"],
)
def test_is_switch_like(token):
    assert is_switch_like(token)


@pytest.mark.parametrize(
    "token",
    ["somefile", "", "-", "/", "--", "-5", "-3.14", "-1e5", "/tmp/file", "C:/path"],
)
def test_is_switch_like_false(token):
    assert not is_switch_like(token)


def test_is_switch_like_custom_prefixes():
    assert is_switch_like("+x", prefixes=("+",))
    assert not is_switch_like("/x", prefixes=("-",))


def test_is_number():
    assert is_number("42")
    assert is_number("-2")
    assert not is_number("-j")
    assert not is_number("abc")


def test_match_prefix():
    assert match_prefix("--foo", ("-", "--", "/")) == "--"
    assert match_prefix("-foo", ("-", "--", "/")) == "-"
    assert match_prefix("foo", ("-", "--", "/")) == ""


def test_to_tuple_converter():
    assert to_tuple_converter(None) == ()
    assert to_tuple_converter("foo") == ("foo",)
    assert to_tuple_converter(["foo", "bar"]) == ("foo", "bar")
