from textwrap import dedent

import pytest

from switchyard import CommandLineParser, UnknownOptionError


def test_call_returns_context(parser, context, console):
    with console.capture() as capture:
        returned = parser("somefile /b", context, console=console, error_console=console)

    assert returned is context
    assert context.boolean_switch is True
    assert capture.get() == ""


def test_call_requires_context(parser):
    with pytest.raises(TypeError):
        parser("somefile")


def test_call_help_exits(parser, context, console):
    with console.capture() as capture, pytest.raises(SystemExit) as e:
        parser("somefile /?", context, console=console, error_console=console)

    assert e.value.code == 0
    assert "Display this message and exit." in capture.get()


def test_call_help_no_exit(parser, context, console):
    with console.capture() as capture:
        returned = parser("-help", context, console=console, exit_on_error=False)

    assert returned is context
    assert context.is_help is True
    assert capture.get().startswith("Usage: ")


def test_call_error_exits(parser, context, console):
    with console.capture() as capture, pytest.raises(SystemExit) as e:
        parser("somefile /x", context, error_console=console)

    assert e.value.code == 1
    expected = dedent(
        """\
        ╭─ Error ────────────────────────────────────────────────────────────╮
        │ Unknown option: "/x".                                              │
        ╰────────────────────────────────────────────────────────────────────╯
        """
    )
    assert capture.get() == expected


def test_call_error_raises(parser, context, console):
    with console.capture() as capture, pytest.raises(UnknownOptionError):
        parser("somefile /x", context, error_console=console, exit_on_error=False)

    assert "Unknown option" in capture.get()


def test_call_error_no_print(parser, context, console):
    with console.capture() as capture, pytest.raises(UnknownOptionError):
        parser("somefile /x", context, error_console=console, print_error=False, exit_on_error=False)

    assert capture.get() == ""


def test_call_warning_does_not_exit(parser, context, console):
    with console.capture() as capture:
        parser("/i 1 /i 2", context, error_console=console)

    assert context.integer_switch == 2
    assert "╭─ Warning" in capture.get()


def test_call_configured_consoles(context, console):
    parser = CommandLineParser(console=console, error_console=console)

    with console.capture() as capture, pytest.raises(SystemExit):
        parser("/x", context)

    assert "Unknown option" in capture.get()


def test_call_help_custom_help_names(context, console):
    parser = CommandLineParser(help_names=["usage"])

    with console.capture() as capture:
        parser("somefile /usage", context, console=console, exit_on_error=False)

    actual = capture.get()

    assert context.is_help is True
    assert "│ -usage " in actual
    assert "-help" not in actual
