from switchyard import Option, format_help, help_print
from switchyard.help import format_description, format_help_names, format_names, format_usage


def test_format_names():
    assert format_names(Option("b", "boolean", field="value", type=bool)) == "-boolean -b"
    assert format_names(Option("b", "boolean", field="value", type=bool), prefix="/") == "/boolean /b"
    assert format_names(Option(field="file_name", display_name="file")) == "FILE"


def test_format_usage(context):
    assert format_usage(context, name="prog") == "Usage: prog [OPTIONS] [FILE]"


def test_format_usage_required(required_context):
    assert format_usage(required_context, name="prog") == "Usage: prog -n COUNT [OPTIONS] SOURCE [DESTINATION]"


def test_format_description(context, required_context):
    assert format_description(context) == "Process a single file."
    assert format_description(required_context) == ""


def test_format_description_first_paragraph():
    class Documented:
        """First line
        continues here.

        Second paragraph.
        """

        __options__ = ()

    assert format_description(Documented) == "First line\ncontinues here."


def test_format_help_renderables(context):
    renderables = format_help(context, name="prog")
    # usage, blank, description, blank, arguments panel, options panel
    assert len(renderables) == 6


def test_help_print(console, context):
    with console.capture() as capture:
        help_print(context, console=console, name="prog")

    actual = capture.get()
    lines = actual.splitlines()

    assert lines[0] == "Usage: prog [OPTIONS] [FILE]"
    assert lines[1] == ""
    assert lines[2] == "Process a single file."
    assert lines[3] == ""
    assert lines[4].startswith("╭─ Arguments ─")
    assert "│ FILE  File to process." in actual
    assert "╭─ Options ─" in actual
    assert "│ -boolean -b  A boolean switch." in actual
    assert "│ -integer -i  An integer switch." in actual
    assert "│ -string -s   A string switch." in actual
    assert "│ -help -h -?  Display this message and exit." in actual


def test_help_print_required_marker(console, required_context):
    with console.capture() as capture:
        help_print(required_context, console=console, name="prog", description="Copy things.")

    actual = capture.get()

    assert "Copy things." in actual
    assert "[required]" in actual


def test_help_print_prefix(console, context):
    with console.capture() as capture:
        help_print(context, console=console, name="prog", prefix="/")

    assert "│ /boolean /b  A boolean switch." in capture.get()


def test_format_help_names():
    assert format_help_names({"h", "help", "?"}) == "-help -h -?"
    assert format_help_names(["usage", "H"], prefix="/") == "/h /usage"


def test_help_print_custom_help_names(console, context):
    with console.capture() as capture:
        help_print(context, console=console, name="prog", help_names=["usage", "u"])

    actual = capture.get()

    assert "│ -usage -u    Display this message and exit." in actual
    assert "-help" not in actual
