from enum import Enum

import pytest
from attrs import define
from rich.console import Console

from switchyard import CommandLineParser, Context, Option


class Color(Enum):
    RED = 1
    DARK_BLUE = 2


@define
class FileContext(Context):
    """Process a single file."""

    __options__ = (
        Option(field="file_name", display_name="file", help="File to process."),
        Option("b", "boolean", field="boolean_switch", type=bool, help="A boolean switch."),
        Option("i", "integer", field="integer_switch", type=int, help="An integer switch."),
        Option("s", "string", field="string_switch", help="A string switch."),
    )

    file_name: str = ""
    boolean_switch: bool = False
    integer_switch: int = 0
    string_switch: str = ""


@define
class RequiredContext(Context):
    __options__ = (
        Option(field="source", required=True),
        Option(field="destination"),
        Option("c", "color", field="color", type=Color),
        Option("n", "count", field="count", type=int, required=True),
    )

    source: str = ""
    destination: str = ""
    color: Color = Color.RED
    count: int = 0


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def parser():
    return CommandLineParser()


@pytest.fixture
def context():
    return FileContext()


@pytest.fixture
def required_context():
    return RequiredContext()
