# Keep in sync with pyproject.toml.
__version__ = "0.1.0"

__all__ = [
    "CoercionError",
    "CommandLineParser",
    "Context",
    "DuplicateAliasError",
    "HELP_NAMES",
    "InvalidOptionError",
    "MissingArgumentError",
    "Option",
    "OptionCatalog",
    "RepeatArgumentError",
    "SwitchyardError",
    "SwitchyardPanel",
    "TokenizationError",
    "Token",
    "UnexpectedPositionalError",
    "UnknownOptionError",
    "ValidationResult",
    "convert",
    "format_help",
    "get_catalog",
    "help_print",
    "normalize_tokens",
    "split_command_line",
    "parse",
]

from switchyard._convert import convert
from switchyard.catalog import HELP_NAMES, OptionCatalog, get_catalog
from switchyard.context import Context
from switchyard.exceptions import (
    CoercionError,
    DuplicateAliasError,
    InvalidOptionError,
    MissingArgumentError,
    RepeatArgumentError,
    SwitchyardError,
    TokenizationError,
    UnexpectedPositionalError,
    UnknownOptionError,
)
from switchyard.help import format_help, help_print
from switchyard.option import Option
from switchyard.panel import SwitchyardPanel
from switchyard.parser import CommandLineParser, normalize_tokens, parse, split_command_line
from switchyard.result import ValidationResult
from switchyard.token import Token
