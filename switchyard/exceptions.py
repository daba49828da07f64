from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from attrs import define, field

from switchyard.token import Token

if TYPE_CHECKING:
    from switchyard.option import Option


__all__ = [
    "CoercionError",
    "DuplicateAliasError",
    "InvalidOptionError",
    "MissingArgumentError",
    "RepeatArgumentError",
    "SwitchyardError",
    "TokenizationError",
    "UnexpectedPositionalError",
    "UnknownOptionError",
]


class DuplicateAliasError(Exception):
    """Two options of the same schema claim the same alias or field."""

    # This doesn't derive from SwitchyardError since this is a developer error
    # rather than a command-line error.


class InvalidOptionError(Exception):
    """An :class:`Option` or schema is malformed."""


def get_type_name(type_: Any) -> str:
    if isinstance(type_, type):
        if issubclass(type_, Enum):
            return "one of {" + ", ".join(repr(x.name.lower()) for x in type_) + "}"
        return type_.__name__
    return getattr(type_, "__name__", str(type_))


@define
class SwitchyardError(Exception):
    """Root exception for command-line errors.

    Instances are usually *collected* into a :class:`~switchyard.ValidationResult`
    rather than raised.
    """

    msg: str | None = None
    """
    If set, override automatic message generation.
    """

    option: Optional["Option"] = field(default=None, kw_only=True)
    """:class:`Option` that was matched, if any."""

    token: Token | None = field(default=None, kw_only=True)
    """Offending token, if any."""

    verbose: bool = field(default=False, kw_only=True)
    """
    Append the token position to messages; aimed towards developers debugging their schema.
    """

    def __str__(self):
        if self.msg is not None:
            return self.msg
        return self._message() + self._suffix()

    def _message(self) -> str:
        return ""

    def _suffix(self) -> str:
        if self.verbose and self.token is not None:
            return f" (token #{self.token.index})"
        return ""

    @property
    def display_name(self) -> str:
        if self.token is not None and self.token.keyword:
            return self.token.keyword
        if self.option is not None:
            return self.option.display
        return ""


@define(kw_only=True)
class UnknownOptionError(SwitchyardError):
    """Switch-like token without a matching :class:`Option`.

    A nearest-neighbor suggestion may be appended.
    """

    token: Token  # pyright: ignore[reportIncompatibleVariableOverride]

    candidates: Sequence[str] = ()
    """Known aliases, used for the "Did you mean" suggestion."""

    prefix: str = "-"

    def _message(self):
        response = f'Unknown option: "{self.token.display}".'

        name = (self.token.keyword or self.token.value)[len(self.prefix) :].lower()
        if name and self.candidates:
            import difflib

            close_matches = difflib.get_close_matches(name, list(self.candidates), n=1, cutoff=0.6)
            if close_matches:
                response += f' Did you mean "{self.prefix}{close_matches[0]}"?'
        return response


@define(kw_only=True)
class CoercionError(SwitchyardError):
    """A value could not be converted into the option's type."""

    target_type: Any = None
    """
    Intended type to coerce into.
    """

    def _message(self):
        target_type_name = get_type_name(self.target_type)
        if self.token is None:
            return f"Unable to convert value to {target_type_name}."
        elif self.token.keyword is None:
            name = self.option.display if self.option is not None else "positional"
            return f'Invalid value for "{name}": unable to convert "{self.token.value}" into {target_type_name}.'
        else:
            return f'Invalid value for "{self.token.keyword}": unable to convert "{self.token.value}" into {target_type_name}.'


@define(kw_only=True)
class MissingArgumentError(SwitchyardError):
    """A switch requiring a value got none, or a required option was never supplied."""

    def _message(self):
        assert self.option is not None
        if self.token is None:
            if self.option.is_positional:
                return f'Missing required argument "{self.option.display}".'
            return f'Missing required option "{self.option.display}".'
        return f'Option "{self.display_name}" requires an argument.'


@define(kw_only=True)
class UnexpectedPositionalError(SwitchyardError):
    """A bare token arrived after every positional slot was filled."""

    token: Token  # pyright: ignore[reportIncompatibleVariableOverride]

    def _message(self):
        return f'Unexpected argument "{self.token.value}".'


@define(kw_only=True)
class RepeatArgumentError(SwitchyardError):
    """The same option has been specified multiple times. Reported as a warning; the last value wins."""

    def _message(self):
        return f'Option "{self.display_name}" specified multiple times; using the last value.'


@define(kw_only=True)
class TokenizationError(SwitchyardError):
    """The raw command line could not be split into tokens, e.g. an unbalanced quote."""

    command_line: str = ""
    """The raw command line as given."""

    reason: str = ""
    """Tokenizer message, e.g. ``"No closing quotation"``."""

    def _message(self):
        reason = self.reason.rstrip(".") if self.reason else "unable to split into tokens"
        return f'Malformed command line "{self.command_line}": {reason[:1].lower()}{reason[1:]}.'
