import logging
import shlex
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional

from attrs import define, field

from switchyard.catalog import DEFAULT_PREFIXES, HELP_NAMES, OptionCatalog, get_catalog, is_help_token
from switchyard.exceptions import (
    CoercionError,
    MissingArgumentError,
    RepeatArgumentError,
    TokenizationError,
    UnexpectedPositionalError,
    UnknownOptionError,
)
from switchyard.option import Option
from switchyard.result import ValidationResult
from switchyard.token import Token
from switchyard.utils import is_switch_like, is_under_pytest, match_prefix, to_tuple_converter

if TYPE_CHECKING:
    from rich.console import Console

logger = logging.getLogger(__name__)


def split_command_line(command_line: str) -> list[str]:
    """Split ``command_line`` on whitespace, honoring single and double quotes.

    Backslashes are kept literally so that Windows paths like ``C:\\temp`` survive.

    Raises
    ------
    TokenizationError
        A quote is left open.
    """
    lexer = shlex.shlex(command_line, posix=True)
    lexer.whitespace_split = True
    lexer.escape = ""
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise TokenizationError(command_line=command_line, reason=str(e)) from e


def normalize_tokens(tokens: None | str | Iterable[str]) -> list[str]:
    if tokens is None:
        if is_under_pytest():
            import warnings

            warnings.warn(
                UserWarning("Parsing sys.argv under pytest; did you mean to pass tokens explicitly?"),
                stacklevel=3,
            )
        tokens = sys.argv[1:]  # Remove the executable
    elif isinstance(tokens, str):
        tokens = split_command_line(tokens)
    else:
        tokens = list(tokens)
    return tokens


def _original_command_line(tokens: None | str | Iterable[str], normalized: list[str]) -> str:
    if isinstance(tokens, str):
        return tokens
    return shlex.join(normalized)


@define
class _ParseState:
    """Mutable bookkeeping for a single :meth:`CommandLineParser.parse` call."""

    context: Any
    catalog: OptionCatalog
    result: ValidationResult = field(factory=ValidationResult)
    seen: set[str] = field(factory=set)
    next_positional: int = 0

    def record_raw(self, option: Option, value: str) -> None:
        raw_values = getattr(self.context, "raw_values", None)
        if isinstance(raw_values, dict):
            raw_values.setdefault(option.field, []).append(value)

    def assign(self, option: Option, token: Token, value: Any) -> None:
        if option.field in self.seen and not option.is_positional:
            self.result.add_warning(RepeatArgumentError(option=option, token=token))
        self.seen.add(option.field)
        option.set(self.context, value)


@define
class CommandLineParser:
    """Populates a context object from a command line.

    Parameters are resolved against the context's ``__options__`` schema
    (see :func:`~switchyard.get_catalog`).
    """

    prefixes: tuple[str, ...] = field(default=DEFAULT_PREFIXES, converter=to_tuple_converter, kw_only=True)
    """Accepted switch prefixes."""

    help_names: frozenset[str] = field(
        default=HELP_NAMES,
        converter=lambda x: frozenset(n.lower() for n in to_tuple_converter(x)),
        kw_only=True,
    )
    """Aliases that request help, when combined with any of :attr:`prefixes`."""

    help_field: str = field(default="is_help", kw_only=True)
    """Context attribute that is set to :obj:`True` when help is requested."""

    end_of_options_delimiter: str = field(default="--", kw_only=True)
    """
    All tokens after this delimiter are force-interpreted as positional arguments.
    Set to an empty string to disable.
    """

    value_separators: tuple[str, ...] = field(default=("=", ":"), converter=to_tuple_converter, kw_only=True)
    """Characters that separate a switch from an inline value, e.g. ``/i:42`` or ``--integer=42``."""

    verbose: bool = field(default=False, kw_only=True)
    """Include token positions in error messages."""

    console: Optional["Console"] = field(default=None, kw_only=True)
    """:class:`~rich.console.Console` used by :meth:`__call__` to print the help page."""

    error_console: Optional["Console"] = field(default=None, kw_only=True)
    """:class:`~rich.console.Console` used by :meth:`__call__` to print errors. Defaults to stderr."""

    @property
    def display_prefix(self) -> str:
        """Prefix shown on the help page."""
        if "-" in self.prefixes:
            return "-"
        return self.prefixes[0] if self.prefixes else ""

    def find_help_token(self, tokens: list[str]) -> int | None:
        """Index of the first help token, anywhere on the command line."""
        for index, token in enumerate(tokens):
            if is_help_token(token, self.prefixes, self.help_names):
                return index
        return None

    def parse(self, tokens: None | str | Iterable[str], context: Any) -> ValidationResult:
        """Parse ``tokens`` into ``context``, mutating it in place.

        Per-token problems never raise; they are collected into the returned
        :class:`~switchyard.ValidationResult`.

        Parameters
        ----------
        tokens: None | str | Iterable[str]
            Either a string, or a list of strings.
            Defaults to ``sys.argv[1:]``.
        context: Any
            Object whose type declares ``__options__``.

        Returns
        -------
        ValidationResult
        """
        catalog = get_catalog(context)
        try:
            normalized = normalize_tokens(tokens)
        except TokenizationError as e:
            assert isinstance(tokens, str)
            logger.debug("Could not tokenize %r: %s", tokens, e.reason)
            if hasattr(context, "original_command_line"):
                context.original_command_line = tokens
            # Help still wins over a malformed command line.
            if self.find_help_token(tokens.split()) is not None:
                setattr(context, self.help_field, True)
                return ValidationResult()
            e.verbose = self.verbose
            result = ValidationResult()
            result.add_error(e)
            return result

        if hasattr(context, "original_command_line"):
            context.original_command_line = _original_command_line(tokens, normalized)

        if (help_index := self.find_help_token(normalized)) is not None:
            logger.debug("Help token %r found at position %d.", normalized[help_index], help_index)
            setattr(context, self.help_field, True)
            return ValidationResult()

        state = _ParseState(context=context, catalog=catalog)
        self._walk(normalized, state)

        for option in catalog.required:
            if option.field not in state.seen:
                state.result.add_error(MissingArgumentError(option=option, verbose=self.verbose))

        logger.debug(
            "Parsed %d token(s): %d error(s), %d warning(s).",
            len(normalized),
            len(state.result.errors),
            len(state.result.warnings),
        )
        return state.result

    def _walk(self, tokens: list[str], state: _ParseState) -> None:
        i = 0
        force_positional = False
        while i < len(tokens):
            raw = tokens[i]
            if not force_positional and self.end_of_options_delimiter and raw == self.end_of_options_delimiter:
                force_positional = True
                i += 1
            elif not force_positional and is_switch_like(raw, self.prefixes, self.value_separators):
                i += self._consume_switch(tokens, i, state)
            else:
                self._consume_positional(Token(value=raw, index=i), state)
                i += 1

    def _split_switch(self, raw: str) -> tuple[str, str, str | None]:
        """Split ``raw`` into ``(prefix, name, inline_value)``."""
        prefix = match_prefix(raw, self.prefixes)
        body = raw[len(prefix) :]
        separator_positions = [pos for sep in self.value_separators if (pos := body.find(sep)) > 0]
        if separator_positions:
            pos = min(separator_positions)
            return prefix, body[:pos], body[pos + 1 :]
        return prefix, body, None

    def _is_known_switch(self, raw: str, catalog: OptionCatalog) -> bool:
        if self.end_of_options_delimiter and raw == self.end_of_options_delimiter:
            return True
        if not is_switch_like(raw, self.prefixes, self.value_separators):
            return False
        _, name, _ = self._split_switch(raw)
        return name in catalog

    def _consume_switch(self, tokens: list[str], i: int, state: _ParseState) -> int:
        """Handle the switch at ``tokens[i]``; returns the number of tokens consumed."""
        raw = tokens[i]
        prefix, name, inline_value = self._split_switch(raw)
        keyword = raw if inline_value is None else raw[: len(prefix) + len(name)]
        option = state.catalog.get(name)

        if option is None:
            logger.debug("Unknown switch %r.", raw)
            state.result.add_error(
                UnknownOptionError(
                    token=Token(keyword=keyword, index=i),
                    candidates=state.catalog.aliases,
                    prefix=prefix,
                    verbose=self.verbose,
                )
            )
            return 1

        if option.is_flag:
            token = Token(keyword=keyword, value=inline_value or "", index=i)
            if inline_value is None:
                state.assign(option, token, True)
            else:
                self._convert_and_assign(option, token, state)
            return 1

        if inline_value is not None:
            self._convert_and_assign(option, Token(keyword=keyword, value=inline_value, index=i), state)
            return 1

        if i + 1 >= len(tokens) or self._is_known_switch(tokens[i + 1], state.catalog):
            state.result.add_error(
                MissingArgumentError(option=option, token=Token(keyword=keyword, index=i), verbose=self.verbose)
            )
            return 1

        self._convert_and_assign(option, Token(keyword=keyword, value=tokens[i + 1], index=i + 1), state)
        return 2

    def _consume_positional(self, token: Token, state: _ParseState) -> None:
        positionals = state.catalog.positionals
        if state.next_positional >= len(positionals):
            state.result.add_error(UnexpectedPositionalError(token=token, verbose=self.verbose))
            return
        option = positionals[state.next_positional]
        state.next_positional += 1
        self._convert_and_assign(option, token, state)

    def _convert_and_assign(self, option: Option, token: Token, state: _ParseState) -> None:
        state.record_raw(option, token.value)
        try:
            value = option.convert(token.value)
        except CoercionError as e:
            e.token = token
            e.verbose = self.verbose
            logger.debug("Could not convert %r for %s.", token.value, option.display)
            state.result.add_error(e)
            # The option was still supplied; don't report it as missing too.
            state.seen.add(option.field)
            return
        state.assign(option, token, value)

    def __call__(
        self,
        tokens: None | str | Iterable[str] = None,
        context: Any = None,
        *,
        console: Optional["Console"] = None,
        error_console: Optional["Console"] = None,
        print_error: bool = True,
        exit_on_error: bool = True,
    ) -> Any:
        """Parse a command line into ``context`` and handle help/errors like an application would.

        Parameters
        ----------
        tokens: None | str | Iterable[str]
            Either a string, or a list of strings.
            Defaults to ``sys.argv[1:]``.
        context: Any
            Object whose type declares ``__options__``.
        console: ~rich.console.Console
            Console to print the help page to.
        error_console: ~rich.console.Console
            Console to print errors and warnings to.
        print_error: bool
            Print a rich-formatted panel for each error and warning.
        exit_on_error: bool
            On help, exit with status 0; on errors, exit with status 1.
            Otherwise, return after printing help, or raise the first error.

        Returns
        -------
        Any
            The populated ``context``.
        """
        if context is None:
            raise TypeError("A context object is required.")

        from rich.console import Console

        console = console or self.console or Console()
        error_console = error_console or self.error_console or Console(stderr=True)

        result = self.parse(tokens, context)

        if getattr(context, self.help_field, False):
            from switchyard.help import help_print

            help_print(context, console=console, prefix=self.display_prefix, help_names=self.help_names)
            if exit_on_error:
                sys.exit(0)
            return context

        if print_error:
            result.print(error_console)
        if result.has_errors:
            if exit_on_error:
                sys.exit(1)
            result.raise_for_errors()
        return context


def parse(tokens: None | str | Iterable[str], context: Any, **kwargs) -> ValidationResult:
    """Parse ``tokens`` into ``context`` with a default-configured :class:`CommandLineParser`.

    Keyword arguments are forwarded to :class:`CommandLineParser`.
    """
    return CommandLineParser(**kwargs).parse(tokens, context)
