import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Any

import attrs

from switchyard.exceptions import DuplicateAliasError, InvalidOptionError
from switchyard.option import Option
from switchyard.utils import frozen, match_prefix

logger = logging.getLogger(__name__)

HELP_NAMES: frozenset[str] = frozenset({"h", "help", "?"})
"""Reserved aliases that request the help page."""

DEFAULT_PREFIXES: tuple[str, ...] = ("--", "-", "/")


def is_help_token(
    token: str,
    prefixes: Iterable[str] = DEFAULT_PREFIXES,
    help_names: Iterable[str] = HELP_NAMES,
) -> bool:
    """Whether ``token`` is a prefix followed by a help alias, e.g. ``/?`` or ``-HELP``."""
    prefix = match_prefix(token, prefixes)
    if not prefix:
        return False
    return token[len(prefix) :].lower() in help_names


@frozen
class OptionCatalog:
    """Immutable alias → :class:`Option` lookup for one context type.

    Keys are lower-cased once at construction so lookups are case-insensitive.
    """

    options: tuple[Option, ...] = attrs.field(converter=tuple)

    _lookup: Mapping[str, Option] = attrs.field(init=False, eq=False, hash=False, repr=False)

    def __attrs_post_init__(self):
        lookup: dict[str, Option] = {}
        fields: dict[str, Option] = {}
        for option in self.options:
            if not isinstance(option, Option):
                raise InvalidOptionError(f"Expected an Option; got {option!r}.")
            if option.field in fields:
                raise DuplicateAliasError(
                    f'Field "{option.field}" is targeted by both {fields[option.field]!r} and {option!r}.'
                )
            fields[option.field] = option
            for name in option.names:
                key = name.lower()
                if key in HELP_NAMES:
                    raise DuplicateAliasError(f'Alias "{name}" is reserved for help.')
                if key in lookup:
                    raise DuplicateAliasError(
                        f'Alias "{name}" is declared by both "{lookup[key].field}" and "{option.field}".'
                    )
                lookup[key] = option
        # Circumvent frozen protection.
        object.__setattr__(self, "_lookup", MappingProxyType(lookup))
        logger.debug("Built option catalog with %d option(s), %d alias(es).", len(self.options), len(lookup))

    @classmethod
    def from_options(cls, options: Iterable[Option]) -> "OptionCatalog":
        return cls(tuple(options))

    def get(self, name: str) -> Option | None:
        """Look up an option by alias (without prefix), case-insensitively."""
        return self._lookup.get(name.lower())

    def __getitem__(self, name: str) -> Option:
        option = self.get(name)
        if option is None:
            raise KeyError(name)
        return option

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._lookup

    def __iter__(self) -> Iterator[Option]:
        return iter(self.options)

    def __len__(self) -> int:
        return len(self.options)

    @property
    def aliases(self) -> tuple[str, ...]:
        """All lower-cased aliases, in declaration order."""
        return tuple(self._lookup)

    @property
    def switches(self) -> tuple[Option, ...]:
        return tuple(x for x in self.options if not x.is_positional)

    @property
    def positionals(self) -> tuple[Option, ...]:
        return tuple(x for x in self.options if x.is_positional)

    @property
    def required(self) -> tuple[Option, ...]:
        return tuple(x for x in self.options if x.required)


@lru_cache
def _get_catalog(context_type: type) -> OptionCatalog:
    try:
        options = context_type.__options__  # pyright: ignore[reportAttributeAccessIssue]
    except AttributeError:
        raise InvalidOptionError(f"{context_type.__name__} does not declare __options__.") from None
    return OptionCatalog.from_options(options)


def get_catalog(context: Any) -> OptionCatalog:
    """Get the (cached) :class:`OptionCatalog` for a context object or type.

    The schema is read from the type's ``__options__`` class attribute.

    Raises
    ------
    InvalidOptionError
        The type has no ``__options__``.
    DuplicateAliasError
        Two options share an alias or a target field, or an alias is reserved for help.
    """
    context_type = context if isinstance(context, type) else type(context)
    return _get_catalog(context_type)
