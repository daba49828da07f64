"""To prevent circular dependencies, this module should never import anything else from Switchyard."""

import functools
import os
import sys
from collections.abc import Iterable
from contextlib import suppress
from typing import TYPE_CHECKING, Any

# https://threeofwands.com/attra-iv-zero-overhead-frozen-attrs-classes/
if TYPE_CHECKING:
    from attrs import frozen
else:
    from attrs import define

    frozen = functools.partial(define, unsafe_hash=True)


def is_iterable(obj) -> bool:
    if isinstance(obj, list | tuple | set | frozenset | dict):  # Fast path for common types
        return True
    return not isinstance(obj, str) and isinstance(obj, Iterable)


def to_tuple_converter(value: None | Any | Iterable[Any]) -> tuple[Any, ...]:
    """Convert a single element or an iterable of elements into a tuple.

    Intended to be used in an ``attrs.Field``. If :obj:`None` is provided, returns an empty tuple.
    If a single element is provided, returns a tuple containing just that element.
    If an iterable is provided, converts it into a tuple.
    """
    if value is None:
        return ()
    elif is_iterable(value):
        return tuple(value)
    else:
        return (value,)


def is_number(token: str) -> bool:
    with suppress(ValueError):
        complex(token)
        # ``complex("-j")`` is a valid imaginary number, but more than likely
        # the caller meant it as a short flag.
        return token.lower() != "-j"
    return False


def is_switch_like(
    token: str,
    prefixes: Iterable[str] = ("--", "-", "/"),
    separators: Iterable[str] = ("=", ":"),
) -> bool:
    """Checks if a token looks like a switch.

    Negative numbers are not switches, and neither are absolute paths
    with more than one segment (``/tmp/file``), but ``-b``, ``--boolean``,
    ``/b`` and ``/s:/tmp/file`` are.

    Parameters
    ----------
    token: str
        String to interpret.
    prefixes: Iterable[str]
        Accepted switch prefixes.
    separators: Iterable[str]
        Characters that may separate a switch name from an inline value.

    Returns
    -------
    bool
        Whether or not the ``token`` is switch-like.
    """
    prefix = match_prefix(token, prefixes)
    if not prefix or len(token) == len(prefix):
        return False
    if is_number(token):
        return False
    if prefix == "/":
        name = token[1:]
        for separator in separators:
            name = name.split(separator, 1)[0]
        if "/" in name:
            return False
    return True


def match_prefix(token: str, prefixes: Iterable[str]) -> str:
    """Return the longest prefix in ``prefixes`` that ``token`` starts with, or ``""``."""
    return max((p for p in prefixes if token.startswith(p)), key=len, default="")


def is_under_pytest() -> bool:
    # "PYTEST_VERSION" is set as of pytest v8.2.0
    return "pytest" in sys.modules and "PYTEST_VERSION" in os.environ
