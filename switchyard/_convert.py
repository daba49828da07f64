from collections.abc import Callable
from enum import Enum
from inspect import isclass
from pathlib import Path
from typing import Any

from switchyard.exceptions import CoercionError


def _bool(s: str) -> bool:
    s = s.lower()
    if s in {"no", "n", "0", "false", "f", "off"}:
        return False
    elif s in {"yes", "y", "1", "true", "t", "on"}:
        return True
    else:
        # Switchyard is a little bit conservative when coercing strings into boolean.
        raise CoercionError(target_type=bool)


def _int(s: str) -> int:
    s = s.lower()
    if s.startswith(("0x", "-0x")):
        return int(s, 16)
    elif s.startswith(("0o", "-0o")):
        return int(s, 8)
    elif s.startswith(("0b", "-0b")):
        return int(s, 2)
    elif "." in s:
        # Casting to a float first allows for things like "30.0"
        # We handle this conditionally because very large integers can lose
        # meaningful precision when cast to a float.
        f = float(s)
        if not f.is_integer():
            raise ValueError(f"{s!r} is not an integer.")
        return int(f)
    else:
        return int(s)


def _str(s: str) -> str:
    return s


def _enum(type_: type[Enum], s: str) -> Enum:
    """Match an enum member by name; case-insensitive, ``-`` and ``_`` are equivalent."""
    normalized = s.lower().replace("-", "_")
    for member in type_:
        if member.name.lower() == normalized:
            return member
    raise CoercionError(target_type=type_)


_converters: dict[Any, Callable[[str], Any]] = {
    bool: _bool,
    int: _int,
    float: float,
    complex: complex,
    str: _str,
    Path: Path,
}


def get_converter(type_: Any) -> Callable[[str], Any]:
    """Look up the single-string converter for ``type_``.

    Known types use a dedicated converter; :class:`~enum.Enum` subclasses
    match member names; anything else callable is used as-is.
    """
    try:
        return _converters[type_]
    except (KeyError, TypeError):
        pass

    if isclass(type_) and issubclass(type_, Enum):
        return lambda s: _enum(type_, s)

    if callable(type_):
        return type_

    raise TypeError(f"Don't know how to convert into {type_!r}.")


def convert(type_: Any, value: str, converter: Callable[[str], Any] | None = None) -> Any:
    """Convert a single command-line string into ``type_``.

    Parameters
    ----------
    type_: Any
        Target type, e.g. :class:`int` or an :class:`~enum.Enum` subclass.
    value: str
        Raw string from the command line.
    converter: Callable[[str], Any] | None
        Overrides the converter derived from ``type_``.

    Raises
    ------
    CoercionError
        The string could not be converted. The caller is expected to attach
        the offending :class:`~switchyard.Token` and :class:`~switchyard.Option`.
    """
    func = converter if converter is not None else get_converter(type_)
    try:
        return func(value)
    except CoercionError as e:
        if e.target_type is None:
            e.target_type = type_
        raise
    except (ValueError, TypeError, ArithmeticError) as e:
        raise CoercionError(target_type=type_) from e
