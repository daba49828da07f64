from collections.abc import Callable
from typing import Any

import attrs

from switchyard._convert import convert
from switchyard.exceptions import CoercionError, InvalidOptionError
from switchyard.utils import frozen, to_tuple_converter

_FORBIDDEN_NAME_CHARS = frozenset(" \t\r\n=:")


def _names_validator(instance, attribute, value: tuple[str, ...]):
    for name in value:
        if not isinstance(name, str):
            raise InvalidOptionError(f"Option names must be strings; got {name!r}.")
        if not name:
            raise InvalidOptionError("Option names cannot be empty; omit names to declare a positional.")
        if name[0] in "-/":
            raise InvalidOptionError(f'Option name "{name}" must be given without a "-" or "/" prefix.')
        if _FORBIDDEN_NAME_CHARS.intersection(name):
            raise InvalidOptionError(f'Option name "{name}" cannot contain whitespace, "=" or ":".')


def _field_validator(instance, attribute, value: str):
    if not value.isidentifier():
        raise InvalidOptionError(f"Option field must be a python identifier; got {value!r}.")


@frozen
class Option:
    """A single statically declared command-line switch or positional slot.

    .. code-block:: python

        class Context(switchyard.Context):
            __options__ = (
                Option("", field="file_name", type=str, display_name="file"),
                Option("b", "boolean", field="boolean_switch", type=bool),
                Option("i", "integer", field="integer_switch", type=int),
            )

    An option without names is a positional slot; positional slots are
    filled by bare tokens in declaration order.
    """

    names: tuple[str, ...] = attrs.field(
        default=(),
        converter=lambda x: tuple(n for n in to_tuple_converter(x) if n != ""),
        validator=_names_validator,
    )
    """Aliases without prefix, e.g. ``("b", "boolean")``."""

    field: str = attrs.field(kw_only=True, validator=_field_validator)
    """Name of the context attribute that receives the value."""

    type: Any = attrs.field(default=str, kw_only=True)
    """
    Value type. :class:`bool` options are presence flags that take no value;
    every other type consumes exactly one value.
    """

    converter: Callable[[str], Any] | None = attrs.field(default=None, kw_only=True)
    """Overrides the converter derived from :attr:`type`."""

    help: str = attrs.field(default="", kw_only=True)

    required: bool = attrs.field(default=False, kw_only=True)
    """Report an error if the option is never supplied."""

    trim_whitespace: bool = attrs.field(default=True, kw_only=True)
    """Strip leading/trailing whitespace from the raw value before conversion."""

    display_name: str = attrs.field(default="", kw_only=True)
    """Name used in help and error messages. Defaults to the longest alias."""

    def __init__(self, *names: str, **kwargs):
        self.__attrs_init__(names, **kwargs)  # pyright: ignore[reportAttributeAccessIssue]

    @property
    def is_positional(self) -> bool:
        return not self.names

    @property
    def is_flag(self) -> bool:
        """Presence flag; does not consume a value token."""
        return self.type is bool and self.converter is None and not self.is_positional

    @property
    def accepts_value(self) -> bool:
        return not self.is_flag

    @property
    def display(self) -> str:
        if self.display_name:
            return self.display_name
        if self.is_positional:
            return self.field.upper()
        return "-" + max(self.names, key=len)

    def get(self, context: Any) -> Any:
        return getattr(context, self.field)

    def set(self, context: Any, value: Any) -> None:
        setattr(context, self.field, value)

    def convert(self, value: str) -> Any:
        """Convert a raw command-line string into this option's type.

        Raises
        ------
        CoercionError
            Conversion failed. ``option`` is attached; ``token`` is left to the caller.
        """
        if self.trim_whitespace:
            value = value.strip()
        try:
            return convert(self.type, value, self.converter)
        except CoercionError as e:
            e.option = self
            raise
