from typing import ClassVar

from attrs import define, field

from switchyard.option import Option


@define
class Context:
    """Optional base class for parse targets.

    Subclasses declare their schema in ``__options__`` and add one attribute per option:

    .. code-block:: python

        @define
        class BuildContext(Context):
            __options__ = (
                Option(field="target"),
                Option("v", "verbose", field="verbose", type=bool),
            )

            target: str = ""
            verbose: bool = False

    Any object works as a parse target, provided it has the attributes its
    ``__options__`` name. This base class only adds the bookkeeping attributes
    the parser fills in when present.
    """

    __options__: ClassVar[tuple[Option, ...]] = ()

    is_help: bool = field(default=False, kw_only=True)
    """Set when a help token appears anywhere on the command line."""

    original_command_line: str = field(default="", kw_only=True)
    """The command line as given to the parser."""

    raw_values: dict[str, list[str]] = field(factory=dict, kw_only=True)
    """Raw value strings consumed by each option, keyed by :attr:`Option.field`."""
