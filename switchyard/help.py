import inspect
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from switchyard.catalog import HELP_NAMES, get_catalog
from switchyard.option import Option

if TYPE_CHECKING:
    from rich.console import Console, RenderableType


HELP_DESCRIPTION = "Display this message and exit."
_HELP_DISPLAY_ORDER = ("help", "h", "?")


def format_names(option: Option, prefix: str = "-") -> str:
    """Aliases of ``option`` with ``prefix``, longest first, e.g. ``"-boolean -b"``."""
    if option.is_positional:
        return option.display.upper()
    return " ".join(prefix + name for name in sorted(option.names, key=len, reverse=True))


def format_help_names(help_names: Iterable[str], prefix: str = "-") -> str:
    """Help aliases with ``prefix``, e.g. ``"-help -h -?"``."""
    names = {x.lower() for x in help_names}
    ordered = [x for x in _HELP_DISPLAY_ORDER if x in names]
    ordered.extend(sorted(names.difference(_HELP_DISPLAY_ORDER), key=lambda x: (-len(x), x)))
    return " ".join(prefix + x for x in ordered)


def format_usage(context: Any, name: str | None = None, prefix: str = "-") -> str:
    if name is None:
        name = Path(sys.argv[0]).name
    catalog = get_catalog(context)
    parts = ["Usage:", name]
    for option in catalog.switches:
        if option.required:
            parts.append(f"{prefix}{option.names[0]}" + ("" if option.is_flag else f" {option.field.upper()}"))
    if any(not x.required for x in catalog.switches):
        parts.append("[OPTIONS]")
    for option in catalog.positionals:
        display = option.display.upper()
        parts.append(display if option.required else f"[{display}]")
    return " ".join(parts)


def format_description(context: Any) -> str:
    context_type = context if isinstance(context, type) else type(context)
    doc = context_type.__dict__.get("__doc__")
    if not doc:
        return ""
    return inspect.cleandoc(doc).split("\n\n", 1)[0]


def _help_text(option: Option) -> str:
    text = option.help
    if option.required:
        text = f"{text} [required]" if text else "[required]"
    return text


def _options_table(rows: list[tuple[str, str]]) -> "RenderableType":
    from rich.table import Table
    from rich.text import Text

    table = Table(
        box=None,
        show_header=False,
        pad_edge=False,
        padding=(0, 2, 0, 0),
        expand=False,
    )
    table.add_column("names", no_wrap=True, style="cyan")
    table.add_column("help")
    for names, text in rows:
        table.add_row(Text(names), Text(text))
    return table


def _panel(title: str, renderable: "RenderableType") -> "RenderableType":
    from rich import box
    from rich.panel import Panel

    return Panel(renderable, title=title, title_align="left", box=box.ROUNDED, expand=True)


def format_help(
    context: Any,
    *,
    name: str | None = None,
    description: str | None = None,
    prefix: str = "-",
    help_names: Iterable[str] = HELP_NAMES,
) -> list["RenderableType"]:
    """Build the help page for ``context``'s option schema.

    Parameters
    ----------
    context: Any
        Context object or type declaring ``__options__``.
    name: str | None
        Program name for the usage line. Defaults to ``sys.argv[0]``'s file name.
    description: str | None
        Text below the usage line. Defaults to the first paragraph of the context type's docstring.
    prefix: str
        Prefix used to display aliases.
    help_names: Iterable[str]
        Aliases that request help, listed in the "Options" panel.

    Returns
    -------
    list[RenderableType]
        Renderables, in print order.
    """
    from rich.text import Text

    catalog = get_catalog(context)
    renderables: list["RenderableType"] = [Text(format_usage(context, name=name, prefix=prefix))]

    if description is None:
        description = format_description(context)
    if description:
        renderables.append(Text(""))
        renderables.append(Text(description))
    renderables.append(Text(""))

    if catalog.positionals:
        rows = [(format_names(x, prefix), _help_text(x)) for x in catalog.positionals]
        renderables.append(_panel("Arguments", _options_table(rows)))

    rows = [(format_names(x, prefix), _help_text(x)) for x in catalog.switches]
    rows.append((format_help_names(help_names, prefix), HELP_DESCRIPTION))
    renderables.append(_panel("Options", _options_table(rows)))
    return renderables


def help_print(
    context: Any,
    *,
    console: Optional["Console"] = None,
    name: str | None = None,
    description: str | None = None,
    prefix: str = "-",
    help_names: Iterable[str] = HELP_NAMES,
) -> None:
    """Print the help page for ``context`` to ``console`` (stdout by default)."""
    if console is None:
        from rich.console import Console

        console = Console()

    for renderable in format_help(
        context, name=name, description=description, prefix=prefix, help_names=help_names
    ):
        console.print(renderable)
