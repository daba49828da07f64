from attrs import evolve, field

from switchyard.utils import frozen


@frozen(kw_only=True)
class Token:
    """Tracks how a user supplied a value to the parser."""

    keyword: str | None = None
    """The switch as typed (e.g. ``"/I"``); :obj:`None` for positional values."""

    value: str = ""
    """The raw value string. Empty for bare flags."""

    index: int = field(default=0, kw_only=True)
    """Position of the originating token in the normalized token list."""

    @property
    def display(self) -> str:
        return self.keyword if self.keyword is not None else self.value

    def evolve(self, **kwargs) -> "Token":
        return evolve(self, **kwargs)
