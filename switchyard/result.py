from typing import TYPE_CHECKING

from attrs import define, field

from switchyard.exceptions import SwitchyardError

if TYPE_CHECKING:
    from rich.console import Console


@define
class ValidationResult:
    """Errors and warnings collected while parsing one command line."""

    errors: list[SwitchyardError] = field(factory=list)
    warnings: list[SwitchyardError] = field(factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def error_messages(self) -> list[str]:
        return [str(e) for e in self.errors]

    @property
    def warning_messages(self) -> list[str]:
        return [str(w) for w in self.warnings]

    def add_error(self, error: SwitchyardError) -> None:
        self.errors.append(error)

    def add_warning(self, warning: SwitchyardError) -> None:
        self.warnings.append(warning)

    def raise_for_errors(self) -> None:
        """Raise the first collected error, if any."""
        if self.errors:
            raise self.errors[0]

    def print(self, console: "Console") -> None:
        """Print every error and warning in its own :func:`~switchyard.SwitchyardPanel`."""
        from switchyard.panel import SwitchyardPanel

        for error in self.errors:
            console.print(SwitchyardPanel(error))
        for warning in self.warnings:
            console.print(SwitchyardPanel(warning, title="Warning", style="yellow"))

    def __bool__(self) -> bool:
        """:obj:`True` when there are no errors."""
        return not self.errors
