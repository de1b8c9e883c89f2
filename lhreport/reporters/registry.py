"""Output formats and the reporters that produce them."""

from .base import OutputOptions, Reporter
from .console import ConsoleReporter
from .json_reporter import JSONReporter


class ReporterNotFoundError(Exception):
    """Raised when no reporter produces the requested output format."""

    def __init__(self, output_format: str) -> None:
        self.output_format = output_format
        super().__init__(f"Unknown output format: {output_format}")


class ReporterRegistry:
    """Maps ``--format`` values to reporter classes.

    Reporters register under their ``name`` and build themselves from
    OutputOptions, so adding a format needs no change here.
    """

    def __init__(self) -> None:
        self._reporters: dict[str, type[Reporter]] = {}
        for reporter_class in (ConsoleReporter, JSONReporter):
            self.register(reporter_class)

    def register(self, reporter_class: type[Reporter]) -> None:
        """Register a reporter class under its name, replacing any previous one."""
        self._reporters[reporter_class.name] = reporter_class

    @property
    def formats(self) -> list[str]:
        """Registered format names in registration order."""
        return list(self._reporters)

    def create(
        self, output_format: str, options: OutputOptions | None = None
    ) -> Reporter:
        """Build the reporter for an output format.

        Args:
            output_format: Registered format name.
            options: Output destination and format switches.

        Raises:
            ReporterNotFoundError: If no reporter handles the format.
        """
        try:
            reporter_class = self._reporters[output_format]
        except KeyError:
            raise ReporterNotFoundError(output_format) from None
        return reporter_class.from_options(options or OutputOptions())


_default_registry: ReporterRegistry | None = None


def get_registry() -> ReporterRegistry:
    """Get the global reporter registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = ReporterRegistry()
    return _default_registry


def create_reporter(
    output_format: str, options: OutputOptions | None = None
) -> Reporter:
    """Create a reporter using the global registry."""
    return get_registry().create(output_format, options)
