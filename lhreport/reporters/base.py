"""Base reporter interface and render context."""

import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from lhreport.protocol.models import RendererFormattedStrings, ScoreDisplayMode
from lhreport.report.models import Clump, ReportModel

# Minimum scores for each rating, highest first
RATING_THRESHOLDS: tuple[tuple[str, float], ...] = (
    ("pass", 0.9),
    ("average", 0.5),
)

FAILED_CLUMP_TITLE = "Failed audits"


class RenderContext(BaseModel):
    """Everything a reporter needs besides the report itself.

    Passed explicitly on every call so concurrent renders never share state.
    """

    model_config = ConfigDict(frozen=True)

    strings: RendererFormattedStrings = Field(
        default_factory=RendererFormattedStrings,
        description="Localized clump titles and labels",
    )
    locale: str = "en-US"
    use_colors: bool = False
    verbose: bool = False

    @classmethod
    def from_report(
        cls, report: ReportModel, use_colors: bool = False, verbose: bool = False
    ) -> "RenderContext":
        """Build a context from the strings and locale stored in the result."""
        return cls(
            strings=report.lhr.renderer_strings,
            locale=report.lhr.config_settings.locale,
            use_colors=use_colors,
            verbose=verbose,
        )

    def clump_title(self, clump: Clump) -> str:
        """Heading shown above a clump."""
        titles = {
            Clump.FAILED: FAILED_CLUMP_TITLE,
            Clump.WARNING: self.strings.warning_audits_group_title,
            Clump.MANUAL: self.strings.manual_audits_group_title,
            Clump.PASSED: self.strings.passed_audits_group_title,
            Clump.NOT_APPLICABLE: self.strings.not_applicable_audits_group_title,
        }
        return titles[clump]


class OutputOptions(BaseModel):
    """Where and how a reporter writes, as chosen on the command line."""

    model_config = ConfigDict(frozen=True)

    output_file: Path | None = Field(None, description="Write here instead")
    stream: Any = Field(None, description="Text stream; defaults to stdout")
    include_lhr: bool = Field(False, description="Embed the input result")
    indent: int | None = Field(2, description="JSON indentation, None = compact")


def display_score(score: float | None) -> int | None:
    """Score on the 0-100 scale, rounded half up. None stays None."""
    if score is None or not math.isfinite(score):
        return None
    return math.floor(score * 100 + 0.5)


def calculate_rating(
    score: float | None, mode: ScoreDisplayMode | str | None = None
) -> str:
    """Rating label for a score: pass, average, fail or error."""
    if mode in (ScoreDisplayMode.MANUAL, ScoreDisplayMode.NOT_APPLICABLE):
        return "pass"
    if mode == ScoreDisplayMode.ERROR:
        return "error"
    if score is None or not math.isfinite(score):
        return "fail"
    for label, minimum in RATING_THRESHOLDS:
        if score >= minimum:
            return label
    return "fail"


class Reporter(ABC):
    """Base class for reporters.

    Reporters are the presentation adapters of the classified model. Each
    one is registered under its ``name``, the value of ``--format``.
    """

    name: ClassVar[str]

    @classmethod
    def from_options(cls, options: OutputOptions) -> "Reporter":
        """Build the reporter from command-line output options."""
        return cls()

    @abstractmethod
    def report(self, report: ReportModel, context: RenderContext | None = None) -> None:
        """Generate and output the report.

        Args:
            report: Classified report to output.
            context: Render context; built from the report when omitted.
        """

    def _context(
        self, report: ReportModel, context: RenderContext | None
    ) -> RenderContext:
        return context if context is not None else RenderContext.from_report(report)

    def _format_score(self, score: float | None) -> str:
        """Format a 0-1 score for display, '-' when ungraded."""
        value = display_score(score)
        return "-" if value is None else str(value)
