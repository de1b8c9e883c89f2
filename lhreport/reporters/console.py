"""Console reporter for terminal output."""

import sys
from typing import TextIO

from lhreport.report.models import (
    AuditRun,
    ClassifiedCategory,
    Clump,
    ClumpSection,
    ReportAuditRef,
    ReportModel,
)
from lhreport.reporters.base import (
    OutputOptions,
    RenderContext,
    Reporter,
    calculate_rating,
)


class ConsoleReporter(Reporter):
    """Reporter that writes a plain-text summary to the terminal.

    Colours are applied only when the render context asks for them.
    """

    name = "console"

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize the console reporter.

        Args:
            output: Output stream (defaults to sys.stdout).
        """
        self._output = output or sys.stdout

    @classmethod
    def from_options(cls, options: OutputOptions) -> "ConsoleReporter":
        return cls(output=options.stream)

    def _color(self, text: str, color_code: str, context: RenderContext) -> str:
        if not context.use_colors:
            return text
        return f"\033[{color_code}m{text}\033[0m"

    def _write(self, text: str = "") -> None:
        self._output.write(text + "\n")

    def report(self, report: ReportModel, context: RenderContext | None = None) -> None:
        """Generate and output the console report.

        Args:
            report: Classified report to output.
            context: Render context.
        """
        context = self._context(report, context)
        self._write_header(report, context)

        for category in report.categories:
            self._write()
            self._write_category(category, context)

        if report.category_errors:
            self._write()
            for category_id, error in report.category_errors.items():
                message = f"Category {category_id} skipped: {error}"
                self._write(self._color(message, "31", context))

    def _write_header(self, report: ReportModel, context: RenderContext) -> None:
        lhr = report.lhr
        self._write(self._color("Audit Report", "1", context))
        self._write("=" * 50)
        if lhr.final_url or lhr.requested_url:
            self._write(f"URL: {lhr.final_url or lhr.requested_url}")
        if lhr.fetch_time:
            self._write(f"Fetched: {lhr.fetch_time}")

        if lhr.run_warnings:
            self._write(
                self._color(context.strings.toplevel_warnings_message, "33", context)
            )
            for warning in lhr.run_warnings:
                self._write(f"  - {warning}")

    def _write_category(
        self, category: ClassifiedCategory, context: RenderContext
    ) -> None:
        score = self._format_score(category.score)
        badge = " [plugin]" if category.is_plugin else ""
        self._write(self._color(f"{category.title}  {score}{badge}", "1", context))
        self._write("-" * 50)

        if context.verbose and category.description:
            self._write(category.description)

        for section in category.sections:
            self._write_section(section, category, context)

    def _write_section(
        self,
        section: ClumpSection,
        category: ClassifiedCategory,
        context: RenderContext,
    ) -> None:
        title = context.clump_title(section.clump)
        self._write(f"{title} ({section.audit_count})")
        if section.clump == Clump.MANUAL and category.manual_description:
            self._write(self._color(category.manual_description, "2", context))

        for run in section.runs:
            self._write_run(run, context)

    def _write_run(self, run: AuditRun, context: RenderContext) -> None:
        indent = "  "
        if run.group is not None:
            title = run.group_info.title if run.group_info else run.group
            self._write(f"  {title}")
            indent = "    "

        for ref in run.audit_refs:
            self._write_audit(ref, indent, context)

    def _write_audit(
        self, ref: ReportAuditRef, indent: str, context: RenderContext
    ) -> None:
        result = ref.result
        rating = calculate_rating(result.score, result.score_display_mode)
        indicators = {
            "pass": ("*", "32"),
            "average": ("~", "33"),
            "fail": ("x", "31"),
            "error": ("!", "31"),
        }
        symbol, color = indicators[rating]

        line = f"{indent}{self._color(symbol, color, context)} {result.title or ref.id}"
        if result.display_value:
            line += f"  ({result.display_value})"
        self._write(line)

        detail_indent = indent + "    "
        if result.error_message:
            self._write(
                f"{detail_indent}{context.strings.error_label} {result.error_message}"
            )
        if result.explanation:
            self._write(f"{detail_indent}{result.explanation}")
        warnings = ref.warnings + list(ref.contract_warnings)
        if warnings:
            self._write(
                detail_indent
                + self._color(context.strings.warning_header.strip(), "33", context)
            )
            for warning in warnings:
                self._write(f"{detail_indent}  - {warning}")
        if context.verbose:
            for pack in ref.stack_packs:
                self._write(f"{detail_indent}[{pack.title}] {pack.description}")
