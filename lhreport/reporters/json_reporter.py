"""JSON reporter for machine-readable output."""

import json
import sys
from pathlib import Path
from typing import Any, TextIO

from lhreport.report.models import (
    AuditRun,
    ClassifiedCategory,
    ReportAuditRef,
    ReportModel,
)
from lhreport.reporters.base import (
    OutputOptions,
    RenderContext,
    Reporter,
    display_score,
)


class JSONReporter(Reporter):
    """Reporter that outputs the classified model as JSON.

    Produces a stable format suitable for CI pipelines. Scores are kept
    unrounded next to their 0-100 display value.
    """

    name = "json"
    FORMAT_VERSION = "1.0"

    def __init__(
        self,
        output_file: Path | str | None = None,
        output: TextIO | None = None,
        indent: int | None = 2,
        include_lhr: bool = False,
    ) -> None:
        """Initialize the JSON reporter.

        Args:
            output_file: Path to write JSON file (takes precedence over output).
            output: Output stream (defaults to sys.stdout if no file specified).
            indent: JSON indentation level (None for compact output).
            include_lhr: Whether to embed the untouched input result.
        """
        self._output_file = Path(output_file) if output_file else None
        self._output = output
        self._indent = indent
        self._include_lhr = include_lhr

    @classmethod
    def from_options(cls, options: OutputOptions) -> "JSONReporter":
        return cls(
            output_file=options.output_file,
            output=options.stream,
            indent=options.indent,
            include_lhr=options.include_lhr,
        )

    def report(self, report: ReportModel, context: RenderContext | None = None) -> None:
        """Generate and output the JSON report.

        Args:
            report: Classified report to output.
            context: Render context.
        """
        context = self._context(report, context)
        json_data = self._build_json(report, context)
        json_str = json.dumps(json_data, indent=self._indent, default=str)

        if self._output_file:
            self._output_file.parent.mkdir(parents=True, exist_ok=True)
            self._output_file.write_text(json_str + "\n")
        else:
            output = self._output or sys.stdout
            output.write(json_str + "\n")

    def _build_json(
        self, report: ReportModel, context: RenderContext
    ) -> dict[str, Any]:
        lhr = report.lhr
        data: dict[str, Any] = {
            "version": self.FORMAT_VERSION,
            "locale": context.locale,
            "requested_url": lhr.requested_url,
            "final_url": lhr.final_url,
            "fetch_time": lhr.fetch_time,
            "run_warnings": list(lhr.run_warnings),
            "categories": [
                self._build_category(category, context)
                for category in report.categories
            ],
            "category_errors": dict(report.category_errors),
        }
        if self._include_lhr:
            data["lhr"] = lhr.to_json_dict()
        return data

    def _build_category(
        self, category: ClassifiedCategory, context: RenderContext
    ) -> dict[str, Any]:
        return {
            "id": category.id,
            "title": category.title,
            "score": category.score,
            "display_score": display_score(category.score),
            "reported_score": (
                category.reported_score
                if display_score(category.reported_score) is not None
                else None
            ),
            "is_plugin": category.is_plugin,
            "audit_count": category.audit_count,
            "clumps": [
                {
                    "clump": section.clump.value,
                    "title": context.clump_title(section.clump),
                    "runs": [self._build_run(run) for run in section.runs],
                }
                for section in category.sections
            ],
        }

    def _build_run(self, run: AuditRun) -> dict[str, Any]:
        return {
            "group": run.group,
            "group_title": run.group_info.title if run.group_info else None,
            "audits": [self._build_audit(ref) for ref in run.audit_refs],
        }

    def _build_audit(self, ref: ReportAuditRef) -> dict[str, Any]:
        result = ref.result
        audit: dict[str, Any] = {
            "id": ref.id,
            "title": result.title,
            "weight": ref.weight,
            "score": result.score if result.has_finite_score else None,
            "score_display_mode": str(result.score_display_mode),
            "display_value": result.display_value,
            "warnings": ref.warnings,
        }
        if ref.contract_warnings:
            audit["contract_warnings"] = list(ref.contract_warnings)
        if result.explanation:
            audit["explanation"] = result.explanation
        if result.error_message:
            audit["error_message"] = result.error_message
        if ref.stack_packs:
            audit["stack_packs"] = [pack.model_dump() for pack in ref.stack_packs]
        return audit
