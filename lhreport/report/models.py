"""Derived, read-only report models.

A ``ReportCategory`` is an ``LhrCategory`` whose audit refs have been joined
with their audit results. Classification turns it into a
``ClassifiedCategory``: the computed score plus the category's audits sorted
into clumps and, inside each clump, into runs.
"""

import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from lhreport.protocol.models import (
    AuditResult,
    CategoryGroup,
    LighthouseResult,
)


class Clump(StrEnum):
    """Disposition bucket of an audit. Every audit lands in exactly one."""

    FAILED = "failed"
    WARNING = "warning"
    MANUAL = "manual"
    PASSED = "passed"
    NOT_APPLICABLE = "notApplicable"


# Presentation order of clumps within a category
CLUMP_ORDER: tuple[Clump, ...] = (
    Clump.FAILED,
    Clump.WARNING,
    Clump.MANUAL,
    Clump.PASSED,
    Clump.NOT_APPLICABLE,
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class StackPackDescription(_Frozen):
    """Stack-pack advice attached to one audit."""

    id: str
    title: str
    icon_data_url: str = ""
    description: str


class ReportAuditRef(_Frozen):
    """An audit ref joined with the audit result it points at."""

    id: str = Field(..., description="Audit identifier")
    weight: float = Field(0.0, ge=0.0)
    group: str | None = Field(None, description="Category group id")
    result: AuditResult
    group_info: CategoryGroup | None = Field(
        None, description="Resolved category group"
    )
    stack_packs: tuple[StackPackDescription, ...] = ()
    contract_warnings: tuple[str, ...] = Field(
        default=(), description="Data-contract problems found while preparing"
    )

    @property
    def warnings(self) -> list[str]:
        """The audit's own warnings."""
        return self.result.warning_list


class ReportCategory(_Frozen):
    """A category whose refs carry their audit results."""

    id: str
    title: str = ""
    description: str = ""
    score: float | None = None
    manual_description: str | None = None
    audit_refs: tuple[ReportAuditRef, ...] = ()

    def with_result_overrides(self, **fields: Any) -> "ReportCategory":
        """Return a deep copy with the given fields replaced on every result.

        Overrides are validated like loaded data, so ``score="0"`` becomes
        ``0.0`` and an unusable value raises pydantic's ValidationError.

        Example:
            failing = category.with_result_overrides(
                score=0, score_display_mode="binary"
            )
        """
        refs = tuple(
            ref.model_copy(
                update={
                    "result": AuditResult.model_validate(
                        {**ref.result.model_dump(exclude_unset=True), **fields}
                    )
                },
                deep=True,
            )
            for ref in self.audit_refs
        )
        return self.model_copy(update={"audit_refs": refs}, deep=True)


class AuditRun(_Frozen):
    """Consecutive audits rendered together, optionally under one group."""

    group: str | None = None
    group_info: CategoryGroup | None = None
    audit_refs: tuple[ReportAuditRef, ...] = ()

    @property
    def audit_ids(self) -> list[str]:
        return [ref.id for ref in self.audit_refs]


class ClumpSection(_Frozen):
    """One non-empty clump of a category."""

    clump: Clump
    runs: tuple[AuditRun, ...] = ()

    @property
    def audit_refs(self) -> list[ReportAuditRef]:
        """All members in render order."""
        return [ref for run in self.runs for ref in run.audit_refs]

    @property
    def audit_count(self) -> int:
        return sum(len(run.audit_refs) for run in self.runs)


class ClassifiedCategory(_Frozen):
    """Fully classified category, ready for a presentation adapter."""

    id: str
    title: str = ""
    description: str = ""
    manual_description: str | None = None
    reported_score: float | None = Field(
        None, description="Score as found in the result"
    )
    score: float | None = Field(
        None, description="Weighted average of scored audits; None when ungraded"
    )
    is_plugin: bool = False
    sections: tuple[ClumpSection, ...] = ()

    def section(self, clump: Clump) -> ClumpSection | None:
        """Return the section for a clump, or None if the clump is empty."""
        for section in self.sections:
            if section.clump == clump:
                return section
        return None

    def members(self, clump: Clump) -> list[ReportAuditRef]:
        """Audits in a clump, in render order."""
        section = self.section(clump)
        return section.audit_refs if section else []

    def clump_counts(self) -> dict[Clump, int]:
        """Number of audits per clump, every clump present."""
        counts = {clump: 0 for clump in CLUMP_ORDER}
        for section in self.sections:
            counts[section.clump] = section.audit_count
        return counts

    @property
    def audit_count(self) -> int:
        return sum(section.audit_count for section in self.sections)

    @property
    def is_graded(self) -> bool:
        return self.score is not None and math.isfinite(self.score)


class ReportModel(_Frozen):
    """Classified view of a whole result."""

    lhr: LighthouseResult
    categories: tuple[ClassifiedCategory, ...] = ()
    category_errors: dict[str, str] = Field(
        default_factory=dict, description="Category id to integrity error"
    )

    def category(self, category_id: str) -> ClassifiedCategory | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    @property
    def has_errors(self) -> bool:
        return bool(self.category_errors)
