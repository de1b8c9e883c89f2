"""Report model: preparation, classification and the derived models."""

from lhreport.report.builder import (
    CategoryClassifier,
    ReportBuilder,
    build_report,
    classify_category,
)
from lhreport.report.models import (
    CLUMP_ORDER,
    AuditRun,
    ClassifiedCategory,
    Clump,
    ClumpSection,
    ReportAuditRef,
    ReportCategory,
    ReportModel,
    StackPackDescription,
)
from lhreport.report.prepare import (
    prepare_audit_ref,
    prepare_category,
    prepare_report_result,
)

__all__ = [
    "CLUMP_ORDER",
    "AuditRun",
    "CategoryClassifier",
    "ClassifiedCategory",
    "Clump",
    "ClumpSection",
    "ReportAuditRef",
    "ReportBuilder",
    "ReportCategory",
    "ReportModel",
    "StackPackDescription",
    "build_report",
    "classify_category",
    "prepare_audit_ref",
    "prepare_category",
    "prepare_report_result",
]
