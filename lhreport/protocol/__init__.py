"""Lighthouse result data contract."""

from lhreport.protocol.models import (
    AuditRef,
    AuditResult,
    CategoryGroup,
    ConfigSettings,
    EmulatedFormFactor,
    Environment,
    I18n,
    LhrCategory,
    LighthouseError,
    LighthouseResult,
    PerformanceEntry,
    RendererFormattedStrings,
    RuntimeErrorInfo,
    ScoreDisplayMode,
    StackPack,
    Timing,
)
from lhreport.protocol.schema import generate_result_schema

__all__ = [
    "AuditRef",
    "AuditResult",
    "CategoryGroup",
    "ConfigSettings",
    "EmulatedFormFactor",
    "Environment",
    "I18n",
    "LhrCategory",
    "LighthouseError",
    "LighthouseResult",
    "PerformanceEntry",
    "RendererFormattedStrings",
    "RuntimeErrorInfo",
    "ScoreDisplayMode",
    "StackPack",
    "Timing",
    "generate_result_schema",
]
