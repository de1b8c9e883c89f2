"""Reporters for classified audit reports."""

from .base import (
    OutputOptions,
    RenderContext,
    Reporter,
    calculate_rating,
    display_score,
)
from .console import ConsoleReporter
from .json_reporter import JSONReporter
from .registry import (
    ReporterNotFoundError,
    ReporterRegistry,
    create_reporter,
    get_registry,
)

__all__ = [
    "OutputOptions",
    "RenderContext",
    "Reporter",
    "calculate_rating",
    "display_score",
    "ConsoleReporter",
    "JSONReporter",
    "ReporterRegistry",
    "ReporterNotFoundError",
    "create_reporter",
    "get_registry",
]
