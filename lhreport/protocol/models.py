"""Lighthouse result (LHR) data models.

Field names are snake_case in Python and camelCase on the wire. Every model
keeps unknown fields (``extra="allow"``) so a result loaded and dumped with
``to_json_dict()`` comes back with the same keys it went in with.
"""

import math
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class LighthouseError(StrEnum):
    """Canonical runtime error codes of an audit run."""

    NO_ERROR = "NO_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NO_SPEEDLINE_FRAMES = "NO_SPEEDLINE_FRAMES"
    SPEEDINDEX_OF_ZERO = "SPEEDINDEX_OF_ZERO"
    NO_SCREENSHOTS = "NO_SCREENSHOTS"
    INVALID_SPEEDLINE = "INVALID_SPEEDLINE"
    NO_TRACING_STARTED = "NO_TRACING_STARTED"
    NO_NAVSTART = "NO_NAVSTART"
    NO_FCP = "NO_FCP"
    NO_DCL = "NO_DCL"
    NO_DOCUMENT_REQUEST = "NO_DOCUMENT_REQUEST"
    FAILED_DOCUMENT_REQUEST = "FAILED_DOCUMENT_REQUEST"
    ERRORED_DOCUMENT_REQUEST = "ERRORED_DOCUMENT_REQUEST"
    TRACING_ALREADY_STARTED = "TRACING_ALREADY_STARTED"
    PARSING_PROBLEM = "PARSING_PROBLEM"
    READ_FAILED = "READ_FAILED"
    INSECURE_DOCUMENT_REQUEST = "INSECURE_DOCUMENT_REQUEST"
    PROTOCOL_TIMEOUT = "PROTOCOL_TIMEOUT"
    PAGE_HUNG = "PAGE_HUNG"
    DNS_FAILURE = "DNS_FAILURE"
    CRI_TIMEOUT = "CRI_TIMEOUT"


class ScoreDisplayMode(StrEnum):
    """How an audit score should be interpreted."""

    BINARY = "binary"
    NUMERIC = "numeric"
    INFORMATIVE = "informative"
    NOT_APPLICABLE = "notApplicable"
    MANUAL = "manual"
    ERROR = "error"


class EmulatedFormFactor(StrEnum):
    """Form factor the page was emulated as."""

    UNSPECIFIED = "UNKNOWN_FORM_FACTOR"
    MOBILE = "mobile"
    DESKTOP = "desktop"
    NONE = "none"


class LHRModel(BaseModel):
    """Base for all wire models: camelCase aliases, frozen, extras kept."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )


class AuditResult(LHRModel):
    """Result of an individual audit."""

    id: str = Field(..., description="Audit identifier")
    title: str = Field("", description="Audit title")
    description: str = Field("", description="Markdown description")
    score: float | None = Field(
        None, description="Score in 0-1, or null/NaN when not scored"
    )
    # Unknown modes load as plain strings; the classifier rejects them per audit
    score_display_mode: ScoreDisplayMode | str = Field(
        ...,
        description="How the score should be interpreted",
        union_mode="left_to_right",
    )
    display_value: str | None = Field(None, description="Human readable value")
    explanation: str | None = Field(None, description="Explanation of issues")
    error_message: str | None = Field(None, description="Audit error message")
    details: dict[str, Any] | None = Field(None, description="Opaque details")
    warnings: list[str] | None = Field(None, description="Audit warnings")
    numeric_value: float | None = Field(None, description="Audit-specific value")

    @field_validator("score_display_mode", mode="before")
    @classmethod
    def normalize_display_mode(cls, v: Any) -> Any:
        """Accept the legacy ``not_applicable`` spelling."""
        if v == "not_applicable":
            return ScoreDisplayMode.NOT_APPLICABLE.value
        return v

    @property
    def has_finite_score(self) -> bool:
        """Whether the score is a real number (not null, NaN or infinite)."""
        return self.score is not None and math.isfinite(self.score)

    @property
    def has_valid_score(self) -> bool:
        """Whether the score is finite and within 0-1."""
        return self.has_finite_score and 0.0 <= self.score <= 1.0

    @property
    def warning_list(self) -> list[str]:
        """Warnings with null treated as empty."""
        return list(self.warnings or [])


class AuditRef(LHRModel):
    """A category's reference to an audit result."""

    id: str = Field(..., description="Key in the top-level audits map")
    weight: float = Field(0.0, description="Weight in the category score", ge=0.0)
    group: str | None = Field(None, description="Category group id")


class CategoryGroup(LHRModel):
    """A group used to cluster audits within a category."""

    title: str = Field("", description="Group title")
    description: str = Field("", description="Group description")


class LhrCategory(LHRModel):
    """A category of audits and its combined weighted score."""

    id: str = Field(..., description="Category identifier")
    title: str = Field("", description="Category title")
    description: str = Field("", description="Category description")
    score: float | None = Field(None, description="Reported score in 0-1")
    manual_description: str | None = Field(
        None, description="Description shown above manual audits"
    )
    audit_refs: list[AuditRef] = Field(
        default_factory=list, description="Ordered audit references"
    )


class Environment(LHRModel):
    """Environment the run happened in."""

    network_user_agent: str = ""
    host_user_agent: str = ""
    benchmark_index: float | None = None


class RuntimeErrorInfo(LHRModel):
    """Run-level error."""

    code: LighthouseError = LighthouseError.NO_ERROR
    message: str = ""


class ConfigSettings(LHRModel):
    """Settings the run was configured with."""

    emulated_form_factor: EmulatedFormFactor = EmulatedFormFactor.UNSPECIFIED
    locale: str = "en-US"
    only_categories: list[str] | None = None
    channel: str = ""


class RendererFormattedStrings(LHRModel):
    """Localized strings consumed by report renderers."""

    variance_disclaimer: str = "Values are estimated and may vary."
    opportunity_resource_column_label: str = "Opportunity"
    opportunity_savings_column_label: str = "Estimated Savings"
    error_missing_audit_info: str = "Report error: no audit information"
    error_label: str = "Error!"
    warning_header: str = "Warnings: "
    audit_group_expand_tooltip: str = "Show audits"
    passed_audits_group_title: str = "Passed audits"
    not_applicable_audits_group_title: str = "Not applicable"
    manual_audits_group_title: str = "Additional items to manually check"
    toplevel_warnings_message: str = (
        "There were issues affecting this run of Lighthouse:"
    )
    scorescale_label: str = "Score scale:"
    crc_longest_duration_label: str = "Maximum critical path latency:"
    crc_initial_navigation: str = "Initial Navigation"
    ls_performance_category_description: str = (
        "Analysis of the current page on an emulated mobile network. "
        "Values are estimated and may vary."
    )
    lab_data_title: str = "Lab data"
    warning_audits_group_title: str = "Passed audits but with warnings"
    snippet_expand_button_label: str = "Expand snippet"
    snippet_collapse_button_label: str = "Collapse snippet"


class I18n(LHRModel):
    """Localization data."""

    renderer_formatted_strings: RendererFormattedStrings = Field(
        default_factory=RendererFormattedStrings
    )


class PerformanceEntry(LHRModel):
    """A timed step of the run."""

    name: str
    entry_type: str = "measure"
    start_time: float | None = None
    duration: float | None = None
    gather: bool = Field(False, description="Captured during data collection")


class Timing(LHRModel):
    """Run timing data."""

    total: float | None = None
    entries: list[PerformanceEntry] = Field(default_factory=list)


class StackPack(LHRModel):
    """Stack-specific advice contributed by a third party."""

    id: str
    title: str = ""
    icon_data_url: str = Field("", alias="iconDataURL")
    descriptions: dict[str, str] = Field(
        default_factory=dict, description="Audit id to description"
    )


class LighthouseResult(LHRModel):
    """Top-level run record."""

    fetch_time: str | None = Field(None, description="ISO capture timestamp")
    requested_url: str = ""
    final_url: str = ""
    lighthouse_version: str = ""
    environment: Environment = Field(default_factory=Environment)
    user_agent: str = ""
    run_warnings: list[str] = Field(default_factory=list)
    runtime_error: RuntimeErrorInfo | None = None
    audits: dict[str, AuditResult] = Field(default_factory=dict)
    categories: dict[str, LhrCategory] = Field(default_factory=dict)
    category_groups: dict[str, CategoryGroup] = Field(default_factory=dict)
    config_settings: ConfigSettings = Field(default_factory=ConfigSettings)
    # to_camel would turn this into "i18N"
    i18n: I18n = Field(default_factory=I18n, alias="i18n")
    timing: Timing = Field(default_factory=Timing)
    stack_packs: list[StackPack] = Field(default_factory=list)

    @property
    def fetched_at(self) -> datetime | None:
        """Capture timestamp as a datetime, if parseable."""
        if not self.fetch_time:
            return None
        try:
            return datetime.fromisoformat(self.fetch_time.replace("Z", "+00:00"))
        except ValueError:
            return None

    @property
    def renderer_strings(self) -> RendererFormattedStrings:
        """Renderer strings, English defaults filling the gaps."""
        return self.i18n.renderer_formatted_strings

    def to_json_dict(self) -> dict[str, Any]:
        """Dump back to the wire shape, emitting only fields that were set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
