"""JSON Schema generation for the result data contract."""

from typing import Any

from lhreport.protocol.models import AuditResult, LhrCategory, LighthouseResult


def generate_result_schema() -> dict[str, Any]:
    """Generate JSON Schema for LighthouseResult (camelCase keys)."""
    return LighthouseResult.model_json_schema(by_alias=True)


def generate_all_schemas() -> dict[str, dict[str, Any]]:
    """Generate schemas for the top-level result and its main parts."""
    return {
        "LighthouseResult": generate_result_schema(),
        "AuditResult": AuditResult.model_json_schema(by_alias=True),
        "LhrCategory": LhrCategory.model_json_schema(by_alias=True),
    }
