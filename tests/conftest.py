"""Shared pytest fixtures for lhreport tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from lhreport.loader import ResultLoader
from lhreport.protocol import LighthouseResult
from lhreport.protocol.models import AuditResult, CategoryGroup
from lhreport.report.models import ReportAuditRef, ReportCategory


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_lhr_path(fixtures_dir: Path) -> Path:
    """Return path to the sample result JSON file."""
    return fixtures_dir / "results" / "sample_lhr.json"


@pytest.fixture
def sample_lhr(sample_lhr_path: Path) -> LighthouseResult:
    """Return the sample result, loaded."""
    return ResultLoader().load_file(sample_lhr_path)


@pytest.fixture
def make_audit_ref() -> Callable[..., ReportAuditRef]:
    """Return a factory for prepared audit refs.

    Example:
        ref = make_audit_ref("viewport", score=1, warnings=["x"], group="a11y")
    """

    def factory(
        audit_id: str,
        score: float | None = 1.0,
        mode: str = "binary",
        weight: float = 1.0,
        warnings: list[str] | None = None,
        group: str | None = None,
        group_title: str | None = None,
        **result_fields: Any,
    ) -> ReportAuditRef:
        result = AuditResult(
            id=audit_id,
            title=result_fields.pop("title", audit_id.replace("-", " ").title()),
            score=score,
            score_display_mode=mode,
            warnings=warnings,
            **result_fields,
        )
        group_info = None
        if group is not None:
            group_info = CategoryGroup(title=group_title or group)
        return ReportAuditRef(
            id=audit_id,
            weight=weight,
            group=group,
            result=result,
            group_info=group_info,
        )

    return factory


@pytest.fixture
def make_category() -> Callable[..., ReportCategory]:
    """Return a factory for prepared categories."""

    def factory(
        refs: list[ReportAuditRef],
        category_id: str = "test-category",
        **fields: Any,
    ) -> ReportCategory:
        fields.setdefault("title", "Test Category")
        return ReportCategory(id=category_id, audit_refs=tuple(refs), **fields)

    return factory


@pytest.fixture
def make_lhr() -> Callable[..., LighthouseResult]:
    """Return a factory building a result from a compact description.

    ``categories`` maps a category id to a list of
    ``(audit_id, weight, group)`` tuples; ``audits`` maps audit ids to the
    keyword arguments of their AuditResult.
    """

    def factory(
        audits: dict[str, dict[str, Any]],
        categories: dict[str, list[tuple[str, float, str | None]]],
        groups: dict[str, str] | None = None,
        **top_level: Any,
    ) -> LighthouseResult:
        data: dict[str, Any] = {
            "requestedUrl": "https://example.com/",
            "finalUrl": "https://example.com/",
            "fetchTime": "2024-01-01T00:00:00.000Z",
            "audits": {
                audit_id: {
                    "id": audit_id,
                    "title": audit_id,
                    "scoreDisplayMode": "binary",
                    **fields,
                }
                for audit_id, fields in audits.items()
            },
            "categories": {
                category_id: {
                    "id": category_id,
                    "title": category_id.title(),
                    "auditRefs": [
                        {"id": audit_id, "weight": weight, "group": group}
                        for audit_id, weight, group in refs
                    ],
                }
                for category_id, refs in categories.items()
            },
            "categoryGroups": {
                group_id: {"title": title} for group_id, title in (groups or {}).items()
            },
            **top_level,
        }
        return ResultLoader().load_dict(data)

    return factory
