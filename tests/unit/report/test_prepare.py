"""Unit tests for joining audit refs with their results."""

import logging

import pytest
from pydantic import ValidationError

from lhreport.core.exceptions import DanglingReferenceError
from lhreport.protocol.models import ScoreDisplayMode
from lhreport.report import prepare_category, prepare_report_result


class TestPrepareCategory:
    """Tests for prepare_category."""

    def test_refs_joined_in_order(self, sample_lhr) -> None:
        category = prepare_category(
            sample_lhr.categories["accessibility"],
            sample_lhr.audits,
            sample_lhr.category_groups,
        )

        assert [ref.id for ref in category.audit_refs] == [
            "image-alt",
            "color-contrast",
            "button-name",
            "html-lang",
            "video-caption",
            "tabindex",
        ]
        first = category.audit_refs[0]
        assert first.weight == 10
        assert first.result == sample_lhr.audits["image-alt"]
        assert first.group_info is not None
        assert first.group_info.title == "Names and labels"
        assert category.audit_refs[3].group_info is None

    def test_category_fields_copied(self, sample_lhr) -> None:
        category = prepare_category(sample_lhr.categories["pwa"], sample_lhr.audits)

        assert category.id == "pwa"
        assert category.title == "Progressive Web App"
        assert category.score == 0.33
        assert category.manual_description.startswith("These checks")

    def test_stack_packs_attached(self, sample_lhr) -> None:
        category = prepare_category(
            sample_lhr.categories["accessibility"],
            sample_lhr.audits,
            sample_lhr.category_groups,
            sample_lhr.stack_packs,
        )
        image_alt = category.audit_refs[0]
        (pack,) = image_alt.stack_packs

        assert pack.id == "wordpress"
        assert pack.title == "WordPress"
        assert pack.description.startswith("Use the media library")
        assert category.audit_refs[1].stack_packs == ()

    def test_dangling_audit(self, make_lhr) -> None:
        lhr = make_lhr(
            audits={"present": {"score": 1}},
            categories={"seo": [("present", 1, None), ("missing", 1, None)]},
        )
        with pytest.raises(DanglingReferenceError) as exc_info:
            prepare_category(lhr.categories["seo"], lhr.audits, lhr.category_groups)

        assert exc_info.value.kind == "audit"
        assert exc_info.value.ref_id == "missing"
        assert exc_info.value.category_id == "seo"

    def test_dangling_group(self, make_lhr) -> None:
        lhr = make_lhr(
            audits={"present": {"score": 1}},
            categories={"seo": [("present", 1, "nowhere")]},
        )
        with pytest.raises(DanglingReferenceError) as exc_info:
            prepare_category(lhr.categories["seo"], lhr.audits, lhr.category_groups)

        assert exc_info.value.kind == "group"
        assert exc_info.value.ref_id == "nowhere"

    def test_out_of_range_score_warns(
        self, make_lhr, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a finite score outside 0-1 is flagged, not rejected."""
        lhr = make_lhr(
            audits={"odd": {"score": 1.5}, "fine": {"score": 1}},
            categories={"seo": [("odd", 1, None), ("fine", 1, None)]},
        )
        with caplog.at_level(logging.WARNING, logger="lhreport.report.prepare"):
            category = prepare_category(lhr.categories["seo"], lhr.audits)

        odd, fine = category.audit_refs
        assert odd.contract_warnings == ("Score 1.5 is outside the range 0-1",)
        assert fine.contract_warnings == ()
        assert "breaks the data contract" in caplog.text
        assert odd.warnings == []


class TestPrepareReportResult:
    """Tests for prepare_report_result."""

    def test_all_categories_in_order(self, sample_lhr) -> None:
        categories = prepare_report_result(sample_lhr)
        assert [category.id for category in categories] == list(sample_lhr.categories)

    def test_fails_fast(self, make_lhr) -> None:
        lhr = make_lhr(audits={}, categories={"seo": [("missing", 1, None)]})
        with pytest.raises(DanglingReferenceError):
            prepare_report_result(lhr)


class TestWithResultOverrides:
    """Tests for ReportCategory.with_result_overrides."""

    def test_returns_modified_copy(self, make_audit_ref, make_category) -> None:
        category = make_category(
            [
                make_audit_ref("a", score=1.0, mode="numeric"),
                make_audit_ref("b", score=None, mode="manual"),
            ]
        )
        failing = category.with_result_overrides(score=0, score_display_mode="binary")

        for ref in failing.audit_refs:
            assert ref.result.score == 0
            assert ref.result.score_display_mode is ScoreDisplayMode.BINARY

    def test_input_untouched(self, make_audit_ref, make_category) -> None:
        category = make_category(
            [make_audit_ref("a", score=1.0, mode="numeric", warnings=["w"])]
        )
        before = category.model_dump()

        changed = category.with_result_overrides(score=0.0, warnings=None)

        assert category.model_dump() == before
        assert changed.audit_refs[0].result is not category.audit_refs[0].result
        assert changed.audit_refs[0].warnings == []
        assert category.audit_refs[0].warnings == ["w"]

    def test_overrides_validated(self, make_audit_ref, make_category) -> None:
        """Test override values are coerced like loaded data."""
        category = make_category([make_audit_ref("a", score=1.0)])

        changed = category.with_result_overrides(score="0")

        assert changed.audit_refs[0].result.score == 0.0
        assert isinstance(changed.audit_refs[0].result.score, float)

    def test_invalid_override_rejected(self, make_audit_ref, make_category) -> None:
        category = make_category([make_audit_ref("a", score=1.0)])
        with pytest.raises(ValidationError):
            category.with_result_overrides(score="high")

    def test_other_fields_kept(self, make_audit_ref, make_category) -> None:
        category = make_category(
            [make_audit_ref("a", score=1.0, display_value="1.2 s", numericValue=1200)]
        )

        result = category.with_result_overrides(score=0).audit_refs[0].result

        assert result.display_value == "1.2 s"
        assert result.numeric_value == 1200
        assert result.title == "A"
