"""Unit tests for category score aggregation."""

import math

import pytest

from lhreport.scoring import CategoryScore, ScoreAggregator, compute_category_score


class TestScoreAggregator:
    """Tests for ScoreAggregator.calculate."""

    def test_weighted_mean(self, make_audit_ref, make_category) -> None:
        """Test the score is the weight-normalized mean."""
        category = make_category(
            [
                make_audit_ref("a", score=1.0, weight=3),
                make_audit_ref("b", score=0.0, weight=1),
            ]
        )
        score = ScoreAggregator().calculate(category)

        assert score.value == pytest.approx(0.75)
        assert score.scored_weight == 4
        assert score.total_weight == 4
        assert score.contributing == ["a", "b"]
        assert score.excluded == []
        assert score.is_graded

    def test_zero_weight_excluded(self, make_audit_ref, make_category) -> None:
        category = make_category(
            [
                make_audit_ref("a", score=1.0, weight=1),
                make_audit_ref("b", score=0.0, weight=0),
            ]
        )
        score = ScoreAggregator().calculate(category)

        assert score.value == 1.0
        assert score.excluded == ["b"]

    @pytest.mark.parametrize("unscored", [None, math.nan, math.inf])
    def test_non_finite_scores_excluded(
        self, make_audit_ref, make_category, unscored
    ) -> None:
        """Test audits without a real score leave both sums."""
        category = make_category(
            [
                make_audit_ref("a", score=0.5, weight=2),
                make_audit_ref("b", score=unscored, mode="numeric", weight=5),
            ]
        )
        score = ScoreAggregator().calculate(category)

        assert score.value == 0.5
        assert score.scored_weight == 2
        assert score.total_weight == 7
        assert score.excluded == ["b"]

    def test_all_zero_weight_is_ungraded(self, make_audit_ref, make_category) -> None:
        category = make_category(
            [
                make_audit_ref("a", score=1.0, weight=0),
                make_audit_ref("b", score=0.0, weight=0),
            ]
        )
        score = ScoreAggregator().calculate(category)

        assert score.value is None
        assert not score.is_graded

    def test_all_unscored_is_ungraded(self, make_audit_ref, make_category) -> None:
        category = make_category(
            [
                make_audit_ref("a", score=None, mode="manual", weight=1),
                make_audit_ref("b", score=None, mode="notApplicable", weight=1),
            ]
        )
        assert ScoreAggregator().calculate(category).value is None

    def test_empty_category_is_ungraded(self, make_category) -> None:
        assert ScoreAggregator().calculate(make_category([])).value is None

    def test_all_failing_is_zero_not_none(self, make_audit_ref, make_category) -> None:
        """Test a graded zero stays distinct from ungraded."""
        category = make_category([make_audit_ref("a", score=0.0, weight=1)])
        assert ScoreAggregator().calculate(category).value == 0.0

    def test_order_invariant(self, make_audit_ref, make_category) -> None:
        refs = [
            make_audit_ref("a", score=0.9, weight=3),
            make_audit_ref("b", score=0.2, weight=7),
            make_audit_ref("c", score=0.6, weight=1),
        ]
        forward = compute_category_score(make_category(refs))
        backward = compute_category_score(make_category(list(reversed(refs))))

        assert forward == pytest.approx(backward)
        assert forward == pytest.approx((2.7 + 1.4 + 0.6) / 11)

    def test_out_of_range_score_excluded(self, make_audit_ref, make_category) -> None:
        """Test scores outside 0-1 never leak into the category score."""
        category = make_category(
            [
                make_audit_ref("odd", score=1.5, weight=1),
                make_audit_ref("negative", score=-0.5, weight=1),
                make_audit_ref("fine", score=0.5, weight=1),
            ]
        )
        breakdown = ScoreAggregator().calculate(category)

        assert breakdown.value == 0.5
        assert breakdown.contributing == ["fine"]
        assert breakdown.excluded == ["odd", "negative"]

    def test_only_out_of_range_scores_is_ungraded(
        self, make_audit_ref, make_category
    ) -> None:
        category = make_category([make_audit_ref("a", score=1.5, weight=1)])
        assert compute_category_score(category) is None

    def test_sample_scores(self, sample_lhr) -> None:
        from lhreport.report import prepare_report_result

        scores = {
            category.id: compute_category_score(category)
            for category in prepare_report_result(sample_lhr)
        }
        assert scores["performance"] == pytest.approx(0.8)
        assert scores["accessibility"] == pytest.approx(13 / 29)
        assert scores["pwa"] == pytest.approx(1 / 3)
        assert scores["lighthouse-plugin-field-data"] == 0.5


class TestCategoryScore:
    """Tests for the CategoryScore model."""

    def test_to_dict(self) -> None:
        score = CategoryScore(
            category_id="pwa",
            value=0.5,
            scored_weight=2,
            total_weight=3,
            contributing=["a"],
            excluded=["b"],
        )
        assert score.to_dict() == {
            "category_id": "pwa",
            "value": 0.5,
            "scored_weight": 2.0,
            "total_weight": 3.0,
            "contributing": ["a"],
            "excluded": ["b"],
        }

    def test_defaults_ungraded(self) -> None:
        score = CategoryScore(category_id="x")
        assert score.value is None
        assert not score.is_graded
