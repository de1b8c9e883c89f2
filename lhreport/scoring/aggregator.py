"""Score aggregation for report categories."""

from lhreport.report.models import ReportCategory

from .models import CategoryScore


class ScoreAggregator:
    """
    Aggregates audit scores into a category score.

    The category score is calculated as:
        Score = Σ(weight_i × score_i) / Σ(weight_i)

    over refs whose audit has a score in 0-1 and whose weight is positive.
    Audits that are not scored (null, NaN, infinite) or whose score falls
    outside 0-1 are left out of both sums whatever their weight, so the
    result always stays in 0-1. When nothing is left the category is
    ungraded and the score is None, which callers must keep apart from 0.

    No rounding happens here.
    """

    def calculate(self, category: ReportCategory) -> CategoryScore:
        """
        Calculate the score breakdown for a category.

        Args:
            category: Category whose refs carry their results.

        Returns:
            CategoryScore with the weighted mean and its inputs.
        """
        weighted_sum = 0.0
        scored_weight = 0.0
        total_weight = 0.0
        contributing: list[str] = []
        excluded: list[str] = []

        for ref in category.audit_refs:
            total_weight += ref.weight
            if ref.weight > 0 and ref.result.has_valid_score:
                weighted_sum += ref.weight * ref.result.score
                scored_weight += ref.weight
                contributing.append(ref.id)
            else:
                excluded.append(ref.id)

        value = weighted_sum / scored_weight if scored_weight > 0 else None

        return CategoryScore(
            category_id=category.id,
            value=value,
            scored_weight=scored_weight,
            total_weight=total_weight,
            contributing=contributing,
            excluded=excluded,
        )


def compute_category_score(category: ReportCategory) -> float | None:
    """Weighted mean score of a category, or None if it is ungraded."""
    return ScoreAggregator().calculate(category).value
