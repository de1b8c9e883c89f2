"""Build classified categories and whole report models."""

import logging
from collections.abc import Iterable

import structlog

from lhreport.clumps.classifier import clump_audit_refs
from lhreport.clumps.grouping import DEFAULT_FLAT_CLUMPS, organize
from lhreport.core.exceptions import LHReportError
from lhreport.plugins.detector import is_plugin_category
from lhreport.protocol.models import LighthouseResult
from lhreport.report.models import (
    ClassifiedCategory,
    Clump,
    ClumpSection,
    ReportCategory,
    ReportModel,
)
from lhreport.report.prepare import prepare_category
from lhreport.scoring.aggregator import ScoreAggregator

logger = logging.getLogger(__name__)

# Reported and computed scores further apart than this get logged
SCORE_MISMATCH_TOLERANCE = 1e-6


class CategoryClassifier:
    """Turns prepared categories into classified ones.

    Args:
        flat_clumps: Clumps rendered as a single ungrouped run. Every other
            clump groups its members by category group.
    """

    def __init__(self, flat_clumps: Iterable[Clump] | None = None) -> None:
        self.flat_clumps = (
            frozenset(flat_clumps) if flat_clumps is not None else DEFAULT_FLAT_CLUMPS
        )
        self.aggregator = ScoreAggregator()

    def classify_category(self, category: ReportCategory) -> ClassifiedCategory:
        """Score and clump one category. The input is left untouched."""
        score = self.aggregator.calculate(category).value
        self._check_reported_score(category, score)

        sections = []
        for clump, members in clump_audit_refs(category).items():
            if not members:
                continue
            runs = organize(members, grouping_enabled=clump not in self.flat_clumps)
            sections.append(ClumpSection(clump=clump, runs=runs))

        classified = ClassifiedCategory(
            id=category.id,
            title=category.title,
            description=category.description,
            manual_description=category.manual_description,
            reported_score=category.score,
            score=score,
            is_plugin=is_plugin_category(category.id),
            sections=tuple(sections),
        )
        logger.debug(
            "Classified category %s: %s",
            category.id,
            {clump.value: n for clump, n in classified.clump_counts().items()},
        )
        return classified

    def _check_reported_score(
        self, category: ReportCategory, score: float | None
    ) -> None:
        if category.score is None or score is None:
            return
        if abs(category.score - score) > SCORE_MISMATCH_TOLERANCE:
            logger.debug(
                "Category %s reports score %s, computed %s",
                category.id,
                category.score,
                score,
            )


class ReportBuilder:
    """Builds a ReportModel from a whole result.

    Each category is prepared and classified on its own. A broken reference
    or an audit with an unknown display mode in one category is recorded in
    ``category_errors`` and the remaining categories are still built, unless
    ``strict`` is set.
    """

    def __init__(
        self,
        flat_clumps: Iterable[Clump] | None = None,
        strict: bool = False,
    ) -> None:
        self.classifier = CategoryClassifier(flat_clumps)
        self.strict = strict

    def build(
        self,
        lhr: LighthouseResult,
        category_ids: Iterable[str] | None = None,
    ) -> ReportModel:
        """
        Classify the categories of a result.

        Args:
            lhr: Loaded result. Not modified.
            category_ids: Restrict to these categories (result order kept).

        Returns:
            ReportModel holding the original result and classified categories.

        Raises:
            LHReportError: In strict mode, on the first broken category.
        """
        wanted = set(category_ids) if category_ids is not None else None
        categories: list[ClassifiedCategory] = []
        errors: dict[str, str] = {}

        for category_id, category in lhr.categories.items():
            if wanted is not None and category_id not in wanted:
                continue
            with structlog.contextvars.bound_contextvars(category=category_id):
                try:
                    prepared = prepare_category(
                        category, lhr.audits, lhr.category_groups, lhr.stack_packs
                    )
                    classified = self.classifier.classify_category(prepared)
                except LHReportError as e:
                    if self.strict:
                        raise
                    logger.error("Skipping category %s: %s", category_id, e)
                    errors[category_id] = str(e)
                    continue
            categories.append(classified)

        return ReportModel(
            lhr=lhr, categories=tuple(categories), category_errors=errors
        )


def classify_category(
    category: ReportCategory, flat_clumps: Iterable[Clump] | None = None
) -> ClassifiedCategory:
    """Classify a single prepared category."""
    return CategoryClassifier(flat_clumps).classify_category(category)


def build_report(
    lhr: LighthouseResult,
    strict: bool = False,
    flat_clumps: Iterable[Clump] | None = None,
    category_ids: Iterable[str] | None = None,
) -> ReportModel:
    """Classify every category of a result. See ReportBuilder."""
    return ReportBuilder(flat_clumps=flat_clumps, strict=strict).build(
        lhr, category_ids=category_ids
    )
