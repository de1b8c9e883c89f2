"""Join audit refs with their results before classification."""

import logging
from collections.abc import Iterable, Mapping

from lhreport.core.exceptions import DanglingReferenceError
from lhreport.protocol.models import (
    AuditRef,
    AuditResult,
    CategoryGroup,
    LhrCategory,
    LighthouseResult,
    StackPack,
)
from lhreport.report.models import ReportAuditRef, ReportCategory, StackPackDescription

logger = logging.getLogger(__name__)


def _contract_warnings(result: AuditResult) -> tuple[str, ...]:
    """Describe data-contract violations of a single result."""
    if result.has_finite_score and not result.has_valid_score:
        return (f"Score {result.score!r} is outside the range 0-1",)
    return ()


def _stack_pack_descriptions(
    audit_id: str, stack_packs: Iterable[StackPack]
) -> tuple[StackPackDescription, ...]:
    return tuple(
        StackPackDescription(
            id=pack.id,
            title=pack.title,
            icon_data_url=pack.icon_data_url,
            description=pack.descriptions[audit_id],
        )
        for pack in stack_packs
        if audit_id in pack.descriptions
    )


def prepare_audit_ref(
    ref: AuditRef,
    category_id: str,
    audits: Mapping[str, AuditResult],
    groups: Mapping[str, CategoryGroup],
    stack_packs: Iterable[StackPack] = (),
) -> ReportAuditRef:
    """Resolve one audit ref.

    Raises:
        DanglingReferenceError: If the audit or its group does not exist.
    """
    result = audits.get(ref.id)
    if result is None:
        raise DanglingReferenceError("audit", ref.id, category_id)

    group_info = None
    if ref.group is not None:
        group_info = groups.get(ref.group)
        if group_info is None:
            raise DanglingReferenceError("group", ref.group, category_id)

    contract_warnings = _contract_warnings(result)
    if contract_warnings:
        logger.warning(
            "Audit %s in category %s breaks the data contract: %s",
            ref.id,
            category_id,
            "; ".join(contract_warnings),
        )

    return ReportAuditRef(
        id=ref.id,
        weight=ref.weight,
        group=ref.group,
        result=result,
        group_info=group_info,
        stack_packs=_stack_pack_descriptions(ref.id, stack_packs),
        contract_warnings=contract_warnings,
    )


def prepare_category(
    category: LhrCategory,
    audits: Mapping[str, AuditResult],
    groups: Mapping[str, CategoryGroup] | None = None,
    stack_packs: Iterable[StackPack] = (),
) -> ReportCategory:
    """Build a ReportCategory, failing fast on the first dangling reference.

    Args:
        category: Category as found in the result.
        audits: Audit id to result.
        groups: Group id to group; refs naming a group need it here.
        stack_packs: Stack packs whose descriptions get attached to audits.

    Returns:
        ReportCategory with refs in their original order.

    Raises:
        DanglingReferenceError: If a ref names an unknown audit or group.
    """
    groups = groups or {}
    stack_packs = tuple(stack_packs)
    refs = tuple(
        prepare_audit_ref(ref, category.id, audits, groups, stack_packs)
        for ref in category.audit_refs
    )
    return ReportCategory(
        id=category.id,
        title=category.title,
        description=category.description,
        score=category.score,
        manual_description=category.manual_description,
        audit_refs=refs,
    )


def prepare_report_result(lhr: LighthouseResult) -> list[ReportCategory]:
    """Prepare every category of a result, in input order.

    Raises:
        DanglingReferenceError: On the first category with a broken reference.
    """
    return [
        prepare_category(category, lhr.audits, lhr.category_groups, lhr.stack_packs)
        for category in lhr.categories.values()
    ]
