"""Arrange the members of a clump into runs."""

from collections.abc import Sequence

from lhreport.report.models import AuditRun, Clump, ReportAuditRef

# Clumps rendered as one flat list unless configured otherwise
DEFAULT_FLAT_CLUMPS = frozenset({Clump.PASSED})


def organize(
    members: Sequence[ReportAuditRef], grouping_enabled: bool
) -> tuple[AuditRun, ...]:
    """
    Split clump members into runs.

    With grouping disabled all members form a single ungrouped run. With
    grouping enabled, ungrouped members come first as one run each, then one
    run per group in order of the group's first appearance. A group's run
    holds all of its members in their original relative order, even where
    other groups were interleaved with them.

    Args:
        members: Clump members in category order.
        grouping_enabled: Whether to coalesce members by group.

    Returns:
        Runs covering every member exactly once. Empty when there are no
        members.
    """
    if not members:
        return ()

    if not grouping_enabled:
        return (AuditRun(audit_refs=tuple(members)),)

    standalone: list[AuditRun] = []
    grouped: dict[str, list[ReportAuditRef]] = {}

    for ref in members:
        if ref.group is None:
            standalone.append(AuditRun(audit_refs=(ref,)))
        else:
            grouped.setdefault(ref.group, []).append(ref)

    runs = [
        AuditRun(group=group, group_info=refs[0].group_info, audit_refs=tuple(refs))
        for group, refs in grouped.items()
    ]
    return tuple(standalone + runs)
