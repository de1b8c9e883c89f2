"""Sort audits into clumps."""

from lhreport.core.exceptions import UnknownDisplayModeError
from lhreport.protocol.models import ScoreDisplayMode
from lhreport.report.models import CLUMP_ORDER, Clump, ReportAuditRef, ReportCategory

# Display modes decided by score and warnings rather than by the mode itself
SCORE_DECIDED_MODES = frozenset(
    {
        ScoreDisplayMode.BINARY,
        ScoreDisplayMode.NUMERIC,
        ScoreDisplayMode.INFORMATIVE,
        ScoreDisplayMode.ERROR,
    }
)

# Display modes that map straight to a clump
MODE_CLUMPS: dict[ScoreDisplayMode, Clump] = {
    ScoreDisplayMode.MANUAL: Clump.MANUAL,
    ScoreDisplayMode.NOT_APPLICABLE: Clump.NOT_APPLICABLE,
}


def classify(audit_ref: ReportAuditRef) -> Clump:
    """
    Return the clump an audit belongs to.

    Rules, first match wins:
        1. manual mode              -> MANUAL
        2. notApplicable mode       -> NOT_APPLICABLE
        3. score == 1, no warnings  -> PASSED
        4. score == 1, warnings     -> WARNING
        5. anything else            -> FAILED

    Only passing audits move to WARNING; a failing audit keeps its warnings
    and stays FAILED. informative and error audits follow rules 3-5 like any
    scored audit.

    Raises:
        UnknownDisplayModeError: If the mode is covered by neither rule set.
    """
    result = audit_ref.result
    mode = result.score_display_mode

    if mode in MODE_CLUMPS:
        return MODE_CLUMPS[mode]
    if mode not in SCORE_DECIDED_MODES:
        raise UnknownDisplayModeError(str(mode), audit_ref.id)

    if result.score == 1:
        return Clump.WARNING if result.warning_list else Clump.PASSED
    return Clump.FAILED


def clump_audit_refs(
    category: ReportCategory,
) -> dict[Clump, list[ReportAuditRef]]:
    """
    Partition a category's refs by clump.

    Returns:
        Every clump in presentation order mapped to its members, in the
        order they appear in the category. Empty clumps map to [].
    """
    clumps: dict[Clump, list[ReportAuditRef]] = {clump: [] for clump in CLUMP_ORDER}
    for ref in category.audit_refs:
        clumps[classify(ref)].append(ref)
    return clumps
