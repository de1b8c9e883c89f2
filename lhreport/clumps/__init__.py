"""Audit clumping and grouping."""

from lhreport.clumps.classifier import (
    MODE_CLUMPS,
    SCORE_DECIDED_MODES,
    classify,
    clump_audit_refs,
)
from lhreport.clumps.grouping import DEFAULT_FLAT_CLUMPS, organize

__all__ = [
    "DEFAULT_FLAT_CLUMPS",
    "MODE_CLUMPS",
    "SCORE_DECIDED_MODES",
    "classify",
    "clump_audit_refs",
    "organize",
]
