"""Moteur de réconciliation : index, matching par champ, cascade et lots."""

from concordauto.matching.index import ReferenceIndex, build_index
from concordauto.matching.matcher import FieldMatcher
from concordauto.matching.resolver import RowResolver
from concordauto.matching.schema import (
    BatchSummary,
    CanonicalEntry,
    FieldMatchResult,
    InputRow,
    MatchStatus,
    RowVerdict,
)
from concordauto.matching.validator import BatchValidator, summarize_verdicts

__all__ = [
    "BatchSummary",
    "BatchValidator",
    "CanonicalEntry",
    "FieldMatchResult",
    "FieldMatcher",
    "InputRow",
    "MatchStatus",
    "ReferenceIndex",
    "RowResolver",
    "RowVerdict",
    "build_index",
    "summarize_verdicts",
]
