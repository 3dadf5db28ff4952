"""
Résolution hiérarchique d'une ligne Marque → Modèle → Version.

Chaque niveau restreint le pool du niveau suivant à ce qui a été observé sous
la valeur résolue du parent. Un parent non résolu élargit le pool au repli
global : moins de précision, mais des suggestions restent disponibles.
"""

from __future__ import annotations

import logging

from concordauto.config import MatchConfig
from concordauto.matching.index import ReferenceIndex
from concordauto.matching.matcher import FieldMatcher
from concordauto.matching.schema import FieldMatchResult, InputRow, MatchStatus, RowVerdict
from concordauto.normalize import normalize

logger = logging.getLogger(__name__)


def effective_value(result: FieldMatchResult) -> str | None:
    """Valeur normalisée utilisable pour restreindre le niveau suivant, ou None."""
    if result.status.is_resolved and result.matched_value is not None:
        return normalize(result.matched_value)
    return None


def corrected_value(result: FieldMatchResult) -> str | None:
    """Libellé canonique à reprendre tel quel, ou None si un humain doit trancher."""
    return result.matched_value if result.status.is_resolved else None


class RowResolver:
    """Applique le matching en cascade sur une ligne."""

    def __init__(self, config: MatchConfig | None = None) -> None:
        self.config = config or MatchConfig()
        self.matcher = FieldMatcher(self.config)

    def resolve(self, row: InputRow, index: ReferenceIndex) -> RowVerdict:
        make_result = self.matcher.match(row.make, index.candidates_for_make())
        make_key = effective_value(make_result)

        model_result = self.matcher.match(row.model, index.candidates_for_model(make_key))
        model_key = effective_value(model_result)

        variant_result = self.matcher.match(row.variant, index.candidates_for_variant(make_key, model_key))

        worst = MatchStatus.worst(make_result.status, model_result.status, variant_result.status)
        verdict = RowVerdict(
            row_index=row.row_index,
            make_result=make_result,
            model_result=model_result,
            variant_result=variant_result,
            is_valid=worst.is_resolved,
            needs_review=worst is MatchStatus.NEEDS_REVIEW,
            corrected_make=corrected_value(make_result),
            corrected_model=corrected_value(model_result),
            corrected_variant=corrected_value(variant_result),
        )
        logger.debug(
            "Ligne %d: make=%s model=%s variant=%s -> %s",
            row.row_index,
            make_result.status.value,
            model_result.status.value,
            variant_result.status.value,
            verdict.category,
        )
        return verdict
