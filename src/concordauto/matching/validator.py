"""Validation d'un lot de lignes contre l'index du référentiel."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from concordauto.config import MatchConfig
from concordauto.matching.index import ReferenceIndex
from concordauto.matching.resolver import RowResolver
from concordauto.matching.schema import BatchSummary, InputRow, RowVerdict

logger = logging.getLogger(__name__)


class BatchValidator:
    """Applique RowResolver à chaque ligne d'un lot, dans l'ordre."""

    def __init__(self, config: MatchConfig | None = None) -> None:
        self.config = config or MatchConfig()
        self.resolver = RowResolver(self.config)

    def validate_batch(self, rows: Iterable[InputRow], index: ReferenceIndex) -> list[RowVerdict]:
        """
        Valide toutes les lignes du lot.

        Les lignes sont indépendantes : la sortie a la même longueur et le même ordre que l'entrée.

        Returns:
            Liste de RowVerdict, un par ligne.
        """
        verdicts = [self.resolver.resolve(row, index) for row in rows]
        summary = summarize_verdicts(verdicts)
        logger.info(
            "Lot validé: %d lignes (%d valides, %d à revoir, %d invalides)",
            summary.total,
            summary.valid,
            summary.needs_review,
            summary.invalid,
        )
        return verdicts

    def validate_records(self, records: Iterable[Mapping[str, Any]], index: ReferenceIndex) -> list[RowVerdict]:
        """Variante acceptant des dicts {rowIndex, make, model, variant}."""
        return self.validate_batch([InputRow.from_dict(dict(r)) for r in records], index)


def summarize_verdicts(verdicts: list[RowVerdict]) -> BatchSummary:
    """Compte les lignes valides, à revoir et invalides."""
    summary = BatchSummary(total=len(verdicts))
    for v in verdicts:
        if v.is_valid:
            summary.valid += 1
        elif v.needs_review:
            summary.needs_review += 1
        else:
            summary.invalid += 1
        worst = v.worst_status.value
        summary.by_status[worst] = summary.by_status.get(worst, 0) + 1
    return summary
