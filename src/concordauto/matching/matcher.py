"""Matching d'un champ saisi contre un pool de candidats canoniques."""

from __future__ import annotations

from collections.abc import Sequence

from concordauto.config import MatchConfig
from concordauto.matching.schema import Candidate, FieldMatchResult, MatchStatus
from concordauto.matching.scorers import rank_candidates
from concordauto.normalize import normalize, safe_str


class FieldMatcher:
    """Note une valeur contre des candidats et classe le meilleur par seuils."""

    def __init__(self, config: MatchConfig | None = None) -> None:
        self.config = config or MatchConfig()

    def classify(self, confidence: float) -> MatchStatus:
        """Statut correspondant à un score (hors égalité exacte)."""
        if confidence >= self.config.auto_correct_threshold:
            return MatchStatus.AUTO_CORRECTED
        if confidence >= self.config.review_threshold:
            return MatchStatus.NEEDS_REVIEW
        return MatchStatus.NO_MATCH

    def match(self, value: str | None, candidates: Sequence[Candidate]) -> FieldMatchResult:
        """
        Cherche le meilleur candidat pour une valeur saisie.

        Args:
            value: Valeur brute saisie par le vendeur.
            candidates: Pool (affiché, normalisé) issu de l'index.

        Returns:
            FieldMatchResult : exact (100), auto_corrected, needs_review ou no_match,
            avec jusqu'à max_suggestions libellés canoniques.
        """
        original = safe_str(value)
        norm = normalize(original)

        if not norm or not candidates:
            return FieldMatchResult(
                original_value=original,
                normalized_value=norm,
                matched_value=None,
                confidence=0.0,
                status=MatchStatus.NO_MATCH,
            )

        ranked = rank_candidates(norm, candidates)

        for display, cand_norm in candidates:
            if cand_norm == norm:
                # Le libellé exact en tête, puis les suivants du classement
                others = [c.display for c in ranked if c.display != display]
                return FieldMatchResult(
                    original_value=original,
                    normalized_value=norm,
                    matched_value=display,
                    confidence=100.0,
                    status=MatchStatus.EXACT,
                    suggestions=(display, *others[: self.config.max_suggestions - 1]),
                )

        best = ranked[0]
        confidence = min(100.0, max(0.0, best.score))
        status = self.classify(confidence)

        return FieldMatchResult(
            original_value=original,
            normalized_value=norm,
            matched_value=best.display if status is MatchStatus.AUTO_CORRECTED else None,
            confidence=confidence,
            status=status,
            suggestions=tuple(c.display for c in ranked[: self.config.max_suggestions]),
        )
