"""Schémas et types pour la réconciliation Marque/Modèle/Version."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from concordauto.normalize import safe_str


class MatchStatus(str, Enum):
    """Statut d'un champ, du meilleur au pire : exact > auto_corrected > needs_review > no_match."""

    EXACT = "exact"
    AUTO_CORRECTED = "auto_corrected"
    NEEDS_REVIEW = "needs_review"
    NO_MATCH = "no_match"

    @property
    def rank(self) -> int:
        """0 = meilleur, 3 = pire."""
        return _STATUS_RANK[self]

    @property
    def is_resolved(self) -> bool:
        """True si la valeur canonique peut être reprise sans intervention humaine."""
        return self in (MatchStatus.EXACT, MatchStatus.AUTO_CORRECTED)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MatchStatus):
            return NotImplemented
        # a < b : a est pire que b
        return self.rank > other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, MatchStatus):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, MatchStatus):
            return NotImplemented
        return self.rank < other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, MatchStatus):
            return NotImplemented
        return self.rank <= other.rank

    @classmethod
    def worst(cls, *statuses: MatchStatus) -> MatchStatus:
        return min(statuses)


_STATUS_RANK = {
    MatchStatus.EXACT: 0,
    MatchStatus.AUTO_CORRECTED: 1,
    MatchStatus.NEEDS_REVIEW: 2,
    MatchStatus.NO_MATCH: 3,
}


@dataclass(frozen=True)
class CanonicalEntry:
    """Un triplet valide du référentiel véhicules."""

    make: str
    model: str
    variant: str

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CanonicalEntry:
        return cls(
            make=safe_str(d.get("make")),
            model=safe_str(d.get("model")),
            variant=safe_str(d.get("variant")),
        )


@dataclass(frozen=True)
class InputRow:
    """Une ligne saisie par le vendeur."""

    row_index: int
    make: str
    model: str
    variant: str

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> InputRow:
        """Accepte rowIndex (payload web) ou row_index."""
        idx = d.get("rowIndex", d.get("row_index"))
        if idx is None:
            raise ValueError(f"rowIndex manquant: {d!r}")
        return cls(
            row_index=int(idx),
            make=safe_str(d.get("make")),
            model=safe_str(d.get("model")),
            variant=safe_str(d.get("variant")),
        )


# (libellé affiché, libellé normalisé)
Candidate = tuple[str, str]


@dataclass(frozen=True)
class FieldMatchResult:
    """Résultat du matching d'un champ contre un pool de candidats."""

    original_value: str
    normalized_value: str
    matched_value: str | None
    confidence: float
    status: MatchStatus
    suggestions: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return (
            f"FieldMatchResult({self.original_value!r} -> {self.matched_value!r}, "
            f"{self.status.value}, confidence={self.confidence:.1f})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalValue": self.original_value,
            "normalizedValue": self.normalized_value,
            "matchedValue": self.matched_value,
            "confidence": self.confidence,
            "status": self.status.value,
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class RowVerdict:
    """Verdict pour une ligne : un résultat par champ et le statut global."""

    row_index: int
    make_result: FieldMatchResult
    model_result: FieldMatchResult
    variant_result: FieldMatchResult
    is_valid: bool
    needs_review: bool
    corrected_make: str | None = None
    corrected_model: str | None = None
    corrected_variant: str | None = None

    @property
    def field_results(self) -> dict[str, FieldMatchResult]:
        return {
            "make": self.make_result,
            "model": self.model_result,
            "variant": self.variant_result,
        }

    @property
    def worst_status(self) -> MatchStatus:
        return MatchStatus.worst(self.make_result.status, self.model_result.status, self.variant_result.status)

    @property
    def category(self) -> str:
        """valid, needs_review ou invalid."""
        if self.is_valid:
            return "valid"
        if self.needs_review:
            return "needs_review"
        return "invalid"

    def to_dict(self) -> dict[str, Any]:
        return {
            "rowIndex": self.row_index,
            "makeResult": self.make_result.to_dict(),
            "modelResult": self.model_result.to_dict(),
            "variantResult": self.variant_result.to_dict(),
            "isValid": self.is_valid,
            "needsReview": self.needs_review,
            "correctedMake": self.corrected_make,
            "correctedModel": self.corrected_model,
            "correctedVariant": self.corrected_variant,
        }


@dataclass
class BatchSummary:
    """Comptes par catégorie pour un lot."""

    total: int = 0
    valid: int = 0
    needs_review: int = 0
    invalid: int = 0
    by_status: dict[str, int] = field(default_factory=dict)  # statut du pire champ -> nb lignes

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "valid": self.valid,
            "needsReview": self.needs_review,
            "invalid": self.invalid,
        }
