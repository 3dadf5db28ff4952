"""Application des décisions du relecteur avant import."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from concordauto.config import ConcordAutoError
from concordauto.matching.schema import RowVerdict

FIELDS = ("make", "model", "variant")


class ReviewError(ConcordAutoError, ValueError):
    """Décision de relecture incohérente (ligne inconnue, champ invalide, valeur manquante)."""


@dataclass(frozen=True)
class ReviewedRow:
    """Ligne prête pour l'import."""

    row_index: int
    make: str
    model: str
    variant: str
    source: str  # auto, reviewer


def apply_review(
    verdicts: list[RowVerdict],
    *,
    accepted: Iterable[int] = (),
    rejected: Iterable[int] = (),
    corrections: Mapping[int, Mapping[str, str]] | None = None,
) -> list[ReviewedRow]:
    """
    Construit la liste des lignes à importer à partir des choix du relecteur.

    - rejetée : toujours exclue ;
    - valide : incluse par défaut ;
    - acceptée par le relecteur : incluse ;
    - corrections : {row_index: {"make"|"model"|"variant": valeur}} remplacent les valeurs corrigées.

    Raises:
        ReviewError: Ligne inconnue, champ de correction invalide, ou ligne acceptée
            à laquelle il manque encore une valeur.
    """
    accepted_set = set(accepted)
    rejected_set = set(rejected)
    corrections = corrections or {}
    known = {v.row_index for v in verdicts}

    for idx in accepted_set | rejected_set | set(corrections):
        if idx not in known:
            raise ReviewError(f"Ligne inconnue dans la relecture: {idx}")
    both = accepted_set & rejected_set
    if both:
        raise ReviewError(f"Lignes à la fois acceptées et rejetées: {sorted(both)}")
    for idx, fields in corrections.items():
        bad = set(fields) - set(FIELDS)
        if bad:
            raise ReviewError(f"Champ de correction invalide pour la ligne {idx}: {sorted(bad)}")

    out: list[ReviewedRow] = []
    for v in verdicts:
        if v.row_index in rejected_set:
            continue
        if v.row_index in accepted_set:
            source = "reviewer"
        elif v.is_valid:
            source = "auto"
        else:
            continue

        fix = corrections.get(v.row_index, {})
        values = {
            "make": fix.get("make") or v.corrected_make,
            "model": fix.get("model") or v.corrected_model,
            "variant": fix.get("variant") or v.corrected_variant,
        }
        missing = [f for f in FIELDS if not values[f]]
        if missing:
            raise ReviewError(f"Ligne {v.row_index} acceptée sans valeur pour: {', '.join(missing)}")
        if fix and source == "auto":
            source = "reviewer"

        out.append(
            ReviewedRow(
                row_index=v.row_index,
                make=values["make"],  # type: ignore[arg-type]
                model=values["model"],  # type: ignore[arg-type]
                variant=values["variant"],  # type: ignore[arg-type]
                source=source,
            )
        )
    return out
