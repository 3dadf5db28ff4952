"""Génération du rapport et des onglets REPORT / VERDICTS."""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from concordauto import __version__
from concordauto.config import MatchConfig
from concordauto.matching.schema import RowVerdict
from concordauto.matching.validator import summarize_verdicts


def build_report_df(
    verdicts: list[RowVerdict],
    config: MatchConfig,
) -> pd.DataFrame:
    """
    Construit le DataFrame pour l'onglet REPORT.

    Contient : nb lignes, nb valides, nb à revoir, nb invalides, répartition par
    pire statut, paramètres, horodatage, version.
    """
    summary = summarize_verdicts(verdicts)

    rows = [
        ("Metric", "Value"),
        ("nb_rows", summary.total),
        ("nb_valid", summary.valid),
        ("nb_needs_review", summary.needs_review),
        ("nb_invalid", summary.invalid),
        ("", ""),
        ("Worst status", ""),
    ]
    for status in ("exact", "auto_corrected", "needs_review", "no_match"):
        rows.append((f"worst_{status}", summary.by_status.get(status, 0)))

    rows.extend(
        [
            ("", ""),
            ("Parameters", ""),
            ("auto_correct_threshold", config.auto_correct_threshold),
            ("review_threshold", config.review_threshold),
            ("max_suggestions", config.max_suggestions),
            ("", ""),
            ("timestamp", datetime.now().isoformat()),
            ("version", __version__),
        ]
    )

    return pd.DataFrame(rows, columns=["Key", "Value"])


def verdicts_to_df(verdicts: list[RowVerdict]) -> pd.DataFrame:
    """Une ligne par verdict et par champ : saisie, statut, confiance, valeur retenue, suggestions."""
    rows = []
    for v in verdicts:
        for field_name, r in v.field_results.items():
            rows.append(
                {
                    "row_index": v.row_index,
                    "category": v.category,
                    "field": field_name,
                    "original": r.original_value,
                    "status": r.status.value,
                    "confidence": r.confidence,
                    "matched": r.matched_value or "",
                    "suggestions": " | ".join(r.suggestions),
                }
            )
    return pd.DataFrame(
        rows,
        columns=["row_index", "category", "field", "original", "status", "confidence", "matched", "suggestions"],
    )


def print_report_console(verdicts: list[RowVerdict], config: MatchConfig) -> None:
    """Affiche un résumé du rapport en console."""
    summary = summarize_verdicts(verdicts)

    print("\n=== ConcordAuto Report ===")
    print(f"  Lignes:           {summary.total}")
    print(f"  Valides:          {summary.valid}")
    print(f"  À revoir:         {summary.needs_review}")
    print(f"  Invalides:        {summary.invalid}")
    print(f"  Seuils:           auto={config.auto_correct_threshold:g} revue={config.review_threshold:g}")
    print(f"  Version:          {__version__}")
    print(f"  Timestamp:        {datetime.now().isoformat()}")
    print("==========================\n")
