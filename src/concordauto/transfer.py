"""Report des valeurs corrigées dans le tableau d'import."""

from __future__ import annotations

import pandas as pd

from concordauto.config import ColumnMapping
from concordauto.matching.schema import RowVerdict

STATUS_COLUMN = "mmv_status"


def apply_corrections(
    df_input: pd.DataFrame,
    verdicts: list[RowVerdict],
    columns: ColumnMapping | None = None,
    *,
    overwrite_mode: str = "always",
    suffix_on_collision: str = "_corrected",
    status_column: str = STATUS_COLUMN,
) -> pd.DataFrame:
    """
    Écrit les libellés canoniques retenus dans une copie du tableau d'import.

    Args:
        df_input: DataFrame d'import (copie, non modifié).
        verdicts: Verdicts dont row_index est la position de la ligne.
        columns: Colonnes Marque/Modèle/Version.
        overwrite_mode: always (remplace), if_empty (seulement cellules vides),
            never (écrit dans une colonne suffixée).
        suffix_on_collision: Suffixe des colonnes créées en mode never.
        status_column: Colonne recevant valid / needs_review / invalid.

    Returns:
        Nouveau DataFrame corrigé.
    """
    out = df_input.copy()
    columns = columns or ColumnMapping()

    targets: dict[str, str] = {}
    for field_name, col in (("make", columns.make), ("model", columns.model), ("variant", columns.variant)):
        target_col = col
        if overwrite_mode == "never":
            target_col = col + suffix_on_collision
        if target_col not in out.columns:
            out[target_col] = pd.NA
        targets[field_name] = target_col

    if status_column not in out.columns:
        out[status_column] = pd.NA
    status_idx = out.columns.get_loc(status_column)

    for v in verdicts:
        if not 0 <= v.row_index < len(out):
            continue
        corrected = {
            "make": v.corrected_make,
            "model": v.corrected_model,
            "variant": v.corrected_variant,
        }
        for field_name, target_col in targets.items():
            val = corrected[field_name]
            if val is None:
                continue
            col_idx = out.columns.get_loc(target_col)
            existing = out.iat[v.row_index, col_idx]  # type: ignore[index]
            if overwrite_mode == "if_empty" and not (pd.isna(existing) or str(existing).strip() == ""):
                continue
            out.iat[v.row_index, col_idx] = val  # type: ignore[index]
        out.iat[v.row_index, status_idx] = v.category  # type: ignore[index]

    return out


def build_mapping_csv(
    verdicts: list[RowVerdict],
    output_path: str,
) -> None:
    """
    Génère mapping.csv : une ligne par verdict avec statuts, confiances et valeurs corrigées.
    """
    rows = []
    for v in verdicts:
        rows.append(
            {
                "row_index": v.row_index,
                "category": v.category,
                "make_status": v.make_result.status.value,
                "make_confidence": v.make_result.confidence,
                "corrected_make": v.corrected_make or "",
                "model_status": v.model_result.status.value,
                "model_confidence": v.model_result.confidence,
                "corrected_model": v.corrected_model or "",
                "variant_status": v.variant_result.status.value,
                "variant_confidence": v.variant_result.confidence,
                "corrected_variant": v.corrected_variant or "",
            }
        )
    df = pd.DataFrame(rows)
    df.to_csv(output_path, index=False, encoding="utf-8")
