"""I/O tableurs : référentiel et fichiers d'import vendeur (Excel, ODS, CSV)."""

from __future__ import annotations

import csv
from pathlib import Path

import pandas as pd

from concordauto.config import ColumnMapping, ConcordAutoError
from concordauto.matching.schema import CanonicalEntry, InputRow
from concordauto.normalize import safe_str

# Formats supportés
SUPPORTED_INPUT_EXTENSIONS = (".xlsx", ".xls", ".ods", ".csv")


class ExcelFileError(ConcordAutoError):
    """Erreur de chargement d'un fichier (fichier absent, feuille ou colonne inexistante)."""


def _get_engine(path: Path) -> str | None:
    """Retourne le moteur pandas selon l'extension, ou None pour auto."""
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        return "openpyxl"
    if suffix == ".xls":
        return "xlrd"
    if suffix in (".ods", ".odt"):
        return "odf"
    return None


def _is_csv(path: Path) -> bool:
    return path.suffix.lower() == ".csv"


def _detect_csv_delimiter(path: Path, encoding: str) -> str | None:
    try:
        with path.open("r", encoding=encoding) as f:
            sample_lines: list[str] = []
            for line in f:
                if line.strip() == "":
                    continue
                sample_lines.append(line)
                if len(sample_lines) >= 5:
                    break
    except OSError:
        return None
    if not sample_lines:
        return None
    sample = "".join(sample_lines)
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=[",", ";", "\t", "|"])
        return dialect.delimiter
    except csv.Error:
        first = sample_lines[0]
        counts = {d: first.count(d) for d in [",", ";", "\t", "|"]}
        best = max(counts, key=lambda d: counts[d])
        return best if counts[best] > 0 else None


def _open_excel(path: Path) -> pd.ExcelFile:
    try:
        engine = _get_engine(path)
        return pd.ExcelFile(path, engine=engine) if engine else pd.ExcelFile(path)
    except ImportError as e:
        ext = path.suffix.lower()
        if ext == ".xls":
            raise ExcelFileError(f"Format .xls requis: pip install xlrd. Détail: {e}") from e
        if ext in (".ods", ".odt"):
            raise ExcelFileError(f"Format ODS requis: pip install odfpy. Détail: {e}") from e
        raise ExcelFileError(f"Impossible de lire {path}: {e}") from e
    except Exception as e:
        raise ExcelFileError(f"Impossible de lire le fichier {path}: {e}") from e


def list_sheets(filepath: str | Path) -> list[str]:
    """
    Liste les noms des feuilles d'un fichier tableur.

    Raises:
        ExcelFileError: Si le fichier est absent ou illisible.
    """
    path = Path(filepath)
    if not path.exists():
        raise ExcelFileError(f"Fichier introuvable: {path}")
    if _is_csv(path):
        return ["(données)"]
    with _open_excel(path) as xl:
        return [str(s) for s in xl.sheet_names]


def _read_csv(path: Path) -> pd.DataFrame:
    for encoding in ("utf-8", "latin-1"):
        try:
            delimiter = _detect_csv_delimiter(path, encoding) or ","
            return pd.read_csv(path, dtype=str, encoding=encoding, sep=delimiter, keep_default_na=False)
        except UnicodeDecodeError:
            continue
        except pd.errors.ParserError as e:
            raise ExcelFileError(f"Erreur CSV {path}: {e}. Vérifiez le séparateur.") from e
        except Exception as e:
            raise ExcelFileError(f"Erreur CSV {path}: {e}") from e
    raise ExcelFileError(f"Erreur CSV {path}: encodage non reconnu")


def load_sheet(filepath: str | Path, sheet_name: str | None = None) -> pd.DataFrame:
    """
    Charge une feuille dans un DataFrame en préservant le texte.

    Args:
        filepath: Chemin vers le fichier (.xlsx, .xls, .ods, .csv).
        sheet_name: Nom de la feuille (None = première). Ignoré pour CSV.

    Returns:
        DataFrame chargé, toutes colonnes en texte.

    Raises:
        ExcelFileError: Si le fichier est absent, illisible ou si la feuille n'existe pas.
    """
    path = Path(filepath)
    if not path.exists():
        raise ExcelFileError(f"Fichier introuvable: {path}")
    if _is_csv(path):
        return _read_csv(path)

    with _open_excel(path) as xl:
        if sheet_name is None:
            sheet_name = str(xl.sheet_names[0])
        elif sheet_name not in xl.sheet_names:
            sheets = [str(s) for s in xl.sheet_names]
            raise ExcelFileError(f"Feuille '{sheet_name}' introuvable dans {path}. Feuilles: {', '.join(sheets)}")
        try:
            return pd.read_excel(xl, sheet_name=sheet_name, dtype=str, keep_default_na=False)
        except Exception as e:
            raise ExcelFileError(f"Erreur feuille '{sheet_name}' dans {path}: {e}") from e


def _check_columns(df: pd.DataFrame, columns: ColumnMapping, path: str | Path) -> None:
    missing = [c for c in columns.as_list() if c not in df.columns]
    if missing:
        raise ExcelFileError(
            f"Colonnes absentes dans {path}: {', '.join(missing)}. Colonnes: {', '.join(map(str, df.columns))}"
        )


def entries_from_df(df: pd.DataFrame, columns: ColumnMapping | None = None) -> list[CanonicalEntry]:
    """Convertit un DataFrame de référentiel en triplets canoniques."""
    columns = columns or ColumnMapping()
    return [
        CanonicalEntry(
            make=safe_str(rec[columns.make]),
            model=safe_str(rec[columns.model]),
            variant=safe_str(rec[columns.variant]),
        )
        for rec in df[columns.as_list()].to_dict("records")
    ]


def rows_from_df(df: pd.DataFrame, columns: ColumnMapping | None = None) -> list[InputRow]:
    """Convertit un DataFrame d'import en lignes ; row_index = position 0-based de la ligne de données."""
    columns = columns or ColumnMapping()
    return [
        InputRow(
            row_index=i,
            make=safe_str(rec[columns.make]),
            model=safe_str(rec[columns.model]),
            variant=safe_str(rec[columns.variant]),
        )
        for i, rec in enumerate(df[columns.as_list()].to_dict("records"))
    ]


def load_catalog(
    filepath: str | Path,
    sheet_name: str | None = None,
    columns: ColumnMapping | None = None,
) -> list[CanonicalEntry]:
    """
    Charge le référentiel Marque/Modèle/Version depuis un tableur.

    Raises:
        ExcelFileError: Fichier illisible ou colonnes absentes.
    """
    columns = columns or ColumnMapping()
    df = load_sheet(filepath, sheet_name)
    _check_columns(df, columns, filepath)
    return entries_from_df(df, columns)


def load_rows(
    filepath: str | Path,
    sheet_name: str | None = None,
    columns: ColumnMapping | None = None,
) -> tuple[pd.DataFrame, list[InputRow]]:
    """
    Charge un fichier d'import vendeur.

    Returns:
        (DataFrame complet, lignes Marque/Modèle/Version)

    Raises:
        ExcelFileError: Fichier illisible ou colonnes absentes.
    """
    columns = columns or ColumnMapping()
    df = load_sheet(filepath, sheet_name)
    _check_columns(df, columns, filepath)
    return df, rows_from_df(df, columns)


def save_xlsx(
    filepath: str | Path,
    dataframes: dict[str, pd.DataFrame],
    *,
    header: bool = True,
    index: bool = False,
) -> None:
    """
    Sauvegarde plusieurs DataFrames dans un fichier xlsx (une feuille par DataFrame).

    Args:
        filepath: Chemin de sortie.
        dataframes: Dict {nom_feuille: DataFrame}.
    """
    with pd.ExcelWriter(filepath, engine="openpyxl") as writer:
        for sheet_name, df in dataframes.items():
            # Nettoyer le nom de feuille (Excel limite à 31 caractères)
            safe_name = str(sheet_name)[:31]
            df.to_excel(writer, sheet_name=safe_name, index=index, header=header)
