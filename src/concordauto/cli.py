"""Interface en ligne de commande ConcordAuto."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from concordauto import __version__
from concordauto.config import AppConfig, ConcordAutoError
from concordauto.io_excel import list_sheets, load_catalog, load_rows, save_xlsx
from concordauto.matching.index import build_index
from concordauto.matching.review import FIELDS, ReviewedRow, apply_review
from concordauto.matching.schema import RowVerdict
from concordauto.matching.validator import BatchValidator
from concordauto.report import build_report_df, print_report_console, verdicts_to_df
from concordauto.transfer import apply_corrections, build_mapping_csv


def cmd_list_sheets(filepath: str) -> int:
    """Liste les feuilles d'un fichier tableur."""
    sheets = list_sheets(filepath)
    print(f"Feuilles dans {filepath}:")
    for s in sheets:
        print(f"  - {s}")
    return 0


def _ask_field(field_name: str, verdict: RowVerdict) -> str | None:
    """Demande la valeur d'un champ non résolu. None = rejet de la ligne."""
    result = verdict.field_results[field_name]
    print(f"  {field_name}: {result.original_value!r} ({result.status.value}, {result.confidence:.1f})")
    for i, s in enumerate(result.suggestions):
        print(f"    [{i + 1}] {s}")
    print("    [0] Rejeter la ligne")
    print("    =valeur  Saisie libre (ex. =2008)")
    while True:
        inp = input(f"  Choix pour {field_name} (numéro ou saisie libre): ").strip()
        if inp == "0":
            return None
        if inp.startswith("="):
            value = inp[1:].strip()
            if value:
                return value
        elif inp.isdigit() and 1 <= int(inp) <= len(result.suggestions):
            return result.suggestions[int(inp) - 1]
        elif inp:
            # Hors menu : valeur saisie telle quelle (modèles numériques compris)
            return inp
        print("  Choix invalide, réessayez.")


def interactive_review(verdicts: list[RowVerdict]) -> list[ReviewedRow]:
    """
    Mode interactif : pour chaque ligne à revoir, demande une valeur par champ non résolu.

    Returns:
        Lignes prêtes pour l'import (valides + acceptées).
    """
    accepted: set[int] = set()
    rejected: set[int] = set()
    corrections: dict[int, dict[str, str]] = {}

    for v in verdicts:
        if not v.needs_review:
            continue
        print("\n" + "=" * 60)
        print(f"Ligne #{v.row_index}:")
        inp = input("[Entrée] Relire, [s] Passer: ").strip().lower()
        if inp == "s":
            continue
        fix: dict[str, str] = {}
        for field_name in FIELDS:
            if v.field_results[field_name].status.is_resolved:
                continue
            value = _ask_field(field_name, v)
            if value is None:
                rejected.add(v.row_index)
                break
            fix[field_name] = value
        else:
            accepted.add(v.row_index)
            corrections[v.row_index] = fix

    return apply_review(verdicts, accepted=accepted, rejected=rejected, corrections=corrections)


def _reviewed_to_df(rows: list[ReviewedRow]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"row_index": r.row_index, "make": r.make, "model": r.model, "variant": r.variant, "source": r.source} for r in rows],
        columns=["row_index", "make", "model", "variant", "source"],
    )


def cmd_validate(
    catalog_path: str,
    input_path: str,
    output_path: str | None,
    *,
    config_path: str | None = None,
    dry_run: bool = False,
    interactive: bool = False,
    mapping_path: str | None = None,
) -> int:
    """Valide un fichier d'import contre le référentiel."""
    config = AppConfig.load(config_path) if config_path else AppConfig()

    entries = load_catalog(catalog_path, config.catalog_sheet, config.catalog_columns)
    index = build_index(entries)
    df_input, rows = load_rows(input_path, config.input_sheet, config.input_columns)

    validator = BatchValidator(config.match)
    verdicts = validator.validate_batch(rows, index)

    if interactive:
        ready = interactive_review(verdicts)
    else:
        ready = apply_review(verdicts)

    # mapping.csv (--mapping prime s'il est fourni)
    map_path = (
        Path(mapping_path)
        if mapping_path
        else (Path(output_path).parent / "mapping.csv" if output_path else Path(input_path).parent / "mapping.csv")
    )
    build_mapping_csv(verdicts, str(map_path))
    print(f"Mapping écrit: {map_path}")

    print_report_console(verdicts, config.match)
    print(f"Lignes prêtes pour l'import: {len(ready)}")

    if dry_run:
        print("Mode dry-run: pas d'écriture du fichier de sortie.")
        return 0

    if not output_path:
        print("Erreur: --output requis en mode non dry-run.")
        return 1

    df_corrected = apply_corrections(
        df_input,
        verdicts,
        config.input_columns,
        overwrite_mode=config.overwrite_mode,
    )
    sheets = {
        "Import": df_corrected,
        "READY": _reviewed_to_df(ready),
        "VERDICTS": verdicts_to_df(verdicts),
        "REPORT": build_report_df(verdicts, config.match),
    }
    save_xlsx(output_path, sheets)
    print(f"Fichier de sortie: {output_path}")

    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="concordauto",
        description="Réconciliation Marque/Modèle/Version contre le référentiel véhicules",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Journalisation détaillée")

    subparsers = parser.add_subparsers(dest="command", help="Commandes")

    # list-sheets
    p_list = subparsers.add_parser("list-sheets", help="Lister les feuilles d'un tableur")
    p_list.add_argument("file", help="Fichier tableur")

    # validate
    p_val = subparsers.add_parser("validate", help="Valider un fichier d'import")
    p_val.add_argument("--catalog", required=True, help="Tableur du référentiel (make, model, variant)")
    p_val.add_argument("--input", "-f", required=True, help="Tableur d'import vendeur")
    p_val.add_argument("--config", "-c", help="Fichier config JSON")
    p_val.add_argument("--output", "-o", help="Fichier xlsx de sortie")
    p_val.add_argument("--dry-run", action="store_true", help="Ne pas écrire le fichier de sortie")
    p_val.add_argument("--interactive", "-i", action="store_true", help="Relecture interactive des lignes à revoir")
    p_val.add_argument("--mapping", "-m", help="Chemin pour mapping.csv")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "list-sheets":
            return cmd_list_sheets(args.file)

        if args.command == "validate":
            if not args.dry_run and not args.output:
                parser.error("--output requis sauf en --dry-run")
            return cmd_validate(
                args.catalog,
                args.input,
                args.output,
                config_path=args.config,
                dry_run=args.dry_run,
                interactive=args.interactive,
                mapping_path=args.mapping,
            )
    except ConcordAutoError as e:
        print(f"Erreur: {e}")
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
