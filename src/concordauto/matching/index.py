"""
Index du référentiel : structures de recherche construites une fois par snapshot.

Au lieu de filtrer tout le référentiel à chaque ligne, on construit des dictionnaires :
- makes : toutes les marques
- models_by_make : modèles observés sous chaque marque
- variants_by_make_model : versions observées sous chaque couple (marque, modèle)

Les pools de repli (tous les modèles, toutes les versions) ne servent que lorsque
le niveau parent n'est pas résolu.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from concordauto.matching.schema import Candidate, CanonicalEntry
from concordauto.normalize import display_form, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceIndex:
    """
    Index immuable du référentiel véhicules.

    Attributes:
        makes: Pool global des marques (affiché, normalisé).
        models_by_make: marque normalisée -> modèles (affiché, normalisé).
        variants_by_make_model: (marque, modèle) normalisés -> versions (affiché, normalisé).
        all_models: Pool de repli, union des modèles de toutes les marques.
        all_variants: Pool de repli, union des versions de tous les couples.
        entry_count: Nombre de triplets distincts indexés.
        dropped_count: Nombre d'entrées rejetées (champ vide).
    """

    makes: tuple[Candidate, ...] = ()
    models_by_make: Mapping[str, tuple[Candidate, ...]] = field(default_factory=lambda: MappingProxyType({}))
    variants_by_make_model: Mapping[tuple[str, str], tuple[Candidate, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    all_models: tuple[Candidate, ...] = ()
    all_variants: tuple[Candidate, ...] = ()
    entry_count: int = 0
    dropped_count: int = 0

    def __len__(self) -> int:
        return self.entry_count

    def candidates_for_make(self) -> tuple[Candidate, ...]:
        """Pool complet des marques."""
        return self.makes

    def candidates_for_model(self, normalized_make: str | None) -> tuple[Candidate, ...]:
        """Modèles de la marque si elle est connue, sinon tous les modèles."""
        if normalized_make is not None and normalized_make in self.models_by_make:
            return self.models_by_make[normalized_make]
        return self.all_models

    def candidates_for_variant(
        self,
        normalized_make: str | None,
        normalized_model: str | None,
    ) -> tuple[Candidate, ...]:
        """Versions du couple (marque, modèle) s'il est connu, sinon toutes les versions."""
        if normalized_make is not None and normalized_model is not None:
            key = (normalized_make, normalized_model)
            if key in self.variants_by_make_model:
                return self.variants_by_make_model[key]
        return self.all_variants

    def has_make(self, normalized_make: str) -> bool:
        return normalized_make in self.models_by_make


def _add(pool: dict[str, str], display: str, norm: str) -> None:
    # Premier libellé affiché rencontré conservé
    if norm not in pool:
        pool[norm] = display


def _freeze(pool: dict[str, str]) -> tuple[Candidate, ...]:
    return tuple((display, norm) for norm, display in pool.items())


def build_index(entries: Iterable[CanonicalEntry]) -> ReferenceIndex:
    """
    Construit l'index à partir d'un snapshot du référentiel.

    Les doublons (après normalisation) sont fusionnés. Une entrée dont un champ
    est vide est ignorée avec un avertissement : un référentiel partiel reste utilisable.

    Args:
        entries: Triplets canoniques (Marque, Modèle, Version).

    Returns:
        ReferenceIndex prêt à l'emploi.
    """
    makes: dict[str, str] = {}
    models_by_make: dict[str, dict[str, str]] = {}
    variants_by_make_model: dict[tuple[str, str], dict[str, str]] = {}
    all_models: dict[str, str] = {}
    all_variants: dict[str, str] = {}
    seen: set[tuple[str, str, str]] = set()
    dropped = 0
    total = 0

    for i, entry in enumerate(entries):
        total += 1
        make_d = display_form(entry.make)
        model_d = display_form(entry.model)
        variant_d = display_form(entry.variant)
        make_n, model_n, variant_n = normalize(make_d), normalize(model_d), normalize(variant_d)

        if not make_n or not model_n or not variant_n:
            dropped += 1
            logger.warning(
                "Entrée de référentiel #%d ignorée (champ vide): make=%r model=%r variant=%r",
                i,
                entry.make,
                entry.model,
                entry.variant,
            )
            continue

        key = (make_n, model_n, variant_n)
        if key in seen:
            continue
        seen.add(key)

        _add(makes, make_d, make_n)
        _add(models_by_make.setdefault(make_n, {}), model_d, model_n)
        _add(variants_by_make_model.setdefault((make_n, model_n), {}), variant_d, variant_n)
        _add(all_models, model_d, model_n)
        _add(all_variants, variant_d, variant_n)

    if dropped:
        logger.warning("%d entrée(s) de référentiel ignorée(s) sur %d", dropped, total)
    logger.info(
        "Index construit: %d triplets, %d marques, %d modèles, %d versions",
        len(seen),
        len(makes),
        len(all_models),
        len(all_variants),
    )

    return ReferenceIndex(
        makes=_freeze(makes),
        models_by_make=MappingProxyType({k: _freeze(v) for k, v in models_by_make.items()}),
        variants_by_make_model=MappingProxyType({k: _freeze(v) for k, v in variants_by_make_model.items()}),
        all_models=_freeze(all_models),
        all_variants=_freeze(all_variants),
        entry_count=len(seen),
        dropped_count=dropped,
    )
