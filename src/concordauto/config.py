"""Configuration et chargement du fichier config JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

VALID_OVERWRITE_MODES = frozenset({"never", "if_empty", "always"})

DEFAULT_AUTO_CORRECT_THRESHOLD = 90.0
DEFAULT_REVIEW_THRESHOLD = 70.0
DEFAULT_MAX_SUGGESTIONS = 3


class ConcordAutoError(Exception):
    """Exception de base pour ConcordAuto."""


class ConfigError(ConcordAutoError, ValueError):
    """Erreur de validation de la configuration."""


class ConfigFileError(ConcordAutoError):
    """Erreur de chargement du fichier de configuration (fichier absent, JSON invalide)."""


def _pick(d: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Première clé présente dans d (accepte snake_case et camelCase)."""
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default


@dataclass(frozen=True)
class MatchConfig:
    """Seuils du matching approximatif."""

    auto_correct_threshold: float = DEFAULT_AUTO_CORRECT_THRESHOLD
    review_threshold: float = DEFAULT_REVIEW_THRESHOLD
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Vérifie la cohérence des seuils.

        Raises:
            ConfigError: Seuil hors [0, 100], seuils inversés ou max_suggestions < 1.
        """
        if not 0 <= self.auto_correct_threshold <= 100:
            raise ConfigError(
                f"auto_correct_threshold doit être entre 0 et 100 (got {self.auto_correct_threshold})"
            )
        if not 0 <= self.review_threshold <= 100:
            raise ConfigError(f"review_threshold doit être entre 0 et 100 (got {self.review_threshold})")
        if self.auto_correct_threshold < self.review_threshold:
            raise ConfigError(
                "auto_correct_threshold doit être >= review_threshold "
                f"(got {self.auto_correct_threshold} < {self.review_threshold})"
            )
        if self.max_suggestions < 1:
            raise ConfigError(f"max_suggestions doit être >= 1 (got {self.max_suggestions})")

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MatchConfig:
        try:
            auto = float(
                _pick(d, "auto_correct_threshold", "autoCorrectThreshold", default=DEFAULT_AUTO_CORRECT_THRESHOLD)
            )
            review = float(_pick(d, "review_threshold", "reviewThreshold", default=DEFAULT_REVIEW_THRESHOLD))
            max_suggestions = int(_pick(d, "max_suggestions", "maxSuggestions", default=DEFAULT_MAX_SUGGESTIONS))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Valeur de seuil invalide: {e}") from e
        return cls(
            auto_correct_threshold=auto,
            review_threshold=review,
            max_suggestions=max_suggestions,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "auto_correct_threshold": self.auto_correct_threshold,
            "review_threshold": self.review_threshold,
            "max_suggestions": self.max_suggestions,
        }


@dataclass
class ColumnMapping:
    """Noms des colonnes Marque/Modèle/Version dans un tableur."""

    make: str = "make"
    model: str = "model"
    variant: str = "variant"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ColumnMapping:
        mapping = cls(
            make=str(d.get("make", "make")),
            model=str(d.get("model", "model")),
            variant=str(d.get("variant", "variant")),
        )
        cols = [mapping.make, mapping.model, mapping.variant]
        if any(not c.strip() for c in cols):
            raise ConfigError(f"Nom de colonne vide dans le mapping: {cols}")
        if len(set(cols)) != 3:
            raise ConfigError(f"Colonnes make/model/variant en double: {cols}")
        return mapping

    def as_list(self) -> list[str]:
        return [self.make, self.model, self.variant]


@dataclass
class AppConfig:
    """Configuration complète de la ligne de commande (seuils + tableurs)."""

    match: MatchConfig = field(default_factory=MatchConfig)
    catalog_columns: ColumnMapping = field(default_factory=ColumnMapping)
    input_columns: ColumnMapping = field(default_factory=ColumnMapping)
    catalog_sheet: str | None = None  # None = première feuille
    input_sheet: str | None = None
    overwrite_mode: str = "always"  # never, if_empty, always

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AppConfig:
        overwrite_mode = d.get("overwrite_mode", "always")
        if overwrite_mode not in VALID_OVERWRITE_MODES:
            raise ConfigError(f"overwrite_mode invalide: {overwrite_mode!r}. Valides: {sorted(VALID_OVERWRITE_MODES)}")

        match_d = d.get("match", d)
        if not isinstance(match_d, dict):
            raise ConfigError("La section 'match' doit être un objet")

        return cls(
            match=MatchConfig.from_dict(match_d),
            catalog_columns=ColumnMapping.from_dict(d.get("catalog_columns", {})),
            input_columns=ColumnMapping.from_dict(d.get("input_columns", {})),
            catalog_sheet=d.get("catalog_sheet"),
            input_sheet=d.get("input_sheet"),
            overwrite_mode=overwrite_mode,
        )

    @classmethod
    def load(cls, path: str | Path) -> AppConfig:
        """
        Charge la configuration depuis un fichier JSON.

        Raises:
            ConfigFileError: Si le fichier est absent ou le JSON invalide.
            ConfigError: Si la configuration est invalide.
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigFileError(f"Fichier de configuration introuvable: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                d = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"JSON invalide dans {path}: {e}") from e
        except OSError as e:
            raise ConfigFileError(f"Impossible de lire {path}: {e}") from e

        if not isinstance(d, dict):
            raise ConfigFileError(f"Fichier de configuration invalide: {path} doit contenir un objet JSON")

        return cls.from_dict(d)
