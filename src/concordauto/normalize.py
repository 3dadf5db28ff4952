"""Normalisation des libellés Marque/Modèle/Version pour comparaison."""

from __future__ import annotations

import re
import unicodedata
from typing import Any

# Ponctuation retirée : tirets, points, parenthèses
_STRIPPED_PUNCTUATION = re.compile(r"[-.()‐-―]")
_WHITESPACE = re.compile(r"\s+")


def _is_missing(s: Any) -> bool:
    return s is None or (isinstance(s, float) and (s != s or s == float("inf")))


def normalize(s: str | float | int | None) -> str:
    """
    Normalise un libellé : NFKC, lower, ponctuation retirée, espaces multiples → espace simple, strip.

    Sert uniquement à la comparaison, jamais à l'affichage.

    >>> normalize("  Mercedes-Benz  (W204) ")
    'mercedesbenz w204'
    """
    if _is_missing(s):
        return ""
    text = unicodedata.normalize("NFKC", str(s))
    text = text.lower()
    text = _STRIPPED_PUNCTUATION.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def safe_str(val: Any) -> str:
    """Convertit une valeur en chaîne pour affichage/stockage."""
    if _is_missing(val):
        return ""
    return str(val)


def display_form(val: Any) -> str:
    """Forme d'affichage d'un libellé canonique : texte d'origine, espaces superflus retirés."""
    return _WHITESPACE.sub(" ", safe_str(val)).strip()
