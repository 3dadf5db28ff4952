"""Calcul des scores de similarité entre libellés normalisés."""

from __future__ import annotations

from dataclasses import dataclass

from rapidfuzz.distance import LCSseq, Levenshtein, Prefix

# Part d'une unité d'édition que le bonus préfixe/inclusion peut ajouter.
# Reste < 1 : à longueurs égales, une distance plus faible garde toujours le meilleur score.
AFFINITY_WEIGHT = 0.9
MIN_PREFIX_LEN = 2


@dataclass(frozen=True)
class ScoredCandidate:
    """Un candidat noté pour une valeur saisie."""

    display: str
    normalized: str
    score: float
    distance: int

    def sort_key(self) -> tuple[float, int, int, str]:
        """Score décroissant, puis distance, longueur et libellé croissants."""
        return (-self.score, self.distance, len(self.normalized), self.display)


def common_prefix_len(a: str, b: str) -> int:
    return int(Prefix.similarity(a, b))


def is_subsequence(shorter: str, longer: str) -> bool:
    """Vrai si shorter s'obtient de longer par suppressions seules (ex. "hnda" / "honda")."""
    return int(LCSseq.similarity(shorter, longer)) == len(shorter)


def affinity(a: str, b: str) -> float:
    """
    Ressemblance structurelle (0-1) : 1 si l'un contient l'autre ou en est une
    sous-séquence (lettres omises), sinon part du préfixe commun.

    Un préfixe commun de moins de MIN_PREFIX_LEN caractères ne compte pas.
    """
    if not a or not b:
        return 0.0
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if shorter in longer or is_subsequence(shorter, longer):
        return 1.0
    prefix = common_prefix_len(a, b)
    if prefix < MIN_PREFIX_LEN:
        return 0.0
    return prefix / len(shorter)


def edit_similarity(distance: int, max_len: int) -> float:
    """100 * (1 - distance / max_len), calculé sans erreur d'arrondi sur les cas entiers."""
    if max_len == 0:
        return 100.0
    return 100.0 * (max_len - distance) / max_len


def similarity(a: str, b: str) -> float:
    """
    Score (0-100) entre deux libellés déjà normalisés.

    Similarité d'édition normalisée par la longueur, plus un bonus préfixe/inclusion
    plafonné à AFFINITY_WEIGHT unité d'édition. Symétrique.
    """
    return score_pair(a, b)[0]


def score_pair(a: str, b: str) -> tuple[float, int]:
    """Retourne (score, distance d'édition)."""
    if a == b:
        return 100.0, 0
    if not a or not b:
        return 0.0, max(len(a), len(b))
    distance = Levenshtein.distance(a, b)
    max_len = max(len(a), len(b))
    base = edit_similarity(distance, max_len)
    bonus = AFFINITY_WEIGHT * (100.0 / max_len) * affinity(a, b)
    score = min(100.0, max(0.0, base + bonus))
    return round(score, 2), distance


def score_candidate(value: str, display: str, normalized: str) -> ScoredCandidate:
    score, distance = score_pair(value, normalized)
    return ScoredCandidate(display=display, normalized=normalized, score=score, distance=distance)


def rank_candidates(value: str, candidates: list[tuple[str, str]] | tuple[tuple[str, str], ...]) -> list[ScoredCandidate]:
    """Note et trie tous les candidats (ordre déterministe)."""
    scored = [score_candidate(value, display, norm) for display, norm in candidates]
    scored.sort(key=ScoredCandidate.sort_key)
    return scored
