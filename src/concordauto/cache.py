"""Cellule de référence vers l'index courant, reconstruit à expiration."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable

from concordauto.matching.index import ReferenceIndex, build_index
from concordauto.matching.schema import CanonicalEntry

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60  # 1 heure


class IndexCache:
    """
    Détient l'index du référentiel et le remplace en bloc à l'expiration du TTL.

    Un index publié n'est jamais modifié : un rafraîchissement construit un nouvel
    index puis remplace la référence, les validations en cours gardent l'ancien.

    Args:
        loader: Fonction retournant un snapshot des triplets canoniques.
        ttl_seconds: Durée de validité de l'index.
        clock: Horloge monotone (injectable pour les tests).
    """

    def __init__(
        self,
        loader: Callable[[], Iterable[CanonicalEntry]],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds doit être >= 0 (got {ttl_seconds})")
        self._loader = loader
        self._ttl = ttl_seconds
        self._clock = clock
        self._index: ReferenceIndex | None = None
        self._loaded_at = 0.0
        self._lock = threading.Lock()

    def _is_fresh(self, now: float) -> bool:
        return self._index is not None and now - self._loaded_at < self._ttl

    def get(self) -> ReferenceIndex:
        """Index courant, reconstruit s'il est absent ou expiré."""
        index = self._index
        if index is not None and self._is_fresh(self._clock()):
            return index
        with self._lock:
            now = self._clock()
            if self._is_fresh(now):
                return self._index  # type: ignore[return-value]
            logger.info("Rafraîchissement de l'index du référentiel")
            new_index = build_index(self._loader())
            self._index = new_index
            self._loaded_at = now
            return new_index

    def invalidate(self) -> None:
        """Force la reconstruction au prochain get()."""
        with self._lock:
            self._index = None

    @property
    def current(self) -> ReferenceIndex | None:
        """Index publié, sans déclencher de chargement."""
        return self._index
