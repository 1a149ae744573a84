"""
Cache persistant des fiches catalogue, borne en taille et en duree de vie.

Le cache utilise diskcache pour la persistence sur disque, ce qui permet
de conserver les fiches entre les redemarrages. L'eviction est de type
LRU (least-recently-used) au-dela de la taille limite, et chaque entree
expire apres le TTL configure.

Les cles sont les cles de recherche normalisees (MediaIdentity.lookup_key).
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache

from vlcord.core.value_objects.catalog_record import CatalogRecord


def normalize_cache_key(key: str) -> str:
    """Minuscules et espaces compactes."""
    return " ".join(key.lower().split())


class MetadataCache:
    """
    Cache asynchrone LRU + TTL pour les fiches catalogue.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        cache = MetadataCache(cache_dir="~/.cache/vlcord", ttl=86400)
        await cache.set("inception", record)
        record = await cache.get("Inception")
    """

    DEFAULT_TTL = 24 * 60 * 60  # 24 heures en secondes

    def __init__(
        self,
        cache_dir: str = ".cache/vlcord",
        ttl: int = DEFAULT_TTL,
        size_limit_mb: int = 64,
    ) -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
            ttl: Duree de vie des entrees en secondes
            size_limit_mb: Taille maximale sur disque avant eviction LRU
        """
        self._ttl = ttl
        self._cache = Cache(
            str(cache_dir),
            size_limit=size_limit_mb * 1024 * 1024,
            eviction_policy="least-recently-used",
        )
        self._cache.stats(enable=True)

    @property
    def ttl(self) -> int:
        return self._ttl

    async def get(self, key: str) -> Optional[CatalogRecord]:
        """
        Recupere une fiche du cache.

        Returns:
            La fiche stockee ou None si absente ou expiree
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, normalize_cache_key(key))

    async def set(self, key: str, value: CatalogRecord, ttl: Optional[int] = None) -> None:
        """Stocke une fiche avec le TTL configure (ou un TTL specifique)."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            partial(
                self._cache.set,
                normalize_cache_key(key),
                value,
                expire=ttl if ttl is not None else self._ttl,
            ),
        )

    async def delete(self, key: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.delete, normalize_cache_key(key))

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def stats(self) -> dict[str, Any]:
        """Compteurs du cache: hits, misses, nombre d'entrees, volume disque."""
        hits, misses = self._cache.stats()
        return {
            "hits": hits,
            "misses": misses,
            "size": len(self._cache),
            "volume": self._cache.volume(),
        }

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
