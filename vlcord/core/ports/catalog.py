"""
Interface port pour le catalogue de metadonnees externe.

Definit le contrat de recherche et de recuperation des details pour les
films, les series et les episodes. L'implementation concrete est le client
TMDB (adapters/api/tmdb_client.py).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class SearchResult:
    """
    Resultat de recherche depuis le catalogue.

    Attributs :
        id : ID TMDB
        title : Titre localise (ou nom pour une serie)
        original_title : Titre en langue originale
        year : Annee de sortie/premiere diffusion
        popularity : Indice de popularite TMDB
        source : Identifiant de la source API ("tmdb")
        raw : Element brut retourne par l'API (pour construire une fiche
              minimale quand les details ne sont pas disponibles)
    """

    id: str
    title: str
    original_title: Optional[str] = None
    year: Optional[int] = None
    popularity: float = 0.0
    source: str = ""
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


class ICatalogClient(ABC):
    """
    Interface du catalogue de metadonnees.

    Les methodes de recherche retournent une liste (vide si aucun resultat).
    Les methodes de details retournent le document brut ou None si l'ID
    n'existe pas. Les erreurs reseau sont propagees a l'appelant.
    """

    @property
    @abstractmethod
    def source(self) -> str:
        """Identifiant de la source ("tmdb")."""
        ...

    @abstractmethod
    async def search_movie(
        self, query: str, year: Optional[int] = None
    ) -> list[SearchResult]:
        """Recherche des films par titre (annee optionnelle)."""
        ...

    @abstractmethod
    async def search_tv(self, query: str) -> list[SearchResult]:
        """Recherche des series par nom."""
        ...

    @abstractmethod
    async def get_movie(self, movie_id: str) -> Optional[dict[str, Any]]:
        ...

    @abstractmethod
    async def get_tv(self, tv_id: str) -> Optional[dict[str, Any]]:
        ...

    @abstractmethod
    async def get_episode(
        self, tv_id: str, season: int, episode: int
    ) -> Optional[dict[str, Any]]:
        ...

    @abstractmethod
    async def close(self) -> None:
        ...
