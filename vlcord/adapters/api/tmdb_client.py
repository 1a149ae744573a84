"""
Client TMDB pour la recherche et la recuperation de metadonnees.

Implemente l'interface ICatalogClient pour TMDB (The Movie Database):
recherche de films et de series, details d'un film, d'une serie et d'un
episode. Les appels passent par le mecanisme de retry (429, erreurs de
transport) et par un disjoncteur dedie au service.

Usage:
    client = TMDBClient(api_key="your_key")
    results = await client.search_movie("Inception", year=2010)
    details = await client.get_movie(results[0].id)
    await client.close()
"""

from typing import Any, Optional

import httpx

from vlcord.adapters.api.circuit_breaker import CircuitBreaker
from vlcord.adapters.api.retry import request_with_retry
from vlcord.adapters.api.tmdb_format import release_year
from vlcord.core.ports.catalog import ICatalogClient, SearchResult
from vlcord.utils.constants import TMDB_BASE_URL


class TMDBClient(ICatalogClient):
    """
    Client API TMDB.

    Les erreurs reseau, de rate limiting et de circuit ouvert sont propagees:
    c'est le resolveur qui les intercepte. Un 404 sur un ID retourne None.

    Example:
        client = TMDBClient(api_key="xxx", language="en-US")
        results = await client.search_tv("Breaking Bad")
        episode = await client.get_episode(results[0].id, 5, 14)
        await client.close()
    """

    def __init__(
        self,
        api_key: str,
        language: str = "en-US",
        timeout: float = 10.0,
        max_attempts: int = 3,
        breaker: Optional[CircuitBreaker] = None,
        base_url: str = TMDB_BASE_URL,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (cle v3 ou Read Access Token v4)
            language: Langue des resultats (ex: "en-US", "fr-FR")
            timeout: Timeout HTTP en secondes
            max_attempts: Tentatives maximales par requete
            breaker: Disjoncteur du service (un disjoncteur par defaut sinon)
            base_url: URL de base de l'API v3
        """
        self._api_key = api_key
        self._language = language
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._breaker = breaker or CircuitBreaker("tmdb", failure_threshold=10, reset_timeout=120)
        self._base_url = base_url
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        return "tmdb"

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    async def _request(self, path: str, params: dict[str, Any]) -> httpx.Response:
        try:
            return await request_with_retry(
                self._get_client(),
                "GET",
                path,
                max_attempts=self._max_attempts,
                params=params,
            )
        except httpx.HTTPStatusError as e:
            # Un ID inexistant n'est pas une panne du service
            if e.response.status_code == 404:
                return e.response
            raise

    async def _get(self, path: str, **params: Any) -> httpx.Response:
        params.setdefault("language", self._language)
        return await self._breaker.call(self._request, path, params)

    async def _get_or_none(self, path: str, **params: Any) -> Optional[dict[str, Any]]:
        """GET d'une ressource par ID; None si elle n'existe pas (404)."""
        response = await self._get(path, **params)
        if response.status_code == 404:
            return None
        return response.json()

    async def search_movie(self, query: str, year: Optional[int] = None) -> list[SearchResult]:
        """
        Recherche des films par titre.

        Args:
            query: Titre du film a rechercher
            year: Annee de sortie (filtre cote API)

        Returns:
            Liste de SearchResult dans l'ordre de pertinence TMDB
        """
        params: dict[str, Any] = {"query": query, "include_adult": "false"}
        if year is not None:
            params["year"] = year
        data = (await self._get("/search/movie", **params)).json()

        results = []
        for item in data.get("results", []):
            localized_title = item.get("title", "")
            original_title = item.get("original_title", "")
            results.append(
                SearchResult(
                    id=str(item["id"]),
                    title=localized_title or original_title,
                    original_title=original_title if original_title != localized_title else None,
                    year=release_year(item.get("release_date")),
                    popularity=float(item.get("popularity") or 0.0),
                    source=self.source,
                    raw=item,
                )
            )
        return results

    async def search_tv(self, query: str) -> list[SearchResult]:
        """Recherche des series TV par nom."""
        data = (await self._get("/search/tv", query=query, include_adult="false")).json()

        results = []
        for item in data.get("results", []):
            localized_title = item.get("name", "")
            original_title = item.get("original_name", "")
            results.append(
                SearchResult(
                    id=str(item["id"]),
                    title=localized_title or original_title,
                    original_title=original_title if original_title != localized_title else None,
                    year=release_year(item.get("first_air_date")),
                    popularity=float(item.get("popularity") or 0.0),
                    source=self.source,
                    raw=item,
                )
            )
        return results

    async def get_movie(self, movie_id: str) -> Optional[dict[str, Any]]:
        """Details d'un film, None si l'ID n'existe pas."""
        return await self._get_or_none(f"/movie/{movie_id}")

    async def get_tv(self, tv_id: str) -> Optional[dict[str, Any]]:
        """Details d'une serie, None si l'ID n'existe pas."""
        return await self._get_or_none(f"/tv/{tv_id}")

    async def get_episode(
        self, tv_id: str, season: int, episode: int
    ) -> Optional[dict[str, Any]]:
        """Details d'un episode, None s'il n'existe pas."""
        return await self._get_or_none(f"/tv/{tv_id}/season/{season}/episode/{episode}")

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
