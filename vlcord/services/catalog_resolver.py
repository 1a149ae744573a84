"""
Resolution d'une identite de media en fiche catalogue (TMDB).

CatalogResolver enchaine, pour un film:
1. Table des overrides (une entree du store avec titre ne coute aucun appel
   reseau; une entree integree sans titre recupere les details par ID)
2. Recherche du contenu entre crochets ("[REC]" -> "REC")
3. Recherche contrainte par l'annee, puis sans contrainte si le premier
   resultat est trop peu populaire
4. Recherche sur les trois premiers mots

Pour une serie: re-extraction depuis le nom de fichier, overrides, recherche
plein texte avec replis (premier mot, deux premiers mots, sans article),
details de la serie puis de l'episode.

Toutes les erreurs reseau sont interceptees et journalisees: les methodes
retournent None et la boucle de lecture continue avec le titre nettoye.
"""

import re
from dataclasses import replace
from typing import Optional

import httpx
from loguru import logger
from rapidfuzz import fuzz, utils

from vlcord.adapters.api.circuit_breaker import CircuitOpenError
from vlcord.adapters.api.retry import RateLimitError
from vlcord.adapters.api.tmdb_format import episode_display, format_movie, format_tv_show
from vlcord.adapters.persistence.overrides_store import OverrideEntry
from vlcord.core.ports.catalog import ICatalogClient, SearchResult
from vlcord.core.value_objects import CatalogRecord, EpisodeInfo, MediaIdentity, MediaType
from vlcord.core.value_objects.media_identity import format_episode_code
from vlcord.services.overrides import OverrideTable
from vlcord.services.parsing.anime_titles import AnimeTitleResolver
from vlcord.services.parsing.episode_extractor import EpisodeExtractor

# Erreurs attendues d'un appel au catalogue (reseau, rate limit, disjoncteur,
# document inattendu)
CATALOG_ERRORS = (
    httpx.HTTPError,
    RateLimitError,
    CircuitOpenError,
    KeyError,
    ValueError,
    TypeError,
)

_TRAILING_YEAR = re.compile(r"\s\(?((?:19|20)\d{2})\)?$")
_BRACKET_CONTENT = re.compile(r"\[([^\]]+)\]")
_LEADING_ARTICLE = re.compile(r"^(?:the|a|an)\s+", re.IGNORECASE)

# Nombre de resultats examines pour une correspondance exacte du titre
BEST_MATCH_WINDOW = 5


def pick_best(query: str, results: list[SearchResult]) -> Optional[SearchResult]:
    """
    Choisit le meilleur resultat de recherche.

    Un titre identique (token_sort_ratio == 100, insensible a la casse et a
    l'ordre des mots) parmi les premiers resultats l'emporte; sinon l'ordre
    de pertinence TMDB est conserve.
    """
    if not results:
        return None
    for result in results[:BEST_MATCH_WINDOW]:
        for title in (result.title, result.original_title):
            if title and fuzz.token_sort_ratio(query, title, processor=utils.default_process) == 100:
                return result
    return results[0]


def merge_identity(record: CatalogRecord, identity: MediaIdentity) -> CatalogRecord:
    """
    Complete une fiche de serie avec les champs d'episode de l'identite.

    Les valeurs du catalogue sont prioritaires; l'identite comble les trous
    (numeros, titre d'episode, nom de saison).
    """
    if record.media_type == MediaType.MOVIE or not identity.is_episode:
        return record
    season = record.season_number if record.season_number is not None else identity.season
    episode = record.episode_number if record.episode_number is not None else identity.episode
    episode_title = record.episode_title or identity.episode_title
    code = format_episode_code(season, episode)
    full_info = record.full_episode_info
    if code and (not full_info or (episode_title and episode_title not in full_info)):
        full_info = f"{record.canonical_title} {code}"
        if episode_title:
            full_info = f"{full_info} - {episode_title}"
    return replace(
        record,
        season_number=season,
        episode_number=episode,
        episode_title=episode_title,
        formatted_episode=record.formatted_episode or code,
        full_episode_info=full_info,
        episode_display=episode_display(
            season, episode, episode_title, no_season_display=record.no_season_display
        ),
        season_name=record.season_name or identity.season_name,
    )


class CatalogResolver:
    """
    Resolveur catalogue (overrides + recherche TMDB).

    Attributes:
        popularity_threshold: Popularite minimale du premier resultat d'une
            recherche contrainte par l'annee avant d'essayer sans l'annee
        fetch_override_details: Recuperer les details TMDB meme pour une
            entree d'override qui porte deja un titre

    Example:
        resolver = CatalogResolver(client, OverrideTable(store), AnimeTitleResolver())
        record = await resolver.resolve(identity)
    """

    def __init__(
        self,
        client: Optional[ICatalogClient],
        overrides: OverrideTable,
        anime: Optional[AnimeTitleResolver] = None,
        popularity_threshold: float = 2.0,
        fetch_override_details: bool = False,
        extractor: Optional[EpisodeExtractor] = None,
    ) -> None:
        self._client = client
        self._overrides = overrides
        self._anime = anime or AnimeTitleResolver()
        self.popularity_threshold = popularity_threshold
        self.fetch_override_details = fetch_override_details
        self._extractor = extractor or EpisodeExtractor()
        self._stats = {"searches": 0, "details": 0, "override_hits": 0, "failures": 0}

    @property
    def enabled(self) -> bool:
        """Vrai si un client catalogue est configure (cle API presente)."""
        return self._client is not None

    def stats(self) -> dict[str, int]:
        return dict(self._stats)

    # Acces au catalogue

    async def _search_movies(self, query: str, year: Optional[int] = None) -> list[SearchResult]:
        if self._client is None or not query.strip():
            return []
        self._stats["searches"] += 1
        return await self._client.search_movie(query, year=year)

    async def _search_shows(self, query: str) -> list[SearchResult]:
        if self._client is None or not query.strip():
            return []
        self._stats["searches"] += 1
        return await self._client.search_tv(query)

    async def _movie_record(self, hit: SearchResult) -> CatalogRecord:
        """Details du film; repli sur le resultat de recherche si les details echouent."""
        try:
            self._stats["details"] += 1
            details = await self._client.get_movie(hit.id)
        except CATALOG_ERRORS as e:
            logger.warning("Details du film indisponibles", movie_id=hit.id, error=str(e))
            details = None
        return format_movie(details or {**hit.raw, "id": hit.id, "title": hit.title})

    # Films

    def _movie_override(self, entry: OverrideEntry) -> CatalogRecord:
        record = format_movie({"id": entry.catalog_id, "title": entry.title})
        return replace(record, year=entry.year)

    async def search_movie(self, title: str, year: Optional[int] = None) -> Optional[CatalogRecord]:
        """
        Recherche un film.

        Args:
            title: Titre nettoye (une annee finale est extraite si year est None)
            year: Annee de sortie

        Returns:
            CatalogRecord ou None (aucun resultat ou erreur reseau)
        """
        title = title.strip()
        if year is None:
            match = _TRAILING_YEAR.search(title)
            if match and match.start() > 0:
                year = int(match.group(1))
                title = title[: match.start()].strip()
        if not title:
            return None

        entry = self._overrides.find_movie(title, year)
        if entry is not None:
            self._stats["override_hits"] += 1
            logger.debug("Override film", title=title, catalog_id=entry.catalog_id)
            if entry.title and (not self.fetch_override_details or self._client is None):
                return self._movie_override(entry)
            try:
                if self._client is not None:
                    self._stats["details"] += 1
                    details = await self._client.get_movie(entry.catalog_id)
                    if details:
                        return format_movie(details)
            except CATALOG_ERRORS as e:
                logger.warning(
                    "Details de l'override indisponibles",
                    catalog_id=entry.catalog_id,
                    error=str(e),
                )
            if entry.title:
                return self._movie_override(entry)

        try:
            hit = await self._find_movie_hit(title, year)
            if hit is None:
                logger.debug("Aucun film trouve", title=title, year=year)
                return None
            return await self._movie_record(hit)
        except CATALOG_ERRORS as e:
            self._stats["failures"] += 1
            logger.warning("Recherche de film en echec", title=title, error=str(e))
            return None

    async def _find_movie_hit(self, title: str, year: Optional[int]) -> Optional[SearchResult]:
        if "[" in title and "]" in title:
            bracket = _BRACKET_CONTENT.search(title)
            if bracket:
                results = await self._search_movies(bracket.group(1))
                if results:
                    return pick_best(bracket.group(1), results)

        results: list[SearchResult] = []
        if year is not None:
            results = await self._search_movies(title, year)
        if not results or results[0].popularity < self.popularity_threshold:
            unconstrained = await self._search_movies(title)
            if not results:
                results = unconstrained
            elif unconstrained and unconstrained[0].popularity > results[0].popularity:
                logger.debug(
                    "Recherche sans annee retenue",
                    title=title,
                    year=year,
                    popularity=unconstrained[0].popularity,
                )
                results = unconstrained

        words = title.split()
        if not results and len(words) > 3:
            simplified = " ".join(words[:3])
            results = await self._search_movies(simplified)

        return pick_best(title, results)

    # Series

    def _show_override(
        self, entry: OverrideEntry, season: Optional[int], episode: Optional[int]
    ) -> CatalogRecord:
        return format_tv_show(
            {"id": entry.catalog_id, "name": entry.title},
            season_number=season,
            episode_number=episode,
        )

    async def _show_record(
        self, show_id: str, fallback: dict, season: Optional[int], episode: Optional[int]
    ) -> CatalogRecord:
        try:
            self._stats["details"] += 1
            show = await self._client.get_tv(show_id)
        except CATALOG_ERRORS as e:
            logger.warning("Details de la serie indisponibles", show_id=show_id, error=str(e))
            show = None
        show = show or fallback

        episode_doc = None
        if season is not None and episode is not None:
            try:
                self._stats["details"] += 1
                episode_doc = await self._client.get_episode(show_id, season, episode)
            except CATALOG_ERRORS as e:
                logger.debug(
                    "Details de l'episode indisponibles",
                    show_id=show_id,
                    season=season,
                    episode=episode,
                    error=str(e),
                )
        return format_tv_show(show, episode_doc, season, episode)

    async def search_tv_show(
        self,
        title: str,
        season: Optional[int] = None,
        episode: Optional[int] = None,
        source_filename: Optional[str] = None,
    ) -> Optional[CatalogRecord]:
        """
        Recherche une serie et, si possible, l'episode.

        Args:
            title: Titre de la serie
            season: Numero de saison
            episode: Numero d'episode
            source_filename: Nom de fichier d'origine, re-analyse pour
                             affiner titre, saison et episode

        Returns:
            CatalogRecord ou None
        """
        info = EpisodeInfo()
        if source_filename:
            info = self._extractor.extract(source_filename)
            title = info.show_title or title
            season = season if season is not None else info.season
            episode = episode if episode is not None else info.episode
        if season is None or episode is None:
            season = episode = None
        title = title.strip()
        if not title:
            return None

        entry = self._overrides.find_show(title)
        record: Optional[CatalogRecord] = None
        if entry is not None:
            self._stats["override_hits"] += 1
            logger.debug("Override serie", title=title, catalog_id=entry.catalog_id)
            if entry.title and (not self.fetch_override_details or self._client is None):
                record = self._show_override(entry, season, episode)
            elif self._client is not None:
                fallback = {"id": entry.catalog_id, "name": entry.title or title}
                record = await self._show_record(entry.catalog_id, fallback, season, episode)

        if record is None:
            try:
                hit = await self._find_show_hit(title)
                if hit is None:
                    logger.debug("Aucune serie trouvee", title=title)
                    return None
                fallback = {**hit.raw, "id": hit.id, "name": hit.title}
                record = await self._show_record(hit.id, fallback, season, episode)
            except CATALOG_ERRORS as e:
                self._stats["failures"] += 1
                logger.warning("Recherche de serie en echec", title=title, error=str(e))
                return None

        if season is not None:
            identity = MediaIdentity(
                title=title,
                media_type=MediaType.TV,
                show_title=title,
                season=season,
                episode=episode,
                episode_title=info.episode_title,
                season_name=info.season_name,
            )
            record = merge_identity(record, identity)
        return record

    async def _find_show_hit(self, title: str) -> Optional[SearchResult]:
        results = await self._search_shows(title)
        words = title.split()
        if not results and len(words) > 1:
            results = await self._search_shows(words[0])
            if not results and len(words) > 2:
                results = await self._search_shows(" ".join(words[:2]))
        if not results:
            without_article = _LEADING_ARTICLE.sub("", title)
            if without_article != title:
                results = await self._search_shows(without_article)
        return pick_best(title, results)

    # Type inconnu

    async def search_generic(self, title: str) -> Optional[CatalogRecord]:
        """Recherche film, puis serie, puis sur les deux premiers mots."""
        record = await self.search_movie(title)
        if record is not None:
            return record
        record = await self.search_tv_show(title)
        if record is not None:
            return record
        words = title.split()
        if len(words) > 2:
            simplified = " ".join(words[:2])
            logger.debug("Recherche simplifiee", title=title, simplified=simplified)
            return await self.search_movie(simplified) or await self.search_tv_show(simplified)
        return None

    async def resolve(
        self, identity: MediaIdentity, source_filename: Optional[str] = None
    ) -> Optional[CatalogRecord]:
        """
        Resout une identite selon son type.

        Les animes passent par la recherche de series quand saison et
        episode sont connus, sinon par la recherche de films, puis recoivent
        le formatage d'affichage anime.
        """
        if identity.media_type == MediaType.MOVIE:
            return await self.search_movie(identity.title, identity.year)

        if identity.media_type == MediaType.TV:
            record = await self.search_tv_show(
                identity.lookup_title, identity.season, identity.episode, source_filename
            )
            return merge_identity(record, identity) if record else None

        if identity.media_type == MediaType.ANIME:
            if identity.is_episode:
                record = await self.search_tv_show(
                    identity.lookup_title, identity.season, identity.episode
                )
            else:
                record = await self.search_movie(identity.title, identity.year)
            if record is None:
                return None
            record = self._anime.apply(merge_identity(record, identity), identity)
            if record.no_season_display and record.episode_number is not None:
                record = replace(
                    record,
                    episode_display=episode_display(
                        record.season_number,
                        record.episode_number,
                        record.episode_title,
                        no_season_display=True,
                    ),
                )
            return record

        return await self.search_generic(identity.title)
