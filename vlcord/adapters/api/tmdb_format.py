"""
Mise en forme des documents TMDB en fiches CatalogRecord.

- URLs d'images: base + taille fixe (w500 affiche, w1280 fond, w300 vignette)
- Code episode zero-padde (S01E02) et libelles d'episode
- Duree formatee ("2h 28m")

La troncature des textes est laissee au consommateur (presence).
"""

from typing import Any, Optional

from vlcord.core.value_objects.catalog_record import CatalogRecord
from vlcord.core.value_objects.media_identity import MediaType, format_episode_code
from vlcord.utils.constants import (
    BACKDROP_SIZE,
    POSTER_SIZE,
    STILL_SIZE,
    TMDB_IMAGE_BASE_URL,
    TMDB_WEB_URL,
)


def image_url(path: Optional[str], size: str, base_url: str = TMDB_IMAGE_BASE_URL) -> Optional[str]:
    """URL complete d'une image TMDB, None sans chemin."""
    return f"{base_url}/{size}{path}" if path else None


def format_runtime(minutes: Optional[int]) -> Optional[str]:
    """Duree en minutes -> "2h 28m" (None si inconnue ou nulle)."""
    if not minutes:
        return None
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def episode_display(
    season: Optional[int],
    episode: Optional[int],
    episode_title: Optional[str] = None,
    no_season_display: bool = False,
) -> Optional[str]:
    """
    Libelle court d'un episode.

    "S05E14 - Ozymandias", ou "Episode 1071" pour les series a numerotation
    continue (One Piece).
    """
    if episode is None:
        return None
    label = f"Episode {episode}" if no_season_display else format_episode_code(season, episode)
    if not label:
        return None
    return f"{label} - {episode_title}" if episode_title else label


def release_year(date: Optional[str]) -> Optional[int]:
    """Annee d'une date TMDB (YYYY-MM-DD), None si absente ou invalide."""
    if date and len(date) >= 4 and date[:4].isdigit():
        return int(date[:4])
    return None


def _names(items: Optional[list[dict[str, Any]]]) -> tuple[str, ...]:
    return tuple(item["name"] for item in items or () if item.get("name"))


def format_movie(movie: dict[str, Any], base_url: str = TMDB_IMAGE_BASE_URL) -> CatalogRecord:
    """Construit la fiche d'un film depuis /movie/{id} (ou un resultat de recherche)."""
    title = movie.get("title") or movie.get("original_title") or ""
    return CatalogRecord(
        external_id=str(movie["id"]),
        media_type=MediaType.MOVIE,
        canonical_title=title,
        original_title=movie.get("original_title"),
        year=release_year(movie.get("release_date")),
        overview=movie.get("overview") or None,
        poster_url=image_url(movie.get("poster_path"), POSTER_SIZE, base_url),
        backdrop_url=image_url(movie.get("backdrop_path"), BACKDROP_SIZE, base_url),
        catalog_url=f"{TMDB_WEB_URL}/movie/{movie['id']}",
        genres=_names(movie.get("genres")),
        runtime=movie.get("runtime") or None,
        formatted_runtime=format_runtime(movie.get("runtime")),
    )


def format_tv_show(
    show: dict[str, Any],
    episode: Optional[dict[str, Any]] = None,
    season_number: Optional[int] = None,
    episode_number: Optional[int] = None,
    base_url: str = TMDB_IMAGE_BASE_URL,
) -> CatalogRecord:
    """
    Construit la fiche d'une serie, enrichie de l'episode si disponible.

    Sans document d'episode, les numeros connus (depuis le nom de fichier)
    suffisent a renseigner le code episode.

    Args:
        show: Document /tv/{id} (ou resultat de recherche)
        episode: Document /tv/{id}/season/{s}/episode/{e}
        season_number: Saison connue par le nom de fichier
        episode_number: Episode connu par le nom de fichier
    """
    name = show.get("name") or show.get("original_name") or ""
    fields: dict[str, Any] = {
        "external_id": str(show["id"]),
        "media_type": MediaType.TV,
        "canonical_title": name,
        "original_title": show.get("original_name"),
        "year": release_year(show.get("first_air_date")),
        "overview": show.get("overview") or None,
        "poster_url": image_url(show.get("poster_path"), POSTER_SIZE, base_url),
        "backdrop_url": image_url(show.get("backdrop_path"), BACKDROP_SIZE, base_url),
        "catalog_url": f"{TMDB_WEB_URL}/tv/{show['id']}",
        "genres": _names(show.get("genres")),
        "number_of_seasons": show.get("number_of_seasons") or None,
        "number_of_episodes": show.get("number_of_episodes") or None,
        "status": show.get("status") or None,
        "networks": _names(show.get("networks")),
    }

    episode_title = None
    if episode:
        season_number = episode.get("season_number", season_number)
        episode_number = episode.get("episode_number", episode_number)
        episode_title = episode.get("name") or None
        fields.update(
            episode_overview=episode.get("overview") or None,
            episode_air_date=episode.get("air_date") or None,
            episode_still_url=image_url(episode.get("still_path"), STILL_SIZE, base_url),
        )

    code = format_episode_code(season_number, episode_number)
    if code:
        full_info = f"{name} {code}"
        if episode_title:
            full_info = f"{full_info} - {episode_title}"
        fields.update(
            season_number=season_number,
            episode_number=episode_number,
            episode_title=episode_title,
            formatted_episode=code,
            full_episode_info=full_info,
            episode_display=episode_display(season_number, episode_number, episode_title),
        )
    return CatalogRecord(**fields)
