"""
Objets valeur pour l'identite d'un media en cours de lecture.

Objets valeur immutables representant ce qui a pu etre deduit d'un nom de
fichier ou d'un titre embarque : type de media, titre, saison/episode.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaType(Enum):
    """Type de media deduit du nom de fichier.

    Valeurs:
        MOVIE: Film (long-metrage)
        TV: Episode de serie TV
        ANIME: Anime (serie ou film)
        UNKNOWN: Type non determine
    """

    MOVIE = "movie"
    TV = "tv"
    ANIME = "anime"
    UNKNOWN = "unknown"


def format_episode_code(season: Optional[int], episode: Optional[int]) -> Optional[str]:
    """Retourne le code SxxEyy (zero-padde) ou None si incomplet."""
    if season is None or episode is None:
        return None
    return f"S{season:02d}E{episode:02d}"


@dataclass(frozen=True)
class EpisodeInfo:
    """
    Resultat partiel de l'extraction saison/episode.

    Les champs non determines restent a None. Contrairement a MediaIdentity,
    saison et episode peuvent etre partiellement renseignes pendant
    l'extraction (ex: saison connue par le dossier parent uniquement).
    """

    show_title: Optional[str] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    episode_title: Optional[str] = None
    year: Optional[int] = None
    season_name: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """Vrai si la saison et l'episode sont connus."""
        return self.season is not None and self.episode is not None

    @property
    def episode_code(self) -> Optional[str]:
        return format_episode_code(self.season, self.episode)


@dataclass(frozen=True)
class MediaIdentity:
    """
    Identite structuree d'un media deduite d'un nom de fichier.

    Invariant : season et episode sont renseignes ensemble, ou tous deux None.

    Attributs:
        title: Titre nettoye (obligatoire)
        media_type: Type de media (MOVIE, TV, ANIME, UNKNOWN)
        show_title: Titre de la serie pour un episode
        year: Annee de sortie
        season: Numero de saison
        episode: Numero d'episode
        episode_title: Titre de l'episode
        season_name: Nom de saison (ex: "Final Season")
    """

    title: str
    media_type: MediaType = MediaType.UNKNOWN
    show_title: Optional[str] = None
    year: Optional[int] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    episode_title: Optional[str] = None
    season_name: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.season is None) != (self.episode is None):
            raise ValueError(
                "season et episode doivent etre renseignes ensemble "
                f"(season={self.season}, episode={self.episode})"
            )

    @property
    def is_episode(self) -> bool:
        return self.season is not None

    @property
    def lookup_title(self) -> str:
        """Titre utilise comme requete de recherche (titre de serie en priorite)."""
        return self.show_title or self.title

    @property
    def episode_code(self) -> Optional[str]:
        return format_episode_code(self.season, self.episode)

    @property
    def lookup_key(self) -> str:
        """
        Cle de deduplication et de cache.

        Titre de recherche normalise (minuscules, espaces compactes), suffixe
        du code sxxeyy pour un episode afin que deux episodes d'une meme serie
        ne partagent pas la meme fiche.
        """
        key = " ".join(self.lookup_title.lower().split())
        if self.episode_code:
            key = f"{key} {self.episode_code.lower()}"
        return key
