"""
Objet valeur pour une fiche de metadonnees issue du catalogue (TMDB).

Une fiche porte toujours un identifiant externe non vide. Les champs
d'episode ne sont renseignes que pour un episode de serie, les champs
d'affichage anime que lorsque le titre a ete reconnu comme anime.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional

from vlcord.core.value_objects.media_identity import MediaType


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


@dataclass(frozen=True)
class CatalogRecord:
    """
    Fiche de metadonnees canonique.

    Attributs principaux:
        external_id: ID TMDB (obligatoire, non vide)
        media_type: MOVIE ou TV (ANIME apres formatage anime)
        canonical_title: Titre localise retourne par le catalogue
        original_title: Titre en langue originale
        year: Annee de sortie ou de premiere diffusion
        overview: Resume
        poster_url, backdrop_url: URLs d'images (tailles fixes)
        catalog_url: Lien vers la fiche TMDB
        genres: Noms de genres
        runtime: Duree en minutes
        formatted_runtime: Duree formatee ("2h 28m")

    Champs serie/episode:
        number_of_seasons, number_of_episodes, status, networks
        season_number, episode_number, episode_title, episode_overview,
        episode_air_date, episode_still_url, formatted_episode ("S01E02"),
        full_episode_info ("S01E02 - Titre"), episode_display

    Champs d'affichage anime:
        display_title, season_name, no_season_display
    """

    external_id: str
    media_type: MediaType
    canonical_title: str
    original_title: Optional[str] = None
    year: Optional[int] = None
    overview: Optional[str] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    catalog_url: Optional[str] = None
    genres: tuple[str, ...] = ()
    runtime: Optional[int] = None
    formatted_runtime: Optional[str] = None
    # Serie
    number_of_seasons: Optional[int] = None
    number_of_episodes: Optional[int] = None
    status: Optional[str] = None
    networks: tuple[str, ...] = ()
    # Episode
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    episode_title: Optional[str] = None
    episode_overview: Optional[str] = None
    episode_air_date: Optional[str] = None
    episode_still_url: Optional[str] = None
    formatted_episode: Optional[str] = None
    full_episode_info: Optional[str] = None
    episode_display: Optional[str] = None
    # Affichage anime
    display_title: Optional[str] = None
    season_name: Optional[str] = None
    no_season_display: bool = False

    def __post_init__(self) -> None:
        if not str(self.external_id).strip():
            raise ValueError("Une fiche catalogue doit avoir un identifiant externe")

    @property
    def title(self) -> str:
        """Titre a afficher : titre anime formate en priorite."""
        return self.display_title or self.canonical_title

    def to_dict(self) -> dict[str, Any]:
        """Serialise la fiche en dictionnaire (cles camelCase)."""
        data = asdict(self)
        data["media_type"] = self.media_type.value
        data["genres"] = list(self.genres)
        data["networks"] = list(self.networks)
        data["title"] = self.title
        return {_camel_case(key): value for key, value in data.items()}
