"""
Commandes CLI d'analyse et de resolution ponctuelle (parse, resolve).
"""

import asyncio
from enum import Enum
from pathlib import PurePath
from typing import Annotated, Optional

import typer

from vlcord.adapters.cli.helpers import (
    console,
    identity_table,
    record_table,
    suppress_loguru,
    with_container,
)
from vlcord.core.value_objects import (
    Matched,
    MediaIdentity,
    MediaType,
    PlayerState,
    RawPlaybackSample,
)
from vlcord.services.parsing.candidates import CandidateClassifier


class LookupType(str, Enum):
    """Type de recherche pour la commande resolve."""

    AUTO = "auto"
    MOVIE = "movie"
    TV = "tv"
    ANIME = "anime"


def parse(
    filename: Annotated[str, typer.Argument(help="Nom ou chemin du fichier video")],
    title: Annotated[
        Optional[str],
        typer.Option("--title", "-t", help="Titre embarque (metadonnee du fichier)"),
    ] = None,
) -> None:
    """
    Affiche l'identite deduite d'un nom de fichier.

    Exemples:
      vlcord parse "Breaking.Bad.S05E14.Ozymandias.1080p.BluRay.x264-DEMAND.mkv"
      vlcord parse "/series/The Office/Season 2/02 - The Fire.mkv"
    """
    path = PurePath(filename)
    sample = RawPlaybackSample(
        state=PlayerState.PLAYING,
        title=title,
        filename=path.name,
        file_path=filename if len(path.parts) > 1 else None,
    )
    result = CandidateClassifier().classify_sample(sample)
    if not isinstance(result, Matched):
        console.print(f"[yellow]Aucune identite deduite[/yellow] ({result.reason})")
        raise typer.Exit(code=1)
    console.print(identity_table(result.identity, source=result.candidate.source.value))


def resolve(
    title: Annotated[str, typer.Argument(help="Titre a rechercher")],
    media_type: Annotated[
        LookupType,
        typer.Option("--type", case_sensitive=False, help="Type de media"),
    ] = LookupType.AUTO,
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Annee de sortie")] = None,
    season: Annotated[Optional[int], typer.Option("--season", "-s", min=0)] = None,
    episode: Annotated[Optional[int], typer.Option("--episode", "-e", min=0)] = None,
) -> None:
    """
    Recherche ponctuelle d'un titre dans les overrides et le catalogue TMDB.

    Exemples:
      vlcord resolve "Inception" --type movie --year 2010
      vlcord resolve "Breaking Bad" --type tv -s 5 -e 14
    """
    if (season is None) != (episode is None):
        raise typer.BadParameter("--season et --episode doivent etre fournis ensemble")
    found = asyncio.run(_resolve_async(title, media_type, year, season, episode))
    if not found:
        raise typer.Exit(code=1)


def _identity_for(
    title: str,
    media_type: LookupType,
    year: Optional[int],
    season: Optional[int],
    episode: Optional[int],
) -> MediaIdentity:
    if media_type == LookupType.MOVIE:
        return MediaIdentity(title=title, media_type=MediaType.MOVIE, year=year)
    kind = MediaType.ANIME if media_type == LookupType.ANIME else MediaType.TV
    return MediaIdentity(
        title=title,
        media_type=kind,
        show_title=title,
        year=year,
        season=season,
        episode=episode,
    )


@with_container()
async def _resolve_async(
    container,
    title: str,
    media_type: LookupType,
    year: Optional[int],
    season: Optional[int],
    episode: Optional[int],
) -> bool:
    """Implementation async de la commande resolve."""
    resolver = container.catalog_resolver()
    if not resolver.enabled:
        console.print("[yellow]Cle TMDB absente: seuls les overrides sont consultes.[/yellow]")

    with suppress_loguru():
        if media_type == LookupType.AUTO and season is None:
            record = await resolver.search_generic(title)
        else:
            if media_type == LookupType.AUTO:
                media_type = LookupType.TV
            identity = _identity_for(title, media_type, year, season, episode)
            record = await resolver.resolve(identity)

    if record is None:
        console.print(f"[red]Aucun resultat[/red] pour '{title}'")
        return False
    console.print(record_table(record))
    return True
