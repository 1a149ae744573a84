"""
Utilitaires partages pour les commandes CLI de VLCord.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container en premier argument
- close_container : fermeture des clients HTTP et du cache
- identity_table / record_table / status_line : rendus Rich
"""

from contextlib import contextmanager
from functools import wraps
from typing import Optional

from loguru import logger as loguru_logger
from rich.console import Console
from rich.table import Table

from vlcord.container import Container
from vlcord.core.value_objects import CatalogRecord, MediaIdentity, PlaybackStatus

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("vlcord")
    try:
        yield
    finally:
        loguru_logger.enable("vlcord")


def with_container():
    """
    Decorateur qui injecte un container en premier argument et ferme ses
    ressources (clients HTTP, cache) a la fin de la commande.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await close_container(container)
        return wrapper
    return decorator


async def close_container(container: Container) -> None:
    """Ferme les clients HTTP et le cache du container."""
    await container.vlc_client().close()
    client = container.tmdb_client()
    if client is not None:
        await client.close()
    container.metadata_cache().close()


def _row(table: Table, label: str, value: Optional[object]) -> None:
    if value not in (None, "", ()):
        table.add_row(label, str(value))


def identity_table(identity: MediaIdentity, source: Optional[str] = None) -> Table:
    """Tableau d'une identite deduite."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column()
    _row(table, "Type", identity.media_type.value)
    _row(table, "Titre", identity.title)
    _row(table, "Serie", identity.show_title)
    _row(table, "Annee", identity.year)
    _row(table, "Episode", identity.episode_code)
    _row(table, "Titre episode", identity.episode_title)
    _row(table, "Saison", identity.season_name)
    _row(table, "Cle", identity.lookup_key)
    _row(table, "Source", source)
    return table


def record_table(record: CatalogRecord) -> Table:
    """Tableau d'une fiche catalogue."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column()
    _row(table, "Titre", record.title)
    _row(table, "Titre original", record.original_title)
    _row(table, "Type", record.media_type.value)
    _row(table, "TMDB", record.external_id)
    _row(table, "Annee", record.year)
    _row(table, "Duree", record.formatted_runtime)
    _row(table, "Genres", ", ".join(record.genres))
    _row(table, "Episode", record.episode_display)
    _row(table, "Lien", record.catalog_url)
    _row(table, "Affiche", record.poster_url)
    return table


def _clock(seconds: int) -> str:
    minutes, secs = divmod(max(seconds, 0), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def status_line(status: PlaybackStatus) -> str:
    """Ligne Rich resumant un statut de lecture."""
    if not status.connected:
        return "[red]VLC deconnecte[/red]"
    if not status.playing and not status.paused:
        return "[dim]VLC inactif[/dim]"

    icon = "[green]>[/green]" if status.playing else "[yellow]||[/yellow]"
    title = status.title or status.original_title or "?"
    record = status.metadata
    if record is not None and record.episode_display:
        title = f"{title} - {record.episode_display}"
    elif record is not None and record.year:
        title = f"{title} ({record.year})"
    progress = f"{_clock(status.elapsed)} / {_clock(status.length)} ({status.percentage:.1f}%)"
    source = f" [dim]tmdb:{record.external_id}[/dim]" if record is not None else ""
    return f"{icon} [bold]{title}[/bold] {progress}{source}"
