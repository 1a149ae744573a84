"""
Commande CLI de surveillance du lecteur (watch).
"""

import asyncio
from typing import Annotated, Optional

import typer

from vlcord.adapters.cli.helpers import console, status_line, with_container
from vlcord.core.value_objects import PlaybackStatus


class StatusPrinter:
    """Affiche un statut uniquement quand l'etat ou le media change."""

    def __init__(self, progress: bool = False) -> None:
        self.progress = progress
        self._last: Optional[tuple] = None

    def __call__(self, status: PlaybackStatus) -> None:
        record = status.metadata
        signature = (
            status.state,
            status.title,
            record.external_id if record else None,
            record.episode_display if record else None,
        )
        if signature == self._last and not self.progress:
            return
        self._last = signature
        console.print(status_line(status))


def watch(
    once: Annotated[
        bool,
        typer.Option("--once", help="Interroge VLC une seule fois puis quitte"),
    ] = False,
    interval: Annotated[
        Optional[float],
        typer.Option("--interval", "-i", min=0.1, help="Intervalle de polling en secondes"),
    ] = None,
    progress: Annotated[
        bool,
        typer.Option("--progress", help="Affiche chaque tick (progression incluse)"),
    ] = False,
) -> None:
    """
    Surveille VLC et affiche les changements de statut.

    Exemples:
      vlcord watch                 # Surveillance continue (Ctrl+C pour quitter)
      vlcord watch --once          # Un seul tick
      vlcord watch -i 5 --progress # Toutes les 5 secondes, chaque tick affiche
    """
    try:
        asyncio.run(_watch_async(once, interval, progress))
    except KeyboardInterrupt:
        console.print("\n[dim]Surveillance interrompue[/dim]")


@with_container()
async def _watch_async(container, once: bool, interval: Optional[float], progress: bool) -> None:
    """Implementation async de la commande watch."""
    config = container.config()
    if not config.tmdb_enabled:
        console.print(
            "[yellow]Cle TMDB absente (VLCORD_TMDB_API_KEY): "
            "seuls les overrides sont consultes.[/yellow]"
        )

    monitor = container.monitor()
    if interval is not None:
        monitor.poll_interval = interval

    if once:
        status = await monitor.poll_once()
        console.print(status_line(status or monitor.status))
        return

    console.print(
        f"[bold]Surveillance de VLC[/bold] sur {config.vlc_host}:{config.vlc_port} "
        f"[dim](toutes les {monitor.poll_interval:g}s, Ctrl+C pour quitter)[/dim]"
    )
    monitor.add_listener(StatusPrinter(progress=progress))
    monitor.start()
    try:
        await asyncio.Event().wait()
    finally:
        await monitor.stop()
