"""
Commande CLI de consultation du cache des fiches (cache-stats).
"""

import asyncio
from typing import Annotated

import typer
from rich.table import Table

from vlcord.adapters.api.cache import MetadataCache
from vlcord.adapters.cli.helpers import console
from vlcord.config import Settings


def cache_stats(
    clear: Annotated[
        bool,
        typer.Option("--clear", help="Vide le cache apres affichage"),
    ] = False,
) -> None:
    """Affiche les statistiques du cache des fiches TMDB."""
    settings = Settings()
    cache = MetadataCache(
        cache_dir=settings.cache_dir,
        ttl=settings.cache_ttl_seconds,
        size_limit_mb=settings.cache_size_limit_mb,
    )
    try:
        stats = cache.stats()
        table = Table(title=f"Cache ({settings.cache_dir})", show_header=False)
        table.add_column(style="cyan")
        table.add_column(justify="right")
        table.add_row("Entrees", str(stats["size"]))
        table.add_row("Volume", f"{stats['volume'] / 1024:.1f} Ko")
        table.add_row("Hits", str(stats["hits"]))
        table.add_row("Misses", str(stats["misses"]))
        table.add_row("TTL", f"{cache.ttl} s")
        console.print(table)
        if clear:
            asyncio.run(cache.clear())
            console.print("[green]Cache vide[/green]")
    finally:
        cache.close()
