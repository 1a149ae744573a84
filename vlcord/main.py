"""
Point d'entree CLI de VLCord.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from vlcord import __version__
from vlcord.adapters.cli.commands import (
    cache_stats,
    overrides_app,
    parse,
    resolve,
    watch,
)
from vlcord.adapters.cli.helpers import console
from vlcord.config import Settings
from vlcord.container import Container
from vlcord.logging_config import configure_logging

app = typer.Typer(
    name="vlcord",
    help="Suivi de lecture VLC enrichi par les metadonnees TMDB",
)
container = Container()


def _configure(settings: Settings, log_level: str) -> None:
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Logs detailles (DEBUG)"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """VLCord - Suivi de lecture VLC et metadonnees TMDB."""
    if quiet:
        _configure(get_config(), "ERROR")
    elif verbose:
        _configure(get_config(), "DEBUG")


app.command()(watch)
app.command()(parse)
app.command()(resolve)
app.command(name="cache-stats")(cache_stats)

# Monter overrides_app comme sous-commande
app.add_typer(overrides_app, name="overrides")


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    console.print(f"VLC : {config.vlc_host}:{config.vlc_port}")
    console.print(f"Mot de passe VLC : {'defini' if config.vlc_password else 'non defini'}")
    console.print(f"Intervalle de polling : {config.poll_interval:g} s")
    console.print(f"API TMDB : {'activee' if config.tmdb_enabled else 'desactivee'}")
    console.print(f"Langue TMDB : {config.tmdb_language}")
    console.print(f"Cache : {config.cache_dir} (TTL {config.cache_ttl_seconds} s)")
    console.print(f"Overrides : {config.overrides_file}")
    console.print(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"VLCord v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    settings = container.config()
    _configure(settings, settings.log_level)

    logger.info("Demarrage de VLCord", version=__version__)

    app()


if __name__ == "__main__":
    main()
