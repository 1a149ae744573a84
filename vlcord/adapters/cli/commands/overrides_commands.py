"""
Commandes CLI de gestion des overrides (list, set, remove).
"""

from typing import Annotated, Optional

import typer
from rich.table import Table

from vlcord.adapters.cli.helpers import console
from vlcord.adapters.persistence.overrides_store import CATEGORIES, OverrideStore
from vlcord.config import Settings
from vlcord.core.value_objects import MediaType

# Application Typer pour les commandes d'overrides
overrides_app = typer.Typer(
    name="overrides",
    help="Gestion des corrections manuelles titre -> fiche TMDB",
    rich_markup_mode="rich",
)


def _store() -> OverrideStore:
    return OverrideStore(Settings().overrides_file)


def _check_category(category: str) -> str:
    category = category.lower()
    if category not in CATEGORIES:
        raise typer.BadParameter(
            f"categorie inconnue '{category}' (attendu: {', '.join(CATEGORIES)})"
        )
    return category


@overrides_app.command("list")
def overrides_list(
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-c", help="movies, shows ou custom"),
    ] = None,
) -> None:
    """Liste les overrides enregistres."""
    if category is not None:
        category = _check_category(category)
    store = _store()
    entries = store.entries(category)

    table = Table(title=f"Overrides ({store.path})")
    table.add_column("Categorie", style="cyan")
    table.add_column("Titre")
    table.add_column("TMDB", justify="right")
    table.add_column("Fiche")
    table.add_column("Type")
    for entry in sorted(entries, key=lambda e: (e.category, e.key)):
        label = entry.title or ""
        if entry.year:
            label = f"{label} ({entry.year})".strip()
        table.add_row(
            entry.category,
            entry.key,
            entry.catalog_id,
            label,
            entry.media_type.value if entry.media_type else "",
        )
    console.print(table)
    console.print(f"[dim]{len(entries)} entree(s)[/dim]")


@overrides_app.command("set")
def overrides_set(
    category: Annotated[str, typer.Argument(help="movies, shows ou custom")],
    title: Annotated[str, typer.Argument(help="Titre tel que deduit du nom de fichier")],
    catalog_id: Annotated[str, typer.Argument(help="ID TMDB")],
    display_title: Annotated[
        Optional[str],
        typer.Option("--title", "-t", help="Titre affiche (evite l'appel TMDB)"),
    ] = None,
    year: Annotated[Optional[int], typer.Option("--year", "-y")] = None,
    media_type: Annotated[
        Optional[str],
        typer.Option("--type", help="movie ou tv (restreint un override custom)"),
    ] = None,
) -> None:
    """
    Ajoute ou remplace un override.

    Exemples:
      vlcord overrides set movies "rec" 8329 --title "[REC]" --year 2007
      vlcord overrides set custom "the office" 2316 --type tv
    """
    category = _check_category(category)
    kind: Optional[MediaType] = None
    if media_type is not None:
        try:
            kind = MediaType(media_type.lower())
        except ValueError:
            raise typer.BadParameter(f"type inconnu '{media_type}' (attendu: movie, tv)")
        if kind not in (MediaType.MOVIE, MediaType.TV):
            raise typer.BadParameter(f"type non supporte '{media_type}' (attendu: movie, tv)")

    store = _store()
    try:
        entry = store.set(
            category, title, catalog_id, display_title=display_title, year=year, media_type=kind
        )
    except ValueError as e:
        console.print(f"[red]Override invalide:[/red] {e}")
        raise typer.Exit(code=1)
    except OSError as e:
        console.print(f"[red]Sauvegarde impossible:[/red] {e}")
        raise typer.Exit(code=1)
    console.print(
        f"[green]Override enregistre[/green] {entry.category}/{entry.key} -> {entry.catalog_id}"
    )


@overrides_app.command("remove")
def overrides_remove(
    category: Annotated[str, typer.Argument(help="movies, shows ou custom")],
    title: Annotated[str, typer.Argument(help="Titre de l'override")],
) -> None:
    """Supprime un override."""
    category = _check_category(category)
    store = _store()
    try:
        removed = store.remove(category, title)
    except OSError as e:
        console.print(f"[red]Sauvegarde impossible:[/red] {e}")
        raise typer.Exit(code=1)
    if not removed:
        console.print(f"[yellow]Aucun override[/yellow] {category}/{title}")
        raise typer.Exit(code=1)
    console.print(f"[green]Override supprime[/green] {category}/{title}")
