"""
Stockage JSON des corrections manuelles de metadonnees (overrides).

Le document est versionne et organise par categorie:

    {
      "version": 1,
      "movies": {"[rec]": {"catalog_id": "24282", "title": "[REC]", "year": 2007}},
      "shows": {...},
      "custom": {...}
    }

Au chargement, chaque categorie du fichier est fusionnee par-dessus les
valeurs par defaut. Un fichier corrompu, illisible ou d'une version plus
recente est ignore (avertissement) et les valeurs par defaut sont utilisees.

Les ecritures passent par un fichier temporaire du meme dossier puis
os.replace, pour qu'un fichier a moitie ecrit ne soit jamais lu. Les erreurs
d'ecriture remontent a l'appelant.
"""

import json
import os
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from vlcord.core.value_objects.media_identity import MediaType

OVERRIDES_VERSION = 1
CATEGORIES = ("movies", "shows", "custom")

DEFAULT_OVERRIDES: dict[str, dict[str, dict[str, Any]]] = {
    "movies": {
        "[rec]": {"catalog_id": "24282", "title": "[REC]", "year": 2007},
        "[rec] 2": {"catalog_id": "24283", "title": "[REC] 2", "year": 2009},
        "[rec] 3": {"catalog_id": "65179", "title": "[REC] 3: Génesis", "year": 2012},
    },
    "shows": {
        "attack on titan": {"catalog_id": "37122", "title": "Attack on Titan"},
        "shingeki no kyojin": {"catalog_id": "37122", "title": "Attack on Titan"},
        "demon slayer": {"catalog_id": "78953", "title": "Demon Slayer"},
        "kimetsu no yaiba": {"catalog_id": "78953", "title": "Demon Slayer"},
    },
    "custom": {},
}


def normalize_key(title: str) -> str:
    """Cle de la table: minuscules et espaces retires aux extremites."""
    return title.lower().strip()


@dataclass(frozen=True)
class OverrideEntry:
    """
    Correction manuelle associant un titre a une fiche du catalogue.

    Attributs:
        category: movies, shows ou custom
        key: Titre normalise
        catalog_id: ID TMDB
        title: Titre a afficher (optionnel)
        year: Annee (optionnelle)
        media_type: Type force (custom uniquement, sinon deduit de la categorie)
    """

    category: str
    key: str
    catalog_id: str
    title: Optional[str] = None
    year: Optional[int] = None
    media_type: Optional[MediaType] = None

    @property
    def resolved_type(self) -> MediaType:
        if self.media_type is not None:
            return self.media_type
        return MediaType.TV if self.category == "shows" else MediaType.MOVIE

    def to_document(self) -> dict[str, Any]:
        data = asdict(self)
        del data["category"], data["key"]
        data["media_type"] = self.media_type.value if self.media_type else None
        return {name: value for name, value in data.items() if value is not None}

    @classmethod
    def from_document(cls, category: str, key: str, data: dict[str, Any]) -> "OverrideEntry":
        """Construit une entree depuis le document JSON (accepte l'ancien champ tmdbId)."""
        catalog_id = data.get("catalog_id", data.get("tmdbId"))
        if catalog_id is None or not str(catalog_id).strip():
            raise ValueError(f"Override sans catalog_id: {category}/{key}")
        raw_type = data.get("media_type")
        return cls(
            category=category,
            key=key,
            catalog_id=str(catalog_id),
            title=data.get("title"),
            year=int(data["year"]) if data.get("year") is not None else None,
            media_type=MediaType(raw_type) if raw_type else None,
        )


def _check_category(category: str) -> None:
    if category not in CATEGORIES:
        raise ValueError(f"Categorie inconnue: {category} (attendu: {', '.join(CATEGORIES)})")


class OverrideStore:
    """
    Table persistante des overrides, chargee au demarrage.

    Example:
        store = OverrideStore(Path("~/.config/vlcord/overrides.json").expanduser())
        store.get("movies", "[REC]")  # OverrideEntry(catalog_id="24282", ...)
        store.set("custom", "heat", "949", year=1995)
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._entries: dict[str, dict[str, OverrideEntry]] = self._defaults()
        if path is not None:
            self.load()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @staticmethod
    def _defaults() -> dict[str, dict[str, OverrideEntry]]:
        return {
            category: {
                key: OverrideEntry.from_document(category, key, data)
                for key, data in DEFAULT_OVERRIDES[category].items()
            }
            for category in CATEGORIES
        }

    def load(self) -> None:
        """
        (Re)charge le document depuis le disque.

        Un fichier absent laisse les valeurs par defaut. Un fichier corrompu
        ou trop recent est ignore avec un avertissement.
        """
        self._entries = self._defaults()
        if self._path is None or not self._path.exists():
            return

        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(document, dict):
                raise ValueError("le document doit etre un objet JSON")
            version = int(document.get("version", OVERRIDES_VERSION))
            if version > OVERRIDES_VERSION:
                logger.warning(
                    "Version d'overrides non supportee, valeurs par defaut utilisees",
                    path=str(self._path),
                    version=version,
                )
                return
            loaded = {
                category: {
                    normalize_key(key): OverrideEntry.from_document(
                        category, normalize_key(key), data
                    )
                    for key, data in (document.get(category) or {}).items()
                }
                for category in CATEGORIES
            }
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(
                "Fichier d'overrides illisible, valeurs par defaut utilisees",
                path=str(self._path),
                error=str(e),
            )
            return

        for category, entries in loaded.items():
            self._entries[category].update(entries)
        logger.info(
            "Overrides charges",
            path=str(self._path),
            count=sum(len(entries) for entries in loaded.values()),
        )

    def save(self) -> None:
        """
        Ecrit le document de maniere atomique.

        Raises:
            OSError: Si l'ecriture ou le renommage echoue
        """
        self._write(self._entries)

    def _commit(self, category: str, entries: dict[str, OverrideEntry]) -> None:
        """Ecrit la categorie modifiee; la memoire n'est mise a jour qu'apres l'ecriture."""
        updated = {**self._entries, category: entries}
        self._write(updated)
        self._entries = updated

    def _write(self, entries: dict[str, dict[str, OverrideEntry]]) -> None:
        if self._path is None:
            return
        document: dict[str, Any] = {"version": OVERRIDES_VERSION}
        for category in CATEGORIES:
            document[category] = {
                key: entry.to_document() for key, entry in sorted(entries[category].items())
            }

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2, ensure_ascii=False)
                handle.write("\n")
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Overrides sauvegardes", path=str(self._path))

    def get(self, category: str, title: str) -> Optional[OverrideEntry]:
        _check_category(category)
        return self._entries[category].get(normalize_key(title))

    def set(
        self,
        category: str,
        title: str,
        catalog_id: str,
        display_title: Optional[str] = None,
        year: Optional[int] = None,
        media_type: Optional[MediaType] = None,
    ) -> OverrideEntry:
        """
        Ajoute ou remplace une entree puis persiste le document.

        Raises:
            ValueError: Categorie inconnue ou catalog_id vide
            OSError: Si la sauvegarde echoue
        """
        _check_category(category)
        key = normalize_key(title)
        if not key:
            raise ValueError("Le titre d'un override ne peut pas etre vide")
        entry = OverrideEntry.from_document(
            category,
            key,
            {
                "catalog_id": catalog_id,
                "title": display_title,
                "year": year,
                "media_type": media_type.value if media_type else None,
            },
        )
        self._commit(category, {**self._entries[category], key: entry})
        return entry

    def remove(self, category: str, title: str) -> bool:
        """Supprime une entree; retourne False si elle n'existait pas."""
        _check_category(category)
        key = normalize_key(title)
        if key not in self._entries[category]:
            return False
        remaining = {k: v for k, v in self._entries[category].items() if k != key}
        self._commit(category, remaining)
        return True

    def entries(self, category: Optional[str] = None) -> list[OverrideEntry]:
        """Liste les entrees (toutes categories ou une seule)."""
        categories = CATEGORIES if category is None else (category,)
        result = []
        for name in categories:
            _check_category(name)
            result.extend(self._entries[name].values())
        return result
