"""
Table de correspondance titre -> fiche catalogue, prioritaire sur la recherche.

Ordre de consultation:
1. Categorie "custom" du store (corrections de l'utilisateur)
2. Categorie du store (movies ou shows)
3. Tables integrees de desambiguisation (ID seul)

Pour les films, les tables integrees sont consultees par "titre annee", puis
par correspondance exacte, puis par prefixe en mots entiers suivi d'une
annee ("the thing 1982 remastered").
"""

import re
from typing import Optional

from loguru import logger

from vlcord.adapters.persistence.overrides_store import (
    OverrideEntry,
    OverrideStore,
    normalize_key,
)
from vlcord.core.value_objects.media_identity import MediaType

# Titres difficiles a retrouver par la recherche: crochets, nombres,
# titres partages par plusieurs films
BUILTIN_MOVIE_IDS: dict[str, str] = {
    "rec": "10664",
    "rec 2007": "10664",
    "[rec] 2007": "10664",
    "rec 2": "40236",
    "three identical strangers": "489466",
    "the thing": "1091",
    "the thing 1982": "1091",
    "the thing 2011": "76655",
    "alien": "348",
    "aliens": "679",
    "the matrix": "603",
    "2001": "62",
    "2001 a space odyssey": "62",
    "heat": "949",
    "heat 1995": "949",
    "deadstream": "886083",
}

# Series aux titres ambigus ou abreges
BUILTIN_SHOW_IDS: dict[str, str] = {
    "24": "1973",
    "the 100": "48866",
    "911": "75219",
    "9-1-1": "75219",
    "mash": "918",
    "m*a*s*h": "918",
    "the shield": "1414",
    "agents of shield": "1403",
    "the office": "2316",
    "the office us": "2316",
    "the office (us)": "2316",
    "the office uk": "2996",
    "the office (uk)": "2996",
    "law and order svu": "2734",
    "csi": "1431",
    "csi ny": "2458",
    "csi miami": "1620",
    "ncis la": "17610",
    "ncis los angeles": "17610",
    "doctor who": "57243",
    "doctor who 2005": "57243",
    "doctor who 1963": "121",
    "one piece": "37854",
    "naruto": "46260",
    "naruto shippuden": "31910",
    "hunter x hunter": "46298",
    "jujutsu kaisen": "95479",
    "one punch man": "63926",
    "death note": "13916",
    "the mandalorian": "82856",
}


def _strip_punctuation(key: str) -> str:
    return " ".join(re.sub(r"[^\w\s]", " ", key).split())


class OverrideTable:
    """
    Consultation des overrides (store + tables integrees).

    Les tables integrees sont injectables pour les tests.

    Example:
        table = OverrideTable(store)
        entry = table.find_movie("[REC]", year=2007)
        entry.catalog_id  # "24282"
    """

    def __init__(
        self,
        store: OverrideStore,
        movie_ids: Optional[dict[str, str]] = None,
        show_ids: Optional[dict[str, str]] = None,
    ) -> None:
        self._store = store
        movies = BUILTIN_MOVIE_IDS if movie_ids is None else movie_ids
        shows = BUILTIN_SHOW_IDS if show_ids is None else show_ids
        self._movie_ids = {normalize_key(k): v for k, v in movies.items()}
        self._show_ids = {normalize_key(k): v for k, v in shows.items()}

    @property
    def store(self) -> OverrideStore:
        return self._store

    def _variants(self, title: str) -> list[str]:
        key = normalize_key(title)
        stripped = _strip_punctuation(key)
        return [key] if stripped == key or not stripped else [key, stripped]

    def find_movie(self, title: str, year: Optional[int] = None) -> Optional[OverrideEntry]:
        """
        Cherche un override de film.

        Args:
            title: Titre nettoye
            year: Annee (utilisee pour la cle "titre annee")

        Returns:
            OverrideEntry (title None pour une entree integree) ou None
        """
        for key in self._variants(title):
            for category in ("custom", "movies"):
                entry = self._store.get(category, key)
                if entry is not None and entry.media_type != MediaType.TV:
                    logger.debug("Override film trouve", key=key, category=category)
                    return entry

        for key in self._variants(title):
            builtin = self._movie_ids.get(f"{key} {year}") if year is not None else None
            if builtin is None:
                builtin = self._movie_ids.get(key)
            if builtin is not None:
                return OverrideEntry(category="builtin", key=key, catalog_id=builtin, year=year)

        key = normalize_key(title)
        for candidate in sorted(self._movie_ids, key=len, reverse=True):
            remainder = key[len(candidate) + 1 :] if key.startswith(f"{candidate} ") else ""
            if re.match(r"(?:19|20)\d{2}\b", remainder):
                catalog_id = self._movie_ids[candidate]
                logger.debug("Override film par prefixe", key=key, prefix=candidate)
                return OverrideEntry(category="builtin", key=candidate, catalog_id=catalog_id)
        return None

    def find_show(self, title: str) -> Optional[OverrideEntry]:
        """Cherche un override de serie (custom, store, table integree)."""
        for key in self._variants(title):
            custom = self._store.get("custom", key)
            if custom is not None and custom.media_type != MediaType.MOVIE:
                return custom
            entry = self._store.get("shows", key)
            if entry is not None:
                return entry

        for key in self._variants(title):
            builtin = self._show_ids.get(key)
            if builtin is not None:
                return OverrideEntry(category="builtin", key=key, catalog_id=builtin)
        return None
