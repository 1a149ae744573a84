"""
Resolution des titres d'anime (titres bilingues et arcs de saison).

AnimeTitleResolver s'appuie sur une table curee des animes connus :
titre anglais, titre japonais romanise, politique d'affichage, variantes de
franchise (Naruto -> Naruto Shippuden), noms d'arcs par saison et
numerotation continue (One Piece).

Politiques d'affichage:
- both: "Anglais (Japonais)"
- japanese-primary: "Japonais (Anglais)"
- english-primary: anglais seul

La table est une valeur injectee a la construction (pas d'etat global),
ce qui permet des tables differentes par instance et des tests deterministes.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Optional

from vlcord.core.value_objects.catalog_record import CatalogRecord
from vlcord.core.value_objects.media_identity import MediaIdentity, MediaType
from vlcord.utils.constants import ANIME_GENRE_KEYWORDS

CJK_PATTERN = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\uff66-\uff9f]")

BOTH = "both"
JAPANESE_PRIMARY = "japanese-primary"
ENGLISH_PRIMARY = "english-primary"

_FANSUB_BRACKET = re.compile(r"^\s*\[([^\]]+)\]\s*\S")
_OVA_MARKER = re.compile(r"\b(?:ova|oad|ona)\b", re.IGNORECASE)
_ANIME_KEYWORD = re.compile(r"\banime\b|\b(?:subbed|dubbed)\b", re.IGNORECASE)
_EPISODE_MARKER = re.compile(
    r"\b(?:s\d{1,2}|season[\s._-]*\d+)[\s._-]+(?:e|ep|episode)[\s._-]*\d+"
    r"|\bs\d{1,2}e\d{1,3}\b|\b(?:episode|ep)[\s._-]*\d+|\s-\s\d{1,3}\b",
    re.IGNORECASE,
)
_GENRE_KEYWORD = re.compile(
    r"\b(?:" + "|".join(k.replace(" ", r"[\s._-]") for k in ANIME_GENRE_KEYWORDS) + r")\b",
    re.IGNORECASE,
)


def normalize_anime_key(title: str) -> str:
    """Normalise un titre pour la table (minuscules, non-alphanumerique -> espace)."""
    return " ".join(re.sub(r"[^0-9a-z]+", " ", title.lower()).split())


def has_cjk(text: Optional[str]) -> bool:
    """Vrai si le texte contient des caracteres japonais/chinois."""
    return bool(text and CJK_PATTERN.search(text))


@dataclass(frozen=True)
class AnimeEntry:
    """
    Entree de la table des animes.

    Attributs:
        english: Titre anglais
        japanese: Titre japonais romanise (optionnel)
        display_format: Politique d'affichage (both, japanese-primary, english-primary)
        special_seasons: Nom d'arc par numero de saison
        variants: Sous-titre de franchise -> titre complet (cle = mot du titre)
        no_season_display: Numerotation continue, pas d'affichage de saison
    """

    english: str
    japanese: Optional[str] = None
    display_format: str = ENGLISH_PRIMARY
    special_seasons: dict[int, str] = field(default_factory=dict)
    variants: dict[str, str] = field(default_factory=dict)
    no_season_display: bool = False

    def display_title(self) -> str:
        if self.japanese and self.display_format == BOTH:
            return f"{self.english} ({self.japanese})"
        if self.japanese and self.display_format == JAPANESE_PRIMARY:
            return f"{self.japanese} ({self.english})"
        return self.english


@dataclass(frozen=True)
class AnimeTitle:
    """Resultat du formatage d'un titre d'anime."""

    title: str
    season_name: Optional[str] = None
    no_season_display: bool = False
    display_format: Optional[str] = None
    matched: bool = False


_DEMON_SLAYER = AnimeEntry(
    english="Demon Slayer",
    japanese="Kimetsu no Yaiba",
    display_format=BOTH,
    special_seasons={
        2: "Entertainment District Arc",
        3: "Swordsmith Village Arc",
        4: "Hashira Training Arc",
    },
)
_ATTACK_ON_TITAN = AnimeEntry(
    english="Attack on Titan",
    japanese="Shingeki no Kyojin",
    special_seasons={4: "The Final Season"},
)
_MY_HERO_ACADEMIA = AnimeEntry(english="My Hero Academia", japanese="Boku no Hero Academia")
_EVANGELION = AnimeEntry(english="Neon Genesis Evangelion", japanese="Shin Seiki Evangelion")
_JOJO = AnimeEntry(english="JoJo's Bizarre Adventure")

DEFAULT_ANIME_MAP: dict[str, AnimeEntry] = {
    "kimetsu no yaiba": _DEMON_SLAYER,
    "demon slayer": _DEMON_SLAYER,
    "shingeki no kyojin": _ATTACK_ON_TITAN,
    "attack on titan": _ATTACK_ON_TITAN,
    "boku no hero academia": _MY_HERO_ACADEMIA,
    "my hero academia": _MY_HERO_ACADEMIA,
    "fullmetal alchemist": AnimeEntry(
        english="Fullmetal Alchemist",
        variants={"brotherhood": "Fullmetal Alchemist: Brotherhood"},
    ),
    "jujutsu kaisen": AnimeEntry(
        english="Jujutsu Kaisen", special_seasons={2: "Shibuya Incident Arc"}
    ),
    "one piece": AnimeEntry(english="One Piece", no_season_display=True),
    "death note": AnimeEntry(english="Death Note"),
    "naruto": AnimeEntry(english="Naruto", variants={"shippuden": "Naruto Shippuden"}),
    "naruto shippuden": AnimeEntry(english="Naruto Shippuden"),
    "hunter x hunter": AnimeEntry(english="Hunter × Hunter"),
    "spy x family": AnimeEntry(english="Spy × Family"),
    "one punch man": AnimeEntry(english="One-Punch Man", japanese="Wanpanman"),
    "tokyo ghoul": AnimeEntry(english="Tokyo Ghoul"),
    "steins gate": AnimeEntry(english="Steins;Gate"),
    "sword art online": AnimeEntry(english="Sword Art Online"),
    "mob psycho 100": AnimeEntry(english="Mob Psycho 100"),
    "made in abyss": AnimeEntry(english="Made in Abyss"),
    "cowboy bebop": AnimeEntry(english="Cowboy Bebop"),
    "evangelion": _EVANGELION,
    "neon genesis evangelion": _EVANGELION,
    "dragon ball": AnimeEntry(
        english="Dragon Ball",
        variants={"z": "Dragon Ball Z", "gt": "Dragon Ball GT", "super": "Dragon Ball Super"},
    ),
    "dragon ball z": AnimeEntry(english="Dragon Ball Z"),
    "dragon ball super": AnimeEntry(english="Dragon Ball Super"),
    "bleach": AnimeEntry(english="Bleach", special_seasons={17: "Thousand-Year Blood War"}),
    "jojo": _JOJO,
    "jojos bizarre adventure": _JOJO,
    "vinland saga": AnimeEntry(english="Vinland Saga"),
    "chainsaw man": AnimeEntry(english="Chainsaw Man", japanese="Chensō Man"),
    "mushoku tensei": AnimeEntry(
        english="Mushoku Tensei: Jobless Reincarnation",
        japanese="Mushoku Tensei: Isekai Ittara Honki Dasu",
    ),
}


def _contains_words(haystack: str, needle: str) -> bool:
    return bool(needle) and f" {needle} " in f" {haystack} "


class AnimeTitleResolver:
    """
    Detection et formatage des titres d'anime.

    Example:
        resolver = AnimeTitleResolver()
        resolver.is_anime("Kimetsu no Yaiba")  # True
        resolver.format(MediaIdentity(title="Kimetsu no Yaiba", season=2, episode=5))
        # AnimeTitle(title="Demon Slayer (Kimetsu no Yaiba)",
        #            season_name="Entertainment District Arc", ...)
    """

    def __init__(self, entries: Optional[dict[str, AnimeEntry]] = None) -> None:
        source = DEFAULT_ANIME_MAP if entries is None else entries
        self._entries = {normalize_anime_key(key): entry for key, entry in source.items()}
        # Cles les plus longues d'abord: "naruto shippuden" avant "naruto"
        self._keys_by_length = sorted(self._entries, key=len, reverse=True)

    def lookup(self, title: Optional[str]) -> Optional[AnimeEntry]:
        """
        Cherche l'entree correspondant a un titre.

        Correspondance exacte, puis la plus longue cle contenue dans le titre
        (mots entiers), puis un titre contenu dans une cle (titres d'au moins
        deux mots seulement, pour eviter "one" -> "one piece").
        """
        if not title:
            return None
        key = normalize_anime_key(title)
        if not key:
            return None
        entry = self._entries.get(key)
        if entry is not None:
            return entry
        for candidate in self._keys_by_length:
            if _contains_words(key, candidate):
                return self._entries[candidate]
        if " " in key:
            for candidate in self._keys_by_length:
                if _contains_words(candidate, key):
                    return self._entries[candidate]
        return None

    def is_anime(self, title: Optional[str], filename: str = "") -> bool:
        """
        Indique si un titre (et son nom de fichier) designe vraisemblablement un anime.

        Signaux: entree de la table, caracteres CJK, crochet de groupe fansub
        en tete, marqueurs OVA/OAD, mots-cles anime/subbed/dubbed, mots-cles
        de genre combines a un marqueur saison/episode.
        """
        if not title and not filename:
            return False
        if self.lookup(title) is not None:
            return True
        for text in (title or "", filename or ""):
            if not text:
                continue
            if has_cjk(text):
                return True
            if _FANSUB_BRACKET.search(text) and _EPISODE_MARKER.search(text):
                return True
            if _OVA_MARKER.search(text) or _ANIME_KEYWORD.search(text):
                return True
            if _GENRE_KEYWORD.search(text) and _EPISODE_MARKER.search(text):
                return True
        return False

    def format(
        self, identity: MediaIdentity, original_title: Optional[str] = None
    ) -> AnimeTitle:
        """
        Formate le titre d'un anime selon la table.

        Args:
            identity: Identite deduite (titre de serie prioritaire)
            original_title: Titre en langue originale (depuis le catalogue)

        Returns:
            AnimeTitle (matched=False et titre inchange si rien ne s'applique)
        """
        title = identity.lookup_title
        entry = self.lookup(title)

        if entry is None:
            if has_cjk(original_title) and original_title.lower() != title.lower():
                return AnimeTitle(title=f"{title} ({original_title})", matched=True)
            return AnimeTitle(title=title)

        key = normalize_anime_key(title)
        for variant, variant_title in entry.variants.items():
            if _contains_words(key, variant):
                return AnimeTitle(
                    title=variant_title,
                    display_format=entry.display_format,
                    matched=True,
                )

        season_name = None
        if identity.season is not None:
            season_name = entry.special_seasons.get(identity.season)

        return AnimeTitle(
            title=entry.display_title(),
            season_name=season_name or identity.season_name,
            no_season_display=entry.no_season_display,
            display_format=entry.display_format,
            matched=True,
        )

    def apply(self, record: CatalogRecord, identity: MediaIdentity) -> CatalogRecord:
        """
        Retourne une copie de la fiche portant les champs d'affichage anime.

        Le titre canonique du catalogue est utilise quand la table ne connait
        pas le titre extrait du fichier.
        """
        formatted = self.format(identity, original_title=record.original_title)
        if not formatted.matched:
            by_catalog = replace(identity, title=record.canonical_title, show_title=None)
            formatted = self.format(by_catalog, original_title=record.original_title)
        if not formatted.matched:
            return replace(record, media_type=MediaType.ANIME)
        return replace(
            record,
            media_type=MediaType.ANIME,
            display_title=formatted.title,
            season_name=formatted.season_name or record.season_name,
            no_season_display=formatted.no_season_display,
        )
