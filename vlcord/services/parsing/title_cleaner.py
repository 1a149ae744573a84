"""
Normalisation et classification des noms de fichiers video.

TitleCleaner transforme un nom de fichier brut (ou un titre embarque) en
titre propre, annee et type de media:

1. Retrait du chemin et de l'extension
2. Detection d'un groupe fansub en tete ("[Group] Titre - 05"). Un crochet
   en tete qui ne laisse rien derriere lui est le titre ("[REC].2007")
3. Retrait des groupes techniques entre crochets/parentheses
4. Passes ordonnees de retrait du bruit: resolution, source, audio, codec,
   drapeaux de release, plateformes de streaming, tag "-GROUPE" final
5. Separateurs (points, underscores, tirets isoles) -> espaces
6. Extraction de l'annee (les titres numeriques connus comme "1917" et les
   titres contenant une annee comme "Blade Runner 2049" ne sont pas traites
   comme une annee)
7. Reconstruction via guessit si le resultat est purement numerique
8. Casse titre

Classification: numerotation TV explicite > signal anime > film.

La normalisation est idempotente: nettoyer un titre deja nettoye le laisse
inchange.
"""

import re
from dataclasses import dataclass
from typing import Optional

from guessit import guessit
from loguru import logger

from vlcord.core.value_objects.media_identity import MediaType
from vlcord.services.parsing.anime_titles import AnimeTitleResolver
from vlcord.services.parsing.episode_extractor import has_tv_pattern
from vlcord.services.parsing.title_formatter import title_case
from vlcord.utils.constants import NUMERIC_TITLES, VIDEO_EXTENSIONS, YEAR_TITLES

_EXTENSION = re.compile(rf"\.(?:{'|'.join(VIDEO_EXTENSIONS)})$", re.IGNORECASE)
_LEADING_BRACKET = re.compile(r"^\s*\[([^\]]+)\]\s*(.*)$")
_BRACKET_GROUP = re.compile(r"\[([^\]]*)\]")
_PAREN_GROUP = re.compile(r"\(([^)]*)\)")
_YEAR_TOKEN = re.compile(r"^(?:19\d{2}|20\d{2})$")
_TV_MARKER = re.compile(
    r"\bs\d{1,2}[\s_-]*e\d{1,3}|\b\d{1,2}x\d{2,3}\b"
    r"|\b(?:season|series|episode|ep|chapter)\b[\s._-]*\d"
    r"|\bchapter\s+(?:one|two|three|four|five|six|seven|eight|nine|ten)\b"
    r"|\s-\s\d{1,3}\b",
    re.IGNORECASE,
)


def _tag(pattern: str, flags: int = re.IGNORECASE) -> re.Pattern:
    """Compile un motif borne par des separateurs (points et tirets compris)."""
    return re.compile(rf"(?<![A-Za-z0-9])(?:{pattern})(?![A-Za-z0-9])", flags)


# Passes de retrait du bruit, dans l'ordre d'application
NOISE_PASSES: tuple[tuple[str, re.Pattern], ...] = (
    ("resolution", _tag(r"\d{3,4}[pi]|4k|8k|uhd|hdr10\+?|hdr|sdr|dolby[\s.]?vision")),
    (
        "source",
        _tag(
            r"blu-?ray|bdrip|brrip|bdremux|remux|web-?dl|web-?rip|hdtv|hdrip|dvdrip"
            r"|dvdscr|dvd5|dvd9|camrip|hdcam|hc"
        ),
    ),
    ("source", _tag(r"WEB", flags=0)),
    (
        "audio",
        _tag(
            r"dts(?:-?hd)?(?:-?ma)?|e-?ac-?3|ac3|aac(?:[\s.]?2[\s.]0)?|mp3|flac|atmos|truehd"
            r"|ddp?(?:[\s.]?[257][\s.][01])?|[57][\s.]1"
        ),
    ),
    ("codec", _tag(r"x\.?26[45]|h\.?26[45]|hevc|avc|xvid|divx|av1|vp9|10-?bits?|8-?bits?|hi10p?")),
    (
        "release",
        _tag(
            r"repack|proper|internal|limited|unrated|extended|directors?[\s.]cut|remastered"
            r"|imax|multi|truefrench|vostfr|vff|subfrench"
        ),
    ),
    ("streaming", _tag(r"amzn|nf|dsnp|hmax|atvp|pcok")),
)

_TECHNICAL_WORD = re.compile(
    "|".join(pattern.pattern for _, pattern in NOISE_PASSES) + r"|^[0-9a-f]{8}$",
    re.IGNORECASE,
)
_RELEASE_GROUP = re.compile(r"-([A-Za-z0-9]+)$")
_DASH_EPISODE = re.compile(r"\s-\s(\d{1,3})(?:v\d)?(?=[\s.\[(]|$)")


@dataclass(frozen=True)
class CleanedTitle:
    """
    Resultat de la normalisation d'un nom de fichier.

    Attributs:
        title: Titre propre (vide si rien d'exploitable)
        year: Annee extraite
        media_type: Type deduit (TV > ANIME > MOVIE, UNKNOWN si vide)
        release_group: Groupe fansub/release detecte
    """

    title: str
    year: Optional[int] = None
    media_type: MediaType = MediaType.UNKNOWN
    release_group: Optional[str] = None


def strip_extension(name: str) -> str:
    """Retire les dossiers et l'extension video d'un nom de fichier."""
    basename = re.split(r"[/\\]", name.strip())[-1]
    return _EXTENSION.sub("", basename)


def _is_technical(text: str) -> bool:
    words = [word for word in re.split(r"[\s._]+", text) if word]
    return bool(words) and all(_TECHNICAL_WORD.search(word) for word in words)


def _remove_bracket_groups(text: str) -> str:
    """Retire les groupes [..] et les parentheses techniques; garde les annees."""

    def _paren(match: re.Match) -> str:
        content = match.group(1).strip()
        if _YEAR_TOKEN.match(content):
            return f" {content} "
        if not content or _is_technical(content):
            return " "
        return match.group(0)

    text = _BRACKET_GROUP.sub(" ", text)
    return _PAREN_GROUP.sub(_paren, text)


def _remove_noise(text: str) -> str:
    for _, pattern in NOISE_PASSES:
        text = pattern.sub(" ", text)
    return text


def _collapse_separators(text: str) -> str:
    text = re.sub(r"[._]+", " ", text)
    # Tirets isoles ou en bordure de mot; "Spider-Man" est conserve
    text = re.sub(r"(?:^|\s)-+(?=\s|$)|(?<=\s)-+(?=\S)|(?<=\S)-+(?=\s|$)", " ", text)
    return " ".join(text.split())


def _protected_prefix(tokens: list[str]) -> int:
    """Nombre de mots en tete qui forment un titre contenant une annee."""
    lowered = [token.lower() for token in tokens]
    longest = 1
    for known in YEAR_TITLES:
        words = known.split(" ")
        if lowered[: len(words)] == words:
            longest = max(longest, len(words))
    return longest


def _split_year(title: str) -> tuple[str, Optional[int]]:
    """
    Separe le titre de l'annee.

    La derniere annee qui n'est pas en tete est retenue et tout ce qui la
    suit est ignore. Un titre reduit a une annee connue ("1917") est garde,
    de meme que l'annee d'un titre connu ("Blade Runner 2049").
    """
    tokens = title.split(" ")
    for index in range(len(tokens) - 1, _protected_prefix(tokens) - 1, -1):
        if _YEAR_TOKEN.match(tokens[index]):
            return " ".join(tokens[:index]), int(tokens[index])
    return title, None


def _strip_leading_group(stem: str) -> tuple[str, Optional[str], Optional[str]]:
    """
    Detecte un groupe fansub en tete.

    Returns:
        (texte restant, groupe ou None, titre entre crochets ou None)
    """
    match = _LEADING_BRACKET.match(stem)
    if not match:
        return stem, None, None
    content, rest = match.group(1).strip(), match.group(2)
    remainder = _collapse_separators(_remove_noise(_remove_bracket_groups(rest)))
    if re.search(r"[A-Za-z]", remainder):
        return rest, content, None
    # Rien d'exploitable apres le crochet: le crochet est le titre ("[REC]")
    return rest, None, f"[{content}]"


def _reconstruct_numeric(raw: str, title: str, year: Optional[int]) -> tuple[str, Optional[int]]:
    """Reconstruit un titre purement numerique via guessit."""
    guessed = guessit(raw)
    guessed_title = str(guessed.get("title", "")).strip()
    guessed_year = guessed.get("year")
    logger.debug(
        "Reconstruction d'un titre numerique",
        raw=raw,
        title=title,
        guessed_title=guessed_title,
    )
    if guessed_title and not guessed_title.isdigit():
        return guessed_title, year or (guessed_year if isinstance(guessed_year, int) else None)
    return title, year


class TitleCleaner:
    """
    Normalise et classe les noms de fichiers.

    Example:
        cleaner = TitleCleaner(AnimeTitleResolver())
        cleaned = cleaner.clean("Inception.2010.1080p.BluRay.x264-GROUP.mkv")
        cleaned.title, cleaned.year  # ("Inception", 2010)
    """

    def __init__(self, anime: Optional[AnimeTitleResolver] = None) -> None:
        self._anime = anime or AnimeTitleResolver()

    def normalize(self, raw: str) -> tuple[str, Optional[int], Optional[str]]:
        """
        Normalise un nom de fichier sans le classer.

        Returns:
            (titre, annee, groupe de release)
        """
        stem = strip_extension(raw or "")
        if not stem.strip():
            return "", None, None

        text, group, bracket_title = _strip_leading_group(stem)

        stripped = text.strip()
        if stripped and _TECHNICAL_WORD.search(stripped):
            trailing = _RELEASE_GROUP.search(stripped)
            last_token = re.split(r"[\s._]+", stripped)[-1]
            # "WEB-DL" est un tag technique, pas un groupe
            if trailing and not group and not _TECHNICAL_WORD.fullmatch(last_token):
                group = trailing.group(1)
                text = stripped[: trailing.start()]

        text = _collapse_separators(_remove_noise(_remove_bracket_groups(text)))
        if bracket_title:
            text = f"{bracket_title} {text}".strip()

        title, year = _split_year(text)
        if title.isdigit() and title not in NUMERIC_TITLES:
            title, year = _reconstruct_numeric(stem, title, year)

        return title_case(title) if title else "", year, group

    def classify(self, raw: str, title: str) -> MediaType:
        """Classe un nom de fichier: TV > ANIME > MOVIE (UNKNOWN si titre vide)."""
        if not title:
            return MediaType.UNKNOWN
        if has_tv_pattern(raw):
            return MediaType.TV
        if self._anime.is_anime(title, raw):
            return MediaType.ANIME
        return MediaType.MOVIE

    def clean(self, raw: str) -> CleanedTitle:
        """
        Nettoie et classe un nom de fichier.

        Pour une serie, le titre est coupe au premier marqueur saison/episode.

        Args:
            raw: Nom de fichier, chemin ou titre embarque

        Returns:
            CleanedTitle
        """
        title, year, group = self.normalize(raw)
        media_type = self.classify(raw, title)
        if media_type in (MediaType.TV, MediaType.ANIME):
            marker = _TV_MARKER.search(title)
            if marker:
                # "Episode 05" seul: le titre viendra des dossiers
                title = title[: marker.start()].strip(" -")
            dash = _DASH_EPISODE.search(strip_extension(raw))
            if dash:
                number = re.search(rf"\s{re.escape(dash.group(1))}(?:v\d)?\b", title)
                if number:
                    title = title[: number.start()].strip()
        return CleanedTitle(title=title, year=year, media_type=media_type, release_group=group)


_default_cleaner: Optional[TitleCleaner] = None


def clean_title(raw: str) -> CleanedTitle:
    """Nettoie un nom de fichier avec la table anime par defaut."""
    global _default_cleaner
    if _default_cleaner is None:
        _default_cleaner = TitleCleaner()
    return _default_cleaner.clean(raw)
