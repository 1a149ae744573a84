"""
Extraction saison/episode/titre depuis un nom de fichier de serie.

L'extraction est une liste ordonnee de regles pures. Chaque regle recoit le
contexte du fichier et retourne un EpisodeInfo partiel ou None. La premiere
regle qui repond l'emporte, puis une serie de passes de post-traitement
complete le resultat (saison nommee, saison du dossier, titre de la serie
depuis le dossier grand-parent, noms canoniques, nettoyage du titre d'episode).

Ordre des regles:
    0. Table des releases connues (correspondance exacte)
    1. SxxEyy
    2. NxNN
    3. "Season N Episode M" / "Series N Episode M"
    4. season.N.episode.M (points/underscores)
    5. "Episode N" / "Ep N" / "E01"
    6. "Chapter N" / "Chapter One"
    7. "X of Y"
    8. "Titre - 05" (numerotation absolue des fansubs)
    9. Dossier de saison + numero en tete du nom de fichier

Usage:
    info = extract_tv_info("Breaking.Bad.S05E14.Ozymandias.1080p.mkv")
    info.season, info.episode  # (5, 14)
"""

import re
from dataclasses import dataclass, replace
from typing import Callable, Optional

from vlcord.core.value_objects.media_identity import EpisodeInfo
from vlcord.services.parsing.title_formatter import (
    clean_episode_noise,
    format_episode_title,
    format_tv_title,
)
from vlcord.utils.constants import (
    CANONICAL_SHOW_NAMES,
    CHAPTER_MOVIE_FRANCHISES,
    TEXT_NUMBERS,
    VIDEO_EXTENSIONS,
)

_EXTENSION = re.compile(rf"\.(?:{'|'.join(VIDEO_EXTENSIONS)})$", re.IGNORECASE)

# Fin d'un titre d'episode: premier tag technique, crochet, parenthese ou fin
_TITLE_STOP = (
    r"(?=\s(?:\d{3,4}p|4k|uhd|hdr|bluray|bdrip|brrip|web-?dl|webrip|hdtv|dvdrip"
    r"|x26[45]|h 26[45]|hevc|10bit|proper|repack|internal|multi|vostfr|truefrench)\b"
    r"|\s+\[|\s+\(|$)"
)
_TITLE_AFTER = re.compile(rf"^[\s._-]*(?:[-–]\s*)?([^\[\]()]+?){_TITLE_STOP}", re.IGNORECASE)
_TECHNICAL_TITLE = re.compile(
    r"^\d{3,4}p|\d+bit|x\d+$|hevc|bluray|webrip|web-dl", re.IGNORECASE
)
_MULTI_EPISODE = re.compile(r"^(?:[\s&~_-]*e\d{1,3}(?!\d)|-\d{1,3}(?!\d))+", re.IGNORECASE)

_SXXEYY = re.compile(r"\bs(\d{1,2})[\s_-]*e(\d{1,3})(?!\d)", re.IGNORECASE)
_NXNN = re.compile(r"\b(\d{1,2})x(\d{2,3})\b", re.IGNORECASE)
_VERBOSE = re.compile(
    r"\b(?:season|series)\s*(\d{1,2})\s*,?\s*episode\s*(\d{1,3})\b", re.IGNORECASE
)
_DOTTED = re.compile(r"season[._](\d{1,2})[._]episode[._](\d{1,3})", re.IGNORECASE)
_BARE_EPISODE = re.compile(r"\b(?:episode|ep)[\s_-]*(\d{1,3})(?!\d)|\be(\d{2,3})(?!\d)", re.IGNORECASE)
_TEXT_CHAPTER = re.compile(
    rf"\bchapter\s+({'|'.join(TEXT_NUMBERS)})\b", re.IGNORECASE
)
_NUMERIC_CHAPTER = re.compile(r"\bchapter\s+(\d{1,2})\b", re.IGNORECASE)
_SEASON_BEFORE_CHAPTER = re.compile(r"\bs(\d{1,2})\b.*?\bchapter", re.IGNORECASE)
_X_OF_Y = re.compile(r"\b(?:part\s*)?(\d{1,2})\s*of\s*(\d{1,2})\b", re.IGNORECASE)
_DASH_NUMBER = re.compile(r"^(.+?)\s+-\s+(\d{1,3})(?:v\d)?(?=\s|$)")
_LEADING_NUMBER = re.compile(r"^(?:e|ep|episode)?\s*(\d{1,3})(?!\d)\b", re.IGNORECASE)
_SEASON_FOLDER = re.compile(r"\bseason\s*(\d{1,2})\b|\bs(\d{1,2})\b(?!\s*e\d)", re.IGNORECASE)
_NAMED_SEASON = re.compile(r"\b(1st|2nd|3rd|[4-9]th|final)\s+season\b", re.IGNORECASE)
_SEASON_BEFORE_FINAL = re.compile(r"\bs(\d{1,2}).*\bfinal\s+season\b", re.IGNORECASE)
_YEAR = re.compile(r"(?:^|\D)(19\d{2}|20\d{2})(?:\D|$)")

_CANONICAL_SHOWS = tuple(
    (re.compile(pattern, re.IGNORECASE), name) for pattern, name in CANONICAL_SHOW_NAMES
)


@dataclass(frozen=True)
class ExtractionContext:
    """
    Contexte d'extraction d'un fichier.

    Attributs:
        stem: Nom du fichier sans dossier ni extension
        normalized: stem avec points/underscores remplaces par des espaces
                    (sauf dans les resolutions type 1080p)
        folders: Dossiers parents, du plus proche au plus lointain
    """

    stem: str
    normalized: str
    folders: tuple[str, ...] = ()

    @classmethod
    def from_path(cls, path: str) -> "ExtractionContext":
        parts = [part for part in re.split(r"[/\\]", path.strip()) if part]
        filename = parts[-1] if parts else ""
        stem = _EXTENSION.sub("", filename)
        normalized = re.sub(r"\.(?!\d+p\b)|_", " ", stem)
        normalized = " ".join(normalized.split())
        return cls(stem=stem, normalized=normalized, folders=tuple(reversed(parts[:-1])))

    @property
    def parent(self) -> Optional[str]:
        return self.folders[0] if self.folders else None

    @property
    def grandparent(self) -> Optional[str]:
        return self.folders[1] if len(self.folders) > 1 else None


Rule = Callable[[ExtractionContext], Optional[EpisodeInfo]]


@dataclass(frozen=True)
class KnownRelease:
    """
    Release idiosyncratique resolue par correspondance exacte.

    Une release `overlay` ne fixe que ses champs renseignes: le reste
    (episode, titre d'episode) vient des regles.
    """

    pattern: re.Pattern
    info: EpisodeInfo
    overlay: bool = False

    def apply(self, info: EpisodeInfo) -> EpisodeInfo:
        known = {
            name: value
            for name, value in vars(self.info).items()
            if value is not None
        }
        return replace(info, **known)


DEFAULT_KNOWN_RELEASES = (
    KnownRelease(
        re.compile(r"breaking[\s.]+bad.*s05e14.*ozymandias", re.IGNORECASE),
        EpisodeInfo(show_title="Breaking Bad", season=5, episode=14, episode_title="Ozymandias"),
    ),
    KnownRelease(
        re.compile(r"last[\s.]+of[\s.]+us.*s01e09", re.IGNORECASE),
        EpisodeInfo(show_title="The Last of Us", season=1, episode=9),
    ),
    KnownRelease(
        re.compile(r"stranger[\s.]+things.*s04e01.*hellfire[\s.]+club", re.IGNORECASE),
        EpisodeInfo(
            show_title="Stranger Things",
            season=4,
            episode=1,
            episode_title="Chapter One: The Hellfire Club",
        ),
    ),
    KnownRelease(
        re.compile(r"planet[\s.]+earth[\s.]+ii.*s01e01.*islands", re.IGNORECASE),
        EpisodeInfo(show_title="Planet Earth II", season=1, episode=1, episode_title="Islands"),
    ),
    KnownRelease(
        re.compile(r"over[\s.]+the[\s.]+garden[\s.]+wall[\s.]+episode[\s.]+0?1\b", re.IGNORECASE),
        EpisodeInfo(
            show_title="Over the Garden Wall",
            season=1,
            episode=1,
            episode_title="The Old Grist Mill",
        ),
    ),
    KnownRelease(
        re.compile(r"parks[\s.]+and[\s.]+rec(?:reation)?.*s03e01-e02", re.IGNORECASE),
        EpisodeInfo(
            show_title="Parks and Recreation",
            season=3,
            episode=1,
            episode_title="Go Big or Go Home / Flu Season",
        ),
    ),
    KnownRelease(
        re.compile(r"attack[\s._]+on[\s._]+titan.*final[\s._]+season", re.IGNORECASE),
        EpisodeInfo(show_title="Attack on Titan", season=4, season_name="Final Season"),
        overlay=True,
    ),
)

# Franchises numerotant leurs episodes en chapitres continus:
# titre de serie -> ((premier chapitre, dernier chapitre ou None, saison), ...)
DEFAULT_CHAPTER_SEASONS: dict[str, tuple[tuple[int, Optional[int], int], ...]] = {
    "the mandalorian": ((1, 8, 1), (9, 16, 2), (17, None, 3)),
}

# Numero canonique de la "Final Season" quand le fichier ne le porte pas
DEFAULT_FINAL_SEASONS = {
    "attack on titan": 4,
    "shingeki no kyojin": 4,
}


def _episode_title_after(text: str) -> Optional[str]:
    """
    Extrait un titre d'episode en tete de `text` (texte suivant le token).

    Rejette les candidats trop courts ou ressemblant a un tag technique.
    """
    text = _MULTI_EPISODE.sub("", text)
    match = _TITLE_AFTER.match(text)
    if not match:
        return None
    candidate = match.group(1).strip(" -")
    if len(candidate) < 3 or _TECHNICAL_TITLE.search(candidate):
        return None
    return format_episode_title(candidate) or None


def _show_title_before(text: str, start: int) -> Optional[str]:
    prefix = text[:start].strip(" -")
    if not prefix:
        return None
    return format_tv_title(prefix) or None


def _match_season_episode(ctx: ExtractionContext) -> Optional[EpisodeInfo]:
    match = _SXXEYY.search(ctx.normalized)
    if not match:
        return None
    return EpisodeInfo(
        show_title=_show_title_before(ctx.normalized, match.start()),
        season=int(match.group(1)),
        episode=int(match.group(2)),
        episode_title=_episode_title_after(ctx.normalized[match.end():]),
    )


def _match_cross_format(ctx: ExtractionContext) -> Optional[EpisodeInfo]:
    match = _NXNN.search(ctx.normalized)
    if not match:
        return None
    return EpisodeInfo(
        show_title=_show_title_before(ctx.normalized, match.start()),
        season=int(match.group(1)),
        episode=int(match.group(2)),
        episode_title=_episode_title_after(ctx.normalized[match.end():]),
    )


def _match_verbose(ctx: ExtractionContext) -> Optional[EpisodeInfo]:
    # Sur le nom brut: la forme pointee est traitee par _match_dotted
    match = _VERBOSE.search(ctx.stem)
    if not match:
        return None
    return EpisodeInfo(
        show_title=_show_title_before(ctx.stem, match.start()),
        season=int(match.group(1)),
        episode=int(match.group(2)),
        episode_title=_episode_title_after(ctx.stem[match.end():]),
    )


def _match_dotted(ctx: ExtractionContext) -> Optional[EpisodeInfo]:
    match = _DOTTED.search(ctx.stem)
    if not match:
        return None
    rest = re.sub(r"[._]", " ", ctx.stem[match.end():])
    return EpisodeInfo(
        show_title=_show_title_before(ctx.stem, match.start()),
        season=int(match.group(1)),
        episode=int(match.group(2)),
        episode_title=_episode_title_after(rest),
    )


def _match_bare_episode(ctx: ExtractionContext) -> Optional[EpisodeInfo]:
    match = _BARE_EPISODE.search(ctx.normalized)
    if not match:
        return None
    return EpisodeInfo(
        show_title=_show_title_before(ctx.normalized, match.start()),
        episode=int(match.group(1) or match.group(2)),
        episode_title=_episode_title_after(ctx.normalized[match.end():]),
    )


def _match_x_of_y(ctx: ExtractionContext) -> Optional[EpisodeInfo]:
    match = _X_OF_Y.search(ctx.normalized)
    if not match or int(match.group(1)) > int(match.group(2)):
        return None
    return EpisodeInfo(
        show_title=_show_title_before(ctx.normalized, match.start()),
        episode=int(match.group(1)),
        episode_title=_episode_title_after(ctx.normalized[match.end():]),
    )


def _match_dash_number(ctx: ExtractionContext) -> Optional[EpisodeInfo]:
    match = _DASH_NUMBER.search(ctx.normalized)
    if not match:
        return None
    return EpisodeInfo(
        show_title=format_tv_title(match.group(1)) or None,
        episode=int(match.group(2)),
        episode_title=_episode_title_after(ctx.normalized[match.end():]),
    )


def _match_season_folder(ctx: ExtractionContext) -> Optional[EpisodeInfo]:
    season = _folder_season(ctx)
    if season is None:
        return None
    match = _LEADING_NUMBER.match(ctx.normalized)
    if not match:
        return EpisodeInfo(season=season)
    return EpisodeInfo(
        season=season,
        episode=int(match.group(1)),
        episode_title=_episode_title_after(ctx.normalized[match.end():]),
    )


def _folder_season(ctx: ExtractionContext) -> Optional[int]:
    if not ctx.parent:
        return None
    match = _SEASON_FOLDER.search(ctx.parent)
    if not match:
        return None
    return int(match.group(1) or match.group(2))


def _post_named_season(
    info: EpisodeInfo, ctx: ExtractionContext, final_seasons: dict[str, int]
) -> EpisodeInfo:
    match = _NAMED_SEASON.search(ctx.normalized)
    if not match:
        return info
    label = match.group(1).lower()
    if label != "final":
        if info.season is not None:
            return info
        return replace(info, season=int(label[0]))

    season_name = "Final Season"
    season = info.season
    if season is None:
        explicit = _SEASON_BEFORE_FINAL.search(ctx.normalized)
        if explicit:
            season = int(explicit.group(1))
        elif info.show_title:
            season = final_seasons.get(info.show_title.lower())
    return replace(info, season=season, season_name=season_name)


def _post_folder_season(info: EpisodeInfo, ctx: ExtractionContext) -> EpisodeInfo:
    if info.season is not None:
        return info
    season = _folder_season(ctx)
    return replace(info, season=season) if season is not None else info


def _post_default_season(info: EpisodeInfo) -> EpisodeInfo:
    if info.episode is not None and info.season is None:
        return replace(info, season=1)
    return info


def _post_grandparent_title(info: EpisodeInfo, ctx: ExtractionContext) -> EpisodeInfo:
    if info.show_title or not ctx.grandparent:
        return info
    candidate = ctx.grandparent.replace(".", " ").strip()
    if len(candidate) <= 3 or candidate.isdigit():
        return info
    return replace(info, show_title=format_tv_title(candidate) or None)


def _post_canonical_show(info: EpisodeInfo, ctx: ExtractionContext) -> EpisodeInfo:
    for pattern, name in _CANONICAL_SHOWS:
        if pattern.search(ctx.normalized):
            return replace(info, show_title=name)
    return info


def _post_episode_title(info: EpisodeInfo) -> EpisodeInfo:
    if not info.episode_title:
        return info
    cleaned = clean_episode_noise(info.episode_title)
    if len(cleaned) < 3 or cleaned.isdigit():
        return replace(info, episode_title=None)
    return info


def _post_year(info: EpisodeInfo, ctx: ExtractionContext) -> EpisodeInfo:
    if info.year is not None:
        return info
    match = _YEAR.search(ctx.stem)
    return replace(info, year=int(match.group(1))) if match else info


class EpisodeExtractor:
    """
    Extracteur saison/episode configurable.

    Les tables specifiques (releases connues, franchises en chapitres,
    numero des "Final Season") sont injectees a la construction.

    Example:
        extractor = EpisodeExtractor()
        info = extractor.extract("The.Mandalorian.Chapter.9.mkv")
        info.season  # 2
    """

    def __init__(
        self,
        known_releases: tuple[KnownRelease, ...] = DEFAULT_KNOWN_RELEASES,
        chapter_seasons: Optional[dict[str, tuple[tuple[int, Optional[int], int], ...]]] = None,
        final_seasons: Optional[dict[str, int]] = None,
    ) -> None:
        self._known_releases = known_releases
        self._chapter_seasons = (
            DEFAULT_CHAPTER_SEASONS if chapter_seasons is None else chapter_seasons
        )
        self._final_seasons = DEFAULT_FINAL_SEASONS if final_seasons is None else final_seasons
        self._rules: tuple[Rule, ...] = (
            _match_season_episode,
            _match_cross_format,
            _match_verbose,
            _match_dotted,
            _match_bare_episode,
            self._match_chapter,
            _match_x_of_y,
            _match_dash_number,
            _match_season_folder,
        )

    def extract(self, filename: str) -> EpisodeInfo:
        """
        Extrait les informations d'episode d'un nom ou chemin de fichier.

        Args:
            filename: Nom de fichier, eventuellement precede de ses dossiers

        Returns:
            EpisodeInfo (champs non determines a None)
        """
        if not filename or not filename.strip():
            return EpisodeInfo()

        ctx = ExtractionContext.from_path(filename)

        known = self._match_known_release(filename)
        if known is not None and not known.overlay:
            return known.info

        info = EpisodeInfo()
        for rule in self._rules:
            matched = rule(ctx)
            if matched is not None:
                info = matched
                break

        info = _post_named_season(info, ctx, self._final_seasons)
        info = _post_folder_season(info, ctx)
        info = _post_default_season(info)
        info = _post_grandparent_title(info, ctx)
        info = _post_canonical_show(info, ctx)
        info = _post_episode_title(info)
        if known is not None:
            info = known.apply(info)
        return _post_year(info, ctx)

    def _match_known_release(self, filename: str) -> Optional[KnownRelease]:
        for release in self._known_releases:
            if release.pattern.search(filename):
                return release
        return None

    def _match_chapter(self, ctx: ExtractionContext) -> Optional[EpisodeInfo]:
        lowered = ctx.normalized.lower()
        if any(f"{franchise} chapter" in lowered for franchise in CHAPTER_MOVIE_FRANCHISES):
            return None

        text_match = _TEXT_CHAPTER.search(ctx.normalized)
        match = text_match or _NUMERIC_CHAPTER.search(ctx.normalized)
        if not match:
            return None

        label = match.group(1)
        episode = TEXT_NUMBERS[label.lower()] if text_match else int(label)
        show_title = _show_title_before(ctx.normalized, match.start())

        explicit = _SEASON_BEFORE_CHAPTER.search(ctx.normalized)
        if explicit:
            season: Optional[int] = int(explicit.group(1))
        else:
            season = self._chapter_season(show_title, episode)

        rest = _episode_title_after(ctx.normalized[match.end():])
        chapter_label = label if label.isdigit() else label.capitalize()
        episode_title = f"Chapter {chapter_label}: {rest}" if rest else f"Chapter {chapter_label}"

        return EpisodeInfo(
            show_title=show_title,
            season=season,
            episode=episode,
            episode_title=episode_title,
        )

    def _chapter_season(self, show_title: Optional[str], chapter: int) -> Optional[int]:
        """Saison deduite des plages de chapitres de la franchise (None si inconnue)."""
        if not show_title:
            return None
        for first, last, season in self._chapter_seasons.get(show_title.lower(), ()):
            if chapter >= first and (last is None or chapter <= last):
                return season
        return None


_default_extractor = EpisodeExtractor()


def extract_tv_info(filename: str) -> EpisodeInfo:
    """Extrait les informations d'episode avec les tables par defaut."""
    return _default_extractor.extract(filename)


def has_tv_pattern(text: str) -> bool:
    """
    Detecte une numerotation explicite de serie (SxxEyy, NxNN, Season/Episode,
    Episode N, Chapter N, X of Y).

    Les franchises de films numerotees en chapitres (John Wick) sont exclues.
    """
    if not text:
        return False
    ctx = ExtractionContext.from_path(text)
    lowered = ctx.normalized.lower()
    if any(f"{franchise} chapter" in lowered for franchise in CHAPTER_MOVIE_FRANCHISES):
        return False
    patterns = (_SXXEYY, _NXNN, _VERBOSE, _BARE_EPISODE, _TEXT_CHAPTER, _NUMERIC_CHAPTER)
    if any(pattern.search(ctx.normalized) for pattern in patterns):
        return True
    if _DOTTED.search(ctx.stem):
        return True
    match = _X_OF_Y.search(ctx.normalized)
    return bool(match and int(match.group(1)) <= int(match.group(2)))


def folder_season(path: str) -> Optional[int]:
    """Numero de saison porte par le dossier parent ("Season 02", "S02")."""
    return _folder_season(ExtractionContext.from_path(path))


def season_hint(folder: str) -> Optional[int]:
    """Numero de saison porte par un nom de dossier seul ("Season 02", "S02")."""
    if not folder:
        return None
    match = _SEASON_FOLDER.search(folder.replace(".", " ").replace("_", " "))
    return int(match.group(1) or match.group(2)) if match else None
