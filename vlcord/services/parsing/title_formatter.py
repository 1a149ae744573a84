"""
Mise en forme des titres extraits des noms de fichiers.

Fournit la casse "titre" utilisee pour les films, les series et les titres
d'episodes :
- premier et dernier mots capitalises, mots mineurs en minuscules ailleurs
- chiffres romains en majuscules
- mots a casse particuliere (NASA, iPhone, HBO...)
- noms de series connus et abreviations de chaines TV
"""

import re

from vlcord.utils.constants import (
    MINOR_WORDS,
    NETWORK_ABBREVIATIONS,
    ROMAN_NUMERALS,
    SHOW_TITLE_MAPPINGS,
    SHOWS_WITH_ARTICLE,
    SPECIAL_CASED_WORDS,
)

_RESOLUTION_SOURCE = re.compile(
    r"\b(?:720p|1080p|2160p|4k|uhd|hd|bluray|bdrip|brrip|web-dl|webdl|webrip|hdtv|dvdrip)\b",
    re.IGNORECASE,
)
_CODEC_AUDIO = re.compile(
    r"\b(?:10bit|x264|x265|hevc|xvid|divx|aac2\.0|aac|ac3|dts|dd5\.1|5\.1|h\.?264|flac|opus|multichannel)\b",
    re.IGNORECASE,
)
_STREAMING = re.compile(r"\b(?:amzn|nf|dsnp|netflix|disney|hulu|amazon)\b", re.IGNORECASE)
_TV_STREAMING = re.compile(r"\b(?:amzn|nf|dsnp)\b", re.IGNORECASE)
_RELEASE_GROUPS = re.compile(
    r"\b(?:yify|yts|rarbg|eztv|ettv|tepes|phoenix|internal|mzabi|fqm|deflate|flux|ntb|joy|tommy|dimension)\b",
    re.IGNORECASE,
)
_NAMED_SEASON = re.compile(
    r"(?:\s+-\s*)?\b(?:the\s+)?(?:1st|2nd|3rd|[4-9]th|final)\s+season\b", re.IGNORECASE
)
_TV_MARKERS = re.compile(
    r"\b(?:complete|season|episode|s\d{1,2}|e\d{1,3}|proper|repack|extended|unrated|directors\.?cut)\b",
    re.IGNORECASE,
)
# Contenu entre crochets/parentheses, sauf les codes pays "(US)" / "(UK)"
_BRACKETED = re.compile(r"\[[^\]]*\]|\((?!(?:us|uk)\))[^)]*\)", re.IGNORECASE)
_FILE_EXTENSION = re.compile(r"\b(?:mkv|mp4|avi|m4v)\b", re.IGNORECASE)
_TRAILING_TAG = re.compile(r"-\s*[A-Z0-9]{2,}$")
_CHAPTER = re.compile(r"^chapter\s+(\w+)(?:\s+(.+))?$", re.IGNORECASE)


def _collapse(text: str) -> str:
    return " ".join(text.split())


def capitalize_word(word: str) -> str:
    """
    Capitalise un mot en respectant les casses particulieres.

    Les mots entre crochets ou parentheses ("[REC]", "(US)") sont conserves
    tels quels.
    """
    if not word:
        return word
    special = SPECIAL_CASED_WORDS.get(word.lower())
    if special:
        return special
    if word[0] in "[(":
        return word
    return word[0].upper() + word[1:].lower()


def title_case(text: str) -> str:
    """
    Applique la casse titre a une chaine deja separee par des espaces.

    Args:
        text: Titre (mots separes par des espaces)

    Returns:
        Titre avec premier/dernier mots capitalises, mots mineurs en
        minuscules et chiffres romains en majuscules.
    """
    words = _collapse(text).split(" ")
    last = len(words) - 1
    result = []
    for index, word in enumerate(words):
        lower = word.lower()
        starts_clause = index == 0 or words[index - 1].endswith(":")
        if lower in ROMAN_NUMERALS:
            result.append(word.upper())
        elif "-" in word.strip("-"):
            result.append("-".join(capitalize_word(part) for part in word.split("-")))
        elif not starts_clause and index != last and lower in MINOR_WORDS:
            result.append(lower)
        else:
            result.append(capitalize_word(word))
    return " ".join(result)


def apply_networks(title: str) -> str:
    """Met en majuscules les abreviations de chaines TV (HBO, BBC, FX...)."""
    for network in NETWORK_ABBREVIATIONS:
        title = re.sub(rf"\b{network}\b", network, title, flags=re.IGNORECASE)
    return title


def format_tv_title(title: str) -> str:
    """
    Met en forme un titre de serie extrait d'un nom de fichier.

    Retire les marqueurs techniques et de saison, applique la casse titre
    puis les exceptions connues ("Walking Dead" -> "The Walking Dead").

    Args:
        title: Titre brut (points/underscores acceptes)

    Returns:
        Titre formate, ou chaine vide si rien ne subsiste
    """
    if not title:
        return ""

    formatted = re.sub(r"[._]", " ", title)
    for pattern in (
        _RESOLUTION_SOURCE,
        _CODEC_AUDIO,
        _NAMED_SEASON,
        _TV_MARKERS,
        _TV_STREAMING,
        _BRACKETED,
    ):
        formatted = pattern.sub("", formatted)
    formatted = _collapse(formatted).strip(" -")
    if not formatted:
        return ""

    formatted = title_case(formatted)

    mapped = SHOW_TITLE_MAPPINGS.get(formatted.lower())
    if mapped:
        return mapped

    formatted = apply_networks(formatted)

    if formatted.lower() in SHOWS_WITH_ARTICLE:
        formatted = f"The {formatted}"

    return formatted


def clean_episode_noise(title: str) -> str:
    """Retire le bruit technique d'un titre d'episode brut."""
    cleaned = re.sub(r"[._]", " ", title)
    for pattern in (
        _RESOLUTION_SOURCE,
        _CODEC_AUDIO,
        _BRACKETED,
        _STREAMING,
        _RELEASE_GROUPS,
        _FILE_EXTENSION,
    ):
        cleaned = pattern.sub("", cleaned)
    cleaned = re.sub(r"-\s*(?:\w+\s*)?(?:rip|dl|enc)\b", "", cleaned, flags=re.IGNORECASE)
    cleaned = _collapse(cleaned)
    cleaned = _TRAILING_TAG.sub("", cleaned)
    return _collapse(cleaned).strip(" -")


def format_episode_title(title: str) -> str:
    """
    Met en forme un titre d'episode.

    Les titres au format chapitre deviennent "Chapter Nine: The Reckoning".

    Args:
        title: Titre d'episode brut

    Returns:
        Titre formate, ou chaine vide si rien ne subsiste
    """
    if not title:
        return ""

    formatted = clean_episode_noise(title)
    if not formatted:
        return ""

    chapter = _CHAPTER.match(formatted)
    if chapter:
        number = chapter.group(1)
        if not number.isdigit():
            number = number.capitalize()
        rest = chapter.group(2)
        if rest:
            return f"Chapter {number}: {format_tv_title(rest)}"
        return f"Chapter {number}"

    return title_case(formatted)
