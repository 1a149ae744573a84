"""
Utilitaires et constantes pour VLCord.

Ce module contient les constantes partagees.
"""

from vlcord.utils.constants import (
    NUMERIC_TITLES,
    TMDB_BASE_URL,
    TMDB_IMAGE_BASE_URL,
    VIDEO_EXTENSIONS,
    YEAR_TITLES,
)

__all__ = [
    "VIDEO_EXTENSIONS",
    "NUMERIC_TITLES",
    "YEAR_TITLES",
    "TMDB_BASE_URL",
    "TMDB_IMAGE_BASE_URL",
]
