"""
Parsing des noms de fichiers et titres embarques.

Ce package contient:
- TitleCleaner: Normalisation et classification (film / serie / anime)
- EpisodeExtractor: Extraction saison/episode/titre d'episode
- AnimeTitleResolver: Titres d'anime bilingues et arcs de saison
- CandidateClassifier: Classification multi-sources (titre, fichier, dossiers)
"""

from vlcord.services.parsing.anime_titles import AnimeTitleResolver
from vlcord.services.parsing.candidates import (
    CandidateClassifier,
    build_candidates,
    classify_candidates,
)
from vlcord.services.parsing.episode_extractor import EpisodeExtractor, extract_tv_info
from vlcord.services.parsing.title_cleaner import CleanedTitle, TitleCleaner, clean_title

__all__ = [
    "AnimeTitleResolver",
    "CandidateClassifier",
    "build_candidates",
    "classify_candidates",
    "EpisodeExtractor",
    "extract_tv_info",
    "CleanedTitle",
    "TitleCleaner",
    "clean_title",
]
