"""
Classification multi-sources d'un media en cours de lecture.

Les chaines candidates sont examinees par ordre de priorite:
titre embarque, nom de fichier, dossier parent, dossier grand-parent.
Le premier candidat portant un signal confiant (numerotation TV, signal
anime, dossier de saison) l'emporte. Sans signal confiant, le premier
candidat dont le titre nettoye est exploitable donne un film.
"""

import re
from typing import Iterable, Optional

from loguru import logger

from vlcord.core.value_objects import (
    CandidateSource,
    ClassificationResult,
    EpisodeInfo,
    Matched,
    MediaIdentity,
    MediaType,
    RawPlaybackSample,
    TitleCandidate,
    Unmatched,
)
from vlcord.services.parsing.anime_titles import AnimeTitleResolver
from vlcord.services.parsing.episode_extractor import EpisodeExtractor, season_hint
from vlcord.services.parsing.title_cleaner import CleanedTitle, TitleCleaner


def build_candidates(sample: RawPlaybackSample) -> list[TitleCandidate]:
    """
    Construit la liste ordonnee des candidats d'un echantillon.

    Le candidat "nom de fichier" porte le chemin complet quand il est connu,
    pour que l'extracteur voie les dossiers de saison.
    """
    candidates: list[TitleCandidate] = []
    if sample.title and sample.title.strip():
        candidates.append(TitleCandidate(sample.title.strip(), CandidateSource.EMBEDDED_TITLE))

    path = sample.file_path or sample.filename
    if path and path.strip():
        candidates.append(TitleCandidate(path.strip(), CandidateSource.FILENAME))

    if sample.file_path:
        folders = [part for part in re.split(r"[/\\]", sample.file_path) if part][:-1]
        if folders:
            candidates.append(TitleCandidate(folders[-1], CandidateSource.PARENT_FOLDER))
        if len(folders) > 1:
            candidates.append(TitleCandidate(folders[-2], CandidateSource.GRANDPARENT_FOLDER))
    return candidates


class CandidateClassifier:
    """
    Replie les candidats en un resultat etiquete Matched | Unmatched.

    Example:
        classifier = CandidateClassifier()
        result = classifier.classify_sample(sample)
        if isinstance(result, Matched):
            result.identity.lookup_key
    """

    def __init__(
        self,
        cleaner: Optional[TitleCleaner] = None,
        extractor: Optional[EpisodeExtractor] = None,
        anime: Optional[AnimeTitleResolver] = None,
    ) -> None:
        self._anime = anime or AnimeTitleResolver()
        self._cleaner = cleaner or TitleCleaner(self._anime)
        self._extractor = extractor or EpisodeExtractor()

    def classify_sample(self, sample: RawPlaybackSample) -> ClassificationResult:
        return self.classify(build_candidates(sample))

    def classify(self, candidates: Iterable[TitleCandidate]) -> ClassificationResult:
        """
        Classe une liste ordonnee de candidats.

        Args:
            candidates: Candidats par ordre de priorite decroissant

        Returns:
            Matched avec l'identite deduite, ou Unmatched si aucun candidat
            n'a de titre exploitable.
        """
        ordered = list(candidates)
        if not ordered:
            return Unmatched(TitleCandidate("", CandidateSource.FILENAME), "aucun candidat")

        cleaned = [self._cleaner.clean(candidate.value) for candidate in ordered]

        for index, (candidate, result) in enumerate(zip(ordered, cleaned)):
            if result.media_type in (MediaType.TV, MediaType.ANIME):
                identity = self._episode_identity(ordered, cleaned, index, result.media_type)
                if identity is not None:
                    return Matched(identity, candidate)
            if candidate.source != CandidateSource.EMBEDDED_TITLE and self._season_hint(candidate):
                identity = self._episode_identity(ordered, cleaned, index, MediaType.TV)
                if identity is not None:
                    return Matched(identity, candidate)

        for candidate, result in zip(ordered, cleaned):
            if result.title:
                year = result.year or self._year_for(result.title, cleaned)
                identity = MediaIdentity(title=result.title, media_type=MediaType.MOVIE, year=year)
                return Matched(identity, candidate)

        logger.debug("Aucun titre exploitable", candidates=[c.value for c in ordered])
        return Unmatched(ordered[0], "aucun titre exploitable")

    def _season_hint(self, candidate: TitleCandidate) -> Optional[int]:
        if candidate.source == CandidateSource.FILENAME:
            parts = [part for part in re.split(r"[/\\]", candidate.value) if part]
            return season_hint(parts[-2]) if len(parts) > 1 else None
        return season_hint(candidate.value)

    def _episode_info(self, ordered: list[TitleCandidate]) -> EpisodeInfo:
        """Premiere extraction complete (saison + episode) parmi les candidats."""
        first: Optional[EpisodeInfo] = None
        for candidate in ordered:
            info = self._extractor.extract(candidate.value)
            if info.is_complete:
                return info
            if first is None and (info.show_title or info.episode_title):
                first = info
        return first or EpisodeInfo()

    def _show_title(
        self,
        info: EpisodeInfo,
        ordered: list[TitleCandidate],
        cleaned: list[CleanedTitle],
        start: int,
    ) -> Optional[str]:
        if info.show_title:
            return info.show_title
        for candidate, result in zip(ordered[start:], cleaned[start:]):
            if not result.title or season_hint(result.title) is not None:
                continue
            if candidate.source == CandidateSource.EMBEDDED_TITLE and start > 0:
                continue
            return result.title
        return None

    def _episode_identity(
        self,
        ordered: list[TitleCandidate],
        cleaned: list[CleanedTitle],
        index: int,
        media_type: MediaType,
    ) -> Optional[MediaIdentity]:
        info = self._episode_info(ordered)
        show_title = self._show_title(info, ordered, cleaned, index)
        if not show_title:
            return None

        if media_type == MediaType.TV and self._anime.lookup(show_title) is not None:
            media_type = MediaType.ANIME

        season, episode = (info.season, info.episode) if info.is_complete else (None, None)
        return MediaIdentity(
            title=show_title,
            media_type=media_type,
            show_title=show_title if season is not None else None,
            year=info.year or cleaned[index].year,
            season=season,
            episode=episode,
            episode_title=info.episode_title if season is not None else None,
            season_name=info.season_name,
        )

    @staticmethod
    def _year_for(title: str, cleaned: list[CleanedTitle]) -> Optional[int]:
        for result in cleaned:
            if result.year and result.title.lower() == title.lower():
                return result.year
        return None


_default_classifier: Optional[CandidateClassifier] = None


def classify_candidates(candidates: Iterable[TitleCandidate]) -> ClassificationResult:
    """Classe des candidats avec les tables par defaut."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = CandidateClassifier()
    return _default_classifier.classify(candidates)
