"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaType : Type de media (MOVIE, TV, ANIME, UNKNOWN)
- MediaIdentity : Identite deduite d'un nom de fichier
- EpisodeInfo : Resultat partiel de l'extraction saison/episode
- TitleCandidate, CandidateSource, Matched, Unmatched : Classification multi-sources
- CatalogRecord : Fiche de metadonnees TMDB
- PlayerState, MonitorState, RawPlaybackSample, PlaybackStatus : Etat de lecture
"""

from vlcord.core.value_objects.catalog_record import CatalogRecord
from vlcord.core.value_objects.media_identity import (
    EpisodeInfo,
    MediaIdentity,
    MediaType,
    format_episode_code,
)
from vlcord.core.value_objects.playback_status import (
    MonitorState,
    PlaybackStatus,
    PlayerState,
    RawPlaybackSample,
)
from vlcord.core.value_objects.title_candidate import (
    CandidateSource,
    ClassificationResult,
    Matched,
    TitleCandidate,
    Unmatched,
)

__all__ = [
    "CatalogRecord",
    "EpisodeInfo",
    "MediaIdentity",
    "MediaType",
    "format_episode_code",
    "MonitorState",
    "PlaybackStatus",
    "PlayerState",
    "RawPlaybackSample",
    "CandidateSource",
    "ClassificationResult",
    "Matched",
    "TitleCandidate",
    "Unmatched",
]
