"""
Objets valeur pour l'etat de lecture du lecteur multimedia.

- PlayerState : etat brut rapporte par le lecteur
- RawPlaybackSample : echantillon brut d'un tick de polling
- MonitorState : etat du moniteur (deconnecte, inactif, lecture, pause)
- PlaybackStatus : statut "en cours de lecture" emis a chaque tick
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from vlcord.core.value_objects.catalog_record import CatalogRecord
from vlcord.core.value_objects.media_identity import MediaType


class PlayerState(Enum):
    """Etat de lecture rapporte par le lecteur."""

    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"

    @classmethod
    def from_raw(cls, value: Optional[str]) -> "PlayerState":
        """Convertit la valeur brute du lecteur (inconnue -> STOPPED)."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.STOPPED


class MonitorState(Enum):
    """Etat du moniteur de lecture."""

    DISCONNECTED = "disconnected"
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class RawPlaybackSample:
    """
    Echantillon brut de l'etat du lecteur pour un tick.

    Attributs:
        state: Etat de lecture
        position: Position relative (0..1)
        length: Duree totale en secondes
        time: Temps ecoule en secondes
        title: Titre embarque dans le fichier (metadonnee "title")
        filename: Nom du fichier
        file_path: Chemin complet du fichier (si connu)
    """

    state: PlayerState
    position: float = 0.0
    length: int = 0
    time: int = 0
    title: Optional[str] = None
    filename: Optional[str] = None
    file_path: Optional[str] = None

    @property
    def remaining(self) -> int:
        return max(0, self.length - self.time)

    @property
    def percentage(self) -> float:
        """Pourcentage de progression (0-100, arrondi a 0.1)."""
        if self.position:
            return round(min(max(self.position, 0.0), 1.0) * 100, 1)
        if self.length > 0:
            return round(min(self.time / self.length, 1.0) * 100, 1)
        return 0.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PlaybackStatus:
    """
    Statut "en cours de lecture" emis vers les consommateurs.

    Attributs:
        connected: Le lecteur a repondu lors du dernier tick
        playing: Lecture en cours
        paused: Lecture en pause
        title: Titre affiche (fiche catalogue ou titre nettoye)
        original_title: Titre brut tel que rapporte par le lecteur
        position, length, elapsed, remaining, percentage: Progression
        media_type: Type de media deduit
        metadata: Fiche catalogue (None si non resolue)
        last_updated: Horodatage UTC du tick
    """

    connected: bool
    playing: bool = False
    paused: bool = False
    title: Optional[str] = None
    original_title: Optional[str] = None
    position: float = 0.0
    length: int = 0
    elapsed: int = 0
    remaining: int = 0
    percentage: float = 0.0
    media_type: Optional[MediaType] = None
    metadata: Optional[CatalogRecord] = None
    last_updated: datetime = field(default_factory=_utcnow)

    @property
    def state(self) -> MonitorState:
        if not self.connected:
            return MonitorState.DISCONNECTED
        if self.playing:
            return MonitorState.PLAYING
        if self.paused:
            return MonitorState.PAUSED
        return MonitorState.IDLE

    @classmethod
    def disconnected(cls) -> "PlaybackStatus":
        return cls(connected=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialise le statut pour les consommateurs JSON (cles camelCase)."""
        return {
            "connected": self.connected,
            "playing": self.playing,
            "paused": self.paused,
            "title": self.title,
            "originalTitle": self.original_title,
            "position": self.position,
            "length": self.length,
            "elapsed": self.elapsed,
            "remaining": self.remaining,
            "percentage": self.percentage,
            "mediaType": self.media_type.value if self.media_type else None,
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "lastUpdated": self.last_updated.isoformat(),
        }
