"""
Objets valeur pour la classification multi-sources d'un titre.

Un meme media peut etre identifie a partir de plusieurs chaines : le titre
embarque dans le fichier, le nom de fichier, le dossier parent et le dossier
grand-parent. Chaque source produit un resultat etiquete Matched ou Unmatched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from vlcord.core.value_objects.media_identity import MediaIdentity


class CandidateSource(Enum):
    """Origine d'une chaine candidate, par ordre de priorite decroissant."""

    EMBEDDED_TITLE = "embedded_title"
    FILENAME = "filename"
    PARENT_FOLDER = "parent_folder"
    GRANDPARENT_FOLDER = "grandparent_folder"


@dataclass(frozen=True)
class TitleCandidate:
    """Chaine candidate et sa source."""

    value: str
    source: CandidateSource


@dataclass(frozen=True)
class Matched:
    """Classification confiante : signal TV ou anime detecte.

    Attributs:
        identity: Identite deduite
        candidate: Candidat ayant produit l'identite
    """

    identity: MediaIdentity
    candidate: TitleCandidate


@dataclass(frozen=True)
class Unmatched:
    """Aucun signal confiant pour ce candidat."""

    candidate: TitleCandidate
    reason: str


ClassificationResult = Union[Matched, Unmatched]
