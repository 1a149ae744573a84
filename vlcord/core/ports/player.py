"""
Interface port pour le lecteur multimedia interroge par le moniteur.
"""

from abc import ABC, abstractmethod
from typing import Any


class IPlayerClient(ABC):
    """
    Interface d'un lecteur multimedia exposant son etat de lecture.

    get_status() retourne le document de statut brut du lecteur et leve une
    exception (httpx.HTTPError, CircuitOpenError) si le lecteur est
    injoignable. Le moniteur classe ces erreurs pour le diagnostic.
    """

    @abstractmethod
    async def get_status(self) -> dict[str, Any]:
        ...

    @abstractmethod
    async def close(self) -> None:
        ...
