"""
Disjoncteur (circuit breaker) pour les services HTTP externes.

Etats:
- CLOSED: les appels passent; N echecs consecutifs ouvrent le circuit
- OPEN: les appels sont refuses (CircuitOpenError) jusqu'au delai de reset
- HALF_OPEN: les appels passent a nouveau; 2 succes referment le circuit,
  un echec le rouvre

Usage:
    breaker = CircuitBreaker("tmdb", failure_threshold=10, reset_timeout=120)
    response = await breaker.call(request_with_retry, client, "GET", url)
"""

import time
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar

from loguru import logger

T = TypeVar("T")


class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(Exception):
    """
    Exception levee quand un appel est refuse par un circuit ouvert.

    Attributes:
        name: Nom du service
        retry_in: Secondes restantes avant la prochaine tentative
    """

    def __init__(self, name: str, retry_in: float) -> None:
        self.name = name
        self.retry_in = retry_in
        super().__init__(f"Circuit '{name}' ouvert, nouvelle tentative dans {retry_in:.0f}s")


class CircuitBreaker:
    """
    Disjoncteur par service.

    Attributes:
        name: Nom du service (vlc, tmdb)
        failure_threshold: Echecs consecutifs avant ouverture
        reset_timeout: Duree d'ouverture en secondes
        half_open_successes: Succes necessaires pour refermer depuis HALF_OPEN
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        reset_timeout: float = 60.0,
        half_open_successes: int = 2,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout
        self.half_open_successes = half_open_successes
        self._clock = clock
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._opened_at: Optional[float] = None
        self._last_failure_at: Optional[float] = None

    @property
    def state(self) -> CircuitState:
        """Etat courant (OPEN devient HALF_OPEN une fois le delai ecoule)."""
        if self._state == CircuitState.OPEN and self._retry_in() <= 0:
            self._state = CircuitState.HALF_OPEN
            self._success_count = 0
            logger.info("Circuit semi-ouvert", circuit=self.name)
        return self._state

    def _retry_in(self) -> float:
        if self._opened_at is None:
            return 0.0
        return max(0.0, self._opened_at + self.reset_timeout - self._clock())

    def before_call(self) -> None:
        """
        Verifie qu'un appel peut etre tente.

        Raises:
            CircuitOpenError: Si le circuit est ouvert
        """
        if self.state == CircuitState.OPEN:
            raise CircuitOpenError(self.name, self._retry_in())

    def record_success(self) -> None:
        self._failure_count = 0
        if self._state == CircuitState.HALF_OPEN:
            self._success_count += 1
            if self._success_count >= self.half_open_successes:
                self._state = CircuitState.CLOSED
                self._success_count = 0
                self._opened_at = None
                logger.info("Circuit referme", circuit=self.name)

    def record_failure(self) -> None:
        self._failure_count += 1
        self._success_count = 0
        self._last_failure_at = self._clock()
        if self._state == CircuitState.HALF_OPEN or self._failure_count >= self.failure_threshold:
            if self._state != CircuitState.OPEN:
                logger.warning(
                    "Circuit ouvert",
                    circuit=self.name,
                    failures=self._failure_count,
                    reset_timeout=self.reset_timeout,
                )
            self._state = CircuitState.OPEN
            self._opened_at = self._clock()

    async def call(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """
        Execute un appel asynchrone a travers le disjoncteur.

        Toute exception de l'appel compte comme un echec puis est propagee.

        Raises:
            CircuitOpenError: Si le circuit est ouvert
        """
        self.before_call()
        try:
            result = await func(*args, **kwargs)
        except Exception:
            self.record_failure()
            raise
        self.record_success()
        return result

    def reset(self) -> None:
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._opened_at = None

    def snapshot(self) -> dict[str, Any]:
        """Etat du disjoncteur pour le diagnostic."""
        state = self.state
        return {
            "name": self.name,
            "state": state.value,
            "failure_count": self._failure_count,
            "last_failure_at": self._last_failure_at,
            "retry_in": round(self._retry_in(), 1) if state == CircuitState.OPEN else 0.0,
        }
