"""
Mecanisme de retry avec backoff exponentiel pour les appels HTTP.

Gere automatiquement les erreurs 429 (rate limiting) et les erreurs de
transport (connexion, timeout) en relancant les requetes avec un delai
croissant et du jitter aleatoire.

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=3, max_wait=10)
    async def my_api_call():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", url)
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def with_retry(max_attempts: int = 3, min_wait: float = 0.5, max_wait: float = 10):
    """
    Decorateur pour relancer sur RateLimitError et erreurs de transport.

    Utilise wait_random_exponential pour ajouter du jitter.

    Args:
        max_attempts: Nombre maximum de tentatives
        min_wait: Delai minimum entre les tentatives en secondes
        max_wait: Delai maximum entre les tentatives en secondes
    """
    return retry(
        retry=retry_if_exception_type((RateLimitError, httpx.TransportError)),
        wait=wait_random_exponential(multiplier=min_wait, min=min_wait, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def _retry_after(response: httpx.Response) -> Optional[int]:
    header = response.headers.get("Retry-After")
    if header and header.strip().isdigit():
        return int(header)
    return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 10,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique.

    Convertit les reponses 429 en RateLimitError et relance avec
    backoff exponentiel, de meme pour les erreurs de transport. Les autres
    erreurs HTTP (4xx, 5xx) sont propagees immediatement sans retry.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives
        min_wait: Delai minimum entre tentatives (secondes)
        max_wait: Delai maximum entre tentatives (secondes)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.TransportError: Si le transport echoue a chaque tentative
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
    """

    @with_retry(max_attempts=max_attempts, min_wait=min_wait, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_retry_after(response))
        response.raise_for_status()
        return response

    return await _do_request()
