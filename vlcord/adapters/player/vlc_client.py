"""
Client de l'interface HTTP de VLC.

Interroge GET /requests/status.json avec une authentification basique
(utilisateur vide, mot de passe configure dans VLC: Outils > Preferences >
Interface > Interfaces principales > Lua > Mot de passe HTTP Lua).

Usage:
    client = VLCClient(host="localhost", port=8080, password="secret")
    status = await client.get_status()
    await client.close()
"""

from typing import Any, Optional

import httpx

from vlcord.adapters.api.circuit_breaker import CircuitBreaker
from vlcord.adapters.api.retry import request_with_retry
from vlcord.core.ports.player import IPlayerClient

STATUS_PATH = "/requests/status.json"
AUTH_STATUS_CODES = (401, 403)


class VLCClient(IPlayerClient):
    """
    Client VLC (interface HTTP Lua).

    Les erreurs (connexion refusee, timeout, 401, reponse illisible, circuit
    ouvert) sont propagees au moniteur, qui les classe pour le diagnostic.
    Un refus d'authentification ne compte pas comme un echec du disjoncteur:
    le lecteur repond.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8080,
        password: str = "",
        timeout: float = 3.0,
        max_attempts: int = 2,
        breaker: Optional[CircuitBreaker] = None,
    ) -> None:
        self._base_url = f"http://{host}:{port}"
        self._password = password
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._breaker = breaker or CircuitBreaker("vlc", failure_threshold=5, reset_timeout=60)
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                auth=httpx.BasicAuth("", self._password),
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        return self._client

    async def _request(self) -> httpx.Response:
        try:
            return await request_with_retry(
                self._get_client(),
                "GET",
                STATUS_PATH,
                max_attempts=self._max_attempts,
                min_wait=0.3,
                max_wait=1.0,
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code in AUTH_STATUS_CODES:
                return e.response
            raise

    async def get_status(self) -> dict[str, Any]:
        """
        Recupere le statut de lecture brut.

        Returns:
            Document JSON de status.json

        Raises:
            httpx.HTTPStatusError: Authentification refusee ou reponse en erreur
            httpx.DecodingError: Corps de reponse qui n'est pas un objet JSON
            httpx.TransportError: Lecteur injoignable
            CircuitOpenError: Trop d'echecs recents
        """
        response = await self._breaker.call(self._request)
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            raise httpx.DecodingError(
                f"Reponse de VLC illisible: {e}", request=response.request
            ) from e
        if not isinstance(data, dict):
            raise httpx.DecodingError(
                f"Reponse de VLC inattendue ({type(data).__name__})", request=response.request
            )
        return data

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
