"""
Boucle de surveillance du lecteur (polling) et emission du statut de lecture.

PlaybackMonitor interroge le lecteur a intervalle regulier. A chaque tick:
1. Recuperation du statut (en cas d'echec: diagnostic differencie,
   connected=False)
2. Derivation de l'identite du media (classification multi-sources)
3. Si la cle de recherche a change pendant la lecture: cache puis
   resolveur catalogue, le resultat non nul est stocke dans le cache
4. Emission du statut aux abonnes

Un tick ne chevauche jamais le precedent (garde "in flight") et le tick
suivant est planifie apres la fin du precedent. stop() incremente un
compteur de generation pour ignorer les resultats d'un tick en cours.
"""

import asyncio
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

import httpx
from loguru import logger

from vlcord.adapters.api.cache import MetadataCache
from vlcord.adapters.api.circuit_breaker import CircuitOpenError
from vlcord.adapters.player.vlc_parser import parse_vlc_status
from vlcord.core.ports.player import IPlayerClient
from vlcord.core.value_objects import (
    CatalogRecord,
    Matched,
    MediaIdentity,
    MonitorState,
    PlaybackStatus,
    PlayerState,
    RawPlaybackSample,
)
from vlcord.services.catalog_resolver import CatalogResolver, merge_identity
from vlcord.services.parsing.candidates import CandidateClassifier

Listener = Callable[[PlaybackStatus], Union[None, Awaitable[None]]]


class FailureKind(Enum):
    """Categorie d'echec de l'interrogation du lecteur."""

    REFUSED = "refused"
    AUTH = "auth"
    TIMEOUT = "timeout"
    INVALID_RESPONSE = "invalid_response"
    CIRCUIT_OPEN = "circuit_open"
    OTHER = "other"


DIAGNOSTICS = {
    FailureKind.REFUSED: (
        "Connexion a VLC refusee: verifier que VLC est lance et que "
        "l'interface HTTP (Lua) est activee"
    ),
    FailureKind.AUTH: (
        "Authentification VLC echouee: verifier le mot de passe HTTP Lua "
        "(Outils > Preferences > Interface > Interfaces principales > Lua)"
    ),
    FailureKind.TIMEOUT: "VLC ne repond pas (timeout): le lecteur est peut-etre bloque",
    FailureKind.INVALID_RESPONSE: (
        "Reponse de VLC illisible: l'interface HTTP n'a pas renvoye de statut JSON"
    ),
    FailureKind.CIRCUIT_OPEN: "Interrogation de VLC suspendue apres des echecs repetes",
    FailureKind.OTHER: "Erreur de connexion a VLC",
}


class PlayerUnavailableError(Exception):
    """
    Echec classe de l'interrogation du lecteur.

    Attributes:
        kind: Categorie de l'echec
        cause: Exception d'origine
    """

    def __init__(self, kind: FailureKind, cause: BaseException) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(f"{DIAGNOSTICS[kind]} ({cause})")


def classify_failure(error: BaseException) -> FailureKind:
    """Classe une erreur d'interrogation du lecteur."""
    if isinstance(error, CircuitOpenError):
        return FailureKind.CIRCUIT_OPEN
    if isinstance(error, httpx.HTTPStatusError) and error.response.status_code in (401, 403):
        return FailureKind.AUTH
    if isinstance(error, httpx.ConnectError):
        return FailureKind.REFUSED
    if isinstance(error, httpx.TimeoutException):
        return FailureKind.TIMEOUT
    if isinstance(error, (httpx.DecodingError, ValueError)):
        return FailureKind.INVALID_RESPONSE
    return FailureKind.OTHER


class PlaybackMonitor:
    """
    Moniteur de lecture.

    Example:
        monitor = PlaybackMonitor(player, resolver, cache, poll_interval=2.0)
        monitor.add_listener(print)
        monitor.start()
        ...
        await monitor.stop()
    """

    def __init__(
        self,
        player: IPlayerClient,
        resolver: CatalogResolver,
        cache: MetadataCache,
        poll_interval: float = 2.0,
        classifier: Optional[CandidateClassifier] = None,
    ) -> None:
        self._player = player
        self._resolver = resolver
        self._cache = cache
        self.poll_interval = poll_interval
        self._classifier = classifier or CandidateClassifier()

        self._status = PlaybackStatus.disconnected()
        self._metadata: Optional[CatalogRecord] = None
        self._last_lookup_key = ""
        self._last_failure: Optional[FailureKind] = None
        self._listeners: list[Listener] = []
        self._task: Optional[asyncio.Task] = None
        self._in_flight = False
        self._paused = False
        self._generation = 0
        self._counters = {"ticks": 0, "failures": 0, "resolutions": 0, "skipped": 0}

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def state(self) -> MonitorState:
        return self._status.state

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_paused(self) -> bool:
        return self._paused

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # Cycle de vie

    def start(self) -> None:
        """Lance la boucle de polling dans une tache asyncio."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Surveillance de VLC demarree", poll_interval=self.poll_interval)

    async def _run(self) -> None:
        while True:
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Tick de surveillance en echec")
            await asyncio.sleep(self.poll_interval)

    async def stop(self) -> None:
        """Arrete la boucle, ignore le tick en cours et emet un statut deconnecte."""
        self._generation += 1
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._metadata = None
        self._last_lookup_key = ""
        self._status = PlaybackStatus.disconnected()
        await self._emit(self._status)
        logger.info("Surveillance de VLC arretee")

    def pause(self) -> None:
        """Suspend les ticks sans arreter la boucle."""
        self._paused = True
        logger.info("Surveillance suspendue")

    def resume(self) -> None:
        self._paused = False
        logger.info("Surveillance reprise")

    # Tick

    async def poll_once(self) -> Optional[PlaybackStatus]:
        """
        Execute un tick de surveillance.

        Returns:
            Statut emis, ou None si le tick a ete ignore (tick deja en cours,
            surveillance suspendue, arret pendant le tick)
        """
        if self._in_flight or self._paused:
            return None
        self._in_flight = True
        generation = self._generation
        try:
            self._counters["ticks"] += 1
            try:
                data = await self._player.get_status()
                sample = parse_vlc_status(data)
            except (httpx.HTTPError, CircuitOpenError, ValueError) as e:
                if generation != self._generation:
                    return None
                return await self._on_failure(PlayerUnavailableError(classify_failure(e), e))

            status = await self._on_sample(sample, generation)
            if status is None:
                return None
            self._status = status
            await self._emit(status)
            return status
        finally:
            self._in_flight = False

    async def _on_failure(self, error: PlayerUnavailableError) -> PlaybackStatus:
        self._counters["failures"] += 1
        kind = error.kind
        if kind == FailureKind.CIRCUIT_OPEN and self._last_failure is not None:
            # Le circuit ouvert prolonge la panne deja diagnostiquee
            kind = self._last_failure
        if kind != self._last_failure:
            logger.error(DIAGNOSTICS[kind], kind=kind.value, error=str(error.cause))
        else:
            logger.debug("VLC toujours injoignable", kind=error.kind.value, error=str(error.cause))
        self._last_failure = kind
        self._metadata = None
        self._last_lookup_key = ""
        self._status = PlaybackStatus.disconnected()
        await self._emit(self._status)
        return self._status

    async def _on_sample(
        self, sample: RawPlaybackSample, generation: int
    ) -> Optional[PlaybackStatus]:
        if self._last_failure is not None or not self._status.connected:
            logger.info("Connexion a VLC etablie")
            self._last_failure = None

        if sample.state == PlayerState.STOPPED:
            self._metadata = None
            self._last_lookup_key = ""
            return PlaybackStatus(connected=True)

        result = self._classifier.classify_sample(sample)
        identity = result.identity if isinstance(result, Matched) else None
        key = identity.lookup_key if identity else ""
        playing = sample.state == PlayerState.PLAYING

        if key != self._last_lookup_key:
            if playing and identity is not None:
                self._last_lookup_key = key
                metadata = await self._lookup(identity, sample)
                if generation != self._generation:
                    return None
                self._metadata = metadata
            else:
                self._metadata = None
        else:
            self._counters["skipped"] += 1

        metadata = self._metadata
        if metadata is not None and identity is not None:
            metadata = merge_identity(metadata, identity)

        if metadata is not None:
            title = metadata.title
        elif identity is not None:
            title = identity.lookup_title
        else:
            title = sample.title or sample.filename

        return PlaybackStatus(
            connected=True,
            playing=playing,
            paused=sample.state == PlayerState.PAUSED,
            title=title,
            original_title=sample.title or sample.filename,
            position=sample.position,
            length=sample.length,
            elapsed=sample.time,
            remaining=sample.remaining,
            percentage=sample.percentage,
            media_type=metadata.media_type if metadata else (identity.media_type if identity else None),
            metadata=metadata,
        )

    async def _lookup(
        self, identity: MediaIdentity, sample: RawPlaybackSample
    ) -> Optional[CatalogRecord]:
        """Cache puis resolveur; un resultat non nul est stocke dans le cache."""
        key = identity.lookup_key
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Fiche trouvee dans le cache", key=key)
            return cached

        self._counters["resolutions"] += 1
        record = await self._resolver.resolve(
            identity, source_filename=sample.file_path or sample.filename
        )
        if record is not None:
            await self._cache.set(key, record)
            logger.info(
                "Media identifie",
                key=key,
                title=record.title,
                external_id=record.external_id,
                media_type=record.media_type.value,
            )
        else:
            logger.info("Media non trouve dans le catalogue", key=key)
        return record

    async def _emit(self, status: PlaybackStatus) -> None:
        for listener in list(self._listeners):
            try:
                result = listener(status)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Abonne au statut en echec")

    def stats(self) -> dict[str, Any]:
        """Compteurs du moniteur, du cache et du resolveur."""
        return {
            "monitor": dict(self._counters),
            "cache": self._cache.stats(),
            "resolver": self._resolver.stats(),
        }
