"""
Tests unitaires pour PlaybackMonitor.

Le lecteur, le resolveur et le cache sont des AsyncMock: les tests pilotent
les ticks avec poll_once() et verifient la deduplication par cle, les
diagnostics de connexion et l'annulation par stop().

TestWithVLCClient branche un vrai VLCClient sur respx; TestCacheRoundTrip
utilise un vrai MetadataCache sur disque.
"""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from vlcord.adapters.api.cache import MetadataCache
from vlcord.adapters.api.circuit_breaker import CircuitBreaker, CircuitOpenError
from vlcord.adapters.player.vlc_client import VLCClient
from vlcord.core.ports.catalog import SearchResult
from vlcord.core.value_objects import CatalogRecord, MediaType, MonitorState
from vlcord.services.catalog_resolver import CatalogResolver
from vlcord.services.monitor import (
    DIAGNOSTICS,
    FailureKind,
    PlaybackMonitor,
    classify_failure,
)
from vlcord.services.overrides import OverrideTable
from tests.fixtures.tmdb_responses import TMDB_MOVIE_DETAILS_RESPONSE
from tests.fixtures.vlc_responses import (
    VLC_PAUSED_MOVIE,
    VLC_PLAYING_EPISODE,
    VLC_PLAYING_MOVIE,
    VLC_STOPPED,
)

INCEPTION = CatalogRecord(
    external_id="27205",
    media_type=MediaType.MOVIE,
    canonical_title="Inception",
    year=2010,
)


def _status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "http://localhost:8080/requests/status.json")
    response = httpx.Response(code, request=request)
    return httpx.HTTPStatusError(f"HTTP {code}", request=request, response=response)


@pytest.fixture
def mock_resolver() -> AsyncMock:
    resolver = AsyncMock(spec=CatalogResolver)
    resolver.resolve.return_value = INCEPTION
    return resolver


@pytest.fixture
def mock_cache() -> AsyncMock:
    cache = AsyncMock(spec=MetadataCache)
    cache.get.return_value = None
    return cache


@pytest.fixture
def monitor(mock_player: AsyncMock, mock_resolver: AsyncMock, mock_cache: AsyncMock) -> PlaybackMonitor:
    return PlaybackMonitor(mock_player, mock_resolver, mock_cache, poll_interval=0.01)


def _errors(records: list) -> list:
    return [record for record in records if record["level"].name == "ERROR"]


class TestClassifyFailure:
    @pytest.mark.parametrize(
        "error,kind",
        [
            (httpx.ConnectError("refused"), FailureKind.REFUSED),
            (httpx.ReadTimeout("slow"), FailureKind.TIMEOUT),
            (_status_error(401), FailureKind.AUTH),
            (_status_error(403), FailureKind.AUTH),
            (_status_error(500), FailureKind.OTHER),
            (CircuitOpenError("vlc", 30), FailureKind.CIRCUIT_OPEN),
            (httpx.DecodingError("bad body"), FailureKind.INVALID_RESPONSE),
            (ValueError("Statut VLC inattendu: list"), FailureKind.INVALID_RESPONSE),
        ],
    )
    def test_kinds(self, error: Exception, kind: FailureKind) -> None:
        assert classify_failure(error) == kind


class TestTick:
    @pytest.mark.asyncio
    async def test_playing_movie_is_resolved_and_cached(
        self,
        monitor: PlaybackMonitor,
        mock_player: AsyncMock,
        mock_resolver: AsyncMock,
        mock_cache: AsyncMock,
    ) -> None:
        mock_player.get_status.return_value = VLC_PLAYING_MOVIE

        status = await monitor.poll_once()

        assert status.connected
        assert status.playing
        assert status.state == MonitorState.PLAYING
        assert status.title == "Inception"
        assert status.original_title == "Inception.2010.1080p.BluRay.x264-SPARKS.mkv"
        assert status.metadata == INCEPTION
        assert status.media_type == MediaType.MOVIE
        assert status.percentage == 25.0
        assert status.remaining == 6660
        mock_cache.get.assert_awaited_once_with("inception")
        mock_cache.set.assert_awaited_once_with("inception", INCEPTION)
        identity = mock_resolver.resolve.await_args.args[0]
        assert identity.title == "Inception"
        assert identity.year == 2010
        assert mock_resolver.resolve.await_args.kwargs == {
            "source_filename": "Inception.2010.1080p.BluRay.x264-SPARKS.mkv"
        }

    @pytest.mark.asyncio
    async def test_unchanged_key_skips_cache_and_catalog(
        self,
        monitor: PlaybackMonitor,
        mock_player: AsyncMock,
        mock_resolver: AsyncMock,
        mock_cache: AsyncMock,
    ) -> None:
        mock_player.get_status.return_value = VLC_PLAYING_MOVIE

        await monitor.poll_once()
        status = await monitor.poll_once()

        assert status.metadata == INCEPTION
        assert mock_cache.get.await_count == 1
        assert mock_resolver.resolve.await_count == 1
        assert monitor.stats()["monitor"]["skipped"] == 1

    @pytest.mark.asyncio
    async def test_cache_hit_avoids_catalog(
        self,
        monitor: PlaybackMonitor,
        mock_player: AsyncMock,
        mock_resolver: AsyncMock,
        mock_cache: AsyncMock,
    ) -> None:
        mock_player.get_status.return_value = VLC_PLAYING_MOVIE
        mock_cache.get.return_value = INCEPTION

        status = await monitor.poll_once()

        assert status.metadata == INCEPTION
        mock_resolver.resolve.assert_not_awaited()
        mock_cache.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unresolved_media_keeps_cleaned_title(
        self,
        monitor: PlaybackMonitor,
        mock_player: AsyncMock,
        mock_resolver: AsyncMock,
        mock_cache: AsyncMock,
    ) -> None:
        mock_player.get_status.return_value = VLC_PLAYING_MOVIE
        mock_resolver.resolve.return_value = None

        status = await monitor.poll_once()

        assert status.title == "Inception"
        assert status.metadata is None
        assert status.media_type == MediaType.MOVIE
        mock_cache.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_episode_uses_full_path(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock, mock_resolver: AsyncMock
    ) -> None:
        mock_player.get_status.return_value = VLC_PLAYING_EPISODE

        await monitor.poll_once()

        identity = mock_resolver.resolve.await_args.args[0]
        assert identity.lookup_key == "breaking bad s05e14"
        assert mock_resolver.resolve.await_args.kwargs["source_filename"].startswith(
            "/media/series/Breaking Bad/Season 5/"
        )

    @pytest.mark.asyncio
    async def test_lookup_is_deferred_while_paused(
        self,
        monitor: PlaybackMonitor,
        mock_player: AsyncMock,
        mock_resolver: AsyncMock,
    ) -> None:
        mock_player.get_status.return_value = VLC_PAUSED_MOVIE

        status = await monitor.poll_once()

        assert status.paused
        assert status.state == MonitorState.PAUSED
        assert status.metadata is None
        mock_resolver.resolve.assert_not_awaited()

        mock_player.get_status.return_value = VLC_PLAYING_MOVIE
        status = await monitor.poll_once()

        assert status.metadata == INCEPTION
        assert mock_resolver.resolve.await_count == 1

    @pytest.mark.asyncio
    async def test_pause_keeps_resolved_metadata(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock
    ) -> None:
        mock_player.get_status.return_value = VLC_PLAYING_MOVIE
        await monitor.poll_once()

        mock_player.get_status.return_value = VLC_PAUSED_MOVIE
        status = await monitor.poll_once()

        assert status.paused
        assert status.metadata == INCEPTION

    @pytest.mark.asyncio
    async def test_stopped_player_is_idle(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock, mock_resolver: AsyncMock
    ) -> None:
        mock_player.get_status.return_value = VLC_STOPPED

        status = await monitor.poll_once()

        assert status.connected
        assert status.state == MonitorState.IDLE
        assert status.title is None
        mock_resolver.resolve.assert_not_awaited()


class TestFailures:
    @pytest.mark.asyncio
    async def test_refused_connection(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock, log_records: list
    ) -> None:
        mock_player.get_status.side_effect = httpx.ConnectError("refused")

        status = await monitor.poll_once()

        assert not status.connected
        assert monitor.state == MonitorState.DISCONNECTED
        errors = _errors(log_records)
        assert len(errors) == 1
        assert errors[0]["message"] == DIAGNOSTICS[FailureKind.REFUSED]

    @pytest.mark.asyncio
    async def test_auth_failure_is_logged_once(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock, log_records: list
    ) -> None:
        mock_player.get_status.side_effect = _status_error(401)

        for _ in range(3):
            status = await monitor.poll_once()

        assert not status.connected
        errors = _errors(log_records)
        assert len(errors) == 1
        assert "mot de passe HTTP Lua" in errors[0]["message"]
        assert monitor.stats()["monitor"]["failures"] == 3

    @pytest.mark.asyncio
    async def test_open_circuit_continues_the_reported_outage(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock, log_records: list
    ) -> None:
        mock_player.get_status.side_effect = [
            _status_error(401),
            CircuitOpenError("vlc", 30),
            CircuitOpenError("vlc", 10),
            _status_error(401),
        ]

        for _ in range(4):
            await monitor.poll_once()

        errors = _errors(log_records)
        assert len(errors) == 1
        assert errors[0]["message"] == DIAGNOSTICS[FailureKind.AUTH]

    @pytest.mark.asyncio
    async def test_invalid_body_still_emits_a_status(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock, log_records: list
    ) -> None:
        received = []
        monitor.add_listener(received.append)
        mock_player.get_status.return_value = ["not", "a", "status"]

        status = await monitor.poll_once()

        assert status is not None
        assert not status.connected
        assert received == [status]
        assert _errors(log_records)[0]["message"] == DIAGNOSTICS[FailureKind.INVALID_RESPONSE]

    @pytest.mark.asyncio
    async def test_reconnection_resolves_again(
        self,
        monitor: PlaybackMonitor,
        mock_player: AsyncMock,
        mock_cache: AsyncMock,
        log_records: list,
    ) -> None:
        mock_player.get_status.return_value = VLC_PLAYING_MOVIE
        await monitor.poll_once()

        mock_player.get_status.side_effect = httpx.ReadTimeout("slow")
        await monitor.poll_once()

        mock_player.get_status.side_effect = None
        status = await monitor.poll_once()

        assert status.connected
        assert status.metadata == INCEPTION
        assert mock_cache.get.await_count == 2
        assert any(r["message"] == "Connexion a VLC etablie" for r in log_records)


class TestListeners:
    @pytest.mark.asyncio
    async def test_sync_and_async_listeners(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock
    ) -> None:
        mock_player.get_status.return_value = VLC_STOPPED
        received = []
        awaited = []

        async def on_status(status) -> None:
            awaited.append(status)

        monitor.add_listener(received.append)
        monitor.add_listener(on_status)
        await monitor.poll_once()

        assert len(received) == 1
        assert len(awaited) == 1

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_emission(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock
    ) -> None:
        mock_player.get_status.return_value = VLC_STOPPED
        received = []

        def broken(status) -> None:
            raise RuntimeError("boom")

        monitor.add_listener(broken)
        monitor.add_listener(received.append)

        status = await monitor.poll_once()

        assert status is not None
        assert received == [status]

    @pytest.mark.asyncio
    async def test_remove_listener(self, monitor: PlaybackMonitor, mock_player: AsyncMock) -> None:
        mock_player.get_status.return_value = VLC_STOPPED
        received = []
        monitor.add_listener(received.append)
        monitor.remove_listener(received.append)

        await monitor.poll_once()

        assert received == []


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_ticks_never_overlap(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock
    ) -> None:
        gate = asyncio.Event()

        async def slow_status() -> dict:
            await gate.wait()
            return VLC_STOPPED

        mock_player.get_status.side_effect = slow_status
        first = asyncio.create_task(monitor.poll_once())
        await asyncio.sleep(0)

        assert await monitor.poll_once() is None

        gate.set()
        assert await first is not None
        assert mock_player.get_status.await_count == 1

    @pytest.mark.asyncio
    async def test_stop_discards_inflight_lookup(
        self,
        monitor: PlaybackMonitor,
        mock_player: AsyncMock,
        mock_resolver: AsyncMock,
    ) -> None:
        gate = asyncio.Event()

        async def slow_resolve(identity, source_filename=None):
            await gate.wait()
            return INCEPTION

        mock_player.get_status.return_value = VLC_PLAYING_MOVIE
        mock_resolver.resolve.side_effect = slow_resolve
        tick = asyncio.create_task(monitor.poll_once())
        while not mock_resolver.resolve.await_count:
            await asyncio.sleep(0)

        await monitor.stop()
        gate.set()

        assert await tick is None
        assert not monitor.status.connected
        assert monitor.status.metadata is None

    @pytest.mark.asyncio
    async def test_paused_monitor_skips_ticks(
        self, monitor: PlaybackMonitor, mock_player: AsyncMock
    ) -> None:
        monitor.pause()

        assert monitor.is_paused
        assert await monitor.poll_once() is None
        mock_player.get_status.assert_not_awaited()

        monitor.resume()
        mock_player.get_status.return_value = VLC_STOPPED
        assert await monitor.poll_once() is not None

    @pytest.mark.asyncio
    async def test_start_and_stop(self, monitor: PlaybackMonitor, mock_player: AsyncMock) -> None:
        mock_player.get_status.return_value = VLC_STOPPED
        received = []
        monitor.add_listener(received.append)

        monitor.start()
        await asyncio.sleep(0.05)
        assert monitor.is_running

        await monitor.stop()

        assert not monitor.is_running
        assert mock_player.get_status.await_count >= 1
        assert received[-1].state == MonitorState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_stats(self, monitor: PlaybackMonitor, mock_player: AsyncMock) -> None:
        mock_player.get_status.return_value = VLC_STOPPED

        await monitor.poll_once()
        stats = monitor.stats()

        assert stats["monitor"]["ticks"] == 1
        assert set(stats) == {"monitor", "cache", "resolver"}


class TestWithVLCClient:
    """Moniteur branche sur un vrai VLCClient, lecteur simule par respx."""

    STATUS_URL = "http://localhost:8080/requests/status.json"

    async def _run_ticks(self, monitor: PlaybackMonitor, now: list, ticks: int) -> None:
        for _ in range(ticks):
            await monitor.poll_once()
            now[0] += 2.0

    @pytest.mark.asyncio
    @respx.mock
    async def test_wrong_password_is_diagnosed_once(
        self, mock_resolver: AsyncMock, mock_cache: AsyncMock, log_records: list
    ) -> None:
        respx.get(self.STATUS_URL).mock(return_value=httpx.Response(401))
        now = [0.0]
        breaker = CircuitBreaker("vlc", failure_threshold=5, reset_timeout=60, clock=lambda: now[0])
        player = VLCClient(password="wrong", max_attempts=1, breaker=breaker)
        monitor = PlaybackMonitor(player, mock_resolver, mock_cache)

        try:
            await self._run_ticks(monitor, now, 150)
        finally:
            await player.close()

        errors = _errors(log_records)
        assert [e["message"] for e in errors] == [DIAGNOSTICS[FailureKind.AUTH]]
        assert monitor.stats()["monitor"]["failures"] == 150

    @pytest.mark.asyncio
    @respx.mock
    async def test_refused_connection_through_breaker_is_diagnosed_once(
        self, mock_resolver: AsyncMock, mock_cache: AsyncMock, log_records: list
    ) -> None:
        respx.get(self.STATUS_URL).mock(side_effect=httpx.ConnectError("refused"))
        now = [0.0]
        breaker = CircuitBreaker("vlc", failure_threshold=5, reset_timeout=60, clock=lambda: now[0])
        player = VLCClient(max_attempts=1, breaker=breaker)
        monitor = PlaybackMonitor(player, mock_resolver, mock_cache)

        try:
            await self._run_ticks(monitor, now, 150)
        finally:
            await player.close()

        errors = _errors(log_records)
        assert [e["message"] for e in errors] == [DIAGNOSTICS[FailureKind.REFUSED]]

    @pytest.mark.asyncio
    @respx.mock
    async def test_html_login_page_emits_disconnected_status(
        self, mock_resolver: AsyncMock, mock_cache: AsyncMock
    ) -> None:
        respx.get(self.STATUS_URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))
        player = VLCClient(max_attempts=1)
        monitor = PlaybackMonitor(player, mock_resolver, mock_cache)
        received = []
        monitor.add_listener(received.append)

        try:
            status = await monitor.poll_once()
        finally:
            await player.close()

        assert status is not None
        assert not status.connected
        assert received == [status]


class TestCacheRoundTrip:
    """Cache disque reel: une seule requete catalogue par media, meme apres redemarrage."""

    @pytest.fixture
    def catalog(self, mock_catalog: AsyncMock) -> AsyncMock:
        mock_catalog.search_movie.return_value = [
            SearchResult("27205", "Inception", year=2010, popularity=98.5)
        ]
        mock_catalog.get_movie.return_value = TMDB_MOVIE_DETAILS_RESPONSE
        return mock_catalog

    @pytest.mark.asyncio
    async def test_one_catalog_request_across_replays_and_restart(
        self, tmp_path, catalog: AsyncMock, mock_player: AsyncMock, override_store
    ) -> None:
        cache_dir = str(tmp_path / "cache")
        resolver = CatalogResolver(catalog, OverrideTable(override_store))

        cache = MetadataCache(cache_dir=cache_dir, ttl=3600, size_limit_mb=1)
        try:
            monitor = PlaybackMonitor(mock_player, resolver, cache)
            mock_player.get_status.return_value = VLC_PLAYING_MOVIE
            first = await monitor.poll_once()
            mock_player.get_status.return_value = VLC_STOPPED
            await monitor.poll_once()
            mock_player.get_status.return_value = VLC_PLAYING_MOVIE
            replay = await monitor.poll_once()
        finally:
            cache.close()

        reopened = MetadataCache(cache_dir=cache_dir, ttl=3600, size_limit_mb=1)
        try:
            restarted = PlaybackMonitor(mock_player, resolver, reopened)
            after_restart = await restarted.poll_once()
            stats = reopened.stats()
        finally:
            reopened.close()

        assert first.metadata.external_id == "27205"
        assert first.metadata.runtime == 148
        assert replay.metadata == first.metadata
        assert after_restart.metadata == first.metadata
        assert catalog.search_movie.await_count == 1
        assert catalog.get_movie.await_count == 1
        assert monitor.stats()["monitor"]["resolutions"] == 1
        assert restarted.stats()["monitor"]["resolutions"] == 0
        assert stats["size"] == 1
