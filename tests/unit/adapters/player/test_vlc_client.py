"""
Tests for VLCClient - VLC Lua HTTP interface client.
"""

import httpx
import pytest
import respx

from vlcord.adapters.api.circuit_breaker import CircuitBreaker, CircuitOpenError, CircuitState
from vlcord.adapters.player.vlc_client import VLCClient
from vlcord.core.ports.player import IPlayerClient
from tests.fixtures.vlc_responses import VLC_PLAYING_MOVIE

STATUS_URL = "http://localhost:8080/requests/status.json"


def test_implements_interface() -> None:
    client = VLCClient()
    assert isinstance(client, IPlayerClient)
    assert client.base_url == "http://localhost:8080"


@pytest.mark.asyncio
@respx.mock
async def test_get_status_uses_basic_auth_with_empty_user() -> None:
    route = respx.get(STATUS_URL).mock(return_value=httpx.Response(200, json=VLC_PLAYING_MOVIE))
    client = VLCClient(password="secret", max_attempts=1)
    try:
        data = await client.get_status()
    finally:
        await client.close()

    assert data["state"] == "playing"
    # base64(":secret")
    assert route.calls.last.request.headers["Authorization"] == "Basic OnNlY3JldA=="


@pytest.mark.asyncio
@respx.mock
async def test_unauthorized_is_propagated() -> None:
    respx.get(STATUS_URL).mock(return_value=httpx.Response(401))
    client = VLCClient(password="wrong", max_attempts=1)
    try:
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await client.get_status()
    finally:
        await client.close()
    assert exc_info.value.response.status_code == 401


@pytest.mark.asyncio
@respx.mock
async def test_connection_refused_is_retried_then_propagated() -> None:
    route = respx.get(STATUS_URL).mock(side_effect=httpx.ConnectError("refused"))
    client = VLCClient(max_attempts=2)
    try:
        with pytest.raises(httpx.ConnectError):
            await client.get_status()
    finally:
        await client.close()
    assert route.call_count == 2


@pytest.mark.asyncio
@respx.mock
async def test_breaker_opens_after_repeated_failures() -> None:
    route = respx.get(STATUS_URL).mock(side_effect=httpx.ConnectError("refused"))
    client = VLCClient(max_attempts=1, breaker=CircuitBreaker("vlc", failure_threshold=2))
    try:
        for _ in range(2):
            with pytest.raises(httpx.ConnectError):
                await client.get_status()
        with pytest.raises(CircuitOpenError):
            await client.get_status()
    finally:
        await client.close()
    assert route.call_count == 2


@pytest.mark.asyncio
@respx.mock
async def test_unauthorized_does_not_trip_breaker() -> None:
    route = respx.get(STATUS_URL).mock(return_value=httpx.Response(401))
    breaker = CircuitBreaker("vlc", failure_threshold=2)
    client = VLCClient(password="wrong", max_attempts=1, breaker=breaker)
    try:
        for _ in range(4):
            with pytest.raises(httpx.HTTPStatusError):
                await client.get_status()
    finally:
        await client.close()
    assert route.call_count == 4
    assert breaker.state == CircuitState.CLOSED


@pytest.mark.asyncio
@respx.mock
async def test_html_body_raises_decoding_error() -> None:
    respx.get(STATUS_URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))
    client = VLCClient(max_attempts=1)
    try:
        with pytest.raises(httpx.DecodingError):
            await client.get_status()
    finally:
        await client.close()


@pytest.mark.asyncio
@respx.mock
async def test_json_array_raises_decoding_error() -> None:
    respx.get(STATUS_URL).mock(return_value=httpx.Response(200, json=["playing"]))
    client = VLCClient(max_attempts=1)
    try:
        with pytest.raises(httpx.DecodingError):
            await client.get_status()
    finally:
        await client.close()
