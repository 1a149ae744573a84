"""
Fixtures pytest partagees pour les tests VLCord.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des ports (IPlayerClient, ICatalogClient)
- Settings de test avec chemins temporaires
- Capture des logs loguru
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from loguru import logger

from vlcord.adapters.persistence.overrides_store import OverrideStore
from vlcord.config import Settings
from vlcord.core.ports.catalog import ICatalogClient
from vlcord.core.ports.player import IPlayerClient


@pytest.fixture
def mock_player() -> AsyncMock:
    """
    Mock de IPlayerClient pour les tests.

    get_status doit etre configure dans chaque test (return_value ou side_effect).
    """
    return AsyncMock(spec=IPlayerClient)


@pytest.fixture
def mock_catalog() -> AsyncMock:
    """
    Mock de ICatalogClient pour les tests.

    Recherches vides et details absents par defaut.
    """
    mock = AsyncMock(spec=ICatalogClient)
    mock.search_movie.return_value = []
    mock.search_tv.return_value = []
    mock.get_movie.return_value = None
    mock.get_tv.return_value = None
    mock.get_episode.return_value = None
    return mock


@pytest.fixture
def override_store() -> OverrideStore:
    """Store en memoire (valeurs par defaut, sans fichier)."""
    return OverrideStore()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler cache, overrides et logs.
    """
    return Settings(
        tmdb_api_key=None,
        cache_dir=tmp_path / "cache",
        overrides_file=tmp_path / "overrides.json",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Variables VLCORD_ pointant vers tmp_path (pour le container et la CLI)."""
    monkeypatch.setenv("VLCORD_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("VLCORD_OVERRIDES_FILE", str(tmp_path / "overrides.json"))
    monkeypatch.setenv("VLCORD_LOG_FILE", str(tmp_path / "test.log"))
    monkeypatch.setenv("VLCORD_TMDB_API_KEY", "")
    return tmp_path


@pytest.fixture
def log_records():
    """Capture les enregistrements loguru emis pendant le test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
