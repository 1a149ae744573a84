"""
Tests unitaires pour MetadataCache (diskcache LRU + TTL).
"""

import asyncio
from pathlib import Path

import pytest

from vlcord.adapters.api.cache import MetadataCache, normalize_cache_key
from vlcord.core.value_objects import CatalogRecord, MediaType


@pytest.fixture
def cache(tmp_path: Path):
    cache = MetadataCache(cache_dir=str(tmp_path / "cache"), ttl=3600, size_limit_mb=1)
    yield cache
    cache.close()


@pytest.fixture
def record() -> CatalogRecord:
    return CatalogRecord(
        external_id="27205",
        media_type=MediaType.MOVIE,
        canonical_title="Inception",
        year=2010,
        genres=("Action", "Science Fiction"),
    )


def test_normalize_cache_key() -> None:
    assert normalize_cache_key("  Breaking   Bad S05E14 ") == "breaking bad s05e14"


class TestMetadataCache:
    @pytest.mark.asyncio
    async def test_set_then_get(self, cache: MetadataCache, record: CatalogRecord) -> None:
        await cache.set("inception", record)
        assert await cache.get("inception") == record

    @pytest.mark.asyncio
    async def test_keys_are_normalized(self, cache: MetadataCache, record: CatalogRecord) -> None:
        await cache.set("Inception", record)
        assert await cache.get("  inception ") == record

    @pytest.mark.asyncio
    async def test_miss_returns_none(self, cache: MetadataCache) -> None:
        assert await cache.get("unknown") is None

    @pytest.mark.asyncio
    async def test_entries_expire(self, cache: MetadataCache, record: CatalogRecord) -> None:
        await cache.set("inception", record, ttl=0.05)
        await asyncio.sleep(0.1)
        assert await cache.get("inception") is None

    @pytest.mark.asyncio
    async def test_delete_and_clear(self, cache: MetadataCache, record: CatalogRecord) -> None:
        await cache.set("a", record)
        await cache.set("b", record)
        assert await cache.delete("a") is True
        assert await cache.get("a") is None
        await cache.clear()
        assert await cache.get("b") is None

    @pytest.mark.asyncio
    async def test_stats_count_hits_and_misses(
        self, cache: MetadataCache, record: CatalogRecord
    ) -> None:
        await cache.set("inception", record)
        await cache.get("inception")
        await cache.get("missing")

        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["size"] == 1
        assert stats["volume"] > 0

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_path: Path, record: CatalogRecord) -> None:
        first = MetadataCache(cache_dir=str(tmp_path / "shared"))
        await first.set("inception", record)
        first.close()

        second = MetadataCache(cache_dir=str(tmp_path / "shared"))
        try:
            assert await second.get("inception") == record
        finally:
            second.close()
