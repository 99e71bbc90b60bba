# ABOUTME: Tests for the content cache and its file-backed store
# ABOUTME: Covers idempotent fetching, atomic writes, miss/failure separation and concurrent misses

import asyncio
import os

import pytest

from country_cards.errors import FetchError
from country_cards.fetch.cache import ContentCache, FileCacheStore, MemoryCacheStore


def locate(name: str) -> str:
    return f"https://example.org/{name}"


class CountingFetcher:
    def __init__(self, data: bytes = b"payload", delay: float = 0.0):
        self.data = data
        self.delay = delay
        self.urls: list[str] = []

    async def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.data


class FailingFetcher:
    async def fetch(self, url: str) -> bytes:
        raise FetchError(url, status=500, reason="Internal Server Error")


class TestFileCacheStore:
    """Test the flat-directory store."""

    def test_miss_returns_none(self, tmp_path):
        store = FileCacheStore(tmp_path / "pages")

        assert store.load("Japan") is None
        assert not store.exists("Japan")

    def test_save_then_load(self, tmp_path):
        store = FileCacheStore(tmp_path / "pages")

        store.save("Japan", b"<xml/>")

        assert store.exists("Japan")
        assert store.load("Japan") == b"<xml/>"
        assert (tmp_path / "pages" / "Japan").read_bytes() == b"<xml/>"

    def test_save_leaves_no_temporary_files(self, tmp_path):
        store = FileCacheStore(tmp_path)

        store.save("Flag_of_Chad.svg", b"<svg/>")

        assert sorted(p.name for p in tmp_path.iterdir()) == ["Flag_of_Chad.svg"]

    def test_failed_write_does_not_create_entry(self, tmp_path, monkeypatch):
        store = FileCacheStore(tmp_path)

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)

        with pytest.raises(OSError):
            store.save("Japan", b"<xml/>")

        assert not store.exists("Japan")
        assert list(tmp_path.iterdir()) == []

    def test_slash_in_name_stays_inside_directory(self, tmp_path):
        store = FileCacheStore(tmp_path)

        store.save("AC/DC", b"x")

        assert (tmp_path / "AC%2FDC").is_file()

    @pytest.mark.parametrize("name", ["", ".", ".."])
    def test_invalid_names_rejected(self, tmp_path, name):
        with pytest.raises(ValueError):
            FileCacheStore(tmp_path).path_for(name)


class TestContentCache:
    """Test cache-first retrieval."""

    @pytest.mark.asyncio
    async def test_second_get_does_not_fetch(self, tmp_path):
        fetcher = CountingFetcher(b"<page/>")
        cache = ContentCache(FileCacheStore(tmp_path), fetcher)

        first = await cache.get("Japan", locate)
        second = await cache.get("Japan", locate)

        assert fetcher.urls == ["https://example.org/Japan"]
        assert first == second == b"<page/>"

    @pytest.mark.asyncio
    async def test_entry_reports_origin(self):
        cache = ContentCache(MemoryCacheStore(), CountingFetcher())

        first = await cache.get_entry("Japan", locate)
        second = await cache.get_entry("Japan", locate)

        assert first.cached is False
        assert second.cached is True
        assert second.data == first.data

    @pytest.mark.asyncio
    async def test_existing_entry_never_touches_network(self):
        fetcher = CountingFetcher()
        cache = ContentCache(MemoryCacheStore({"Japan": b"stored"}), fetcher)

        assert cache.exists("Japan")
        assert await cache.get("Japan", locate) == b"stored"
        assert fetcher.urls == []

    @pytest.mark.asyncio
    async def test_fetched_bytes_are_persisted_verbatim(self, tmp_path):
        payload = bytes(range(256))
        cache = ContentCache(FileCacheStore(tmp_path), CountingFetcher(payload))

        await cache.get("binary.png", locate)

        assert (tmp_path / "binary.png").read_bytes() == payload

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates_and_stores_nothing(self):
        store = MemoryCacheStore()
        cache = ContentCache(store, FailingFetcher())

        with pytest.raises(FetchError):
            await cache.get("Japan", locate)

        assert not store.exists("Japan")

    @pytest.mark.asyncio
    async def test_concurrent_misses_fetch_once(self):
        fetcher = CountingFetcher(b"once", delay=0.01)
        cache = ContentCache(MemoryCacheStore(), fetcher)

        results = await asyncio.gather(*(cache.get("Japan", locate) for _ in range(3)))

        assert results == [b"once", b"once", b"once"]
        assert len(fetcher.urls) == 1

    @pytest.mark.asyncio
    async def test_miss_locks_are_released_after_use(self):
        cache = ContentCache(MemoryCacheStore(), CountingFetcher(b"once", delay=0.01))

        await asyncio.gather(*(cache.get("Japan", locate) for _ in range(3)))

        assert cache._locks == {}

    @pytest.mark.asyncio
    async def test_failed_miss_releases_lock(self):
        cache = ContentCache(MemoryCacheStore(), FailingFetcher())

        with pytest.raises(FetchError):
            await cache.get("Chad", locate)

        assert cache._locks == {}
