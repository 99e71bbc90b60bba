# ABOUTME: Name-keyed content cache that makes every fetch idempotent across runs
# ABOUTME: Flat-directory store with atomic writes, wrapped around a fetcher with per-name miss locking

import asyncio
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from country_cards.fetch.fetcher import Fetcher
from country_cards.utils.logging import get_logger

TEMP_SUFFIX = ".part"


class CacheStore(Protocol):
    """Key-value storage of raw bytes by resource name."""

    def exists(self, name: str) -> bool: ...

    def load(self, name: str) -> bytes | None:
        """Return the stored bytes, or None on a miss."""
        ...

    def save(self, name: str, data: bytes) -> None: ...


class FileCacheStore:
    """One file per entry in a flat directory.

    Entries are written to a temporary file beside the final path and moved
    into place with ``os.replace``, so a crash mid-write leaves only a
    ``.part`` file behind and never a truncated entry under its real name.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        if not name or name in (".", ".."):
            raise ValueError(f"invalid cache entry name: {name!r}")
        return self.directory / name.replace("/", "%2F")

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def load(self, name: str) -> bytes | None:
        path = self.path_for(name)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def save(self, name: str, data: bytes) -> None:
        path = self.path_for(name)
        self.directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{path.name}.", suffix=TEMP_SUFFIX)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class MemoryCacheStore:
    """In-process store, handy for tests and dry runs."""

    def __init__(self, entries: dict[str, bytes] | None = None):
        self.entries: dict[str, bytes] = dict(entries or {})

    def exists(self, name: str) -> bool:
        return name in self.entries

    def load(self, name: str) -> bytes | None:
        return self.entries.get(name)

    def save(self, name: str, data: bytes) -> None:
        self.entries[name] = data


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Bytes for a name and whether they came from the store."""

    name: str
    data: bytes
    cached: bool


class ContentCache:
    """Cache-first retrieval: a name with a stored entry never touches the network.

    The cache does not know where resources live; every ``get`` call supplies a
    ``locate`` function turning the name into the URL to fetch on a miss.
    """

    def __init__(self, store: CacheStore, fetcher: Fetcher):
        self.store = store
        self.fetcher = fetcher
        self._locks: dict[str, asyncio.Lock] = {}
        self.logger = get_logger(__name__)

    def exists(self, name: str) -> bool:
        return self.store.exists(name)

    async def get(self, name: str, locate: Callable[[str], str]) -> bytes:
        entry = await self.get_entry(name, locate)
        return entry.data

    async def get_entry(self, name: str, locate: Callable[[str], str]) -> CacheEntry:
        data = self.store.load(name)
        if data is not None:
            self.logger.debug("Cache hit", name=name, size=len(data))
            return CacheEntry(name=name, data=data, cached=True)

        # Concurrent misses for one name: the first writer wins, later callers reuse its entry
        lock = self._locks.setdefault(name, asyncio.Lock())
        try:
            async with lock:
                data = self.store.load(name)
                if data is not None:
                    return CacheEntry(name=name, data=data, cached=True)

                url = locate(name)
                self.logger.info("Cache miss, fetching", name=name, url=url)
                data = await self.fetcher.fetch(url)
                self.store.save(name, data)
                return CacheEntry(name=name, data=data, cached=False)
        finally:
            if not lock.locked() and self._locks.get(name) is lock:
                del self._locks[name]
