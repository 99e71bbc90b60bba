# ABOUTME: Maps media file names onto the hash-sharded upload storage and downloads them via the cache
# ABOUTME: Path is {base}/{md5[0]}/{md5[0:2]}/{name}, computed without any network access

import hashlib
from pathlib import Path

from country_cards.fetch.cache import ContentCache
from country_cards.utils.logging import get_logger
from country_cards.wiki.titles import to_storage_key

DEFAULT_MEDIA_BASE_URL = "https://upload.wikimedia.org/wikipedia/commons"


def shard_path(file_name: str) -> str:
    """Relative storage path for a file, e.g. ``9/9e/Flag_of_Japan.svg``."""
    name = to_storage_key(file_name)
    digest = hashlib.md5(name.encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"{digest[0]}/{digest[0:2]}/{name}"


def media_url(file_name: str, base_url: str = DEFAULT_MEDIA_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{shard_path(file_name)}"


class MediaLocator:
    """Resolve and retrieve media files through the content cache."""

    def __init__(self, cache: ContentCache, base_url: str = DEFAULT_MEDIA_BASE_URL):
        self.cache = cache
        self.base_url = base_url
        self.logger = get_logger(__name__)

    def resolve(self, file_name: str) -> str:
        return media_url(file_name, self.base_url)

    async def retrieve(self, file_name: str, destination: Path) -> Path:
        """Fetch (or read from cache) a media file and copy it into ``destination``.

        Returns:
            Path of the copied file
        """
        name = to_storage_key(file_name)
        data = await self.cache.get(name, self.resolve)

        destination.mkdir(parents=True, exist_ok=True)
        target = destination / name
        target.write_bytes(data)

        self.logger.debug("Copied media file", name=name, destination=str(target), size=len(data))
        return target
