# ABOUTME: Shared fixtures for building export documents and offline fetch stacks
# ABOUTME: Pages and media are served from in-memory stores so tests never touch the network

from collections.abc import Callable
from xml.sax.saxutils import escape, quoteattr

import pytest

from country_cards.fetch.cache import ContentCache, MemoryCacheStore

EXPORT_NAMESPACE = "http://www.mediawiki.org/xml/export-0.11/"


def build_export(title: str, text: str = "", redirect: str | None = None) -> bytes:
    """Build a minimal Special:Export document holding one page."""
    redirect_el = f"<redirect title={quoteattr(redirect)} />" if redirect else ""
    return (
        f'<mediawiki xmlns="{EXPORT_NAMESPACE}" version="0.11" xml:lang="en">'
        "<siteinfo><sitename>Wikipedia</sitename></siteinfo>"
        f"<page><title>{escape(title)}</title><ns>0</ns><id>1</id>{redirect_el}"
        f'<revision><id>2</id><text bytes="{len(text)}" xml:space="preserve">{escape(text)}</text></revision>'
        "</page></mediawiki>"
    ).encode("utf-8")


class RecordingFetcher:
    """Fetcher serving canned responses and remembering every URL asked for."""

    def __init__(self, responses: dict[str, bytes] | None = None):
        self.responses = dict(responses or {})
        self.calls: list[str] = []

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if url not in self.responses:
            raise AssertionError(f"unexpected fetch of {url}")
        return self.responses[url]


@pytest.fixture
def export_xml() -> Callable[..., bytes]:
    return build_export


@pytest.fixture
def recording_fetcher() -> RecordingFetcher:
    return RecordingFetcher()


@pytest.fixture
def page_cache(recording_fetcher) -> ContentCache:
    """Article cache backed by memory; seed entries via ``page_cache.store.entries``."""
    return ContentCache(MemoryCacheStore(), recording_fetcher)
