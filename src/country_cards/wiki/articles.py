# ABOUTME: Article retrieval from the wiki export endpoint and redirect chain resolution
# ABOUTME: Parses Special:Export XML into immutable Article records; the raw XML lives in the content cache

import xml.etree.ElementTree as ET

from pydantic import BaseModel, ConfigDict

from country_cards.errors import (
    ArticleFetchError,
    ArticleNotFoundError,
    ArticleParseError,
    FetchError,
    RedirectLoopError,
)
from country_cards.fetch.cache import ContentCache
from country_cards.utils.logging import get_logger
from country_cards.wiki.titles import to_storage_key

DEFAULT_EXPORT_URL = "https://en.wikipedia.org/wiki/Special:Export"


class Article(BaseModel):
    """A single page from an export document, possibly a redirect stub."""

    model_config = ConfigDict(frozen=True)

    title: str
    text: str = ""
    redirect: str | None = None

    @property
    def key(self) -> str:
        return to_storage_key(self.title)

    @property
    def is_redirect(self) -> bool:
        return bool(self.redirect)


def _local_name(tag: str) -> str:
    # Export documents are namespaced by schema version (export-0.10, export-0.11, ...)
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    return next((child for child in element if _local_name(child.tag) == name), None)


def parse_export(data: bytes, title: str) -> Article:
    """Parse the first page of a Special:Export document.

    Raises:
        ArticleParseError: If the document is not well-formed XML
        ArticleNotFoundError: If the document holds no page
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise ArticleParseError(title, f"parser error ({e})") from e

    page = next((el for el in root.iter() if _local_name(el.tag) == "page"), None)
    if page is None:
        raise ArticleNotFoundError(title, "page error (no page in export)")

    title_el = _child(page, "title")
    redirect_el = _child(page, "redirect")
    revision_el = _child(page, "revision")
    text_el = _child(revision_el, "text") if revision_el is not None else None

    return Article(
        title=(title_el.text or title) if title_el is not None else title,
        text=(text_el.text or "") if text_el is not None else "",
        redirect=redirect_el.get("title") if redirect_el is not None else None,
    )


class ArticleStore:
    """Look up articles by title through the content cache."""

    def __init__(self, cache: ContentCache, export_url: str = DEFAULT_EXPORT_URL):
        self.cache = cache
        self.export_url = export_url.rstrip("/")
        self.logger = get_logger(__name__)

    def export_location(self, key: str) -> str:
        return f"{self.export_url}/{key}"

    async def get_article(self, title: str) -> Article:
        """Fetch (or read from cache) and parse the article for ``title``.

        Raises:
            ArticleFetchError: The export could not be fetched
            ArticleParseError: The export is not well-formed
            ArticleNotFoundError: The export contains no page
        """
        key = to_storage_key(title)
        try:
            data = await self.cache.get(key, self.export_location)
        except FetchError as e:
            raise ArticleFetchError(key, e) from e

        article = parse_export(data, key)
        self.logger.debug(
            "Loaded article", key=key, title=article.title, redirect=article.redirect, text_length=len(article.text)
        )
        return article


class RedirectResolver:
    """Follow redirect stubs until a real article is reached.

    A title seen twice in one chain, or a chain with more than
    ``max_redirects`` hops, raises RedirectLoopError.
    """

    def __init__(self, store: ArticleStore, max_redirects: int = 10):
        self.store = store
        self.max_redirects = max_redirects
        self.logger = get_logger(__name__)

    async def resolve(self, title: str) -> Article:
        chain = [to_storage_key(title)]
        article = await self.store.get_article(chain[0])

        while article.redirect:
            target = to_storage_key(article.redirect)
            if target in chain:
                raise RedirectLoopError([*chain, target])
            if len(chain) > self.max_redirects:
                raise RedirectLoopError([*chain, target], limit=self.max_redirects)

            self.logger.info("Following redirect", source=chain[-1], target=target)
            chain.append(target)
            article = await self.store.get_article(target)

        return article
