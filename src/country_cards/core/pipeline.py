# ABOUTME: Orchestrates the country run: list -> resolve -> extract -> media -> answer -> render
# ABOUTME: Strictly sequential; the first error aborts the whole run before the failing country is rendered

from collections.abc import Callable
from pathlib import Path

import httpx

from country_cards.cards.answers import read_answer, strip_embedded_image
from country_cards.cards.render import CardKind, CardLayout, CountryRecord, write_card
from country_cards.config import Config
from country_cards.fetch.cache import ContentCache, FileCacheStore
from country_cards.fetch.fetcher import RateLimitedFetcher
from country_cards.fetch.rate_limit import TokenBucket
from country_cards.utils.logging import get_logger, log_pipeline_step
from country_cards.wiki.articles import ArticleStore, RedirectResolver
from country_cards.wiki.countries import parse_country_names, write_country_list
from country_cards.wiki.fields import FieldExtractor
from country_cards.wiki.media import MediaLocator
from country_cards.wiki.overrides import DEFAULT_OVERRIDES, load_overrides
from country_cards.wiki.titles import to_storage_key

DEFAULT_SEED_ARTICLE = "Member_states_of_the_United_Nations"

ProgressCallback = Callable[[int, str], None]


class CountryCardPipeline:
    """Render flashcards for every country, one at a time."""

    def __init__(
        self,
        resolver: RedirectResolver,
        extractor: FieldExtractor,
        media: MediaLocator,
        layout: CardLayout,
        seed_article: str = DEFAULT_SEED_ARTICLE,
        country_list_file: Path | None = None,
        fetcher: RateLimitedFetcher | None = None,
    ):
        self.resolver = resolver
        self.extractor = extractor
        self.media = media
        self.layout = layout
        self.seed_article = seed_article
        self.country_list_file = country_list_file
        self.fetcher = fetcher
        self.logger = get_logger(__name__)

    async def load_countries(self, only: str | None = None, position: int = 0) -> list[str]:
        """Return the sorted country list, starting at ``position``.

        With ``only`` the seed article is not consulted and no list file is written.
        """
        if only:
            countries = [only]
        else:
            seed = await self.resolver.resolve(self.seed_article)
            countries = parse_country_names(seed.text)
            if self.country_list_file is not None:
                write_country_list(countries, self.country_list_file)

        countries = sorted(countries)
        self.logger.info("Loaded country list", count=len(countries), position=position)
        if position > 0:
            countries = countries[position:]
        return countries

    @log_pipeline_step("process_country")
    async def process_country(self, name: str) -> CountryRecord:
        article = await self.resolver.resolve(name)
        key = article.key

        fields = self.extractor.extract(name, article, aliases=[to_storage_key(name)])

        await self.media.retrieve(fields.map_image, self.layout.map_images_dir)
        await self.media.retrieve(fields.flag_image, self.layout.flag_images_dir)

        # The location answer is hand-written; its image is re-attached by the template
        answer = strip_embedded_image(read_answer(self.layout.root, self.layout.location_stem(key)))

        record = CountryRecord(
            name=name,
            map_image_url=CardLayout.image_link(fields.map_image),
            flag_image_url=CardLayout.image_link(fields.flag_image),
            capital=fields.capital,
            answer_location=answer,
        )

        for kind in CardKind:
            write_card(self.layout, kind, key, record)

        return record

    async def run(
        self, only: str | None = None, position: int = 0, on_country: ProgressCallback | None = None
    ) -> list[CountryRecord]:
        countries = await self.load_countries(only=only, position=position)

        records: list[CountryRecord] = []
        for index, name in enumerate(countries, start=position):
            if on_country:
                on_country(index, name)
            self.logger.info("Processing country", index=index, country=name)
            records.append(await self.process_country(name))

        self.logger.info("Run complete", rendered=len(records))
        return records

    async def aclose(self) -> None:
        if self.fetcher is not None:
            await self.fetcher.aclose()

    async def __aenter__(self) -> "CountryCardPipeline":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def build_pipeline(config: Config, client: httpx.AsyncClient | None = None) -> CountryCardPipeline:
    """Wire every component from configuration.

    One TokenBucket and one fetcher are shared by the article and media caches,
    so the rate cap covers all outbound traffic.
    """
    limiter = TokenBucket(capacity=config.rate_limit_capacity, interval=config.rate_limit_interval)
    fetcher = RateLimitedFetcher(
        limiter, client=client, user_agent=config.user_agent, timeout=config.request_timeout
    )

    pages = ContentCache(FileCacheStore(config.pages_dir), fetcher)
    files = ContentCache(FileCacheStore(config.files_dir), fetcher)

    overrides = DEFAULT_OVERRIDES
    if config.overrides_file is not None:
        overrides = overrides.merged(load_overrides(config.overrides_file))

    return CountryCardPipeline(
        resolver=RedirectResolver(ArticleStore(pages, config.export_url), max_redirects=config.max_redirects),
        extractor=FieldExtractor(overrides),
        media=MediaLocator(files, config.media_base_url),
        layout=CardLayout(config.output_dir),
        seed_article=config.seed_article,
        country_list_file=config.country_list_file,
        fetcher=fetcher,
    )
