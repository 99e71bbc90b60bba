# ABOUTME: Tiered extraction of map image, flag image and capital from article wikitext
# ABOUTME: Tier order is override table, primary template key, then fallback keys; nothing found is fatal

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from country_cards.errors import ExtractionError
from country_cards.utils.logging import get_logger
from country_cards.wiki.articles import Article
from country_cards.wiki.markup import find_template_field, parse_wiki_file, parse_wiki_link
from country_cards.wiki.overrides import DEFAULT_OVERRIDES, OverrideTables


class CountryField(str, Enum):
    """Fields pulled from a country article."""

    MAP_IMAGE = "image map"
    FLAG_IMAGE = "image flag"
    CAPITAL = "capital"


class Tier(str, Enum):
    """Which extraction strategy produced a value."""

    OVERRIDE = "override"
    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class FieldRule:
    """Template keys to try, in order, and the cleaner applied to a matched value."""

    field: CountryField
    keys: tuple[str, ...]
    clean: Callable[[str], str]


MAP_IMAGE_RULE = FieldRule(CountryField.MAP_IMAGE, ("image_map", "image_map2"), parse_wiki_file)
FLAG_IMAGE_RULE = FieldRule(CountryField.FLAG_IMAGE, ("image_flag",), parse_wiki_file)
CAPITAL_RULE = FieldRule(CountryField.CAPITAL, ("capital",), parse_wiki_link)


@dataclass(frozen=True)
class FieldValue:
    value: str
    tier: Tier


@dataclass(frozen=True)
class CountryFields:
    """Everything extracted for one country."""

    map_image: str
    flag_image: str
    capital: str


class FieldExtractor:
    """Extract country fields from wikitext with override tables taking precedence."""

    def __init__(self, overrides: OverrideTables = DEFAULT_OVERRIDES):
        self.overrides = overrides
        self.logger = get_logger(__name__)

    def extract_field(
        self,
        rule: FieldRule,
        overrides: Mapping[str, str],
        country: str,
        keys: Iterable[str],
        text: str,
    ) -> FieldValue:
        """Run the tiers for one field.

        Args:
            rule: Template keys and cleaner for the field
            overrides: Override table for the field
            country: Display name used in errors
            keys: Article keys to look up in the override table, first match wins
            text: Article wikitext

        Raises:
            ExtractionError: If no tier yields a non-empty value
        """
        for key in keys:
            if key in overrides:
                self.logger.debug("Using override", field=rule.field.value, key=key, value=overrides[key])
                return FieldValue(overrides[key], Tier.OVERRIDE)

        for position, template_key in enumerate(rule.keys):
            raw = find_template_field(text, template_key)
            if raw is None:
                continue
            value = rule.clean(raw)
            if value:
                return FieldValue(value, Tier.PRIMARY if position == 0 else Tier.FALLBACK)
            self.logger.warning("Template field cleaned to nothing", field=rule.field.value, raw=raw)

        raise ExtractionError(rule.field.value, country, detail=f"no match for {', '.join(rule.keys)}")

    def map_image(self, country: str, key: str, text: str) -> str:
        return self.extract_field(MAP_IMAGE_RULE, self.overrides.map_images, country, [key], text).value

    def flag_image(self, country: str, key: str, text: str) -> str:
        return self.extract_field(FLAG_IMAGE_RULE, self.overrides.flag_images, country, [key], text).value

    def capital(self, country: str, key: str, text: str) -> str:
        return self.extract_field(CAPITAL_RULE, self.overrides.capitals, country, [key], text).value

    def extract(self, country: str, article: Article, aliases: Iterable[str] = ()) -> CountryFields:
        """Extract all three fields for ``country`` from its resolved article.

        Overrides are looked up under the resolved article key first, then
        under each alias (typically the key the country was requested by
        before redirects were followed).
        """
        keys = [article.key, *[alias for alias in aliases if alias != article.key]]
        return CountryFields(
            map_image=self.extract_field(
                MAP_IMAGE_RULE, self.overrides.map_images, country, keys, article.text
            ).value,
            flag_image=self.extract_field(
                FLAG_IMAGE_RULE, self.overrides.flag_images, country, keys, article.text
            ).value,
            capital=self.extract_field(CAPITAL_RULE, self.overrides.capitals, country, keys, article.text).value,
        )
