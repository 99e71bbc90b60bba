# ABOUTME: Wiki layer: articles, redirects, markup cleaning, field extraction and media locations
# ABOUTME: Pipeline Stage 1: raw export bytes -> Article -> CountryFields + downloaded media

"""
Wiki Layer: Turn raw article markup into country facts

This layer handles:
- Special:Export retrieval and parsing into Article records
- Redirect chain resolution
- Tiered field extraction (overrides, template keys, fallback keys)
- Media file location on the sharded upload host

Data Flow: ContentCache -> Article -> CountryFields -> cards layer
"""

from .articles import Article, ArticleStore, RedirectResolver
from .fields import CountryField, CountryFields, FieldExtractor
from .media import MediaLocator, media_url
from .overrides import DEFAULT_OVERRIDES, OverrideTables, load_overrides
from .titles import to_storage_key

__all__ = [
    "Article",
    "ArticleStore",
    "RedirectResolver",
    "CountryField",
    "CountryFields",
    "FieldExtractor",
    "MediaLocator",
    "media_url",
    "DEFAULT_OVERRIDES",
    "OverrideTables",
    "load_overrides",
    "to_storage_key",
]
