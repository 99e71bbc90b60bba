# ABOUTME: Network access layer: shared rate limiting, HTTP fetching and the on-disk content cache
# ABOUTME: Every remote byte the pipeline reads goes through ContentCache -> RateLimitedFetcher

from .cache import CacheEntry, CacheStore, ContentCache, FileCacheStore, MemoryCacheStore
from .fetcher import Fetcher, RateLimitedFetcher
from .rate_limit import RateLimiter, TokenBucket, UnlimitedRateLimiter

__all__ = [
    "CacheEntry",
    "CacheStore",
    "ContentCache",
    "FileCacheStore",
    "MemoryCacheStore",
    "Fetcher",
    "RateLimitedFetcher",
    "RateLimiter",
    "TokenBucket",
    "UnlimitedRateLimiter",
]
