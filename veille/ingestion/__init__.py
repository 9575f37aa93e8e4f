"""SerpAPI ingestion."""

from .models import UNKNOWN_SOURCE, Article, KeywordResult, RawSearchResult, RawSource, normalize_source
from .pacing import paced
from .serpapi import SERPAPI_URL, SerpApiFetcher

__all__ = [
    "SERPAPI_URL",
    "UNKNOWN_SOURCE",
    "Article",
    "KeywordResult",
    "RawSearchResult",
    "RawSource",
    "SerpApiFetcher",
    "normalize_source",
    "paced",
]
