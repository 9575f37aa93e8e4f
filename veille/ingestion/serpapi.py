"""SerpAPI news fetcher."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..config.models import locale_for
from .models import Article, KeywordResult, RawSearchResult

log = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search"
ERROR_BODY_MAX = 500


def utcnow() -> datetime:
    """Current time, timezone-aware."""
    return datetime.now(timezone.utc)


class SerpApiFetcher:
    """Search Google News through SerpAPI, one keyword at a time."""

    def __init__(
        self,
        api_key: str,
        client: Optional[httpx.AsyncClient] = None,
        country: str = "ma",
        num_results: int = 100,
        timeout: float = 30.0,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize fetcher."""
        self.api_key = api_key
        self.client = client
        self.country = country
        self.num_results = num_results
        self.timeout = timeout
        self.clock = clock

    def build_params(self, keyword: str, language: str) -> Dict[str, str]:
        """Query parameters for one news search."""
        return {
            "api_key": self.api_key,
            "q": keyword,
            "engine": "google",
            "google_domain": "google.com",
            "gl": self.country,
            "hl": locale_for(language),
            "tbm": "nws",
            "tbs": "qdr:d",
            "num": str(self.num_results),
        }

    async def _get(self, params: Dict[str, str]) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(SERPAPI_URL, params=params)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(SERPAPI_URL, params=params)

    def parse_results(self, payload: Any, keyword: str) -> List[Article]:
        """Turn a SerpAPI payload into articles."""
        items = payload.get("news_results") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            log.warning("No news results for %r", keyword)
            return []

        now = self.clock()
        articles = []
        for item in items:
            try:
                raw = RawSearchResult.model_validate(item)
            except ValidationError as e:
                log.warning("Skipping malformed result for %r: %s", keyword, e)
                continue
            if not raw.link:
                log.debug("Skipping result without link for %r", keyword)
                continue
            articles.append(Article.from_raw(raw, now))
        return articles

    async def search(self, keyword: str, language: str) -> KeywordResult:
        """
        Search one keyword.

        Never raises: HTTP errors, malformed payloads and unexpected
        exceptions all yield an unsuccessful result with no articles.
        """
        log.info("Fetching articles for keyword: %s (%s)", keyword, language)
        try:
            response = await self._get(self.build_params(keyword, language))

            if not response.is_success:
                body = response.text[:ERROR_BODY_MAX]
                log.error("SerpAPI error for %r: HTTP %s %s", keyword, response.status_code, body)
                return KeywordResult(
                    keyword=keyword,
                    language=language,
                    success=False,
                    error=f"HTTP {response.status_code}",
                )

            articles = self.parse_results(response.json(), keyword)
            return KeywordResult(
                keyword=keyword,
                language=language,
                success=True,
                articles=articles,
            )

        except httpx.HTTPError as e:
            log.error("HTTP error fetching %r: %s", keyword, e)
            return KeywordResult(
                keyword=keyword,
                language=language,
                success=False,
                error=f"HTTP error: {e}",
            )
        except Exception as e:
            log.exception("Error fetching articles for keyword %r", keyword)
            return KeywordResult(
                keyword=keyword,
                language=language,
                success=False,
                error=f"Unexpected error: {e}",
            )

    async def fetch_for_keyword(self, keyword: str, language: str) -> List[Article]:
        """Articles for one keyword; empty on any failure."""
        result = await self.search(keyword, language)
        return result.articles
