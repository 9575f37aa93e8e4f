"""Wiring of external clients into the pipeline."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import Config, KeywordCatalog, Settings
from .db import ArticleStore, create_supabase_client, ensure_schema
from .ingestion import SerpApiFetcher
from .pipeline import IngestionPipeline

log = logging.getLogger(__name__)


@dataclass
class Runtime:
    """Handles shared by every ingestion run of a process."""

    fetcher: SerpApiFetcher
    store: ArticleStore
    catalog: KeywordCatalog
    request_interval: float = 1.0
    http_client: Optional[httpx.AsyncClient] = None

    def pipeline(self) -> IngestionPipeline:
        """A fresh pipeline over the shared handles."""
        return IngestionPipeline(
            fetcher=self.fetcher,
            store=self.store,
            catalog=self.catalog,
            request_interval=self.request_interval,
        )

    async def close(self) -> None:
        """Release the HTTP client."""
        if self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None


def build_runtime(config: Config, migrate: bool = True) -> Runtime:
    """
    Create clients from configuration.

    Raises ConfigError when required settings are missing. With
    ``migrate`` the articles table is ensured once here, not per run.
    """
    settings: Settings = config.settings
    client = create_supabase_client(settings)
    if migrate:
        created = ensure_schema(client, settings.table)
        if created:
            log.info("Created table %s", settings.table)

    http_client = httpx.AsyncClient(timeout=settings.request_timeout)
    fetcher = SerpApiFetcher(
        api_key=settings.serpapi_key,
        client=http_client,
        country=settings.country,
        num_results=settings.results_per_keyword,
        timeout=settings.request_timeout,
    )
    return Runtime(
        fetcher=fetcher,
        store=ArticleStore(client, settings.table),
        catalog=config.catalog,
        request_interval=settings.request_interval,
        http_client=http_client,
    )
