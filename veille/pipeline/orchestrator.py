"""Ingestion pipeline: search every keyword, then persist the results."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, List, Optional, Protocol, Tuple

from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from ..config import DEFAULT_CATALOG, KeywordCatalog, LanguageGroup
from ..db.articles import ArticleStore
from ..db.init import ensure_schema
from ..ingestion import Article, KeywordResult, paced

log = logging.getLogger(__name__)
console = Console()

NO_ARTICLES_MESSAGE = "No articles found"


class Fetcher(Protocol):
    """Anything that can search one keyword."""

    async def search(self, keyword: str, language: str) -> KeywordResult: ...


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        """Mark stage as started."""
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        """Mark stage as completed successfully."""
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        """Mark stage as failed."""
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Get stage duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


class RunSummary(BaseModel):
    """Outcome of one ingestion run."""

    success: bool = Field(..., description="Whether articles were found and stored")
    processed_count: int = Field(0, description="Articles processed, duplicates included")
    message: str = Field(..., description="Human-readable outcome")
    stored_count: int = Field(0, description="Distinct URLs sent to the store")
    keywords_total: int = Field(0, description="Searches issued")
    keywords_failed: int = Field(0, description="Searches that failed")
    per_language: Dict[str, int] = Field(default_factory=dict, description="Articles per language")
    started_at: Optional[datetime] = Field(None, description="Run start")
    finished_at: Optional[datetime] = Field(None, description="Run end")


class IngestionPipeline:
    """Search the keyword catalog sequentially and upsert what is found."""

    def __init__(
        self,
        fetcher: Fetcher,
        store: ArticleStore,
        catalog: KeywordCatalog = DEFAULT_CATALOG,
        request_interval: float = 1.0,
        migrate: bool = False,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize pipeline."""
        self.fetcher = fetcher
        self.store = store
        self.catalog = catalog
        self.request_interval = request_interval
        self.migrate = migrate
        self.sleep = sleep
        self.stages: List[PipelineStage] = []
        self.keyword_results: List[KeywordResult] = []

    def _reset(self) -> None:
        self.stages = [
            PipelineStage("fetch", "Searching keywords"),
            PipelineStage("storage", "Storing articles"),
        ]
        self.keyword_results = []

    async def _search(self, pair: Tuple[str, LanguageGroup]) -> KeywordResult:
        keyword, group = pair
        return await self.fetcher.search(keyword, group.tag)

    @staticmethod
    def _absorb(pair: Tuple[str, LanguageGroup], error: Exception) -> KeywordResult:
        keyword, group = pair
        log.error("Error fetching articles for keyword %r: %s", keyword, error)
        return KeywordResult(keyword=keyword, language=group.tag, success=False, error=str(error))

    async def collect(self) -> List[Article]:
        """Run every search in catalog order and gather the articles."""
        articles: List[Article] = []
        async for _, result in paced(
            list(self.catalog.iter_keywords()),
            self._search,
            interval=self.request_interval,
            on_error=self._absorb,
            sleep=self.sleep,
        ):
            self.keyword_results.append(result)
            articles.extend(result.articles)
        return articles

    def _per_language(self) -> Dict[str, int]:
        counts = {tag: 0 for tag in self.catalog.tags}
        for result in self.keyword_results:
            counts[result.language] = counts.get(result.language, 0) + result.article_count
        return counts

    async def run(self) -> RunSummary:
        """
        Run the pipeline once.

        Returns a failed summary when no keyword produced an article.
        Schema and storage errors propagate.
        """
        self._reset()
        started_at = datetime.now(timezone.utc)

        fetch_stage, storage_stage = self.stages
        fetch_stage.start()
        articles = await self.collect()
        failed = sum(1 for r in self.keyword_results if not r.success)

        summary = RunSummary(
            success=False,
            message=NO_ARTICLES_MESSAGE,
            keywords_total=len(self.keyword_results),
            keywords_failed=failed,
            per_language=self._per_language(),
            started_at=started_at,
        )

        if not articles:
            fetch_stage.fail(NO_ARTICLES_MESSAGE)
            summary.finished_at = datetime.now(timezone.utc)
            log.warning("No articles found across %d keywords", summary.keywords_total)
            return summary

        fetch_stage.complete({
            "keywords": summary.keywords_total,
            "failed": failed,
            "articles": len(articles),
        })

        storage_stage.start()
        try:
            if self.migrate:
                await asyncio.to_thread(ensure_schema, self.store.client, self.store.table)
            stored = await asyncio.to_thread(self.store.upsert, articles)
        except Exception as e:
            storage_stage.fail(str(e))
            raise
        storage_stage.complete({"stored": stored})

        summary.success = True
        summary.processed_count = len(articles)
        summary.stored_count = stored
        summary.message = f"Successfully processed {len(articles)} articles"
        summary.finished_at = datetime.now(timezone.utc)
        return summary


def print_run_summary(pipeline: IngestionPipeline, summary: RunSummary) -> None:
    """Print stage and keyword statistics."""
    table = Table(title="Run Summary")
    table.add_column("Stage", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Duration", style="yellow")
    table.add_column("Details", style="dim")

    for stage in pipeline.stages:
        status = "[green]✓[/green]" if stage.success else "[red]✗[/red]"
        duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"

        details = ""
        if stage.success and stage.stats:
            if stage.name == "fetch":
                details = (
                    f"{stage.stats.get('articles', 0)} articles from "
                    f"{stage.stats.get('keywords', 0)} keywords "
                    f"({stage.stats.get('failed', 0)} failed)"
                )
            elif stage.name == "storage":
                details = f"{stage.stats.get('stored', 0)} distinct URLs sent"
        elif not stage.success:
            details = stage.error or "Skipped"

        table.add_row(stage.name.title(), status, duration, details)

    console.print(table)

    languages = Table(title="Articles per language")
    languages.add_column("Language", style="cyan")
    languages.add_column("Articles", style="green", justify="right")
    for tag, count in summary.per_language.items():
        languages.add_row(tag, str(count))
    console.print(languages)

    failed = [r for r in pipeline.keyword_results if not r.success]
    if failed:
        console.print("\n[bold red]Failed keywords:[/bold red]")
        for result in failed:
            console.print(f"  - {result.keyword} ({result.language}): {result.error}")
