"""Article storage."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from pydantic import BaseModel, Field
from supabase import Client

from ..errors import StorageError
from ..ingestion.models import Article
from .dates import parse_published

log = logging.getLogger(__name__)


class PersistedRow(BaseModel):
    """Row written to the articles table."""

    url: str = Field(..., description="Article URL, unique key")
    title: str = Field(..., description="Article title")
    description: Optional[str] = Field(None, description="Result snippet")
    published_at: datetime = Field(..., description="Publication timestamp")
    created_at: datetime = Field(..., description="Ingestion timestamp")

    def to_record(self) -> Dict[str, Any]:
        """JSON-ready dict for the data store."""
        return self.model_dump(mode="json")


class ArticleStore:
    """Persist articles in the data store."""

    def __init__(self, client: Client, table: str = "articles") -> None:
        """Initialize article store."""
        self.client = client
        self.table = table

    @staticmethod
    def to_row(article: Article, now: Optional[datetime] = None) -> PersistedRow:
        """Project an article onto the table schema."""
        if now is None:
            now = datetime.now(timezone.utc)
        return PersistedRow(
            url=article.link,
            title=article.title,
            description=article.snippet or None,
            published_at=parse_published(article.date, now),
            created_at=now,
        )

    def upsert(self, articles: List[Article]) -> int:
        """
        Write articles in one batch, ignoring URLs already stored.

        Returns the number of rows sent. Rows sharing a URL within the
        batch are collapsed to the first one, since one ON CONFLICT
        statement cannot touch the same key twice.
        """
        if not articles:
            log.info("No articles to insert")
            return 0

        now = datetime.now(timezone.utc)
        rows: Dict[str, Dict[str, Any]] = {}
        for article in articles:
            if article.link not in rows:
                rows[article.link] = self.to_row(article, now).to_record()

        try:
            (
                self.client.table(self.table)
                .upsert(list(rows.values()), on_conflict="url", ignore_duplicates=True)
                .execute()
            )
        except APIError as e:
            log.error("Error inserting articles: %s", e.message)
            raise StorageError(f"Failed to upsert articles: {e.message}") from e

        log.info("Successfully inserted %d articles", len(articles))
        return len(rows)

    def list_recent(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Stored rows, newest first."""
        query = self.client.table(self.table).select("*").order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        try:
            response = query.execute()
        except APIError as e:
            raise StorageError(f"Failed to read articles: {e.message}") from e
        return response.data or []
