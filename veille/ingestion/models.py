"""Data models for ingestion."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_SOURCE = "Unknown"


class RawSource(BaseModel):
    """Source object as returned by SerpAPI."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def non_string_title(cls, v):
        """Only a string title counts."""
        return v if isinstance(v, str) else None


class RawSearchResult(BaseModel):
    """One item of SerpAPI's news_results."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    link: str = ""
    snippet: str = ""
    date: str = ""
    source: Union[str, RawSource, None] = None

    @field_validator("title", "link", "snippet", "date", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """SerpAPI sends null for some fields."""
        return "" if v is None else v

    @field_validator("source", mode="before")
    @classmethod
    def unknown_source_shape(cls, v):
        """Anything but a string or an object is treated as absent."""
        return v if isinstance(v, (str, dict, RawSource)) else None


def normalize_source(source: Union[str, RawSource, None]) -> str:
    """Flatten the polymorphic source field to a plain string."""
    if isinstance(source, str) and source.strip():
        return source
    if isinstance(source, RawSource) and source.title:
        return source.title
    return UNKNOWN_SOURCE


class Article(BaseModel):
    """Canonical article produced by one search result."""

    title: str = Field(..., description="Article title")
    link: str = Field(..., description="Article URL, unique identity")
    snippet: str = Field("", description="Result snippet")
    date: str = Field("", description="Publication date as given by the source")
    source: str = Field(UNKNOWN_SOURCE, description="Publisher name")
    created_at: datetime = Field(..., description="Ingestion time")

    @classmethod
    def from_raw(cls, raw: RawSearchResult, created_at: datetime) -> "Article":
        """Build an article from a raw search result."""
        return cls(
            title=raw.title,
            link=raw.link,
            snippet=raw.snippet,
            date=raw.date,
            source=normalize_source(raw.source),
            created_at=created_at,
        )


class KeywordResult(BaseModel):
    """Result of searching one keyword."""

    keyword: str = Field(..., description="Search phrase")
    language: str = Field(..., description="Language tag")
    success: bool = Field(..., description="Whether the search succeeded")
    articles: List[Article] = Field(default_factory=list, description="Normalized articles")
    error: Optional[str] = Field(None, description="Error message if failed")

    @property
    def article_count(self) -> int:
        """Number of articles found."""
        return len(self.articles)
