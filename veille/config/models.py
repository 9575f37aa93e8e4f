"""Configuration models."""

from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

LOCALES: Dict[str, str] = {
    "arabic": "ar",
    "french": "fr",
    "spanish": "es",
}
DEFAULT_LOCALE = "es"


def locale_for(tag: str) -> str:
    """Map a language tag to its two-letter search locale."""
    return LOCALES.get(tag, DEFAULT_LOCALE)


class LanguageGroup(BaseModel):
    """Keywords searched in one language."""

    model_config = {"frozen": True}

    tag: str = Field(..., description="Language tag (arabic, french, spanish)")
    keywords: Tuple[str, ...] = Field(..., min_length=1, description="Search phrases, in order")

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Reject blank phrases."""
        cleaned = tuple(k.strip() for k in v)
        if any(not k for k in cleaned):
            raise ValueError("Keywords must not be blank")
        return cleaned

    @property
    def locale(self) -> str:
        """Search locale for this group."""
        return locale_for(self.tag)


class KeywordCatalog(BaseModel):
    """Ordered keyword groups."""

    model_config = {"frozen": True}

    groups: Tuple[LanguageGroup, ...] = Field(..., min_length=1)

    @field_validator("groups")
    @classmethod
    def validate_unique_tags(cls, v: Tuple[LanguageGroup, ...]) -> Tuple[LanguageGroup, ...]:
        """Each language appears once."""
        tags = [g.tag for g in v]
        if len(tags) != len(set(tags)):
            raise ValueError("Duplicate language tag in catalog")
        return v

    def iter_keywords(self) -> Iterator[Tuple[str, LanguageGroup]]:
        """Yield (keyword, group) pairs in catalog order."""
        for group in self.groups:
            for keyword in group.keywords:
                yield keyword, group

    @property
    def total_keywords(self) -> int:
        """Number of searches one run issues."""
        return sum(len(g.keywords) for g in self.groups)

    @property
    def tags(self) -> List[str]:
        """Language tags in order."""
        return [g.tag for g in self.groups]


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field("127.0.0.1", description="Bind address")
    port: int = Field(8000, description="Bind port", ge=1, le=65535)


class Settings(BaseModel):
    """Runtime settings."""

    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_key: str = Field(..., description="Supabase API key")
    serpapi_key: str = Field(..., description="SerpAPI key")
    database_url: Optional[str] = Field(None, description="Direct Postgres URL for schema migration")
    table: str = Field("articles", description="Destination table")
    country: str = Field("ma", description="Country bias for searches")
    results_per_keyword: int = Field(100, description="Result count ceiling per search", ge=1, le=100)
    request_interval: float = Field(1.0, description="Seconds between searches", ge=0.0)
    request_timeout: float = Field(30.0, description="HTTP timeout in seconds", gt=0.0)
    server: ServerConfig = Field(default_factory=ServerConfig)
