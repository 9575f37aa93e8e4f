"""Data store access for Veille."""

from .articles import ArticleStore, PersistedRow
from .connection import create_supabase_client
from .dates import parse_published
from .init import SCHEMA_SQL, ensure_schema, init_database, validate_connection

__all__ = [
    "ArticleStore",
    "PersistedRow",
    "SCHEMA_SQL",
    "create_supabase_client",
    "ensure_schema",
    "init_database",
    "parse_published",
    "validate_connection",
]
