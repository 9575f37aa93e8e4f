"""Schema management."""

import logging

import psycopg
from postgrest.exceptions import APIError
from supabase import Client

from ..errors import SchemaError

log = logging.getLogger(__name__)

CREATE_TABLE_RPC = "create_articles_table"

# Postgres undefined_table, PostgREST schema cache misses.
MISSING_TABLE_CODES = {"42P01", "PGRST205", "PGRST204"}


def schema_sql(table: str = "articles") -> str:
    """SQL creating the articles table and its indexes."""
    return f"""
CREATE TABLE IF NOT EXISTS {table} (
    id SERIAL PRIMARY KEY,
    url TEXT NOT NULL UNIQUE,
    title TEXT NOT NULL,
    description TEXT,
    image_url TEXT,
    published_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS {table}_url_idx ON {table}(url);
CREATE INDEX IF NOT EXISTS {table}_created_at_idx ON {table}(created_at DESC);
"""


SCHEMA_SQL = schema_sql()


def is_missing_table(error: APIError) -> bool:
    """Whether a PostgREST error means the table does not exist."""
    if error.code in MISSING_TABLE_CODES:
        return True
    message = (error.message or "").lower()
    return "does not exist" in message or "could not find the table" in message


def ensure_schema(client: Client, table: str = "articles") -> bool:
    """
    Create the articles table if it is absent.

    Returns True when the table had to be created.
    """
    try:
        client.table(table).select("id").limit(1).execute()
        return False
    except APIError as e:
        if not is_missing_table(e):
            raise SchemaError(f"Failed to probe table {table}: {e.message}") from e

    log.warning("Table %s not found, creating it", table)
    try:
        client.rpc(CREATE_TABLE_RPC, {"sql_query": schema_sql(table)}).execute()
    except APIError as e:
        log.error("Error creating table %s: %s", table, e.message)
        raise SchemaError(f"Failed to create table {table}: {e.message}") from e
    return True


def validate_connection(client: Client, table: str = "articles") -> bool:
    """Check that the data store answers."""
    try:
        client.table(table).select("id").limit(1).execute()
        return True
    except APIError as e:
        if is_missing_table(e):
            return True
        log.error("Data store connection failed: %s", e.message)
        return False
    except Exception as e:
        log.error("Data store connection failed: %s", e)
        return False


def init_database(database_url: str, table: str = "articles") -> None:
    """Apply the schema directly over a Postgres connection."""
    try:
        with psycopg.connect(database_url) as conn:
            with conn.cursor() as cur:
                cur.execute(schema_sql(table))
            conn.commit()
    except psycopg.Error as e:
        raise SchemaError(f"Failed to initialize database schema: {e}") from e
    log.info("Database schema initialized")
