"""Data store client management."""

from supabase import Client, create_client

from ..config import Settings
from ..errors import ConfigError


def create_supabase_client(settings: Settings) -> Client:
    """Create a Supabase client from settings."""
    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        raise ConfigError(f"Invalid Supabase settings: {e}") from e
