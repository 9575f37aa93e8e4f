"""Configuration management for Veille."""

from .catalog import DEFAULT_CATALOG
from .loader import (
    Config,
    load_catalog,
    load_settings,
    save_catalog,
    save_config,
)
from .models import KeywordCatalog, LanguageGroup, ServerConfig, Settings, locale_for

__all__ = [
    "Config",
    "DEFAULT_CATALOG",
    "KeywordCatalog",
    "LanguageGroup",
    "ServerConfig",
    "Settings",
    "load_catalog",
    "load_settings",
    "locale_for",
    "save_catalog",
    "save_config",
]
