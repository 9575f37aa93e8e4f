"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .catalog import DEFAULT_CATALOG
from .models import KeywordCatalog, Settings

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "veille"

# Settings field -> environment variables, first match wins.
ENV_VARS: Dict[str, Tuple[str, ...]] = {
    "supabase_url": ("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
    "supabase_key": ("SUPABASE_KEY", "NEXT_PUBLIC_SUPABASE_KEY"),
    "serpapi_key": ("SERPAPI_KEY", "NEXT_PUBLIC_SERPAPI_KEY"),
    "database_url": ("VEILLE_DATABASE_URL",),
}
REQUIRED = ("supabase_url", "supabase_key", "serpapi_key")


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_DIR / "config.yaml"
        self.config_path = config_path
        self._settings: Optional[Settings] = None
        self._catalog: Optional[KeywordCatalog] = None

    @property
    def keywords_path(self) -> Path:
        """Path of the keyword catalog override."""
        return self.config_path.parent / "keywords.yaml"

    @property
    def settings(self) -> Settings:
        """Get loaded settings."""
        if self._settings is None:
            self._settings = load_settings(self.config_path)
        return self._settings

    @property
    def catalog(self) -> KeywordCatalog:
        """Get the keyword catalog, falling back to the built-in one."""
        if self._catalog is None:
            if self.keywords_path.exists():
                self._catalog = load_catalog(self.keywords_path)
            else:
                self._catalog = DEFAULT_CATALOG
        return self._catalog


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}")
    return data


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Load settings from an optional YAML file and the environment.

    Environment variables take precedence over the file. Missing required
    values raise ConfigError naming every missing variable.
    """
    if environ is None:
        environ = os.environ

    data: Dict[str, Any] = {}
    if config_path is not None and config_path.exists():
        data = _read_yaml(config_path)

    for field, names in ENV_VARS.items():
        for name in names:
            value = environ.get(name)
            if value:
                data[field] = value
                break

    missing = [ENV_VARS[field][0] for field in REQUIRED if not data.get(field)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")


def save_config(settings: Dict[str, Any], config_path: Path) -> None:
    """Save non-secret configuration to YAML."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(settings, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def load_catalog(path: Path) -> KeywordCatalog:
    """Load a keyword catalog from YAML."""
    if not path.exists():
        raise FileNotFoundError(f"Keywords file not found: {path}")

    data = _read_yaml(path)
    try:
        return KeywordCatalog(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid keyword catalog: {e}")


def save_catalog(catalog: KeywordCatalog, path: Path) -> None:
    """Save a keyword catalog to YAML."""
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "groups": [
            {"tag": g.tag, "keywords": list(g.keywords)}
            for g in catalog.groups
        ]
    }
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
