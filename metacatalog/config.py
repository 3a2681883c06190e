"""Catalog configuration loaded from environment variables (and .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///metacatalog.db"
DEFAULT_TABLE_NAME = "catalog_metadata"


def _get_env_var(*names: str, default: str = "") -> str:
    """Return the first non-empty env var among ``names``."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


@dataclass
class CatalogConfig:
    """All catalog settings, populated from env vars with sensible defaults."""

    database_url: str = field(
        default_factory=lambda: _get_env_var(
            "METACATALOG_DATABASE_URL", "DATABASE_URL", default=DEFAULT_DATABASE_URL,
        )
    )
    table_name: str = field(
        default_factory=lambda: _get_env_var("METACATALOG_TABLE", default=DEFAULT_TABLE_NAME)
    )
    echo: bool = field(
        default_factory=lambda: os.environ.get("METACATALOG_ECHO", "0") == "1"
    )
    log_level: str = field(
        default_factory=lambda: _get_env_var("METACATALOG_LOG_LEVEL", default="WARNING").upper()
    )


def load_config(env_file: str | Path | None = None, **overrides) -> CatalogConfig:
    """Load ``.env`` (without overriding the real environment) and build a config.

    Keyword overrides that are ``None`` are ignored so CLI options can be
    passed straight through.
    """
    load_dotenv(env_file)
    config = CatalogConfig()
    for name, value in overrides.items():
        if value is None:
            continue
        if not hasattr(config, name):
            raise ValueError(f"Unknown config option: {name}")
        setattr(config, name, value)
    return config
