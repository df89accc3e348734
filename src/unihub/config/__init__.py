"""Configuration utilities for the institution catalog."""

from .settings import (
    BUNDLED_CATALOG_FILE,
    CatalogConfig,
    LoggingConfig,
    PathsConfig,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "CatalogConfig",
    "LoggingConfig",
    "PathsConfig",
    "BUNDLED_CATALOG_FILE",
]
