"""Top-level package for the educational institution catalog."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("unihub")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .catalog import filter_institutions, load, load_bundled, records_for_category
from .config.settings import Settings, get_settings
from .entities import Catalog, Institution
from .exceptions import LinkOpenError, LoadError, LoadFailure, ResourceUnavailable

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "Institution",
    "Catalog",
    "load",
    "load_bundled",
    "filter_institutions",
    "records_for_category",
    "LoadError",
    "LoadFailure",
    "ResourceUnavailable",
    "LinkOpenError",
]
