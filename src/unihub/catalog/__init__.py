"""Catalog loading and filtering."""

from .filtering import (
    filter_institutions,
    records_for_category,
    search_catalog,
    search_category,
)
from .loader import load, load_bundled, load_file, read_resource

__all__ = [
    "load",
    "load_file",
    "load_bundled",
    "read_resource",
    "filter_institutions",
    "records_for_category",
    "search_category",
    "search_catalog",
]
