"""Substring filtering over catalog categories."""

from __future__ import annotations

from typing import Dict, Mapping, Sequence

from ..entities.core import Institution


def filter_institutions(records: Sequence[Institution], query: str) -> Sequence[Institution]:
    """Return the records whose name, type or website contains ``query``.

    Matching is case-insensitive substring containment with no trimming, so a
    whitespace-only query is matched literally. An empty query returns
    ``records`` itself.
    """

    if not query:
        return records
    folded = query.lower()
    return tuple(record for record in records if record.matches(folded))


def records_for_category(catalog: Mapping[str, Sequence[Institution]], key: str) -> Sequence[Institution]:
    """Look up a category, treating a missing key as an empty list."""

    return catalog.get(key, ())


def search_category(
    catalog: Mapping[str, Sequence[Institution]], key: str, query: str
) -> Sequence[Institution]:
    return filter_institutions(records_for_category(catalog, key), query)


def search_catalog(
    catalog: Mapping[str, Sequence[Institution]], query: str
) -> Dict[str, Sequence[Institution]]:
    """Filter every category, keeping the catalog's key order."""

    return {key: filter_institutions(records, query) for key, records in catalog.items()}


__all__ = [
    "filter_institutions",
    "records_for_category",
    "search_category",
    "search_catalog",
]
