"""Immutable application state for presentation shells.

Each transition returns a new :class:`AppState`; nothing is mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

from ..catalog.filtering import search_category
from ..entities.core import Catalog, Institution

APP_TITLE = "University Hub"
LOADING_TITLE = "Loading Data..."
ERROR_TITLE = "Error"
EMPTY_RESULT_MESSAGE = "No institutions found for this search in this category."
SEARCH_HINT = "Search institutions..."


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class AppState:
    """Snapshot of what the shell should display."""

    status: LoadStatus = LoadStatus.LOADING
    catalog: Catalog | None = None
    error: str | None = None
    query: str = ""
    category: str = "public_universities"

    @classmethod
    def initial(cls, category: str = "public_universities") -> "AppState":
        return cls(category=category)

    def load_succeeded(self, catalog: Catalog) -> "AppState":
        return replace(self, status=LoadStatus.READY, catalog=catalog, error=None)

    def load_failed(self, detail: object) -> "AppState":
        return replace(
            self,
            status=LoadStatus.FAILED,
            catalog=None,
            error=f"Failed to load institutions: {detail}",
        )

    def query_changed(self, text: str) -> "AppState":
        return replace(self, query=text)

    def category_selected(self, key: str) -> "AppState":
        return replace(self, category=key)

    @property
    def title(self) -> str:
        if self.status is LoadStatus.LOADING:
            return LOADING_TITLE
        if self.status is LoadStatus.FAILED:
            return ERROR_TITLE
        return APP_TITLE

    def visible_records(self) -> Sequence[Institution]:
        """Records of the selected category that match the current query."""

        if self.status is not LoadStatus.READY or self.catalog is None:
            return ()
        return search_category(self.catalog, self.category, self.query)


__all__ = [
    "APP_TITLE",
    "EMPTY_RESULT_MESSAGE",
    "ERROR_TITLE",
    "LOADING_TITLE",
    "SEARCH_HINT",
    "AppState",
    "LoadStatus",
]
