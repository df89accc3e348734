"""Core domain entities for the institution catalog."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Institution(BaseModel):
    """One educational institution as listed in the bundled catalog."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: StrictStr = Field(..., min_length=1, description="Display name of the institution")
    type: StrictStr = Field(
        ...,
        min_length=1,
        description="Free-form label such as 'Public University' or 'Public TVET College'.",
    )
    website: StrictStr | None = Field(
        default=None,
        description="Website address exactly as stored; absent when no link is available.",
    )

    def matches(self, folded_query: str) -> bool:
        """Return ``True`` when ``folded_query`` occurs in name, type or website.

        The query must already be lowercased; each field is lowercased here.
        """

        if folded_query in self.name.lower() or folded_query in self.type.lower():
            return True
        return self.website is not None and folded_query in self.website.lower()


class Catalog(Mapping):
    """Read-only mapping of category key to an ordered tuple of institutions.

    Key order and per-category order follow the source data.
    """

    __slots__ = ("_categories",)

    def __init__(self, categories: Mapping[str, Iterable[Institution]] | None = None) -> None:
        frozen: Dict[str, Tuple[Institution, ...]] = {}
        for key, records in (categories or {}).items():
            frozen[key] = tuple(records)
        self._categories = MappingProxyType(frozen)

    def __getitem__(self, key: str) -> Tuple[Institution, ...]:
        return self._categories[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        counts = ", ".join(f"{key}={len(records)}" for key, records in self._categories.items())
        return f"Catalog({counts})"

    def categories(self) -> Sequence[str]:
        return tuple(self._categories)

    def records(self, key: str) -> Tuple[Institution, ...]:
        """Return the records for ``key`` or an empty tuple when it is absent."""

        return self._categories.get(key, ())

    def total(self) -> int:
        return sum(len(records) for records in self._categories.values())


__all__ = ["Institution", "Catalog"]
