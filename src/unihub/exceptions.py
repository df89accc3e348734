"""Exception hierarchy shared by the catalog and presentation layers."""

from __future__ import annotations

from enum import Enum


class UnihubError(Exception):
    """Base class for errors raised by the unihub package."""


class ResourceUnavailable(UnihubError):
    """Raised when the catalog resource cannot be read."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Catalog resource unavailable: {path} ({detail})")


class LoadFailure(str, Enum):
    """Structural conditions that invalidate a catalog load."""

    MALFORMED = "malformed"
    NOT_A_MAPPING = "not_a_mapping"
    NOT_A_SEQUENCE = "not_a_sequence"
    INVALID_RECORD = "invalid_record"


class LoadError(UnihubError):
    """Raised when catalog text fails parsing or structural validation.

    ``category`` and ``index`` locate the offending element when the failure
    concerns a single category or record.
    """

    def __init__(
        self,
        reason: LoadFailure,
        message: str,
        *,
        category: str | None = None,
        index: int | None = None,
    ) -> None:
        self.reason = reason
        self.message = message
        self.category = category
        self.index = index
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = ""
        if self.category is not None:
            location = f" in '{self.category}'"
            if self.index is not None:
                location += f" at index {self.index}"
        return f"{self.reason.value}{location}: {self.message}"


class LinkOpenError(UnihubError):
    """Raised when a website cannot be handed to the external launcher."""


__all__ = [
    "UnihubError",
    "ResourceUnavailable",
    "LoadFailure",
    "LoadError",
    "LinkOpenError",
]
