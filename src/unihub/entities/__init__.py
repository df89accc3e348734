"""Domain entities for the institution catalog."""

from .core import Catalog, Institution

__all__ = [
    "Institution",
    "Catalog",
]
