"""Presentation-layer helpers shared by interactive shells."""

from . import categories
from .links import LinkOpener
from .state import AppState, LoadStatus

__all__ = ["AppState", "LoadStatus", "LinkOpener", "categories"]
