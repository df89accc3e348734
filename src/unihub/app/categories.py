"""Fixed mapping between catalog category keys and tab labels."""

from __future__ import annotations

from typing import Dict, List, Tuple

CATEGORY_TABS: Tuple[Tuple[str, str], ...] = (
    ("public_universities", "Public Uni"),
    ("private_higher_education_institutions", "Private HE"),
    ("public_tvet_colleges", "Public TVET"),
    ("private_colleges", "Private Coll"),
)

_LABEL_BY_KEY: Dict[str, str] = dict(CATEGORY_TABS)
_KEY_BY_LABEL: Dict[str, str] = {label: key for key, label in CATEGORY_TABS}


def tabs() -> List[Tuple[str, str]]:
    """Return ``(key, label)`` pairs in display order."""

    return list(CATEGORY_TABS)


def label_for(key: str) -> str:
    return _LABEL_BY_KEY.get(key, key)


def key_for(label: str) -> str | None:
    return _KEY_BY_LABEL.get(label)


def resolve(token: str) -> str:
    """Map a key or label (case-insensitive) to its category key.

    Unrecognised tokens are returned unchanged so lookups fall through to the
    catalog's empty-category behaviour.
    """

    folded = token.strip().lower()
    for key, label in CATEGORY_TABS:
        if folded in (key, label.lower()):
            return key
    return token


__all__ = ["CATEGORY_TABS", "tabs", "label_for", "key_for", "resolve"]
