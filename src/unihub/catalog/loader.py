"""Catalog loader - parses the bundled institution list into a :class:`Catalog`.

Resource format::

    {
      "public_universities": [
        {"name": "University of Cape Town", "type": "Public University",
         "website": "https://www.uct.ac.za"}
      ],
      "private_colleges": [
        {"name": "Lyceum College", "type": "Private College"}
      ]
    }

:func:`load` is pure and works on text already read from disk. The helpers
below it handle reading the resource itself.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from ..config.settings import Settings, get_settings
from ..entities.core import Catalog, Institution
from ..exceptions import LoadError, LoadFailure, ResourceUnavailable
from ..utils.logging import get_logger, log_timing

_LOGGER = get_logger(module=__name__)


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "record"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def _parse_record(category: str, index: int, item: Any) -> Institution:
    if not isinstance(item, dict):
        raise LoadError(
            LoadFailure.INVALID_RECORD,
            f"expected an object, got {type(item).__name__}",
            category=category,
            index=index,
        )
    try:
        return Institution.model_validate(item)
    except ValidationError as exc:
        raise LoadError(
            LoadFailure.INVALID_RECORD,
            _describe_validation_error(exc),
            category=category,
            index=index,
        ) from exc


def load(resource_text: str) -> Catalog:
    """Parse and validate catalog text.

    Returns a fully populated :class:`Catalog` or raises a single
    :class:`LoadError`; malformed records are never skipped.
    """

    try:
        data = json.loads(resource_text)
    except json.JSONDecodeError as exc:
        raise LoadError(LoadFailure.MALFORMED, str(exc)) from exc

    if not isinstance(data, dict):
        raise LoadError(
            LoadFailure.NOT_A_MAPPING,
            f"top-level value must be an object, got {type(data).__name__}",
        )

    categories: Dict[str, List[Institution]] = {}
    for category, items in data.items():
        if not isinstance(items, list):
            raise LoadError(
                LoadFailure.NOT_A_SEQUENCE,
                f"expected an array, got {type(items).__name__}",
                category=category,
            )
        categories[category] = [
            _parse_record(category, index, item) for index, item in enumerate(items)
        ]
        _LOGGER.debug("Parsed category", category=category, records=len(items))

    catalog = Catalog(categories)
    _LOGGER.info(
        "Loaded institution catalog",
        categories=len(catalog),
        records=catalog.total(),
    )
    return catalog


def read_resource(path: Path | str, encoding: str = "utf-8") -> str:
    """Read catalog text from ``path``, raising :class:`ResourceUnavailable` on failure."""

    resource = Path(path)
    try:
        return resource.read_text(encoding=encoding)
    except FileNotFoundError as exc:
        raise ResourceUnavailable(str(resource), "file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceUnavailable(str(resource), str(exc)) from exc


def load_file(path: Path | str, encoding: str = "utf-8") -> Catalog:
    """Read and parse a catalog file."""

    with log_timing("catalog.load_file", logger_=_LOGGER):
        return load(read_resource(path, encoding=encoding))


def load_bundled(settings: Settings | None = None) -> Catalog:
    """Load the catalog configured in ``settings`` (the bundled dataset by default)."""

    cfg = settings or get_settings()
    path = cfg.resource_path
    _LOGGER.info("Loading catalog resource", path=str(path))
    return load_file(path, encoding=cfg.catalog.encoding)


__all__ = ["load", "read_resource", "load_file", "load_bundled"]
