"""Shared helpers used across the unihub CLI modules."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, MutableMapping, Sequence

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from unihub.app import categories
from unihub.app.state import AppState
from unihub.catalog import load_bundled
from unihub.config.settings import Settings
from unihub.entities import Catalog, Institution
from unihub.exceptions import LoadError, ResourceUnavailable
from unihub.utils.logging import get_logger

console = Console()
_LOGGER = get_logger(module=__name__)


class CLIError(RuntimeError):
    """Exception raised for user-facing CLI errors."""


@dataclass(slots=True)
class CLIState:
    """State object attached to ``typer.Context`` for downstream commands."""

    settings: Settings
    overrides: Dict[str, Any]
    environment: str
    verbose: bool
    _catalog: Catalog | None = field(default=None, repr=False)

    def catalog(self) -> Catalog:
        """Load the configured catalog once per invocation."""

        if self._catalog is None:
            self._catalog = load_catalog_or_fail(self.settings)
        return self._catalog

    def initial_view(self) -> AppState:
        return AppState.initial(self.settings.catalog.default_category)


def _merge_dict(dest: MutableMapping[str, Any], src: Mapping[str, Any]) -> None:
    for key, value in src.items():
        if isinstance(value, Mapping) and isinstance(dest.get(key), MutableMapping):
            _merge_dict(dest[key], value)  # type: ignore[index]
        elif isinstance(value, Mapping):
            dest[key] = dict(value)
        else:
            dest[key] = value


def parse_override(argument: str) -> Dict[str, Any]:
    """Parse dotted ``key=value`` overrides into nested dictionaries."""

    if "=" not in argument:
        raise typer.BadParameter("Overrides must be expressed as dotted.key=value")
    dotted, value = argument.split("=", 1)
    cursor: MutableMapping[str, Any] = {}
    current = cursor
    segments = [segment.strip() for segment in dotted.split(".") if segment.strip()]
    if not segments:
        raise typer.BadParameter("Override keys must not be empty")
    for segment in segments[:-1]:
        nested: Dict[str, Any] = {}
        current[segment] = nested
        current = nested
    try:
        parsed_value = json.loads(value)
    except json.JSONDecodeError:
        parsed_value = value
    current[segments[-1]] = parsed_value
    return cursor


def merge_overrides(overrides: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge override dictionaries using deep semantics."""

    result: Dict[str, Any] = {}
    for override in overrides:
        _merge_dict(result, override)
    return result


def resolve_settings(environment: str | None, overrides: Dict[str, Any]) -> Settings:
    """Construct :class:`Settings` with environment and overrides applied."""

    payload = dict(overrides)
    if environment:
        payload["environment"] = environment
    return Settings(**payload)


def configure_state(
    ctx: typer.Context,
    *,
    environment: str | None,
    overrides: Iterable[Dict[str, Any]],
    catalog_file: Path | None,
    verbose: bool,
) -> CLIState:
    """Populate ``ctx.obj`` with :class:`CLIState`."""

    merged = merge_overrides(overrides)
    if catalog_file is not None:
        _merge_dict(merged, {"catalog": {"resource_path": str(catalog_file)}})
    settings = resolve_settings(environment, merged)
    state = CLIState(
        settings=settings,
        overrides=merged,
        environment=settings.environment,
        verbose=verbose,
    )
    ctx.obj = state
    return state


def get_state(ctx: typer.Context) -> CLIState:
    """Return the previously configured :class:`CLIState`.

    Commands must call this helper to access shared state; when the callback has
    not run an informative error is raised to guide developers.
    """

    if ctx.obj is None:
        raise CLIError("CLI context is not initialised")
    if not isinstance(ctx.obj, CLIState):  # pragma: no cover - defensive guard
        raise CLIError("Unexpected CLI context payload")
    return ctx.obj


def load_catalog_or_fail(settings: Settings) -> Catalog:
    """Load the configured catalog, converting loader failures into :class:`CLIError`."""

    try:
        return load_bundled(settings)
    except (ResourceUnavailable, LoadError) as exc:
        _LOGGER.error("Catalog load failed", error=str(exc))
        raise CLIError(f"Failed to load institutions: {exc}") from exc


def render_panel(title: str, content: Mapping[str, Any]) -> None:
    """Utility for rendering JSON-like mappings using Rich panels."""

    from rich.json import JSON as RichJSON

    console.print(Panel(RichJSON.from_data(content), title=title, border_style="cyan"))


def render_institutions(title: str, records: Sequence[Institution], *, numbered: bool = False) -> None:
    """Render institutions as a Rich table."""

    table = Table(title=title, box=None)
    if numbered:
        table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Website", style="cyan")
    for position, record in enumerate(records, start=1):
        row = [record.name, record.type, record.website or "-"]
        if numbered:
            row.insert(0, str(position))
        table.add_row(*row)
    console.print(table)


def tab_title(key: str, count: int) -> str:
    return f"{categories.label_for(key)} ({count})"


def resolve_path(path: str | Path, *, must_exist: bool = True) -> Path:
    """Resolve a filesystem path, optionally requiring that it exists."""

    target = Path(path).expanduser().resolve()
    if must_exist and not target.exists():
        raise CLIError(f"Path does not exist: {target}")
    return target


__all__ = [
    "CLIError",
    "CLIState",
    "console",
    "configure_state",
    "get_state",
    "load_catalog_or_fail",
    "merge_overrides",
    "parse_override",
    "render_institutions",
    "render_panel",
    "resolve_path",
    "resolve_settings",
    "tab_title",
]
