"""Catalog inspection commands: categories, list, search, open and validate."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from unihub.app import categories
from unihub.app.links import LinkOpener
from unihub.app.state import EMPTY_RESULT_MESSAGE
from unihub.catalog import load_file, search_catalog
from unihub.exceptions import LinkOpenError, LoadError, ResourceUnavailable

from .common import CLIError, console, get_state, render_institutions, resolve_path, tab_title


app = typer.Typer(
    add_completion=False,
    help="List, search and open institutions from the bundled catalog.",
    no_args_is_help=True,
)

_link_opener = LinkOpener()


def _categories_command(ctx: typer.Context) -> None:
    state = get_state(ctx)
    catalog = state.catalog()
    table = Table(title="Categories", box=None)
    table.add_column("Tab")
    table.add_column("Key", style="cyan")
    table.add_column("Records", justify="right")
    for key, label in categories.tabs():
        table.add_row(label, key, str(len(catalog.records(key))))
    tab_keys = {key for key, _ in categories.tabs()}
    for key in catalog.categories():
        if key not in tab_keys:
            table.add_row("-", key, str(len(catalog.records(key))))
    console.print(table)


def _list_command(
    ctx: typer.Context,
    category: Optional[str] = typer.Argument(
        None,
        help="Category key or tab label; defaults to catalog.default_category.",
        show_default=False,
    ),
    query: str = typer.Option("", "--query", "-q", help="Case-insensitive substring filter."),
) -> None:
    state = get_state(ctx)
    view = state.initial_view().load_succeeded(state.catalog())
    if category is not None:
        view = view.category_selected(categories.resolve(category))
    view = view.query_changed(query)

    records = view.visible_records()
    if not records:
        console.print(f"[yellow]{EMPTY_RESULT_MESSAGE}[/yellow]")
        return
    render_institutions(tab_title(view.category, len(records)), records)


def _search_command(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Case-insensitive substring matched against name, type and website."),
) -> None:
    state = get_state(ctx)
    catalog = state.catalog()
    results = search_catalog(catalog, query)
    tab_keys = [key for key, _ in categories.tabs()]
    keys = tab_keys + [key for key in catalog.categories() if key not in tab_keys]
    for key in keys:
        records = results.get(key, ())
        if not records:
            console.print(f"[dim]{tab_title(key, 0)}: {EMPTY_RESULT_MESSAGE}[/dim]")
            continue
        render_institutions(tab_title(key, len(records)), records)


def _open_command(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Category key or tab label."),
    name: str = typer.Argument(..., help="Institution name (case-insensitive exact match)."),
) -> None:
    state = get_state(ctx)
    key = categories.resolve(category)
    folded = name.lower()
    match = next(
        (record for record in state.catalog().records(key) if record.name.lower() == folded),
        None,
    )
    if match is None:
        raise CLIError(f"No institution named '{name}' in {categories.label_for(key)}")
    try:
        url = _link_opener.open(match.website)
    except LinkOpenError as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"[green]Opened {url}[/green]")


def _validate_command(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(
        None,
        help="Catalog JSON to validate; defaults to the configured resource.",
        show_default=False,
    ),
) -> None:
    state = get_state(ctx)
    target = resolve_path(path) if path is not None else state.settings.resource_path
    try:
        catalog = load_file(target, encoding=state.settings.catalog.encoding)
    except (ResourceUnavailable, LoadError) as exc:
        raise CLIError(f"Failed to load institutions: {exc}") from exc

    table = Table(title=f"Catalog {target.name}", box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Records", justify="right")
    for key in catalog.categories():
        table.add_row(key, str(len(catalog.records(key))))
    console.print(table)
    console.print(f"[green]Valid catalog: {len(catalog)} categories, {catalog.total()} institutions.[/green]")


app.command("categories")(_categories_command)
app.command("list")(_list_command)
app.command("search")(_search_command)
app.command("open")(_open_command)
app.command("validate")(_validate_command)
