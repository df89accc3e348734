"""Interactive search loop driven by :class:`AppState` transitions."""

from __future__ import annotations

import typer

from unihub.app import categories
from unihub.app.links import LinkOpener
from unihub.app.state import EMPTY_RESULT_MESSAGE, SEARCH_HINT, AppState, LoadStatus
from unihub.catalog import load_bundled
from unihub.exceptions import LinkOpenError, LoadError, ResourceUnavailable

from .common import console, get_state, render_institutions, tab_title

HELP_TEXT = (
    "Type to filter the current tab. Commands: /tab <label or key>, /open <number>, "
    "/clear, /help, /quit"
)

_link_opener = LinkOpener()


def _render(view: AppState) -> None:
    records = view.visible_records()
    tabs = "  ".join(
        f"[reverse]{label}[/reverse]" if key == view.category else label
        for key, label in categories.tabs()
    )
    console.rule(view.title)
    console.print(tabs)
    if view.query:
        console.print(f"[dim]query:[/dim] {view.query!r}")
    if not records:
        console.print(f"[yellow]{EMPTY_RESULT_MESSAGE}[/yellow]")
        return
    render_institutions(tab_title(view.category, len(records)), records, numbered=True)


def _open_visible(view: AppState, argument: str) -> None:
    records = view.visible_records()
    try:
        position = int(argument)
    except ValueError:
        console.print(f"[yellow]Expected a row number, got {argument!r}[/yellow]")
        return
    if not 1 <= position <= len(records):
        console.print(f"[yellow]Row {position} is not on screen[/yellow]")
        return
    try:
        url = _link_opener.open(records[position - 1].website)
    except LinkOpenError as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        return
    console.print(f"[green]Opened {url}[/green]")


def apply_command(view: AppState, line: str) -> AppState | None:
    """Apply one line of input; returns ``None`` when the session should end."""

    if not line.startswith("/"):
        return view.query_changed(line)

    command, _, argument = line[1:].partition(" ")
    command = command.lower()
    if command in {"quit", "q", "exit"}:
        return None
    if command == "tab":
        return view.category_selected(categories.resolve(argument))
    if command == "clear":
        return view.query_changed("")
    if command == "open":
        _open_visible(view, argument.strip())
        return view
    if command != "help":
        console.print(f"[yellow]Unknown command /{command}[/yellow]")
    console.print(HELP_TEXT)
    return view


def _browse_command(ctx: typer.Context) -> None:
    state = get_state(ctx)
    view = state.initial_view()
    console.rule(view.title)
    try:
        view = view.load_succeeded(load_bundled(state.settings))
    except (ResourceUnavailable, LoadError) as exc:
        view = view.load_failed(exc)

    if view.status is LoadStatus.FAILED:
        console.rule(view.title)
        console.print(f"[bold red]{view.error}[/bold red]")
        raise typer.Exit(code=2)

    console.print(f"[dim]{HELP_TEXT}[/dim]")
    _render(view)
    while True:
        try:
            line = console.input(f"[bold]{SEARCH_HINT}[/bold] ")
        except EOFError:
            break
        updated = apply_command(view, line)
        if updated is None:
            break
        if updated is not view:
            view = updated
            _render(view)
