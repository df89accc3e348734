"""Primary Typer application wiring the unihub CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, List, Optional

import typer
from rich.table import Table

from unihub.utils.logging import configure_logging

from . import browse, catalog
from .common import CLIError, configure_state, console, get_state, parse_override, render_panel


class UnihubTyper(typer.Typer):
    """Typer subclass that supports registering exception handlers."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._exception_handlers: list[tuple[type[BaseException], Callable[[BaseException], Any]]] = []

    def exception_handler(
        self, exception_type: type[BaseException]
    ) -> Callable[[Callable[[BaseException], Any]], Callable[[BaseException], Any]]:
        def decorator(handler: Callable[[BaseException], Any]) -> Callable[[BaseException], Any]:
            self._exception_handlers.append((exception_type, handler))
            return handler

        return decorator

    def _resolve_handler(self, exception: BaseException) -> Callable[[BaseException], Any] | None:
        for registered_type, handler in self._exception_handlers:
            if isinstance(exception, registered_type):
                return handler
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().__call__(*args, **kwargs)
        except BaseException as exc:
            handler = self._resolve_handler(exc)
            if handler is None:
                raise
            result = handler(exc)
            if isinstance(result, typer.Exit):
                raise result
            if isinstance(result, BaseException):
                raise result
            return result


app = UnihubTyper(
    add_completion=False,
    help="""
    Browse and search South African educational institutions from the bundled
    catalog, and open their websites.
    """.strip(),
    no_args_is_help=True,
)


@app.exception_handler(CLIError)
def handle_cli_error(exception: CLIError) -> typer.Exit:
    """Render ``CLIError`` messages without stack traces."""

    console.print(f"[bold red]Error:[/bold red] {exception}")
    return typer.Exit(code=2)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Configuration override in dotted.key=value notation (repeatable).",
    ),
    catalog_file: Optional[Path] = typer.Option(
        None,
        "--catalog-file",
        help="Catalog JSON to load instead of the bundled dataset.",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit verbose diagnostic output for CLI operations.",
    ),
) -> None:
    """Configure shared CLI state prior to executing subcommands."""

    overrides = [parse_override(item) for item in override]
    state = configure_state(
        ctx,
        environment=environment,
        overrides=overrides,
        catalog_file=catalog_file,
        verbose=verbose,
    )
    configure_logging(
        state.settings,
        level="DEBUG" if verbose else None,
        command=ctx.invoked_subcommand or "-",
    )

    if verbose:
        table = Table(title="CLI Context", show_header=False, box=None)
        table.add_row("Environment", state.environment)
        table.add_row("Catalog", str(state.settings.resource_path))
        table.add_row("Default tab", state.settings.catalog.default_category)
        table.add_row("Overrides", json.dumps(state.overrides, sort_keys=True) if state.overrides else "-")
        console.print(table)


def _config_command(ctx: typer.Context) -> None:
    state = get_state(ctx)
    render_panel("Settings", state.settings.model_dump(mode="json"))


app.command("config", help="Show the resolved configuration.")(_config_command)
app.command("browse", help="Interactively search the catalog tab by tab.")(browse._browse_command)
app.add_typer(catalog.app, name="catalog", help="Catalog listing, search and link commands")
