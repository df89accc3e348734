"""Module entrypoint so the CLI runs via ``python -m unihub``."""

from __future__ import annotations

from typing import Sequence

import typer

from unihub.cli.main import app


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI; usage errors exit through Typer, ``CLIError`` through its handler."""

    try:
        app(args=list(argv) if argv is not None else None, prog_name="unihub")
    except typer.Exit as exc:
        return exc.exit_code
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
