"""Print the combination key for a bake request without touching files."""

from __future__ import annotations

import typer
from rich.console import Console

from deltabake.cli.commands._common import parse_overlay
from deltabake.core.hasher import fingerprint

console = Console()


def fingerprint_cmd(
    base_type: str = typer.Argument(..., help="Base game type."),
    overlay: list[str] = typer.Option(
        [], "--overlay", "-o", help="Overlay as NAME:VERSION:PATH, in order."
    ),
    engine_version: str = typer.Option(..., "--engine", "-e", help="Engine version."),
    full: bool = typer.Option(False, "--full", help="Print the full 64-hex digest."),
) -> None:
    """Compute the cache key for a combination. Touches no files."""
    key = fingerprint(base_type, engine_version, [parse_overlay(o) for o in overlay])
    console.print(key.digest if full else key.short)
