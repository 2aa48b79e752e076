"""``deltabake bake BASE_TYPE`` — bake a base game with ordered overlays.

Overlays are applied in the order the ``--overlay`` flags are given; the
last one wins on shared files. Prints the baked game name, its path and
the combination hash.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from deltabake.cli.commands._common import load_config, parse_overlay
from deltabake.core.errors import BakeError
from deltabake.core.orchestrator import BakeOrchestrator

console = Console()


def bake_cmd(
    base_type: str = typer.Argument(..., help="Base game type to bake on top of."),
    overlay: list[str] = typer.Option(
        [],
        "--overlay",
        "-o",
        help="Overlay as NAME:VERSION:PATH. Repeat; order is precedence.",
    ),
    engine_version: str = typer.Option(
        ..., "--engine", "-e", help="Engine version the game is baked for."
    ),
    data_root: str = typer.Option(None, "--data-root", help="Writable data root."),
    assets_root: str = typer.Option(None, "--assets-root", help="Bundled assets root."),
) -> None:
    """Bake BASE_TYPE plus overlays into a cached game directory."""
    overlays = [parse_overlay(o) for o in overlay]
    config = load_config(data_root, assets_root)
    try:
        orchestrator = BakeOrchestrator.from_config(config)
        result = orchestrator.bake(base_type, overlays, engine_version)
    except BakeError as exc:
        console.print(f"[bold red]Bake failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    status = "[cyan]cache hit[/cyan]" if result.cache_hit else "[green]freshly baked[/green]"
    console.print(
        Panel(
            "\n".join([
                f"[bold]Name:[/bold]     {result.name}",
                f"[bold]Path:[/bold]     {result.archive_path}",
                f"[bold]Hash:[/bold]     {result.hash}",
                f"[bold]Overlays:[/bold] {len(overlays)}",
                f"[bold]Status:[/bold]   {status}",
            ]),
            title="[bold]Baked Game[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
    # Plain name for scripting
    console.print(result.name, soft_wrap=True, highlight=False)
