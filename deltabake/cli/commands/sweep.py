"""``deltabake sweep`` — evict baked games older than a maximum age."""

from __future__ import annotations

from datetime import timedelta

import typer
from rich.console import Console

from deltabake.cli.commands._common import load_config
from deltabake.core.errors import BakeError
from deltabake.core.orchestrator import BakeOrchestrator

console = Console()


def sweep_cmd(
    max_age_days: float = typer.Option(
        None,
        "--max-age-days",
        help="Evict entries older than this many days (default from config, 7).",
    ),
    data_root: str = typer.Option(None, "--data-root", help="Writable data root."),
) -> None:
    """Remove baked games whose modification time exceeds the maximum age."""
    config = load_config(data_root, None)
    max_age = timedelta(days=max_age_days) if max_age_days is not None else None
    try:
        orchestrator = BakeOrchestrator.from_config(config)
    except BakeError as exc:
        console.print(f"[bold red]Sweep failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    evicted = orchestrator.sweep(max_age)
    if not evicted:
        console.print("[dim]Nothing to evict.[/dim]")
        return
    for name in evicted:
        console.print(f"[yellow]evicted[/yellow] {name}")
    console.print(f"[bold]{len(evicted)}[/bold] baked game(s) removed.")
