"""``deltabake list``: show every published baked game."""

from __future__ import annotations

from datetime import datetime, timezone

import typer
from rich.console import Console
from rich.table import Table

from deltabake.cli.commands._common import load_config
from deltabake.core.cache_store import CacheStore

console = Console()


def list_cmd(
    data_root: str = typer.Option(None, "--data-root", help="Writable data root."),
) -> None:
    """List completed cache entries with their age."""
    config = load_config(data_root, None)
    store = CacheStore(config.cache_root)
    entries = store.entries()

    if not entries:
        console.print("[dim]No baked games.[/dim]")
        return

    now = datetime.now(timezone.utc)
    table = Table(title=f"Baked games in {store.root}")
    table.add_column("Name", style="cyan")
    table.add_column("Form")
    table.add_column("Modified")
    table.add_column("Age (days)", justify="right")

    for entry in entries:
        age = (now - entry.created_at).total_seconds() / 86400
        form = "packaged" if entry.packaged else "directory"
        table.add_row(
            entry.name,
            form,
            entry.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            f"{age:.1f}",
        )

    console.print(table)
