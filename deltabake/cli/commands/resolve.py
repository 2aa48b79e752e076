"""``deltabake resolve BASE_TYPE`` — show which base game a bake would use."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from deltabake.cli.commands._common import load_config
from deltabake.core.resolver import ArtifactResolver

console = Console()


def resolve_cmd(
    base_type: str = typer.Argument(..., help="Base game type to look up."),
    engine_version: str = typer.Option(..., "--engine", "-e", help="Engine version."),
    data_root: str = typer.Option(None, "--data-root", help="Writable data root."),
    assets_root: str = typer.Option(None, "--assets-root", help="Bundled assets root."),
) -> None:
    """List valid base-game candidates in precedence order."""
    config = load_config(data_root, assets_root)
    resolver = ArtifactResolver.from_config(config)
    found = list(resolver.candidates(base_type, engine_version))

    if not found:
        console.print(f"[bold red]Base game not found for:[/bold red] {base_type}")
        for root in resolver.search_roots(engine_version):
            console.print(f"  [dim]searched {root}[/dim]")
        raise typer.Exit(code=1)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Candidate")
    for i, path in enumerate(found, start=1):
        marker = " [green](selected)[/green]" if i == 1 else ""
        table.add_row(str(i), f"{escape(str(path))}{marker}")
    console.print(table)
    # Plain path of the winner for scripting
    console.print(str(found[0]), soft_wrap=True, markup=False, highlight=False)
