"""Main Typer application — imports and registers all CLI commands.

Entry point: ``deltabake`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from deltabake.cli.commands.bake import bake_cmd
from deltabake.cli.commands.fingerprint_cmd import fingerprint_cmd
from deltabake.cli.commands.list_cmd import list_cmd
from deltabake.cli.commands.resolve import resolve_cmd
from deltabake.cli.commands.sweep import sweep_cmd
from deltabake.config import BakeConfig

app = typer.Typer(
    name="deltabake",
    help="deltabake: bake base games and mod overlays into cached composites.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (default from DELTABAKE_LOG_LEVEL)."
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    level = (log_level or BakeConfig().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
app.command(name="bake", help="Bake a base game with ordered overlays.")(bake_cmd)
app.command(name="sweep", help="Evict old baked games.")(sweep_cmd)
app.command(name="fingerprint", help="Print the combination key.")(fingerprint_cmd)
app.command(name="list", help="List published baked games.")(list_cmd)
app.command(name="resolve", help="Show base-game candidates.")(resolve_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
