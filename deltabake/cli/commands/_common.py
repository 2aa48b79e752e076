"""Shared helpers for CLI commands: config overrides and overlay parsing."""

from __future__ import annotations

from pathlib import Path

import typer

from deltabake.config import BakeConfig
from deltabake.models.artifacts import OverlayRef


def load_config(data_root: str | None, assets_root: str | None) -> BakeConfig:
    """Build a BakeConfig, letting CLI flags override env/.env values."""
    overrides: dict[str, Path] = {}
    if data_root:
        overrides["data_root"] = Path(data_root)
    if assets_root:
        overrides["assets_root"] = Path(assets_root)
    return BakeConfig(**overrides)


def parse_overlay(raw: str) -> OverlayRef:
    """Parse ``name:version:path`` (the path may itself contain colons)."""
    parts = raw.split(":", 2)
    if len(parts) != 3 or not all(parts):
        raise typer.BadParameter(
            f"Overlay must be NAME:VERSION:PATH, got {raw!r}", param_hint="--overlay"
        )
    name, version, path = parts
    return OverlayRef(name=name, version=version, path=Path(path))
