"""Shared test fixtures for deltabake."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from deltabake.config import BakeConfig
from deltabake.core.cache_store import CacheStore
from deltabake.core.orchestrator import BakeOrchestrator
from deltabake.core.resolver import ArtifactResolver
from deltabake.models.artifacts import OverlayRef


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Write ``{relative_path: content}`` under *root*, creating parents."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


@pytest.fixture
def config(tmp_path: Path) -> BakeConfig:
    """Provide a BakeConfig rooted in a temp directory."""
    return BakeConfig(
        data_root=tmp_path / "data",
        assets_root=tmp_path / "assets",
    )


@pytest.fixture
def store(config: BakeConfig) -> CacheStore:
    """Provide an opened CacheStore under the temp data root."""
    return CacheStore.open(config.cache_root)


@pytest.fixture
def resolver(config: BakeConfig) -> ArtifactResolver:
    return ArtifactResolver.from_config(config)


@pytest.fixture
def orchestrator(store: CacheStore, config: BakeConfig) -> BakeOrchestrator:
    """Provide a BakeOrchestrator wired to the temp store and config."""
    return BakeOrchestrator(store, config=config)


@pytest.fixture
def make_base(config: BakeConfig) -> Callable[..., Path]:
    """Factory fixture: create an expanded ``.sdd`` base game.

    By default it lands in ``{data_root}/games`` with a ``modinfo.lua``.
    """

    def _factory(
        name: str = "demo.sdd",
        files: dict[str, str] | None = None,
        *,
        root: Path | None = None,
        with_manifest: bool = True,
    ) -> Path:
        base = (root or config.data_root / "games") / name
        base.mkdir(parents=True, exist_ok=True)
        if with_manifest:
            (base / "modinfo.lua").write_text("return { name='demo' }\n", encoding="utf-8")
        write_tree(base, files if files is not None else {"data.txt": "base"})
        return base

    return _factory


@pytest.fixture
def make_overlay(tmp_path: Path) -> Callable[..., OverlayRef]:
    """Factory fixture: create an overlay tree and its OverlayRef."""

    def _factory(
        name: str = "patch",
        version: str = "v1",
        files: dict[str, str] | None = None,
    ) -> OverlayRef:
        path = tmp_path / "overlays" / f"{name}-{version}"
        path.mkdir(parents=True, exist_ok=True)
        write_tree(path, files if files is not None else {"data.txt": "patched"})
        return OverlayRef(name=name, version=version, path=path)

    return _factory


@pytest.fixture
def write_files() -> Callable[[Path, dict[str, str]], None]:
    """Expose write_tree to test modules."""
    return write_tree
