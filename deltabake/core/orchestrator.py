"""Bake orchestrator — the single entry point for producing baked games.

Wires the hasher, ArtifactResolver, compositor and CacheStore together:

    fingerprint -> lookup -> [hit: return]
                          -> resolve base -> copy base -> overlays in order
                          -> write modinfo.lua -> atomic publish -> return

Any failure after the cache check removes the staging directory and
re-raises the original exception unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import timedelta
from pathlib import Path
from typing import Any

from deltabake.config import BakeConfig
from deltabake.core.bake_machine import BakeMachine
from deltabake.core.cache_store import CacheStore
from deltabake.core.compositor import apply_overlay, copy_tree
from deltabake.core.errors import BakeIOError, UnsupportedArtifactError
from deltabake.core.hasher import fingerprint
from deltabake.core.resolver import ArtifactResolver, is_packaged
from deltabake.models.artifacts import (
    ArtifactRef,
    BakedArtifact,
    BakeResult,
    CombinationKey,
    OverlayRef,
)
from deltabake.models.manifest import MANIFEST_FILENAME, Manifest
from deltabake.models.states import BakeState

logger = logging.getLogger(__name__)

OverlayLike = OverlayRef | Mapping[str, Any]


def _coerce_overlays(overlays: Sequence[OverlayLike]) -> list[OverlayRef]:
    return [o if isinstance(o, OverlayRef) else OverlayRef.model_validate(o) for o in overlays]


def build_manifest(
    base_type: str,
    overlays: Sequence[OverlayRef],
    *,
    game: str = "Beyond All Reason",
    short_game: str = "BAR",
) -> Manifest:
    """Synthesize the manifest for a baked combination.

    Depends only on the base type and the overlay list, never on the engine
    version, so the short identity is stable across engine upgrades.
    """
    labels = " + ".join(o.label for o in overlays)
    shortname = f"baked-{fingerprint(base_type, '', overlays).short[:8]}"
    return Manifest(
        name=f"{base_type} + {labels}" if labels else base_type,
        description=f"Baked game combining {base_type} with {len(overlays)} mod(s)",
        shortname=shortname,
        game=game,
        short_game=short_game,
    )


class BakeOrchestrator:
    """Bakes base games plus ordered overlays into cached composites.

    Parameters
    ----------
    store:
        An opened CacheStore. Passed explicitly; there is no global cache.
    resolver:
        Base-artifact resolver. Built from *config* if not provided.
    config:
        Runtime configuration. Uses defaults if not provided.
    """

    def __init__(
        self,
        store: CacheStore,
        resolver: ArtifactResolver | None = None,
        *,
        config: BakeConfig | None = None,
    ) -> None:
        self.config = config or BakeConfig()
        self.store = store
        self.resolver = resolver or ArtifactResolver.from_config(self.config)
        self.last_machine: BakeMachine | None = None

    @classmethod
    def from_config(cls, config: BakeConfig | None = None) -> BakeOrchestrator:
        """Open the configured cache directory and build an orchestrator."""
        config = config or BakeConfig()
        return cls(CacheStore.open(config.cache_root), config=config)

    # ------------------------------------------------------------------
    # Bake
    # ------------------------------------------------------------------

    def bake(
        self,
        base_type: str,
        overlays: Sequence[OverlayLike],
        engine_version: str,
    ) -> BakeResult:
        """Produce (or reuse) the baked game for this combination.

        Overlays are applied strictly in the order given; later overlays win
        on any file they share with earlier ones or the base.

        Raises
        ------
        BaseArtifactNotFoundError
            No valid base artifact for *base_type*.
        UnsupportedArtifactError
            The base or an overlay is a packaged archive that would need
            extraction.
        BakeIOError
            Any filesystem failure while building or publishing.
        """
        overlay_refs = _coerce_overlays(overlays)
        base = ArtifactRef(type=base_type, engine_version=engine_version)

        machine = BakeMachine()
        self.last_machine = machine

        key = fingerprint(base, engine_version, overlay_refs)
        name = self.store.entry_name(key)
        machine.label = name
        machine.transition(BakeState.KEY_COMPUTED, key.short)
        logger.info(
            "Starting delta baking for base game: %s with %d mods",
            base_type,
            len(overlay_refs),
        )

        existing = self.store.lookup(key)
        machine.transition(BakeState.CACHE_CHECKED, "hit" if existing else "miss")
        if existing is not None:
            logger.info("Found existing baked game: %s", name)
            machine.transition(BakeState.DONE)
            return self._result(existing, key, cache_hit=True)

        logger.info("Baking new game combination: %s", name)
        working = self.store.begin_build(key)
        try:
            machine.transition(BakeState.RESOLVING)
            base_path = self.resolver.resolve_base(base_type, engine_version)

            self._extract_base(base_path, working)
            machine.transition(BakeState.BASE_EXTRACTED, str(base_path))

            for overlay in overlay_refs:
                logger.info("Applying mod delta: %s %s", overlay.name, overlay.version)
                machine.transition(BakeState.APPLYING_OVERLAYS, overlay.name)
                if is_packaged(overlay.path):
                    raise UnsupportedArtifactError(overlay.path)
                apply_overlay(overlay.path, working)

            self._write_manifest(working, base_type, overlay_refs)
            machine.transition(BakeState.MANIFEST_WRITTEN)

            artifact = self.store.publish(working, key)
            machine.transition(BakeState.PUBLISHED)
        except Exception as exc:
            logger.error("Failed to bake game %s: %s", name, exc)
            self.store.cleanup_failed(working)
            if machine.is_building:
                machine.fail(type(exc).__name__)
            raise

        machine.transition(BakeState.DONE)
        logger.info("Successfully baked game: %s", name)
        return self._result(artifact, key, cache_hit=False)

    @staticmethod
    def _extract_base(base_path: Path, working: Path) -> None:
        if is_packaged(base_path):
            raise UnsupportedArtifactError(base_path)
        copy_tree(base_path, working)

    def _write_manifest(
        self, working: Path, base_type: str, overlays: Sequence[OverlayRef]
    ) -> None:
        manifest = build_manifest(
            base_type,
            overlays,
            game=self.config.game_name,
            short_game=self.config.game_short_name,
        )
        target = working / MANIFEST_FILENAME
        try:
            if target.is_symlink():
                target.unlink()
            target.write_text(manifest.render(), encoding="utf-8")
        except OSError as exc:
            raise BakeIOError(f"Failed to write {target}: {exc}", path=target) from exc
        logger.info("Created baked game %s", MANIFEST_FILENAME)

    @staticmethod
    def _result(artifact: BakedArtifact, key: CombinationKey, *, cache_hit: bool) -> BakeResult:
        return BakeResult(
            name=artifact.name,
            archive_path=artifact.path,
            hash=key.short,
            cache_hit=cache_hit,
        )

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def sweep(self, max_age: timedelta | None = None) -> list[str]:
        """Evict baked games older than *max_age* (default: config.max_age).

        Best-effort: per-entry failures are logged, never raised.
        """
        age = max_age if max_age is not None else self.config.max_age
        evicted = self.store.evict_older_than(age)
        logger.info("Sweep removed %d baked game(s)", len(evicted))
        return evicted
