"""Artifact identity and cache-entry models (immutable)."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ArtifactRef(BaseModel):
    """Identity of a base artifact: its type tag and engine version.

    Supplied by the caller; the cache never owns it.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    engine_version: str = ""


class OverlayRef(BaseModel):
    """One overlay to apply on top of the base.

    Only ``(name, version)`` is hashed. ``path`` is where the overlay lives at
    bake time and may move without invalidating existing cache entries.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    path: Path
    display_name: str = ""

    @property
    def identity(self) -> tuple[str, str]:
        return (self.name, self.version)

    @property
    def label(self) -> str:
        """Human-facing name used in the synthesized manifest."""
        return self.display_name or self.name


class CombinationKey(BaseModel):
    """Fingerprint of one exact (base, engine version, ordered overlays) tuple.

    ``digest`` is the full SHA-256 hex; ``short`` is the 16-hex prefix used
    in on-disk names.
    """

    model_config = ConfigDict(frozen=True)

    digest: str = ""  # empty when recovered from an on-disk entry name
    short: str

    def __str__(self) -> str:
        return self.short


class BakedArtifact(BaseModel):
    """A published cache entry. Complete and immutable once visible."""

    model_config = ConfigDict(frozen=True)

    name: str  # "baked-<short>"
    path: Path
    key: CombinationKey
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    packaged: bool = False  # True for a .sdz/.sd7 sibling instead of a .sdd dir


class BakeResult(BaseModel):
    """What ``bake`` hands back, for cache hits and fresh builds alike."""

    model_config = ConfigDict(frozen=True)

    name: str
    archive_path: Path
    hash: str
    cache_hit: bool = False
