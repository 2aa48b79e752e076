"""deltabake data models. All Pydantic v2, all frozen."""

from deltabake.models.artifacts import (
    ArtifactRef,
    BakedArtifact,
    BakeResult,
    CombinationKey,
    OverlayRef,
)
from deltabake.models.manifest import (
    BAKED_PREFIX,
    EXPANDED_EXTENSION,
    MANIFEST_FILENAME,
    PACKAGED_EXTENSIONS,
    Manifest,
)
from deltabake.models.states import VALID_TRANSITIONS, BakeState, BakeTransition

__all__ = [
    "ArtifactRef",
    "BAKED_PREFIX",
    "BakeResult",
    "BakeState",
    "BakeTransition",
    "BakedArtifact",
    "CombinationKey",
    "EXPANDED_EXTENSION",
    "MANIFEST_FILENAME",
    "Manifest",
    "OverlayRef",
    "PACKAGED_EXTENSIONS",
    "VALID_TRANSITIONS",
]
