"""Bake lifecycle states and the transition table."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BakeState(str, Enum):
    """Lifecycle of a single bake request."""

    IDLE = "idle"
    KEY_COMPUTED = "key_computed"
    CACHE_CHECKED = "cache_checked"
    RESOLVING = "resolving"
    BASE_EXTRACTED = "base_extracted"
    APPLYING_OVERLAYS = "applying_overlays"
    MANIFEST_WRITTEN = "manifest_written"
    PUBLISHED = "published"
    DONE = "done"
    FAILED = "failed"


_BUILD_STATES = {
    BakeState.RESOLVING,
    BakeState.BASE_EXTRACTED,
    BakeState.APPLYING_OVERLAYS,
    BakeState.MANIFEST_WRITTEN,
    BakeState.PUBLISHED,
}

# Enforced by BakeMachine. DONE and FAILED are terminal.
# APPLYING_OVERLAYS loops onto itself once per overlay.
VALID_TRANSITIONS: dict[BakeState, set[BakeState]] = {
    BakeState.IDLE: {BakeState.KEY_COMPUTED},
    BakeState.KEY_COMPUTED: {BakeState.CACHE_CHECKED},
    BakeState.CACHE_CHECKED: {BakeState.DONE, BakeState.RESOLVING},
    BakeState.RESOLVING: {BakeState.BASE_EXTRACTED, BakeState.FAILED},
    BakeState.BASE_EXTRACTED: {
        BakeState.APPLYING_OVERLAYS,
        BakeState.MANIFEST_WRITTEN,
        BakeState.FAILED,
    },
    BakeState.APPLYING_OVERLAYS: {
        BakeState.APPLYING_OVERLAYS,
        BakeState.MANIFEST_WRITTEN,
        BakeState.FAILED,
    },
    BakeState.MANIFEST_WRITTEN: {BakeState.PUBLISHED, BakeState.FAILED},
    BakeState.PUBLISHED: {BakeState.DONE, BakeState.FAILED},
    BakeState.DONE: set(),
    BakeState.FAILED: set(),
}


def is_build_state(state: BakeState) -> bool:
    """Whether the bake has started touching the filesystem."""
    return state in _BUILD_STATES


class BakeTransition(BaseModel):
    """Records a single state transition of a bake."""

    model_config = ConfigDict(frozen=True)

    from_state: BakeState
    to_state: BakeState
    detail: str = ""
