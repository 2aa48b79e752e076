"""Canonical hashing for combination identity.

Keys depend on *identity* (base type, engine version, ordered overlay
name+version pairs), never on file contents or overlay paths.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from typing import Any

from deltabake.models.artifacts import ArtifactRef, CombinationKey, OverlayRef

SHORT_KEY_LENGTH = 16


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact.

    - sorted keys
    - no whitespace separators (",", ":")
    - ensure_ascii=True
    - UTF-8 encoding
    """
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def combination_payload(
    base_type: str, engine_version: str, overlays: Sequence[OverlayRef]
) -> dict[str, Any]:
    """The canonical structure that gets hashed.

    Overlays stay a list of ``[name, version]`` pairs in caller order;
    list order survives ``sort_keys``, so precedence is part of the key.
    """
    return {
        "base": base_type,
        "engine_version": engine_version,
        "overlays": [[o.name, o.version] for o in overlays],
    }


def fingerprint(
    base: ArtifactRef | str,
    engine_version: str,
    overlays: Sequence[OverlayRef],
) -> CombinationKey:
    """Compute the order-sensitive CombinationKey for a bake request.

    Pure and deterministic across processes and platforms.
    """
    base_type = base.type if isinstance(base, ArtifactRef) else base
    digest = sha256_hex(
        canonical_json_bytes(combination_payload(base_type, engine_version, overlays))
    )
    return CombinationKey(digest=digest, short=digest[:SHORT_KEY_LENGTH])
