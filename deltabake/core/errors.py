"""Error taxonomy for baking.

Cleanup failures have no exception class: they are logged and never raised,
so they cannot mask the error that triggered the cleanup.
"""

from __future__ import annotations

from pathlib import Path


class BakeError(RuntimeError):
    """Base class for every fatal bake failure."""


class BaseArtifactNotFoundError(BakeError):
    """Raised when no search root yields a valid base artifact."""

    def __init__(self, base_type: str, searched: list[Path] | None = None) -> None:
        self.base_type = base_type
        self.searched = list(searched or [])
        where = ", ".join(str(p) for p in self.searched) or "no search roots"
        super().__init__(f"Base game not found for: {base_type} (searched {where})")


class UnsupportedArtifactError(BakeError):
    """Raised for inputs that need archive extraction, which is not implemented."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Archive extraction not yet implemented for: {path}")


class BakeIOError(BakeError):
    """Raised when a read, write, copy or rename fails during a build."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)
