"""On-disk cache of baked games.

Layout::

    {root}/baked-<key>.sdd/            published, complete, immutable
    {root}/baked-<key>.sdz|.sd7        packaged sibling (counts as a hit)
    {root}/.building/baked-<key>-<id>/ private staging for in-flight builds

Builds never happen at the final path. A staging directory becomes visible
only through a single ``os.rename``, so ``lookup`` can never observe a
partial artifact and two builders of the same key cannot interleave writes.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path

from deltabake.core.errors import BakeIOError
from deltabake.models.artifacts import BakedArtifact, CombinationKey
from deltabake.models.manifest import (
    BAKED_PREFIX,
    EXPANDED_EXTENSION,
    MANIFEST_FILENAME,
    PACKAGED_EXTENSIONS,
)

logger = logging.getLogger(__name__)

STAGING_DIRNAME = ".building"


class CacheStore:
    """Maps combination keys to baked artifacts on disk.

    The constructor does no I/O; use :meth:`open` to get a ready store.

    Parameters
    ----------
    root:
        The baked-games directory.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @classmethod
    def open(cls, root: Path) -> CacheStore:
        """Create the cache and staging directories and return the store."""
        store = cls(root)
        try:
            store.staging_root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BakeIOError(f"Cannot open cache at {root}: {exc}", path=Path(root)) from exc
        return store

    @property
    def root(self) -> Path:
        return self._root

    @property
    def staging_root(self) -> Path:
        return self._root / STAGING_DIRNAME

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    @staticmethod
    def entry_name(key: CombinationKey) -> str:
        return f"{BAKED_PREFIX}{key.short}"

    def final_path(self, key: CombinationKey) -> Path:
        return self._root / f"{self.entry_name(key)}{EXPANDED_EXTENSION}"

    def _packaged_paths(self, key: CombinationKey) -> list[Path]:
        return [self._root / f"{self.entry_name(key)}{ext}" for ext in PACKAGED_EXTENSIONS]

    @staticmethod
    def _describe(path: Path, key: CombinationKey, *, packaged: bool) -> BakedArtifact:
        mtime = path.stat().st_mtime
        return BakedArtifact(
            name=path.stem,
            path=path,
            key=key,
            created_at=datetime.fromtimestamp(mtime, tz=timezone.utc),
            packaged=packaged,
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, key: CombinationKey) -> BakedArtifact | None:
        """Return the published artifact for *key*, or None on a miss.

        Existence under the final name is the completeness signal.
        """
        final = self.final_path(key)
        try:
            if final.is_dir():
                return self._describe(final, key, packaged=False)
            for packaged in self._packaged_paths(key):
                if packaged.is_file():
                    return self._describe(packaged, key, packaged=True)
        except OSError:
            # Evicted between the existence check and the stat.
            return None
        return None

    def entries(self) -> list[BakedArtifact]:
        """All completed entries, sorted by name."""
        found: list[BakedArtifact] = []
        for path in self._completed_entries():
            short = path.stem[len(BAKED_PREFIX) :]
            try:
                artifact = self._describe(
                    path,
                    CombinationKey(short=short),
                    packaged=path.suffix.lower() in PACKAGED_EXTENSIONS,
                )
            except OSError:
                continue
            found.append(artifact)
        return found

    def _completed_entries(self) -> list[Path]:
        try:
            names = sorted(os.listdir(self._root))
        except FileNotFoundError:
            return []

        completed: list[Path] = []
        for name in names:
            if not name.startswith(BAKED_PREFIX):
                continue
            path = self._root / name
            suffix = path.suffix.lower()
            if suffix == EXPANDED_EXTENSION and (path / MANIFEST_FILENAME).is_file():
                completed.append(path)
            elif suffix in PACKAGED_EXTENSIONS and path.is_file():
                completed.append(path)
        return completed

    # ------------------------------------------------------------------
    # Build lifecycle
    # ------------------------------------------------------------------

    def begin_build(self, key: CombinationKey) -> Path:
        """Return a fresh private staging path for building *key*.

        The path itself is not created; copying the base creates it.
        """
        self.staging_root.mkdir(parents=True, exist_ok=True)
        return self.staging_root / f"{self.entry_name(key)}-{uuid.uuid4().hex[:12]}"

    def publish(self, working_path: Path, key: CombinationKey) -> BakedArtifact:
        """Atomically move a finished build to its final name.

        If another builder already published *key*, the staging copy is
        discarded and the existing artifact is returned.
        """
        final = self.final_path(key)
        existing = self.lookup(key)
        if existing is None:
            try:
                os.rename(working_path, final)
            except OSError as exc:
                if exc.errno not in (errno.EEXIST, errno.ENOTEMPTY):
                    raise BakeIOError(
                        f"Failed to publish {working_path} as {final}: {exc}",
                        path=Path(working_path),
                    ) from exc
                existing = self.lookup(key)
            else:
                logger.info("Published baked game: %s", final.name)
                return self._describe(final, key, packaged=False)

        logger.info("Baked game %s was published concurrently; discarding duplicate build", final.name)
        self.cleanup_failed(working_path)
        if existing is None:
            raise BakeIOError(f"Published entry vanished during publish: {final}", path=final)
        return existing

    def cleanup_failed(self, path: Path) -> None:
        """Best-effort recursive removal of a partial build. Never raises."""
        path = Path(path)
        try:
            if path.is_symlink() or path.is_file():
                path.unlink()
            elif path.exists():
                shutil.rmtree(path)
            else:
                return
            logger.info("Cleaned up failed baking attempt: %s", path)
        except OSError as exc:
            logger.warning("Failed to cleanup baked game directory %s: %s", path, exc)

    # ------------------------------------------------------------------
    # Eviction
    # ------------------------------------------------------------------

    def evict_older_than(
        self, max_age: timedelta, now: datetime | None = None
    ) -> list[str]:
        """Remove completed entries whose mtime is more than *max_age* old.

        An entry exactly *max_age* old is kept. Staging directories are never
        considered. Per-entry failures are logged and the sweep continues.

        Returns the names of the evicted entries.
        """
        now_ts = (now or datetime.now(timezone.utc)).timestamp()
        limit = max_age.total_seconds()
        evicted: list[str] = []

        for path in self._completed_entries():
            try:
                st = path.lstat()
                if now_ts - st.st_mtime <= limit:
                    continue
                if stat.S_ISDIR(st.st_mode):
                    shutil.rmtree(path)
                else:
                    path.unlink()
            except OSError as exc:
                logger.warning("Failed to evict baked game %s: %s", path.name, exc)
                continue
            logger.info("Cleaned up old baked game: %s", path.name)
            evicted.append(path.name)

        return evicted
