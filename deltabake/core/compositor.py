"""Overlay composition — whole-file, last-writer-wins tree merging.

Trees are walked with an explicit worklist rather than recursion so depth
is bounded by the stack, not the interpreter. Symlinks are recreated as
links and never followed.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from deltabake.core.errors import BakeIOError

logger = logging.getLogger(__name__)


def copy_tree(src: Path, dest: Path) -> None:
    """Copy an expanded artifact directory to a new *dest*.

    *dest* must not exist yet; it is created with all parents.
    """
    logger.info("Copying directory: %s -> %s", src, dest)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(src, dest, symlinks=True)
    except OSError as exc:
        raise BakeIOError(f"Failed to copy {src} to {dest}: {exc}", path=Path(src)) from exc


def _ensure_real_dir(dest: Path) -> None:
    """Make *dest* a real directory, replacing a symlink or file in its place.

    Never descends through a link: that would write outside the tree.
    """
    if dest.is_symlink() or (dest.exists() and not dest.is_dir()):
        dest.unlink()
    dest.mkdir(exist_ok=True)


def _replace_with_link(src: Path, dest: Path) -> None:
    target = os.readlink(src)
    if dest.is_symlink() or dest.is_file():
        dest.unlink()
    os.symlink(target, dest)


def apply_overlay(overlay_root: Path, dest_root: Path) -> int:
    """Merge *overlay_root* on top of the existing *dest_root*.

    Directories are merged, files are overwritten unconditionally. On failure
    the destination may be partially modified; callers must discard it.

    Returns the number of files (and links) written.

    Raises
    ------
    BakeIOError
        If any listing, directory creation or copy fails.
    """
    overlay_root = Path(overlay_root)
    dest_root = Path(dest_root)
    logger.info("Overlaying mod files from: %s", overlay_root)

    written = 0
    stack: list[tuple[Path, Path]] = [(overlay_root, dest_root)]
    while stack:
        src_dir, dest_dir = stack.pop()
        current = src_dir
        try:
            with os.scandir(src_dir) as it:
                entries = sorted(it, key=lambda e: e.name)
            for entry in entries:
                src_path = Path(entry.path)
                dest_path = dest_dir / entry.name
                current = src_path
                if entry.is_symlink():
                    _replace_with_link(src_path, dest_path)
                    written += 1
                elif entry.is_dir():
                    _ensure_real_dir(dest_path)
                    stack.append((src_path, dest_path))
                else:
                    if dest_path.is_symlink():
                        dest_path.unlink()
                    shutil.copyfile(src_path, dest_path)
                    shutil.copymode(src_path, dest_path)
                    written += 1
                    logger.debug("Overlaid file: %s", dest_path.relative_to(dest_root))
        except OSError as exc:
            raise BakeIOError(f"Failed to overlay {current}: {exc}", path=current) from exc

    return written
