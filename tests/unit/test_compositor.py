"""Tests for overlay composition — merge semantics and failure reporting."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from deltabake.core.compositor import apply_overlay, copy_tree
from deltabake.core.errors import BakeIOError


class TestApplyOverlay:
    def test_overwrites_existing_file(self, tmp_path: Path, write_files: Callable):
        dest, overlay = tmp_path / "dest", tmp_path / "ov"
        write_files(dest, {"f.txt": "base"})
        write_files(overlay, {"f.txt": "v1"})
        apply_overlay(overlay, dest)
        assert (dest / "f.txt").read_text() == "v1"

    def test_merges_directories(self, tmp_path: Path, write_files: Callable):
        dest, overlay = tmp_path / "dest", tmp_path / "ov"
        write_files(dest, {"units/a.lua": "a", "units/b.lua": "b"})
        write_files(overlay, {"units/b.lua": "B", "units/c.lua": "C", "new/deep/x.txt": "x"})
        written = apply_overlay(overlay, dest)
        assert written == 3
        assert (dest / "units/a.lua").read_text() == "a"
        assert (dest / "units/b.lua").read_text() == "B"
        assert (dest / "units/c.lua").read_text() == "C"
        assert (dest / "new/deep/x.txt").read_text() == "x"

    def test_later_overlay_wins(self, tmp_path: Path, write_files: Callable):
        dest = tmp_path / "dest"
        write_files(dest, {"f": "base"})
        write_files(tmp_path / "o1", {"f": "v1"})
        write_files(tmp_path / "o2", {"f": "v2"})
        apply_overlay(tmp_path / "o1", dest)
        apply_overlay(tmp_path / "o2", dest)
        assert (dest / "f").read_text() == "v2"

    def test_symlink_copied_as_link(self, tmp_path: Path, write_files: Callable):
        dest, overlay = tmp_path / "dest", tmp_path / "ov"
        write_files(dest, {"link": "was a file"})
        overlay.mkdir()
        os.symlink("target.txt", overlay / "link")
        apply_overlay(overlay, dest)
        assert (dest / "link").is_symlink()
        assert os.readlink(dest / "link") == "target.txt"

    def test_deep_tree(self, tmp_path: Path, write_files: Callable):
        deep = "/".join(f"d{i}" for i in range(200)) + "/leaf.txt"
        write_files(tmp_path / "ov", {deep: "leaf"})
        (tmp_path / "dest").mkdir()
        apply_overlay(tmp_path / "ov", tmp_path / "dest")
        assert (tmp_path / "dest" / deep).read_text() == "leaf"

    def test_missing_overlay_raises(self, tmp_path: Path):
        (tmp_path / "dest").mkdir()
        with pytest.raises(BakeIOError) as info:
            apply_overlay(tmp_path / "nope", tmp_path / "dest")
        assert info.value.path == tmp_path / "nope"

    def test_copy_failure_names_path(
        self, tmp_path: Path, write_files: Callable, monkeypatch: pytest.MonkeyPatch
    ):
        write_files(tmp_path / "ov", {"f": "x"})
        (tmp_path / "dest").mkdir()

        def _boom(src, dst, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(src))

        monkeypatch.setattr("deltabake.core.compositor.shutil.copyfile", _boom)
        with pytest.raises(BakeIOError, match="Failed to overlay") as info:
            apply_overlay(tmp_path / "ov", tmp_path / "dest")
        assert info.value.path == tmp_path / "ov" / "f"
        assert isinstance(info.value.__cause__, PermissionError)


class TestCopyTree:
    def test_full_copy(self, tmp_path: Path, write_files: Callable):
        write_files(tmp_path / "src", {"a": "1", "sub/b": "2"})
        copy_tree(tmp_path / "src", tmp_path / "out" / "dest")
        assert (tmp_path / "out/dest/a").read_text() == "1"
        assert (tmp_path / "out/dest/sub/b").read_text() == "2"

    def test_missing_source_raises(self, tmp_path: Path):
        with pytest.raises(BakeIOError):
            copy_tree(tmp_path / "missing", tmp_path / "dest")


class TestLinkedDestinations:
    """Overlays must replace links in the destination, never write through them."""

    def test_directory_link_replaced_not_followed(self, tmp_path: Path, write_files: Callable):
        outside = tmp_path / "shared_maps"
        write_files(outside, {"m.txt": "original"})
        dest = tmp_path / "dest"
        dest.mkdir()
        os.symlink(outside, dest / "maps")
        write_files(tmp_path / "ov", {"maps/m.txt": "overlaid"})

        apply_overlay(tmp_path / "ov", dest)

        assert (outside / "m.txt").read_text() == "original"
        assert not (dest / "maps").is_symlink()
        assert (dest / "maps").is_dir()
        assert (dest / "maps/m.txt").read_text() == "overlaid"

    def test_file_replaced_by_directory(self, tmp_path: Path, write_files: Callable):
        dest = tmp_path / "dest"
        write_files(dest, {"units": "was a file"})
        write_files(tmp_path / "ov", {"units/a.lua": "a"})

        apply_overlay(tmp_path / "ov", dest)

        assert (dest / "units/a.lua").read_text() == "a"

    def test_file_link_replaced_not_followed(self, tmp_path: Path, write_files: Callable):
        outside = tmp_path / "outside.txt"
        outside.write_text("original")
        dest = tmp_path / "dest"
        dest.mkdir()
        os.symlink(outside, dest / "f.txt")
        write_files(tmp_path / "ov", {"f.txt": "overlaid"})

        apply_overlay(tmp_path / "ov", dest)

        assert outside.read_text() == "original"
        assert not (dest / "f.txt").is_symlink()
        assert (dest / "f.txt").read_text() == "overlaid"
