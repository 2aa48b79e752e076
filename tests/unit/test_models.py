"""Tests for data models and manifest rendering."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from deltabake.models.artifacts import CombinationKey, OverlayRef
from deltabake.models.manifest import Manifest


class TestOverlayRef:
    def test_frozen(self):
        ref = OverlayRef(name="a", version="v1", path=Path("/m"))
        with pytest.raises(ValidationError):
            ref.name = "b"

    def test_identity_and_label(self):
        ref = OverlayRef(name="a", version="v1", path=Path("/m"))
        assert ref.identity == ("a", "v1")
        assert ref.label == "a"
        named = ref.model_copy(update={"display_name": "Mod A"})
        assert named.label == "Mod A"

    def test_validates_from_mapping(self):
        ref = OverlayRef.model_validate({"name": "a", "version": "1", "path": "/m"})
        assert ref.path == Path("/m")


class TestCombinationKey:
    def test_str_is_short(self):
        assert str(CombinationKey(digest="ab" * 32, short="ab" * 8)) == "ab" * 8


class TestManifest:
    def _manifest(self, **overrides) -> Manifest:
        fields = {
            "name": "demo + patch",
            "description": "Baked game combining demo with 1 mod(s)",
            "shortname": "baked-0123abcd",
            "game": "Beyond All Reason",
            "short_game": "BAR",
        }
        fields.update(overrides)
        return Manifest(**fields)

    def test_render_contains_required_fields(self):
        text = self._manifest().render()
        assert text.startswith("return {")
        assert "name='demo + patch'," in text
        assert "version='baked-1.0.0'," in text
        assert "shortname='baked-0123abcd'," in text
        assert "game='Beyond All Reason'," in text
        assert "shortGame='BAR'," in text
        assert "modtype=1," in text
        assert "depend={}," in text

    def test_render_escapes_quotes(self):
        text = self._manifest(name="it's \\ odd").render()
        assert "name='it\\'s \\\\ odd'," in text

    def test_depend_defaults_empty(self):
        assert self._manifest().depend == ()
