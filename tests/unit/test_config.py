"""Tests for BakeConfig — env-driven settings."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from deltabake.config import BakeConfig


class TestBakeConfig:
    def test_defaults(self):
        config = BakeConfig()
        assert config.cache_dirname == "baked-games"
        assert config.max_age == timedelta(days=7)
        assert config.base_aliases == ["byar", "beyond"]
        assert config.game_short_name == "BAR"

    def test_cache_root(self, tmp_path: Path):
        config = BakeConfig(data_root=tmp_path)
        assert config.cache_root == tmp_path / "baked-games"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("DELTABAKE_DATA_ROOT", str(tmp_path))
        monkeypatch.setenv("DELTABAKE_MAX_AGE_DAYS", "2")
        config = BakeConfig()
        assert config.data_root == tmp_path
        assert config.max_age == timedelta(days=2)

    def test_construction_touches_no_files(self, tmp_path: Path):
        BakeConfig(data_root=tmp_path / "data")
        assert not (tmp_path / "data").exists()
