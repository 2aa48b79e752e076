"""Runtime configuration, env-driven via pydantic-settings.

Reads from a .env file and DELTABAKE_* environment variables. Constructing
a config never touches the filesystem; ``CacheStore.open`` does that.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class BakeConfig(BaseSettings):
    """Baking configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export DELTABAKE_DATA_ROOT=/var/lib/bar
        export DELTABAKE_MAX_AGE_DAYS=3
        export DELTABAKE_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DELTABAKE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Writable data root; baked games live under {data_root}/{cache_dirname}
    data_root: Path = Path(".deltabake-data")
    # Bundled assets: {assets_root}/engine/<ev>/games and {assets_root}/games
    assets_root: Path = Path("assets")
    cache_dirname: str = "baked-games"

    # Eviction
    max_age_days: float = 7.0

    # Base-game lookup also matches these name fragments
    base_aliases: list[str] = ["byar", "beyond"]

    # Synthesized manifest
    game_name: str = "Beyond All Reason"
    game_short_name: str = "BAR"

    log_level: str = "INFO"

    @property
    def cache_root(self) -> Path:
        return self.data_root / self.cache_dirname

    @property
    def max_age(self) -> timedelta:
        return timedelta(days=self.max_age_days)

