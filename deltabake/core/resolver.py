"""Base-artifact lookup across an ordered list of search roots."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path

from deltabake.config import BakeConfig
from deltabake.core.errors import BaseArtifactNotFoundError
from deltabake.models.manifest import (
    EXPANDED_EXTENSION,
    MANIFEST_FILENAME,
    PACKAGED_EXTENSIONS,
)

logger = logging.getLogger(__name__)


def is_valid_artifact(path: Path | str) -> bool:
    """Check whether *path* is a well-formed artifact.

    An expanded ``.sdd`` directory must contain ``modinfo.lua``. A packaged
    ``.sdz``/``.sd7`` file is accepted without looking inside. Anything that
    cannot be statted is simply invalid.
    """
    path = Path(path)
    try:
        st = path.stat()
    except OSError:
        return False

    name = path.name.lower()
    if stat.S_ISDIR(st.st_mode) and name.endswith(EXPANDED_EXTENSION):
        return (path / MANIFEST_FILENAME).is_file()
    if stat.S_ISREG(st.st_mode) and name.endswith(PACKAGED_EXTENSIONS):
        return True
    return False


def is_packaged(path: Path | str) -> bool:
    """True for a packaged archive file (needs extraction before use)."""
    path = Path(path)
    return path.is_file() and path.name.lower().endswith(PACKAGED_EXTENSIONS)


class ArtifactResolver:
    """Finds base artifacts by type name.

    Search order is ``{data_root}/games``, then
    ``{assets_root}/engine/<engine_version>/games``, then
    ``{assets_root}/games``: user-writable games win over bundled ones.

    Parameters
    ----------
    data_root:
        Writable data root.
    assets_root:
        Bundled asset root.
    aliases:
        Extra name fragments that also identify a base game.
    """

    def __init__(
        self,
        data_root: Path,
        assets_root: Path,
        aliases: Iterable[str] = (),
    ) -> None:
        self._data_root = Path(data_root)
        self._assets_root = Path(assets_root)
        self._aliases = [a.lower() for a in aliases if a]

    @classmethod
    def from_config(cls, config: BakeConfig) -> ArtifactResolver:
        return cls(config.data_root, config.assets_root, config.base_aliases)

    def search_roots(self, engine_version: str) -> list[Path]:
        return [
            self._data_root / "games",
            self._assets_root / "engine" / engine_version / "games",
            self._assets_root / "games",
        ]

    def _matches(self, entry_name: str, base_type: str) -> bool:
        lowered = entry_name.lower()
        needles = [base_type.lower(), *self._aliases]
        return any(n and n in lowered for n in needles)

    def candidates(self, base_type: str, engine_version: str) -> Iterator[Path]:
        """Yield every valid artifact for *base_type* in precedence order."""
        for root in self.search_roots(engine_version):
            try:
                names = sorted(os.listdir(root))
            except FileNotFoundError:
                continue
            except OSError as exc:
                logger.warning("Cannot list search root %s: %s", root, exc)
                continue

            for name in names:
                if not self._matches(name, base_type):
                    continue
                candidate = root / name
                if is_valid_artifact(candidate):
                    yield candidate

    def resolve_base(self, base_type: str, engine_version: str) -> Path:
        """Return the first valid base artifact for *base_type*.

        Raises
        ------
        BaseArtifactNotFoundError
            If no search root holds a valid candidate.
        """
        logger.info("Looking for base game files for: %s", base_type)
        for candidate in self.candidates(base_type, engine_version):
            logger.info("Found base game at: %s", candidate)
            return candidate
        raise BaseArtifactNotFoundError(base_type, self.search_roots(engine_version))
