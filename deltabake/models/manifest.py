"""The ``modinfo.lua`` descriptor carried by every artifact.

The filename, the ``.sdd``/``.sdz``/``.sd7`` extensions and the ``modtype=1``
tag are the on-disk contract of the consuming engine and must not change.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

MANIFEST_FILENAME = "modinfo.lua"
EXPANDED_EXTENSION = ".sdd"
PACKAGED_EXTENSIONS: tuple[str, ...] = (".sdz", ".sd7")
BAKED_PREFIX = "baked-"
BAKED_VERSION = "baked-1.0.0"


def _lua_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


class Manifest(BaseModel):
    """Synthesized descriptor for a baked game.

    ``depend`` is always empty: dependencies declared by the base artifact
    are not inherited yet.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    version: str = BAKED_VERSION
    shortname: str
    game: str
    short_game: str
    modtype: int = 1
    depend: tuple[str, ...] = ()

    def render(self) -> str:
        """Render as the Lua table the engine reads from ``modinfo.lua``."""
        depend = ", ".join(_lua_string(d) for d in self.depend)
        lines = [
            "return {",
            f"    name={_lua_string(self.name)},",
            f"    description={_lua_string(self.description)},",
            f"    version={_lua_string(self.version)},",
            f"    shortname={_lua_string(self.shortname)},",
            f"    game={_lua_string(self.game)},",
            f"    shortGame={_lua_string(self.short_game)},",
            f"    modtype={self.modtype}, -- Game type",
            f"    depend={{{depend}}},",
            "}",
        ]
        return "\n".join(lines) + "\n"
