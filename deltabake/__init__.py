"""deltabake: content-addressed overlay-composition cache for game archives.

Bakes a base game plus an ordered list of mod overlays into a single cached
``baked-<key>.sdd`` directory the engine can load directly:
  - Order-sensitive SHA-256 combination keys (name+version, never paths)
  - Last-overlay-wins whole-file composition
  - Staged builds published by atomic rename
  - Age-based eviction that never touches in-flight builds
"""

__version__ = "0.1.0"
__description__ = "Content-addressed overlay-composition cache for game archives"

from deltabake.core.orchestrator import BakeOrchestrator
from deltabake.core.cache_store import CacheStore
from deltabake.core.hasher import fingerprint

__all__ = ["BakeOrchestrator", "CacheStore", "fingerprint", "__version__"]
