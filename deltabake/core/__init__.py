"""Core baking subsystems: hashing, resolution, composition, caching."""
