"""Typer-based command-line interface for deltabake.

Provides the ``deltabake`` command with subcommands for baking, sweeping
old entries, computing fingerprints, listing the cache and resolving base
games. All output uses Rich for formatted terminal display.
"""
