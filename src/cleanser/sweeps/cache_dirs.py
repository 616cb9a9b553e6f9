"""Sweep for cache directories (~/.cache, Library/Caches, *cache dirs)."""

from __future__ import annotations

from pathlib import Path

from cleanser.core.classifier import Classification, classify_cache_dir
from cleanser.sweeps.base import DirectorySweep


class CacheDirsSweep(DirectorySweep):
    """Finds directories named like caches or living under a platform cache root."""

    id = "cache_dirs"
    name = "Cache directories"

    def match(self, path: Path, root: Path) -> Classification | None:
        return classify_cache_dir(path, root)

    def describe(self, path: Path) -> str:
        return f"Cache directory: {path.name}"
