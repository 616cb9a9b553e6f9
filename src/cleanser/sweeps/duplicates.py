"""Sweep for byte-identical duplicate files."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from cleanser.core.classifier import MIB, classify_duplicate
from cleanser.models.item import CleanableItem, FileHash
from cleanser.models.scan_result import ScanConfig
from cleanser.sweeps.base import FindingCollector, Sweep, fan_out
from cleanser.utils import bytes_to_human, is_self_path, walk

log = logging.getLogger(__name__)

_CHUNK_SIZE = 65_536  # 64 KB

# Smaller files are never hashed.
MIN_DUPLICATE_SIZE = MIB


def sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file using chunked reads."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            h.update(chunk)
    return h.hexdigest()


def collect_candidates(roots: list[Path], max_depth: int | None) -> dict[Path, int]:
    """Record the size of every regular file over ``MIN_DUPLICATE_SIZE``."""
    sizes: dict[Path, int] = {}
    for root in roots:
        for entry in walk(root, max_depth, prune=lambda e: is_self_path(e.path)):
            if not entry.is_file or entry.path in sizes:
                continue
            try:
                size = entry.path.lstat().st_size
            except OSError:
                log.debug("Cannot stat: %s", entry.path)
                continue
            if size > MIN_DUPLICATE_SIZE:
                sizes[entry.path] = size
    return sizes


def _hash_candidate(candidate: tuple[Path, int]) -> tuple[Path, FileHash | None]:
    path, size = candidate
    try:
        return path, FileHash(hash=sha256_file(path), size=size)
    except OSError:
        log.debug("Cannot hash: %s", path)
        return path, None


def group_duplicates(sizes: dict[Path, int]) -> dict[FileHash, list[Path]]:
    """Group candidate files by content, returning only groups of two or more.

    Files are first bucketed by size; only sizes shared by several files
    are hashed. Hashing runs in worker threads while this thread alone
    owns the grouping table. Each group is sorted so the original is the
    lexicographically smallest path.
    """
    by_size: dict[int, list[Path]] = {}
    for path, size in sizes.items():
        by_size.setdefault(size, []).append(path)

    jobs = [(path, size) for size, paths in by_size.items() if len(paths) > 1 for path in paths]

    groups: dict[FileHash, list[Path]] = {}
    for path, file_hash in fan_out(_hash_candidate, jobs):
        if file_hash is not None:
            groups.setdefault(file_hash, []).append(path)

    return {key: sorted(paths) for key, paths in groups.items() if len(paths) > 1}


class DuplicatesSweep(Sweep):
    """Finds files over 1 MiB whose content matches another file exactly.

    The first copy of each group (by path order) is kept; every other copy
    is reported.
    """

    id = "duplicates"
    name = "Duplicate files"

    def is_enabled(self, config: ScanConfig) -> bool:
        return config.find_duplicates

    def run(self, roots: list[Path], config: ScanConfig, collector: FindingCollector) -> None:
        sizes = collect_candidates(roots, config.effective_max_depth)
        log.debug("duplicates: %d candidate files", len(sizes))
        category, risk = classify_duplicate()

        for file_hash, paths in sorted(group_duplicates(sizes).items(), key=lambda kv: kv[1][0]):
            original = paths[0]
            for dup in paths[1:]:
                collector.add(
                    CleanableItem(
                        path=dup,
                        size=file_hash.size,
                        category=category,
                        risk_level=risk,
                        description=f"Duplicate of {original} ({bytes_to_human(file_hash.size)})",
                    )
                )
