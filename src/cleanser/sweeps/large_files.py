"""Sweep for files above the configured size threshold."""

from __future__ import annotations

import logging
from pathlib import Path

from cleanser.core.classifier import classify_large_file, is_sensitive_path
from cleanser.models.item import CleanableItem
from cleanser.models.scan_result import ScanConfig
from cleanser.sweeps.base import FindingCollector, Sweep
from cleanser.utils import WalkEntry, bytes_to_human, is_self_path, walk

log = logging.getLogger(__name__)


def _prune(entry: WalkEntry) -> bool:
    return is_self_path(entry.path) or is_sensitive_path(entry.path)


class LargeFilesSweep(Sweep):
    """Finds regular files at or above ``ScanConfig.min_file_size_mb``.

    Hidden files and anything inside application bundles, mail or sync
    stores and OS-owned trees are never reported.
    """

    id = "large_files"
    name = "Large files"

    def is_enabled(self, config: ScanConfig) -> bool:
        return config.min_file_size_mb > 0

    def run(self, roots: list[Path], config: ScanConfig, collector: FindingCollector) -> None:
        min_size = config.min_file_size_bytes
        for root in roots:
            for entry in walk(root, config.effective_max_depth, prune=_prune):
                if not entry.is_file:
                    continue
                try:
                    size = entry.path.lstat().st_size
                except OSError:
                    log.debug("Cannot stat: %s", entry.path)
                    continue
                classification = classify_large_file(entry.path, size, min_size)
                if classification is None:
                    continue
                category, risk = classification
                collector.add(
                    CleanableItem(
                        path=entry.path,
                        size=size,
                        category=category,
                        risk_level=risk,
                        description=f"Large file ({bytes_to_human(size)})",
                    )
                )
