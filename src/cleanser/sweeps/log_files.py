"""Sweep for oversized log files."""

from __future__ import annotations

import logging
from pathlib import Path

from cleanser.core.classifier import LOG_DIR_NAMES, PLATFORM_LOG_ROOT, classify_log_file
from cleanser.models.item import CleanableItem
from cleanser.models.scan_result import ScanConfig
from cleanser.sweeps.base import FindingCollector, Sweep
from cleanser.utils import bytes_to_human, is_self_path, walk

log = logging.getLogger(__name__)

# Log directories are searched this deep regardless of the scan depth.
LOG_SEARCH_DEPTH = 3


def log_dirs(root: Path) -> list[Path]:
    """Known log directories under a scan root."""
    return [root.joinpath(*PLATFORM_LOG_ROOT)] + [root / name for name in LOG_DIR_NAMES]


class LogFilesSweep(Sweep):
    """Finds ``*.log`` files over 10 MiB in platform and project log directories."""

    id = "log_files"
    name = "Log files"

    def run(self, roots: list[Path], config: ScanConfig, collector: FindingCollector) -> None:
        for root in roots:
            for log_dir in log_dirs(root):
                if not log_dir.is_dir():
                    continue
                for entry in walk(log_dir, LOG_SEARCH_DEPTH, prune=lambda e: is_self_path(e.path)):
                    if not entry.is_file:
                        continue
                    try:
                        size = entry.path.lstat().st_size
                    except OSError:
                        log.debug("Cannot stat: %s", entry.path)
                        continue
                    classification = classify_log_file(entry.path, size, root)
                    if classification is None:
                        continue
                    category, risk = classification
                    collector.add(
                        CleanableItem(
                            path=entry.path,
                            size=size,
                            category=category,
                            risk_level=risk,
                            description=f"Large log file ({bytes_to_human(size)})",
                        )
                    )
