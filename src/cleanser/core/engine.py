"""Scan orchestration engine."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from cleanser.core.consolidator import consolidate
from cleanser.exceptions import ScanConfigError
from cleanser.models.scan_result import ScanConfig, ScanResults
from cleanser.sweeps import FindingCollector, Sweep, default_sweeps
from cleanser.utils import bytes_to_human, format_elapsed

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]  # (sweep_id, status_message)


def resolve_roots(config: ScanConfig) -> list[Path]:
    """Return absolute scan roots, defaulting to the home directory.

    Raises:
        ScanConfigError: If a root does not exist, the home directory
            cannot be determined, or the depth is negative.
    """
    if config.max_depth is not None and config.max_depth < 0:
        raise ScanConfigError(f"Maximum depth must not be negative: {config.max_depth}")

    if config.paths:
        raw = list(config.paths)
    else:
        try:
            raw = [Path.home()]
        except RuntimeError as exc:
            raise ScanConfigError(f"Cannot determine home directory: {exc}") from exc

    roots: list[Path] = []
    for path in raw:
        root = Path(path).expanduser().absolute()
        if not root.exists():
            raise ScanConfigError(f"Scan path does not exist: {root}")
        if root not in roots:
            roots.append(root)
    return roots


class ScanEngine:
    """Runs every enabled sweep in order and consolidates the findings."""

    def __init__(self, sweeps: list[Sweep] | None = None) -> None:
        self.sweeps = sweeps if sweeps is not None else default_sweeps()

    def scan(
        self,
        config: ScanConfig,
        on_progress: ProgressCallback | None = None,
    ) -> ScanResults:
        """Scan the configured roots for reclaimable space.

        Sweeps run one after another; each may use a thread pool
        internally. A sweep that crashes is logged and contributes
        nothing, the rest of the scan carries on.

        Args:
            config: Scan parameters.
            on_progress: Optional callback receiving (sweep_id, status),
                where status is 'scanning', 'done' or 'error'.

        Returns:
            Consolidated scan results.

        Raises:
            ScanConfigError: If the scan roots cannot be resolved.
        """
        roots = resolve_roots(config)
        collector = FindingCollector()
        started = time.monotonic()

        for sweep in self.sweeps:
            if not sweep.is_enabled(config):
                log.debug("Sweep '%s' disabled for this scan", sweep.id)
                continue
            if on_progress:
                on_progress(sweep.id, "scanning")
            # Findings only reach the scan once the sweep has finished cleanly.
            found = FindingCollector()
            try:
                sweep.run(roots, config, found)
            except Exception:
                log.exception("Sweep '%s' failed", sweep.id)
                if on_progress:
                    on_progress(sweep.id, "error")
                continue
            collector.extend(found.snapshot())
            log.info("Sweep '%s' found %d items", sweep.id, len(found))
            if on_progress:
                on_progress(sweep.id, "done")

        items = consolidate(collector.snapshot())
        results = ScanResults.from_items(items, config.speed)
        log.info(
            "Scan finished in %s: %d items, %s reclaimable",
            format_elapsed(time.monotonic() - started),
            len(results.items),
            bytes_to_human(results.total_size),
        )
        return results
