"""Base sweep interface and the shared finding collector."""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Iterator, TypeVar

from cleanser.core.classifier import MIN_DIR_SIZE, Classification
from cleanser.models.item import CleanableItem
from cleanser.models.scan_result import ScanConfig
from cleanser.utils import WalkEntry, dir_size, is_self_path, walk

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class FindingCollector:
    """Thread-safe, append-only collection of findings.

    One instance is shared by every sweep of a scan and by every worker
    thread inside a sweep. The lock is held only for the append itself.
    """

    def __init__(self) -> None:
        self._items: list[CleanableItem] = []
        self._lock = threading.Lock()

    def add(self, item: CleanableItem) -> None:
        with self._lock:
            self._items.append(item)

    def extend(self, items: Iterable[CleanableItem]) -> None:
        with self._lock:
            self._items.extend(items)

    def snapshot(self) -> list[CleanableItem]:
        """Return a copy of everything collected so far."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def worker_count() -> int:
    """Size of the per-sweep worker pool."""
    return os.cpu_count() or 1


def fan_out(func: Callable[[T], R], jobs: list[T]) -> Iterator[R]:
    """Apply *func* to every job, in parallel when it is worth it.

    Results are yielded in job order to the calling thread. Falls back to
    a plain loop on single-core machines or for a single job, where a
    thread pool only adds overhead.
    """
    workers = worker_count()
    if workers > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(jobs))) as executor:
            yield from executor.map(func, jobs)
    else:
        for job in jobs:
            yield func(job)


class Sweep(ABC):
    """One traversal pass targeting a single category family.

    A sweep never deletes anything; it only appends findings to the
    collector it is given.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier, e.g. 'cache_dirs'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name used in progress output."""

    def is_enabled(self, config: ScanConfig) -> bool:
        """Whether this sweep should run for *config*."""
        return True

    @abstractmethod
    def run(self, roots: list[Path], config: ScanConfig, collector: FindingCollector) -> None:
        """Walk *roots* and add every finding to *collector*."""


class DirectorySweep(Sweep, ABC):
    """Base class for sweeps that report whole directories.

    Subclasses implement :meth:`match` and :meth:`describe`. Candidate
    directories are found in a single-threaded walk; once a directory
    matches, the walk does not descend into it since anything nested is a
    subset of it. Sizes are then computed in parallel and only directories
    holding more than ``min_size`` bytes are reported.
    """

    min_size: int = MIN_DIR_SIZE

    @abstractmethod
    def match(self, path: Path, root: Path) -> Classification | None:
        """Return a (category, risk) pair if *path* is a candidate."""

    @abstractmethod
    def describe(self, path: Path) -> str:
        """Description for a reported directory."""

    def candidates(self, roots: Iterable[Path], max_depth: int | None) -> list[tuple[Path, Classification]]:
        found: list[tuple[Path, Classification]] = []
        matched: set[Path] = set()

        # walk() asks prune() after each entry is consumed, so a directory
        # matched in the loop body below is not descended into.
        def _prune(entry: WalkEntry) -> bool:
            return is_self_path(entry.path) or entry.path in matched

        for root in roots:
            for entry in walk(root, max_depth, prune=_prune):
                if not entry.is_dir or entry.path in matched or is_self_path(entry.path):
                    continue
                classification = self.match(entry.path, root)
                if classification is not None:
                    matched.add(entry.path)
                    found.append((entry.path, classification))
        return found

    def run(self, roots: list[Path], config: ScanConfig, collector: FindingCollector) -> None:
        found = self.candidates(roots, config.effective_max_depth)
        log.debug("%s: %d candidate directories", self.id, len(found))

        def _size(candidate: tuple[Path, Classification]) -> tuple[Path, Classification, int]:
            path, classification = candidate
            return path, classification, dir_size(path)

        for path, (category, risk), size in fan_out(_size, found):
            if size > self.min_size:
                collector.add(
                    CleanableItem(
                        path=path,
                        size=size,
                        category=category,
                        risk_level=risk,
                        description=self.describe(path),
                    )
                )
