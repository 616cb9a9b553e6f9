"""Scan configuration and result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from cleanser.models.item import CleanableItem


class ScanSpeed(str, Enum):
    """Scan depth tier."""

    QUICK = "quick"
    NORMAL = "normal"
    THOROUGH = "thorough"

    def __str__(self) -> str:
        return self.value

    @property
    def default_max_depth(self) -> int | None:
        """Default traversal depth. None means unbounded."""
        return _DEFAULT_DEPTHS[self]


_DEFAULT_DEPTHS: dict[ScanSpeed, int | None] = {
    ScanSpeed.QUICK: 3,
    ScanSpeed.NORMAL: 6,
    ScanSpeed.THOROUGH: None,
}


@dataclass(slots=True)
class ScanConfig:
    """Parameters for a single scan.

    ``min_file_size_mb`` of 0 disables the large-file sweep.
    ``max_depth`` overrides the depth implied by ``speed``.
    """

    speed: ScanSpeed = ScanSpeed.NORMAL
    paths: list[Path] = field(default_factory=list)
    min_file_size_mb: int = 100
    max_depth: int | None = None
    find_duplicates: bool = False

    @property
    def effective_max_depth(self) -> int | None:
        if self.max_depth is not None:
            return self.max_depth
        return self.speed.default_max_depth

    @property
    def min_file_size_bytes(self) -> int:
        return self.min_file_size_mb * 1024 * 1024


@dataclass(frozen=True, slots=True)
class ScanResults:
    """Consolidated result of one scan. Never modified after creation."""

    items: tuple[CleanableItem, ...]
    total_size: int
    scan_speed: ScanSpeed

    @classmethod
    def from_items(cls, items: list[CleanableItem], speed: ScanSpeed) -> ScanResults:
        return cls(items=tuple(items), total_size=sum(i.size for i in items), scan_speed=speed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "total_size": self.total_size,
            "scan_speed": self.scan_speed.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanResults:
        return cls(
            items=tuple(CleanableItem.from_dict(d) for d in data.get("items", [])),
            total_size=int(data.get("total_size", 0)),
            scan_speed=ScanSpeed(data.get("scan_speed", ScanSpeed.NORMAL.value)),
        )
