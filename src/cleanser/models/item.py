"""Cleanable item dataclass and its classification enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any


class RiskLevel(IntEnum):
    """How risky it is to delete an item. Ordered: SAFE < MODERATE < RISKY."""

    SAFE = 0
    MODERATE = 1
    RISKY = 2

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: str) -> RiskLevel:
        """Parse 'safe', 'moderate' or 'risky' (case-insensitive)."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown risk level: {value!r}") from None


class CleanCategory(str, Enum):
    """Kind of reclaimable space. Each item has exactly one category."""

    SYSTEM_CACHE = "system_cache"
    BROWSER_CACHE = "browser_cache"
    APP_CACHE = "app_cache"
    SYSTEM_LOGS = "system_logs"
    APP_LOGS = "app_logs"
    TEMP_FILES = "temp_files"
    NODE_MODULES = "node_modules"
    BUILD_ARTIFACTS = "build_artifacts"
    PIP_CACHE = "pip_cache"
    BREW_CACHE = "brew_cache"
    CARGO_CACHE = "cargo_cache"
    LARGE_FILES = "large_files"
    DUPLICATE_FILES = "duplicate_files"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    def __str__(self) -> str:
        return self.label


_CATEGORY_LABELS: dict[CleanCategory, str] = {
    CleanCategory.SYSTEM_CACHE: "System Cache",
    CleanCategory.BROWSER_CACHE: "Browser Cache",
    CleanCategory.APP_CACHE: "Application Cache",
    CleanCategory.SYSTEM_LOGS: "System Logs",
    CleanCategory.APP_LOGS: "Application Logs",
    CleanCategory.TEMP_FILES: "Temporary Files",
    CleanCategory.NODE_MODULES: "Node Modules",
    CleanCategory.BUILD_ARTIFACTS: "Build Artifacts",
    CleanCategory.PIP_CACHE: "Pip Cache",
    CleanCategory.BREW_CACHE: "Homebrew Cache",
    CleanCategory.CARGO_CACHE: "Cargo Cache",
    CleanCategory.LARGE_FILES: "Large Files",
    CleanCategory.DUPLICATE_FILES: "Duplicate Files",
}

_CATEGORY_RISK: dict[CleanCategory, RiskLevel] = {
    CleanCategory.SYSTEM_CACHE: RiskLevel.SAFE,
    CleanCategory.BROWSER_CACHE: RiskLevel.SAFE,
    CleanCategory.APP_CACHE: RiskLevel.SAFE,
    CleanCategory.SYSTEM_LOGS: RiskLevel.SAFE,
    CleanCategory.APP_LOGS: RiskLevel.SAFE,
    CleanCategory.TEMP_FILES: RiskLevel.SAFE,
    CleanCategory.PIP_CACHE: RiskLevel.SAFE,
    CleanCategory.BREW_CACHE: RiskLevel.SAFE,
    CleanCategory.CARGO_CACHE: RiskLevel.SAFE,
    CleanCategory.NODE_MODULES: RiskLevel.MODERATE,
    CleanCategory.BUILD_ARTIFACTS: RiskLevel.MODERATE,
    CleanCategory.LARGE_FILES: RiskLevel.RISKY,
    CleanCategory.DUPLICATE_FILES: RiskLevel.RISKY,
}

# Interpreter and tool caches that are regenerated on the next run.
EPHEMERAL_ARTIFACTS = frozenset({"__pycache__", ".pytest_cache", ".mypy_cache", ".ruff_cache"})


def category_risk(category: CleanCategory, dir_name: str | None = None) -> RiskLevel:
    """Return the risk level for *category*.

    *dir_name* only matters for build artifacts: ephemeral interpreter
    caches are safe to drop even though other build output is not.
    """
    if category is CleanCategory.BUILD_ARTIFACTS and dir_name in EPHEMERAL_ARTIFACTS:
        return RiskLevel.SAFE
    return _CATEGORY_RISK[category]


@dataclass(frozen=True, slots=True)
class CleanableItem:
    """Single file or directory that can be reclaimed."""

    path: Path
    size: int
    category: CleanCategory
    risk_level: RiskLevel
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "size": self.size,
            "category": self.category.value,
            "risk_level": str(self.risk_level),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CleanableItem:
        return cls(
            path=Path(data["path"]),
            size=int(data["size"]),
            category=CleanCategory(data["category"]),
            risk_level=RiskLevel.parse(data["risk_level"]),
            description=data.get("description", ""),
        )


@dataclass(frozen=True, slots=True)
class FileHash:
    """Content digest used as a grouping key for duplicate detection."""

    hash: str
    size: int
