"""Pure classification rules for filesystem entries.

Each ``classify_*`` function returns a ``(CleanCategory, RiskLevel)``
pair, or None when the entry is not reclaimable under that rule.  Size
floors that depend on walking a directory tree are applied by the sweeps,
not here.
"""

from __future__ import annotations

import re
from pathlib import Path

from cleanser.models.item import CleanCategory, RiskLevel, category_risk
from cleanser.utils import contains_parts

Classification = tuple[CleanCategory, RiskLevel]

MIB = 1024 * 1024

# Directories must hold strictly more than this to be reported.
MIN_DIR_SIZE = MIB

# Log files must be strictly larger than this to be reported.
MIN_LOG_SIZE = 10 * MIB

_CACHE_NAME_RE = re.compile(r"caches?$", re.IGNORECASE)

# Platform cache root (macOS); anything under it is a cache.
PLATFORM_CACHE_ROOT = ("Library", "Caches")

# Platform log root (macOS), relative to the scan root.
PLATFORM_LOG_ROOT = ("Library", "Logs")

# Project-local log directories, relative to the scan root.
LOG_DIR_NAMES = ("logs", ".logs")

LOG_SUFFIX = ".log"

_BROWSER_HINTS = ("chrome", "chromium", "firefox", "mozilla", "safari", "brave")

# Ordered: the first matching hint wins.
_CACHE_HINTS: tuple[tuple[tuple[str, ...], CleanCategory], ...] = (
    (_BROWSER_HINTS, CleanCategory.BROWSER_CACHE),
    (("homebrew", "brew"), CleanCategory.BREW_CACHE),
    (("pip",), CleanCategory.PIP_CACHE),
    (("cargo",), CleanCategory.CARGO_CACHE),
    (("npm", "yarn", "pnpm"), CleanCategory.APP_CACHE),
)

ARTIFACT_CATEGORIES: dict[str, CleanCategory] = {
    "node_modules": CleanCategory.NODE_MODULES,
    "target": CleanCategory.BUILD_ARTIFACTS,
    "build": CleanCategory.BUILD_ARTIFACTS,
    "dist": CleanCategory.BUILD_ARTIFACTS,
    "out": CleanCategory.BUILD_ARTIFACTS,
    ".gradle": CleanCategory.BUILD_ARTIFACTS,
    ".maven": CleanCategory.BUILD_ARTIFACTS,
    ".next": CleanCategory.BUILD_ARTIFACTS,
    ".nuxt": CleanCategory.BUILD_ARTIFACTS,
    "__pycache__": CleanCategory.BUILD_ARTIFACTS,
    ".pytest_cache": CleanCategory.BUILD_ARTIFACTS,
    ".mypy_cache": CleanCategory.BUILD_ARTIFACTS,
    ".ruff_cache": CleanCategory.BUILD_ARTIFACTS,
}

# "target" is only a Cargo build directory next to a Cargo manifest.
CARGO_MANIFEST = "Cargo.toml"

# Generic output directory names that need a project manifest beside them.
GUARDED_OUTPUT_DIRS = frozenset({"build", "dist", "out"})

PROJECT_MANIFESTS = (
    "package.json",
    "build.gradle",
    "build.gradle.kts",
    "pom.xml",
    "go.mod",
    "pyproject.toml",
    "setup.py",
)

# Never report large files from these component sequences.
_SENSITIVE_FRAGMENTS: tuple[tuple[str, ...], ...] = (
    ("Applications",),
    ("Library", "Application Support"),
    ("Library", "Mobile Documents"),
    ("Library", "Mail"),
)

# OS-owned trees, matched as absolute prefixes.
_SYSTEM_TREES = (
    Path("/System"),
    Path("/Library"),
    Path("/proc"),
    Path("/sys"),
    Path("/dev"),
)

CACHE_MARKER = ".cache"


def _relative_lower(path: Path, root: Path | None) -> str:
    if root is not None:
        try:
            path = path.relative_to(root)
        except ValueError:
            pass
    return path.as_posix().lower()


def is_cache_dir(path: Path) -> bool:
    """Check whether a directory looks like a cache by name or location."""
    return bool(_CACHE_NAME_RE.search(path.name)) or contains_parts(path, PLATFORM_CACHE_ROOT)


def categorize_cache(path: Path, root: Path | None = None) -> CleanCategory:
    """Pick the cache category from hints in the path below *root*.

    Only the part of the path below the scan root is inspected for vendor
    names, so a home directory called e.g. ``/home/pippa`` does not turn
    every cache into a pip cache.
    """
    rel = _relative_lower(path, root)
    for hints, category in _CACHE_HINTS:
        if any(hint in rel for hint in hints):
            return category
    if contains_parts(path, PLATFORM_CACHE_ROOT):
        return CleanCategory.SYSTEM_CACHE
    return CleanCategory.APP_CACHE


def classify_cache_dir(path: Path, root: Path | None = None) -> Classification | None:
    if not is_cache_dir(path):
        return None
    category = categorize_cache(path, root)
    return category, category_risk(category)


def _has_any(parent: Path, names: tuple[str, ...]) -> bool:
    return any((parent / name).exists() for name in names)


def classify_build_artifact(path: Path) -> Classification | None:
    """Classify a directory by its exact base name, applying manifest guards."""
    name = path.name
    category = ARTIFACT_CATEGORIES.get(name)
    if category is None:
        return None
    parent = path.parent
    if name == "target" and not (parent / CARGO_MANIFEST).exists():
        return None
    if name in GUARDED_OUTPUT_DIRS and not _has_any(parent, PROJECT_MANIFESTS):
        return None
    return category, category_risk(category, name)


def classify_log_file(path: Path, size: int, root: Path | None = None) -> Classification | None:
    """Classify a ``.log`` file already known to live in a log directory."""
    if not path.name.endswith(LOG_SUFFIX) or size <= MIN_LOG_SIZE:
        return None
    rel = Path(_relative_lower(path, root))
    platform_root = tuple(p.lower() for p in PLATFORM_LOG_ROOT)
    if contains_parts(rel, platform_root):
        category = CleanCategory.SYSTEM_LOGS
    else:
        category = CleanCategory.APP_LOGS
    return category, category_risk(category)


def is_sensitive_path(path: Path) -> bool:
    """Check whether *path* is inside an app bundle, mail store, sync store or OS tree."""
    if any(contains_parts(path, fragment) for fragment in _SENSITIVE_FRAGMENTS):
        return True
    if path.is_absolute():
        parts = path.parts
        for tree in _SYSTEM_TREES:
            if parts[: len(tree.parts)] == tree.parts:
                return True
    return False


def is_hidden_name(name: str) -> bool:
    """Dotfiles are hidden, except the literal cache marker."""
    return name.startswith(".") and name != CACHE_MARKER


def classify_large_file(path: Path, size: int, min_size: int) -> Classification | None:
    if min_size <= 0 or size < min_size:
        return None
    if is_hidden_name(path.name) or is_sensitive_path(path):
        return None
    category = CleanCategory.LARGE_FILES
    return category, category_risk(category)


def classify_duplicate() -> Classification:
    category = CleanCategory.DUPLICATE_FILES
    return category, category_risk(category)
