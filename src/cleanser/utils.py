"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

log = logging.getLogger(__name__)

# Name of our own cache and config directories; never treated as scan targets.
SELF_DIR_NAME = "cleanser"


def xdg_cache_home() -> Path:
    """Return XDG_CACHE_HOME, defaulting to ~/.cache."""
    return Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def self_dirs() -> tuple[Path, Path]:
    """Our own cache and config directories."""
    return xdg_cache_home() / SELF_DIR_NAME, xdg_config_home() / SELF_DIR_NAME


def is_self_path(path: Path | str) -> bool:
    """Check whether *path* lies in (or is) one of our own directories."""
    path = Path(path)
    return any(is_within(path, own) for own in self_dirs())


def is_within(path: Path, parent: Path) -> bool:
    """Component-wise containment test. ``/a/bb`` is not within ``/a/b``."""
    parts = path.parts
    parent_parts = parent.parts
    return len(parts) >= len(parent_parts) and parts[: len(parent_parts)] == parent_parts


def contains_parts(path: Path, fragment: tuple[str, ...]) -> bool:
    """Check whether the component sequence *fragment* appears anywhere in *path*."""
    parts = path.parts
    n = len(fragment)
    return any(parts[i : i + n] == fragment for i in range(len(parts) - n + 1))


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """One entry produced by :func:`walk`."""

    path: Path
    name: str
    depth: int
    is_dir: bool
    is_file: bool


def walk(
    root: Path,
    max_depth: int | None = None,
    *,
    prune: Callable[[WalkEntry], bool] | None = None,
) -> Iterator[WalkEntry]:
    """Walk *root* without following symlinks, yielding entries up to *max_depth*.

    The root itself is yielded at depth 0. Directories for which *prune*
    returns True are yielded but not descended into. Unreadable entries
    are skipped.
    """
    try:
        if root.is_symlink() or not root.is_dir():
            return
    except OSError:
        log.debug("Cannot access: %s", root)
        return

    top = WalkEntry(root, root.name, 0, True, False)
    yield top
    if prune is not None and prune(top):
        return

    stack: list[WalkEntry] = [top]
    while stack:
        current = stack.pop()
        if max_depth is not None and current.depth >= max_depth:
            continue
        try:
            with os.scandir(current.path) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError:
            log.debug("Cannot read directory: %s", current.path)
            continue

        subdirs: list[WalkEntry] = []
        for child in children:
            try:
                is_dir = child.is_dir(follow_symlinks=False)
                is_file = not is_dir and child.is_file(follow_symlinks=False)
            except OSError:
                log.debug("Cannot access: %s", child.path)
                continue
            entry = WalkEntry(Path(child.path), child.name, current.depth + 1, is_dir, is_file)
            yield entry
            if is_dir and not (prune is not None and prune(entry)):
                subdirs.append(entry)
        stack.extend(reversed(subdirs))


def remove_path(path: Path) -> int:
    """Remove a file or directory tree and return the bytes reclaimed.

    A path that no longer exists reclaims nothing.
    """
    if not os.path.lexists(path):
        return 0
    if path.is_dir() and not path.is_symlink():
        size = dir_size(path)
        shutil.rmtree(path)
    else:
        size = path.lstat().st_size
        path.unlink()
    return size


def dir_info(path: Path | str) -> tuple[int, int]:
    """Calculate total size and file count of a directory tree.

    Uses GNU ``find`` (C-speed walk) when available, falling back to
    ``os.scandir`` on systems without it.

    Returns:
        (total_bytes, file_count) tuple.
    """
    try:
        return _dir_info_find(str(path))
    except (OSError, ValueError, subprocess.SubprocessError):
        return _dir_info_scandir(path)


def _dir_info_find(path_str: str) -> tuple[int, int]:
    """Walk a directory tree using GNU find (pure C, no Python per-file overhead)."""
    proc = subprocess.run(
        ["find", path_str, "-type", "f", "-printf", "%s\n"],
        capture_output=True, timeout=60,
    )
    # BSD find has no -printf; fail over to the Python walk.
    if proc.returncode != 0 and not proc.stdout:
        raise OSError(f"find failed on {path_str}: {proc.stderr.decode(errors='replace').strip()}")
    total = count = 0
    for line in proc.stdout.split(b"\n"):
        if line:
            total += int(line)
            count += 1
    return total, count


def _dir_info_scandir(path: Path | str) -> tuple[int, int]:
    """Walk a directory tree using os.scandir (pure Python fallback)."""
    total = 0
    count = 0
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                            count += 1
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except OSError:
                        pass
        except OSError:
            pass
    return total, count


def dir_size(path: Path) -> int:
    """Calculate total size of a directory tree."""
    return dir_info(path)[0]


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"


def format_age(seconds: int) -> str:
    """Format a cache age as '3 min 12 sec' or '45 seconds'."""
    minutes, secs = divmod(max(seconds, 0), 60)
    if minutes:
        return f"{minutes} min {secs} sec"
    return f"{secs} seconds"


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
