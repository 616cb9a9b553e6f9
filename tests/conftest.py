"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

import cleanser.storage as storage
from cleanser.settings import Settings

MIB = 1024 * 1024


def write_file(path: Path, size: int, fill: bytes = b"x") -> Path:
    """Create *path* (and parents) holding exactly *size* bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(fill * size)
    return path


@pytest.fixture
def make_file():
    return write_file


@pytest.fixture
def isolate_storage(tmp_path, monkeypatch):
    """Redirect the scan cache to a temp directory."""
    cache_file = tmp_path / "cleanser_cache" / "last-scan.json"
    monkeypatch.setattr(storage, "SCAN_CACHE_FILE", cache_file)
    return cache_file


@pytest.fixture
def isolate_settings(tmp_path, monkeypatch):
    """Give Settings.instance() a fresh file in a temp directory."""
    settings = Settings(tmp_path / "cleanser_config" / "settings.json")
    monkeypatch.setattr(Settings, "_instance", settings)
    return settings
