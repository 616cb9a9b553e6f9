"""Tests for risk-gated cleaning."""

from __future__ import annotations

import os
from pathlib import Path

from cleanser.core.classifier import MIB
from cleanser.core.cleaner import clean_items, filter_by_risk
from cleanser.models.item import CleanableItem, CleanCategory, RiskLevel
from cleanser.utils import remove_path

from conftest import write_file


def _item(path: Path, size: int, risk: RiskLevel = RiskLevel.SAFE) -> CleanableItem:
    return CleanableItem(path, size, CleanCategory.APP_CACHE, risk, "test item")


class TestFilterByRisk:
    def test_levels(self):
        items = [
            _item(Path("/s"), 1, RiskLevel.SAFE),
            _item(Path("/m"), 1, RiskLevel.MODERATE),
            _item(Path("/r"), 1, RiskLevel.RISKY),
        ]

        assert [i.path.name for i in filter_by_risk(items, RiskLevel.SAFE)] == ["s"]
        assert [i.path.name for i in filter_by_risk(items, RiskLevel.MODERATE)] == ["s", "m"]
        assert len(filter_by_risk(items, RiskLevel.RISKY)) == 3


class TestCleanItems:
    def test_removes_directories_and_files(self, tmp_path):
        cache = tmp_path / "cache"
        write_file(cache / "a" / "blob", 2 * MIB)
        write_file(cache / "b", MIB)
        big = write_file(tmp_path / "big.iso", 3 * MIB)

        result = clean_items([_item(cache, 3 * MIB), _item(big, 3 * MIB)])

        assert not cache.exists()
        assert not big.exists()
        assert result.freed_bytes == 6 * MIB
        assert result.items_removed == 2
        assert result.errors == []
        assert not result.dry_run

    def test_missing_path_frees_nothing(self, tmp_path):
        result = clean_items([_item(tmp_path / "gone", 5 * MIB)])

        assert result.freed_bytes == 0
        assert result.items_removed == 1
        assert result.errors == []

    def test_failure_recorded_and_others_continue(self, tmp_path, monkeypatch):
        bad = write_file(tmp_path / "bad.bin", 10)
        good = write_file(tmp_path / "good.bin", 20)

        def fake_remove(path):
            if path == bad:
                raise PermissionError("Permission denied")
            return remove_path(path)

        monkeypatch.setattr("cleanser.core.cleaner.remove_path", fake_remove)
        seen: list[tuple[Path, int, str | None]] = []

        result = clean_items(
            [_item(bad, 10), _item(good, 20)],
            on_item=lambda item, freed, err: seen.append((item.path, freed, err)),
        )

        assert bad.exists()
        assert not good.exists()
        assert result.freed_bytes == 20
        assert result.items_removed == 1
        assert result.failed == 1
        assert "bad.bin" in result.errors[0]
        assert seen[0][0] == bad and seen[0][2] is not None
        assert seen[1] == (good, 20, None)

    def test_dry_run_touches_nothing(self, tmp_path):
        cache = write_file(tmp_path / "cache" / "blob", 2 * MIB).parent

        result = clean_items([_item(cache, 2 * MIB)], dry_run=True)

        assert cache.exists()
        assert result.dry_run
        assert result.freed_bytes == 2 * MIB
        assert result.items_removed == 1

    def test_symlink_removed_not_target(self, tmp_path):
        target = write_file(tmp_path / "real" / "data", 100)
        link = tmp_path / "link"
        os.symlink(target.parent, link)

        clean_items([_item(link, 100)])

        assert not link.exists() and not link.is_symlink()
        assert target.exists()
