"""Tests for data models."""

from __future__ import annotations

from pathlib import Path

import pytest

from cleanser.models.item import CleanableItem, CleanCategory, FileHash, RiskLevel, category_risk
from cleanser.models.scan_result import ScanConfig, ScanResults, ScanSpeed


class TestRiskLevel:
    def test_ordering(self):
        assert RiskLevel.SAFE < RiskLevel.MODERATE < RiskLevel.RISKY
        assert sorted([RiskLevel.RISKY, RiskLevel.SAFE, RiskLevel.MODERATE]) == list(RiskLevel)

    def test_str_and_parse(self):
        assert str(RiskLevel.MODERATE) == "moderate"
        assert RiskLevel.parse("Risky") is RiskLevel.RISKY
        with pytest.raises(ValueError):
            RiskLevel.parse("extreme")


class TestCategoryRisk:
    @pytest.mark.parametrize(
        "category",
        [
            CleanCategory.SYSTEM_CACHE,
            CleanCategory.BROWSER_CACHE,
            CleanCategory.APP_CACHE,
            CleanCategory.PIP_CACHE,
            CleanCategory.BREW_CACHE,
            CleanCategory.CARGO_CACHE,
            CleanCategory.SYSTEM_LOGS,
            CleanCategory.APP_LOGS,
        ],
    )
    def test_caches_and_logs_are_safe(self, category):
        assert category_risk(category) is RiskLevel.SAFE

    def test_artifacts_are_moderate(self):
        assert category_risk(CleanCategory.NODE_MODULES) is RiskLevel.MODERATE
        assert category_risk(CleanCategory.BUILD_ARTIFACTS, "target") is RiskLevel.MODERATE

    def test_interpreter_caches_are_safe(self):
        assert category_risk(CleanCategory.BUILD_ARTIFACTS, "__pycache__") is RiskLevel.SAFE
        assert category_risk(CleanCategory.BUILD_ARTIFACTS, ".pytest_cache") is RiskLevel.SAFE

    def test_large_and_duplicate_files_are_risky(self):
        assert category_risk(CleanCategory.LARGE_FILES) is RiskLevel.RISKY
        assert category_risk(CleanCategory.DUPLICATE_FILES) is RiskLevel.RISKY

    def test_every_category_has_label_and_risk(self):
        for category in CleanCategory:
            assert category.label
            assert isinstance(category_risk(category), RiskLevel)


class TestScanConfig:
    def test_default_depths(self):
        assert ScanConfig(speed=ScanSpeed.QUICK).effective_max_depth == 3
        assert ScanConfig(speed=ScanSpeed.NORMAL).effective_max_depth == 6
        assert ScanConfig(speed=ScanSpeed.THOROUGH).effective_max_depth is None

    def test_explicit_depth_overrides_speed(self):
        assert ScanConfig(speed=ScanSpeed.THOROUGH, max_depth=2).effective_max_depth == 2

    def test_min_size_bytes(self):
        assert ScanConfig(min_file_size_mb=2).min_file_size_bytes == 2 * 1024 * 1024


class TestScanResults:
    def test_from_items_sums_sizes(self):
        items = [
            CleanableItem(Path("/a"), 10, CleanCategory.APP_CACHE, RiskLevel.SAFE, "a"),
            CleanableItem(Path("/b"), 32, CleanCategory.LARGE_FILES, RiskLevel.RISKY, "b"),
        ]
        results = ScanResults.from_items(items, ScanSpeed.QUICK)
        assert results.total_size == 42
        assert results.items == tuple(items)

    def test_dict_round_trip(self):
        item = CleanableItem(Path("/x/node_modules"), 5, CleanCategory.NODE_MODULES, RiskLevel.MODERATE, "d")
        results = ScanResults.from_items([item], ScanSpeed.NORMAL)

        data = results.to_dict()
        assert data["items"][0]["risk_level"] == "moderate"
        assert data["items"][0]["category"] == "node_modules"
        assert data["scan_speed"] == "normal"
        assert ScanResults.from_dict(data) == results

    def test_items_are_immutable(self):
        item = CleanableItem(Path("/a"), 1, CleanCategory.APP_CACHE, RiskLevel.SAFE, "a")
        with pytest.raises(AttributeError):
            item.size = 2  # type: ignore[misc]


def test_file_hash_equality_includes_size():
    assert FileHash("abc", 10) == FileHash("abc", 10)
    assert FileHash("abc", 10) != FileHash("abc", 11)
    assert len({FileHash("abc", 10), FileHash("abc", 10)}) == 1
