"""Tests for duplicate file detection."""

from __future__ import annotations

import cleanser.sweeps.duplicates as duplicates
from cleanser.core.classifier import MIB
from cleanser.models.item import CleanCategory, FileHash, RiskLevel
from cleanser.models.scan_result import ScanConfig
from cleanser.sweeps import DuplicatesSweep, FindingCollector
from cleanser.sweeps.duplicates import collect_candidates, group_duplicates, sha256_file

from conftest import write_file


def _run(root):
    collector = FindingCollector()
    DuplicatesSweep().run([root], ScanConfig(paths=[root], find_duplicates=True), collector)
    return collector.snapshot()


class TestHashing:
    def test_sha256_matches_known_digest(self, tmp_path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert sha256_file(path) == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_candidates_exclude_small_files(self, tmp_path):
        write_file(tmp_path / "big.bin", 2 * MIB)
        write_file(tmp_path / "floor.bin", MIB)

        assert collect_candidates([tmp_path], None) == {tmp_path / "big.bin": 2 * MIB}

    def test_unique_sizes_are_not_hashed(self, tmp_path, monkeypatch):
        write_file(tmp_path / "a.bin", 2 * MIB)
        write_file(tmp_path / "b.bin", 3 * MIB)
        calls = []
        monkeypatch.setattr(duplicates, "sha256_file", lambda p: calls.append(p) or "x")

        assert group_duplicates(collect_candidates([tmp_path], None)) == {}
        assert calls == []


class TestDuplicatesSweep:
    def test_copies_reported_against_first_path(self, tmp_path):
        a = write_file(tmp_path / "a.bin", 2 * MIB, fill=b"a")
        b = write_file(tmp_path / "b.bin", 2 * MIB, fill=b"a")
        write_file(tmp_path / "c.bin", 2 * MIB, fill=b"c")

        items = _run(tmp_path)

        assert len(items) == 1
        item = items[0]
        assert item.path == b
        assert item.size == 2 * MIB
        assert item.category is CleanCategory.DUPLICATE_FILES
        assert item.risk_level is RiskLevel.RISKY
        assert item.description == f"Duplicate of {a} (2.0 MB)"

    def test_three_copies(self, tmp_path):
        for name in ("z.bin", "sub/y.bin", "x.bin"):
            write_file(tmp_path / name, 2 * MIB, fill=b"q")

        items = _run(tmp_path)

        assert sorted(i.path for i in items) == [tmp_path / "x.bin", tmp_path / "z.bin"]
        assert all(str(tmp_path / "sub" / "y.bin") in i.description for i in items)

    def test_small_files_ignored(self, tmp_path):
        write_file(tmp_path / "a.txt", 1024, fill=b"s")
        write_file(tmp_path / "b.txt", 1024, fill=b"s")

        assert _run(tmp_path) == []

    def test_unreadable_file_dropped(self, tmp_path, monkeypatch):
        a = write_file(tmp_path / "a.bin", 2 * MIB, fill=b"a")
        write_file(tmp_path / "b.bin", 2 * MIB, fill=b"a")
        c = write_file(tmp_path / "c.bin", 2 * MIB, fill=b"a")
        real = duplicates.sha256_file

        def flaky(path):
            if path == a:
                raise PermissionError("denied")
            return real(path)

        monkeypatch.setattr(duplicates, "sha256_file", flaky)

        items = _run(tmp_path)

        assert [i.path for i in items] == [c]
        assert "b.bin" in items[0].description

    def test_group_key_includes_size(self, tmp_path):
        write_file(tmp_path / "a.bin", 2 * MIB, fill=b"a")
        write_file(tmp_path / "b.bin", 2 * MIB, fill=b"a")

        groups = group_duplicates(collect_candidates([tmp_path], None))

        (key,) = groups
        assert isinstance(key, FileHash)
        assert key.size == 2 * MIB

    def test_disabled_by_default(self):
        assert not DuplicatesSweep().is_enabled(ScanConfig())
        assert DuplicatesSweep().is_enabled(ScanConfig(find_duplicates=True))
