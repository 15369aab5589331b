"""Tests for target selection and collection."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from diskrank.core.collector import TargetCollector, is_target_unit
from diskrank.core.exclusions import ExclusionFilter
from diskrank.core.registry import ResultRegistry


def _collect(root: Path, max_depth: int, exclusions=()) -> set[Path]:
    collector = TargetCollector(ExclusionFilter(exclusions), max_depth)
    return set(collector.collect(root).paths())


class TestIsTargetUnit:
    def test_symlink_is_never_a_target(self, small_tree):
        link = small_tree / "link"
        link.symlink_to(small_tree / "a")
        assert not is_target_unit(link, 1, 1)
        assert not is_target_unit(link, 0, 0)

    def test_depth_zero_accepts_only_files(self, small_tree):
        assert is_target_unit(small_tree / "a", 0, 0)
        assert not is_target_unit(small_tree, 0, 0)

    def test_path_at_max_depth_is_target_whatever_its_type(self, small_tree):
        assert is_target_unit(small_tree / "a", 1, 1)
        assert is_target_unit(small_tree / "d", 1, 1)

    def test_file_above_max_depth_is_target(self, small_tree):
        assert is_target_unit(small_tree / "a", 1, 3)

    def test_directory_above_max_depth_is_not_target(self, small_tree):
        assert not is_target_unit(small_tree / "d", 1, 3)

    def test_missing_path_is_not_target(self, tmp_path):
        assert not is_target_unit(tmp_path / "missing", 1, 3)

    def test_classification_error_is_not_target(self, small_tree, monkeypatch):
        def denied(self):
            raise PermissionError("denied")

        monkeypatch.setattr(Path, "is_symlink", denied)
        assert not is_target_unit(small_tree / "a", 1, 1)


class TestTargetCollector:
    def test_depth_one_scenario(self, small_tree):
        assert _collect(small_tree, 1) == {small_tree / "a", small_tree / "b", small_tree / "d"}

    def test_depth_zero_with_directory_root_has_no_targets(self, small_tree):
        assert _collect(small_tree, 0) == set()

    def test_depth_zero_with_file_root(self, small_tree):
        assert _collect(small_tree / "a", 0) == {small_tree / "a"}

    def test_shallow_files_are_kept_when_cutting_deeper(self, deep_tree):
        targets = _collect(deep_tree, 2)
        assert targets == {
            deep_tree / "top.bin",
            deep_tree / "x" / "mid.bin",
            deep_tree / "x" / "y",
        }

    def test_depth_beyond_tree_yields_only_files(self, deep_tree):
        targets = _collect(deep_tree, 10)
        assert all(p.is_file() for p in targets)
        assert len(targets) == 5

    def test_excluded_subtree_is_skipped_at_any_depth(self, deep_tree):
        for depth in range(0, 5):
            targets = _collect(deep_tree, depth, exclusions=[deep_tree / "X"])
            assert not any(p == deep_tree / "x" or deep_tree / "x" in p.parents for p in targets)

    def test_excluded_root_yields_nothing(self, deep_tree):
        assert _collect(deep_tree, 3, exclusions=[deep_tree]) == set()

    def test_symlinks_are_not_collected_or_descended(self, small_tree, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "big").write_bytes(b"o" * 1000)
        (small_tree / "to_dir").symlink_to(outside, target_is_directory=True)
        (small_tree / "to_file").symlink_to(small_tree / "a")

        targets = _collect(small_tree, 2)
        assert targets == {small_tree / "a", small_tree / "b", small_tree / "d" / "e"}

    def test_targets_go_into_given_registry(self, small_tree):
        registry = ResultRegistry()
        registry.add_target("/already/there")
        collector = TargetCollector(ExclusionFilter(), 1)

        result = collector.collect(small_tree, registry)
        assert result is registry
        assert registry.total_targets() == 4

    @pytest.mark.skipif(os.geteuid() == 0 if hasattr(os, "geteuid") else True,
                        reason="needs a non-root POSIX user for permission errors")
    def test_unreadable_subtree_does_not_stop_siblings(self, small_tree):
        locked = small_tree / "locked"
        locked.mkdir()
        (locked / "secret").write_bytes(b"s" * 7)
        locked.chmod(0)
        try:
            targets = _collect(small_tree, 2)
        finally:
            locked.chmod(0o755)
        assert small_tree / "d" / "e" in targets
        assert small_tree / "a" in targets
        assert not any(locked in p.parents for p in targets)
