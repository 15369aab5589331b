"""Tests for settings and scan configuration."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from diskrank.models.scan_config import ScanConfig, default_exclusions, default_root
from diskrank.settings import Settings


class TestSettings:
    def test_missing_file_gives_defaults(self, isolate_settings):
        settings = Settings()
        assert settings.path == isolate_settings
        assert settings.get("scan.max_depth") is None
        assert settings.get("scan.max_depth", 3) == 3

    def test_set_persists_nested_key(self, isolate_settings):
        Settings().set("scan.top_n", 5)
        assert json.loads(isolate_settings.read_text()) == {"scan": {"top_n": 5}}
        assert Settings().get("scan.top_n") == 5

    def test_corrupt_file_is_ignored(self, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text("{not json")
        assert Settings().get("scan.top_n") is None

    def test_non_object_file_is_ignored(self, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text("[1, 2]")
        assert Settings().get("scan") is None

    def test_instance_is_singleton(self):
        assert Settings.instance() is Settings.instance()


class TestScanConfig:
    def test_defaults(self):
        config = ScanConfig()
        assert config.root == default_root()
        assert config.max_depth == 3
        assert config.top_n == 16
        assert config.fps == 2
        assert config.budget == 60.0
        assert config.max_workers is None
        assert config.exclusions == default_exclusions()
        assert config.refresh_interval == 0.5

    def test_platform_exclusions(self):
        if os.name == "nt":
            assert "C:\\Windows" in default_exclusions()
        else:
            assert "/proc" in default_exclusions()

    def test_from_settings_with_overrides(self, tmp_path):
        settings = Settings(tmp_path / "s.json")
        settings.set("scan.max_depth", 5)
        settings.set("scan.exclusions", ["/mnt"])
        settings.set("scan.top_n", 4)

        config = ScanConfig.from_settings(settings, top_n=8, budget=None, root=tmp_path)
        assert config.max_depth == 5
        assert config.exclusions == ["/mnt"]
        assert config.top_n == 8
        assert config.budget == 60.0
        assert config.root == tmp_path

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_depth": -1},
            {"budget": -0.5},
            {"top_n": 0},
            {"fps": 0},
            {"max_workers": 0},
            {"exclusions": "/proc"},
            {"top_n": 2.5},
            {"max_depth": 1.5},
            {"fps": True},
            {"max_workers": "4"},
            {"budget": "60"},
            {"budget": False},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ScanConfig(**kwargs)

    def test_integral_budget_becomes_float(self):
        config = ScanConfig(budget=30)
        assert config.budget == 30.0
        assert isinstance(config.budget, float)

    def test_as_dict(self, tmp_path):
        data = ScanConfig(root=tmp_path, exclusions=[Path("/x")]).as_dict()
        assert data["root"] == str(tmp_path)
        assert data["exclusions"] == ["/x"]
        json.dumps(data)
