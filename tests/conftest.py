"""Shared test fixtures."""

from __future__ import annotations

import pytest

from diskrank.settings import Settings


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Point settings at a temp XDG config dir and drop the cached singleton."""
    config_home = tmp_path / "xdg_config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return config_home / "diskrank" / "settings.json"


@pytest.fixture
def small_tree(tmp_path):
    """Root with files a (10 B), b (20 B) and directory d holding e (5 B)."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a").write_bytes(b"a" * 10)
    (root / "b").write_bytes(b"b" * 20)
    (root / "d").mkdir()
    (root / "d" / "e").write_bytes(b"e" * 5)
    return root


@pytest.fixture
def deep_tree(tmp_path):
    """Three levels of nesting with files scattered at every level."""
    root = tmp_path / "deep"
    (root / "x" / "y" / "z").mkdir(parents=True)
    (root / "top.bin").write_bytes(b"t" * 100)
    (root / "x" / "mid.bin").write_bytes(b"m" * 200)
    (root / "x" / "y" / "low.bin").write_bytes(b"l" * 300)
    (root / "x" / "y" / "z" / "bottom.bin").write_bytes(b"b" * 400)
    (root / "x" / "y" / "z" / "bottom2.bin").write_bytes(b"b" * 50)
    return root
