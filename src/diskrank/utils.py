"""Shared utility functions."""

from __future__ import annotations

import os
from pathlib import Path

_GB = 1024.0 * 1024.0 * 1024.0


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def bytes_to_gb(size_bytes: int) -> float:
    """Convert a byte count to binary gigabytes."""
    return size_bytes / _GB


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
