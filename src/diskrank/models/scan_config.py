"""Scan configuration dataclass."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from diskrank.settings import Settings

DEFAULT_MAX_DEPTH = 3
DEFAULT_BUDGET = 60.0
DEFAULT_TOP_N = 16
DEFAULT_FPS = 2

_WINDOWS_EXCLUSIONS = [
    "C:\\Windows",
    "C:\\ProgramData",
    "C:\\$Recycle.Bin",
    "C:\\System Volume Information",
    "C:\\Recovery",
    "C:\\pagefile.sys",
    "C:\\hiberfil.sys",
]

_POSIX_EXCLUSIONS = ["/proc", "/sys", "/dev", "/run"]


def default_root() -> Path:
    """Return the filesystem root scanned when none is given."""
    return Path("C:\\") if os.name == "nt" else Path("/")


def default_exclusions() -> list[str]:
    """Return the platform deny-list of pseudo and system trees."""
    return list(_WINDOWS_EXCLUSIONS if os.name == "nt" else _POSIX_EXCLUSIONS)


@dataclass(slots=True)
class ScanConfig:
    """Parameters for one scan run."""

    root: Path = field(default_factory=default_root)
    max_depth: int = DEFAULT_MAX_DEPTH
    exclusions: list[str] = field(default_factory=default_exclusions)
    budget: float = DEFAULT_BUDGET
    top_n: int = DEFAULT_TOP_N
    fps: int = DEFAULT_FPS
    max_workers: int | None = None

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if isinstance(self.exclusions, str):
            raise ValueError("exclusions must be a list of paths")
        self.exclusions = [str(p) for p in self.exclusions]
        for name in ("max_depth", "top_n", "fps"):
            _require_int(name, getattr(self, name))
        if self.max_workers is not None:
            _require_int("max_workers", self.max_workers)
        if isinstance(self.budget, bool) or not isinstance(self.budget, (int, float)):
            raise ValueError(f"budget must be a number of seconds, got {self.budget!r}")
        self.budget = float(self.budget)
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.budget < 0:
            raise ValueError(f"budget must be >= 0, got {self.budget}")
        if self.top_n <= 0:
            raise ValueError(f"top_n must be > 0, got {self.top_n}")
        if self.fps <= 0:
            raise ValueError(f"fps must be > 0, got {self.fps}")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"max_workers must be > 0, got {self.max_workers}")

    @property
    def refresh_interval(self) -> float:
        """Seconds between two redraws of the live view."""
        return 1.0 / self.fps

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> ScanConfig:
        """Build a config from persisted ``scan.*`` settings.

        Keyword overrides win over settings; ``None`` overrides are
        ignored so CLI options left unset fall through.
        """
        values: dict[str, Any] = {}
        for key in ("root", "max_depth", "exclusions", "budget", "top_n", "fps", "max_workers"):
            value = settings.get(f"scan.{key}")
            if value is not None:
                values[key] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def as_dict(self) -> dict[str, Any]:
        """Plain representation for display and JSON output."""
        return {
            "root": str(self.root),
            "max_depth": self.max_depth,
            "exclusions": list(self.exclusions),
            "budget": self.budget,
            "top_n": self.top_n,
            "fps": self.fps,
            "max_workers": self.max_workers,
        }


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
