"""Ranked result entry dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class ResultEntry:
    """Size record for a single target path.

    ``size_bytes`` is only meaningful once ``calculated`` is set; until
    then readers should show the entry as pending rather than as empty.
    ``is_partial`` marks an undercount from an early-terminated directory
    walk, and ``elapsed`` is the wall-clock duration of the computation
    in seconds.
    """

    path: Path
    size_bytes: int = 0
    calculated: bool = False
    is_partial: bool = False
    elapsed: float = 0.0
