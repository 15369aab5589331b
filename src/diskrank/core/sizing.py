"""Per-target size computation with a time-boxed early exit."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from diskrank.core.registry import ResultRegistry
from diskrank.models.scan_config import DEFAULT_BUDGET

log = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(slots=True, frozen=True)
class SizeOutcome:
    """Result of sizing one target."""

    size_bytes: int
    is_partial: bool
    elapsed: float


class _Walk:
    """Mutable state of one directory computation."""

    __slots__ = ("started", "total", "stopped")

    def __init__(self, started: float) -> None:
        self.started = started
        self.total = 0
        self.stopped = False


class SizeEngine:
    """Computes the byte size of file and directory targets.

    Directory walks never follow symlinks. Once a walk has run longer
    than ``budget`` seconds it asks the registry before every entry
    whether it may stop; that is only allowed for the last pending
    target whose running total already exceeds the current leader.
    The walk then returns what it has, flagged partial. Otherwise it
    runs to the end however long that takes.
    """

    def __init__(
        self,
        registry: ResultRegistry,
        budget: float = DEFAULT_BUDGET,
        clock: Clock = time.monotonic,
    ) -> None:
        self.registry = registry
        self.budget = budget
        self._clock = clock

    def compute(self, path: Path | str) -> SizeOutcome:
        """Size ``path`` without touching the registry's entry for it."""
        path = Path(path)
        started = self._clock()
        try:
            is_dir = path.is_dir() and not path.is_symlink()
        except (OSError, ValueError):
            is_dir = False

        if is_dir:
            walk = _Walk(started)
            self._walk(path, walk)
            size, partial = walk.total, walk.stopped
        else:
            size, partial = _file_size(path), False

        return SizeOutcome(size_bytes=size, is_partial=partial, elapsed=self._clock() - started)

    def measure(self, path: Path | str) -> SizeOutcome:
        """Compute the size of ``path`` and record it in the registry."""
        outcome = self.compute(path)
        self.registry.complete(path, outcome.size_bytes, outcome.is_partial, outcome.elapsed)
        return outcome

    def _walk(self, directory: str | Path, walk: _Walk) -> None:
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    if self._should_stop(walk):
                        log.info(
                            "Stopping early in %s after %.1fs with %d bytes counted",
                            directory, self._clock() - walk.started, walk.total,
                        )
                        walk.stopped = True
                        return
                    try:
                        if entry.is_symlink():
                            continue
                        if entry.is_dir(follow_symlinks=False):
                            self._walk(entry.path, walk)
                            if walk.stopped:
                                return
                        elif entry.is_file(follow_symlinks=False):
                            walk.total += entry.stat(follow_symlinks=False).st_size
                    except OSError as e:
                        log.debug("Skipping %s: %s", entry.path, e)
        except OSError as e:
            log.debug("Cannot list %s: %s", directory, e)

    def _should_stop(self, walk: _Walk) -> bool:
        if self._clock() - walk.started < self.budget:
            return False
        return self.registry.can_stop_early(walk.total)


def _file_size(path: Path) -> int:
    try:
        return path.lstat().st_size
    except (OSError, ValueError) as e:
        log.debug("Cannot stat %s: %s", path, e)
        return 0
