"""Thread-safe ranked store of per-target size results."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Iterator

from diskrank.models.result_entry import ResultEntry

log = logging.getLogger(__name__)


class ResultRegistry:
    """Holds one :class:`ResultEntry` per target path.

    Every public method takes the same lock, so writers and readers
    always see whole entries. Readers receive copies; the entries
    themselves never leave the registry.
    """

    def __init__(self) -> None:
        self._entries: dict[Path, ResultEntry] = {}
        self._lock = threading.Lock()
        self._completed = 0
        self._frozen = False

    def add_target(self, path: Path | str) -> bool:
        """Register a pending target. Returns False for duplicates or once frozen."""
        path = Path(path)
        with self._lock:
            if self._frozen:
                log.warning("Registry is frozen, not adding target %s", path)
                return False
            if path in self._entries:
                log.debug("Target %s already registered, skipping duplicate", path)
                return False
            self._entries[path] = ResultEntry(path=path)
        return True

    def freeze(self) -> None:
        """End the collection phase; the target count is fixed afterwards."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        with self._lock:
            return self._frozen

    def complete(self, path: Path | str, size_bytes: int, is_partial: bool, elapsed: float) -> bool:
        """Record the outcome for ``path``.

        Only the first completion is applied; repeated calls are ignored.
        Returns True when this call marked the entry calculated.
        """
        path = Path(path)
        with self._lock:
            entry = self._entries.get(path)
            if entry is None:
                log.warning("Completion for unknown target %s ignored", path)
                return False
            if entry.calculated:
                return False
            entry.size_bytes = size_bytes
            entry.is_partial = is_partial
            entry.elapsed = elapsed
            entry.calculated = True
            self._completed += 1
        return True

    def get(self, path: Path | str) -> ResultEntry | None:
        """Return a copy of the entry for ``path``, if registered."""
        with self._lock:
            entry = self._entries.get(Path(path))
            return replace(entry) if entry is not None else None

    def top_n(self, n: int) -> list[ResultEntry]:
        """Up to ``n`` entries by descending size, ties in insertion order.

        Pending entries rank with size 0; check ``calculated`` to tell
        them apart from genuinely empty targets.
        """
        if n <= 0:
            return []
        with self._lock:
            ranked = sorted(self._entries.values(), key=lambda e: e.size_bytes, reverse=True)
            return [replace(e) for e in ranked[:n]]

    def snapshot(self) -> list[ResultEntry]:
        """Every entry, ranked like :meth:`top_n`."""
        with self._lock:
            ranked = sorted(self._entries.values(), key=lambda e: e.size_bytes, reverse=True)
            return [replace(e) for e in ranked]

    def paths(self) -> list[Path]:
        """Registered target paths in insertion order."""
        with self._lock:
            return list(self._entries)

    def is_complete(self) -> bool:
        """True once every registered target is calculated."""
        with self._lock:
            return self._completed == len(self._entries)

    def total_targets(self) -> int:
        with self._lock:
            return len(self._entries)

    def completed_targets(self) -> int:
        with self._lock:
            return self._completed

    def can_stop_early(self, accumulated: int) -> bool:
        """Whether a running computation may report ``accumulated`` as partial.

        Holds only when the caller is the last pending target and its
        running total already beats the current leader. Both facts are
        read under one lock acquisition.
        """
        with self._lock:
            if self._completed != len(self._entries) - 1:
                return False
            leader = max(e.size_bytes for e in self._entries.values())
            return accumulated > leader

    def __len__(self) -> int:
        return self.total_targets()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        with self._lock:
            return Path(path) in self._entries

    def __iter__(self) -> Iterator[ResultEntry]:
        return iter(self.snapshot())
