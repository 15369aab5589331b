"""Administrative deny-list of paths that are never scanned."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

log = logging.getLogger(__name__)


def normalize(path: Path | str) -> str:
    """Return ``path`` made absolute, lexically normalized and case-folded.

    ``.`` and ``..`` are collapsed without touching the filesystem, so
    symlinks are not resolved.
    """
    return os.path.abspath(os.fspath(path)).casefold()


class ExclusionFilter:
    """Prefix match against a list of excluded paths, ignoring case.

    A path is excluded when it equals a configured prefix or lies
    beneath it; ``/proc`` excludes ``/proc/1`` but not ``/processes``.
    """

    def __init__(self, prefixes: Iterable[Path | str] = ()) -> None:
        self._prefixes: list[str] = []
        for prefix in prefixes:
            try:
                self._prefixes.append(normalize(prefix))
            except (OSError, ValueError) as e:
                log.warning("Ignoring unusable exclusion %r: %s", prefix, e)

    @property
    def prefixes(self) -> list[str]:
        return list(self._prefixes)

    def is_excluded(self, path: Path | str) -> bool:
        """Whether ``path`` falls under any excluded prefix.

        Paths that cannot be normalized are reported as excluded.
        """
        try:
            candidate = normalize(path)
        except (OSError, ValueError):
            log.debug("Cannot normalize %r, excluding it", path)
            return True
        return any(_under(candidate, prefix) for prefix in self._prefixes)

    def __len__(self) -> int:
        return len(self._prefixes)


def _under(candidate: str, prefix: str) -> bool:
    if candidate == prefix:
        return True
    if not prefix.endswith(os.sep):
        prefix += os.sep
    return candidate.startswith(prefix)
