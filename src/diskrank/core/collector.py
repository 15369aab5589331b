"""Bounded-depth traversal that picks the paths sized independently."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from diskrank.core.exclusions import ExclusionFilter
from diskrank.core.registry import ResultRegistry

log = logging.getLogger(__name__)


def is_target_unit(path: Path, depth: int, max_depth: int) -> bool:
    """Decide whether ``path`` at ``depth`` below the root is a target.

    Symlinks never are. With ``max_depth == 0`` only a regular file can
    be a target; otherwise anything at ``max_depth`` is, and so is a
    regular file that ends above it. Shallower directories are recursed
    into instead. Classification errors yield ``False``.
    """
    try:
        if path.is_symlink():
            return False
        if max_depth == 0:
            return path.is_file()
        if depth == max_depth:
            return True
        return depth < max_depth and path.is_file()
    except (OSError, ValueError):
        return False


class TargetCollector:
    """Walks the tree from a root and registers every target unit."""

    def __init__(self, exclusions: ExclusionFilter, max_depth: int) -> None:
        self.exclusions = exclusions
        self.max_depth = max_depth

    def collect(self, root: Path | str, registry: ResultRegistry | None = None) -> ResultRegistry:
        """Populate ``registry`` (a new one by default) with targets under ``root``."""
        if registry is None:
            registry = ResultRegistry()
        self._visit(Path(root), 0, registry)
        log.info("Collected %d targets under %s", registry.total_targets(), root)
        return registry

    def _visit(self, path: Path, depth: int, registry: ResultRegistry) -> None:
        if depth > self.max_depth or self.exclusions.is_excluded(path):
            return

        if is_target_unit(path, depth, self.max_depth):
            registry.add_target(path)

        if depth >= self.max_depth:
            return

        try:
            if path.is_symlink() or not path.is_dir():
                return
            with os.scandir(path) as it:
                children = [Path(entry.path) for entry in it]
        except OSError as e:
            log.debug("Skipping subtree %s: %s", path, e)
            return

        for child in children:
            self._visit(child, depth + 1, registry)
