"""Live terminal view of the ranking while sizes are computed."""

from __future__ import annotations

import sys
from typing import TextIO

import click

from diskrank.core.registry import ResultRegistry
from diskrank.models.result_entry import ResultEntry
from diskrank.utils import bytes_to_gb

_CURSOR_HOME = "\033[H"
_CLEAR_EOL = "\033[K"


def format_progress(completed: int, total: int) -> str:
    percent = completed * 100 // total if total else 0
    return f"Progress: {completed}/{total} ({percent}%)"


def format_row(rank: int, entry: ResultEntry) -> str:
    """One ranking line, e.g. ``1. /var : 2.50 GB+ (61.0 sec)``."""
    if not entry.calculated:
        return f"{rank}. {entry.path} : calculating..."
    partial = "+" if entry.is_partial else ""
    return f"{rank}. {entry.path} : {bytes_to_gb(entry.size_bytes):.2f} GB{partial} ({entry.elapsed:.1f} sec)"


class LiveRenderer:
    """Redraws progress and the top ``limit`` entries in place.

    On a terminal each frame starts at the top-left corner and every
    line clears what the previous frame left behind. Other streams get
    plain consecutive frames.
    """

    def __init__(self, limit: int, stream: TextIO | None = None, live: bool = True) -> None:
        self.limit = limit
        self.stream = stream or sys.stdout
        self.live = live and self.stream.isatty()
        self._started = False

    def frame(self, registry: ResultRegistry) -> list[str]:
        lines = [
            format_progress(registry.completed_targets(), registry.total_targets()),
            "",
            f"=== Top {self.limit} Largest Files/Folders ===",
        ]
        entries = registry.top_n(self.limit)
        for rank in range(1, self.limit + 1):
            lines.append(format_row(rank, entries[rank - 1]) if rank <= len(entries) else "")
        return lines

    def draw(self, registry: ResultRegistry) -> None:
        lines = self.frame(registry)
        if self.live:
            if not self._started:
                click.clear()
                self._started = True
            text = _CURSOR_HOME + "".join(f"{line}{_CLEAR_EOL}\n" for line in lines)
        else:
            text = "".join(f"{line}\n" for line in lines)
        click.echo(text, file=self.stream, nl=False)
        self.stream.flush()
