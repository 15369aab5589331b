"""Collect, dispatch and wait: the full scan pipeline."""

from __future__ import annotations

import logging
import time
from typing import Callable

from diskrank.core.collector import TargetCollector
from diskrank.core.dispatcher import Dispatcher, EntryCallback
from diskrank.core.exclusions import ExclusionFilter
from diskrank.core.registry import ResultRegistry
from diskrank.core.sizing import SizeEngine
from diskrank.models.result_entry import ResultEntry
from diskrank.models.scan_config import ScanConfig

log = logging.getLogger(__name__)

TickCallback = Callable[[ResultRegistry], None]


class ScanEngine:
    """Orchestrates target collection and concurrent sizing for one root."""

    def __init__(self, config: ScanConfig) -> None:
        self.config = config
        self.exclusions = ExclusionFilter(config.exclusions)

    def collect(self) -> ResultRegistry:
        """Walk the root and register its targets."""
        collector = TargetCollector(self.exclusions, self.config.max_depth)
        return collector.collect(self.config.root)

    def dispatch(self, registry: ResultRegistry, on_result: EntryCallback | None = None) -> Dispatcher:
        """Start one size computation per target and return the running dispatcher."""
        sizer = SizeEngine(registry, budget=self.config.budget)
        dispatcher = Dispatcher(registry, sizer, max_workers=self.config.max_workers, on_result=on_result)
        dispatcher.start()
        return dispatcher

    def run(
        self,
        on_tick: TickCallback | None = None,
        interval: float | None = None,
    ) -> list[ResultEntry]:
        """Scan to completion and return the final top entries.

        ``on_tick`` is called every ``interval`` seconds while sizes are
        still being computed, and once more after the last one lands.
        """
        if interval is None:
            interval = self.config.refresh_interval

        registry = self.collect()
        dispatcher = self.dispatch(registry)

        try:
            while not registry.is_complete():
                if on_tick:
                    on_tick(registry)
                time.sleep(interval)

            if on_tick:
                on_tick(registry)
        finally:
            dispatcher.join()
        log.info("Scan of %s finished: %d targets", self.config.root, registry.total_targets())
        return registry.top_n(self.config.top_n)
