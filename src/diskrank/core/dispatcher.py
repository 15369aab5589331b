"""Fan-out of one size computation per registered target."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable

from diskrank.core.registry import ResultRegistry
from diskrank.core.sizing import SizeEngine
from diskrank.models.result_entry import ResultEntry

log = logging.getLogger(__name__)

EntryCallback = Callable[[ResultEntry], None]


class Dispatcher:
    """Runs :meth:`SizeEngine.measure` for every target concurrently.

    By default each target gets its own worker thread. Passing
    ``max_workers`` bounds the pool instead; each target is still
    computed independently and completed exactly once.
    """

    def __init__(
        self,
        registry: ResultRegistry,
        engine: SizeEngine,
        max_workers: int | None = None,
        on_result: EntryCallback | None = None,
    ) -> None:
        self.registry = registry
        self.engine = engine
        self.max_workers = max_workers
        self.on_result = on_result
        self._executor: ThreadPoolExecutor | None = None
        self._futures: list[Future[None]] = []

    def start(self) -> None:
        """Freeze the registry and launch all computations."""
        if self._executor is not None:
            raise RuntimeError("Dispatcher already started")

        self.registry.freeze()
        targets = self.registry.paths()
        workers = self.max_workers or max(1, len(targets))
        log.info("Dispatching %d targets on %d workers", len(targets), workers)

        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="diskrank")
        self._futures = [self._executor.submit(self._run, path) for path in targets]

    def _run(self, path: Path) -> None:
        try:
            self.engine.measure(path)
        except Exception:
            log.exception("Size computation failed for %s", path)
            self.registry.complete(path, 0, False, 0.0)

        if self.on_result:
            entry = self.registry.get(path)
            if entry is not None:
                self.on_result(entry)

    @property
    def running(self) -> bool:
        """Whether any launched computation has not finished yet."""
        return any(not f.done() for f in self._futures)

    def join(self, timeout: float | None = None) -> bool:
        """Wait for every launched computation.

        Returns False if ``timeout`` expired first; the pool is only
        shut down once everything finished.
        """
        if self._executor is None:
            return True
        _, pending = wait(self._futures, timeout=timeout)
        if pending:
            return False
        self._executor.shutdown(wait=True)
        return True
