"""Thread pool abstraction giving every archive source its own worker."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Dict


class ThreadPoolManager:
    """Manage named executors sized for the requested parallelism."""

    def __init__(self, default_workers: int = 4) -> None:
        self.default_workers = default_workers
        self._executors: Dict[str, ThreadPoolExecutor] = {}
        self._sizes: Dict[str, int] = {}
        self._lock = Lock()

    def get(self, name: str = "sources", min_workers: int | None = None) -> ThreadPoolExecutor:
        """Return the executor for ``name`` with at least ``min_workers`` threads.

        An executor too small for the request is retired (its running work
        finishes) and replaced by a larger one.
        """

        workers = max(self.default_workers, min_workers or 0)
        with self._lock:
            executor = self._executors.get(name)
            if executor is not None and self._sizes[name] >= workers:
                return executor
            if executor is not None:
                executor.shutdown(wait=False)
            executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix=f"harvester-{name}")
            self._executors[name] = executor
            self._sizes[name] = workers
            return executor

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            for executor in self._executors.values():
                executor.shutdown(wait=wait)
            self._executors.clear()
            self._sizes.clear()


__all__ = ["ThreadPoolManager"]
