"""Fan-in of concurrent archive source fetches into one record stream."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from queue import Queue
from threading import Lock
from typing import Generator, Generic, Sequence, TypeVar

from ..logging_conf import source_logger
from .records import TimestampedURL
from .sources.base import SourceFetcher
from .thread_pool import ThreadPoolManager
from .urls import is_subdomain

T = TypeVar("T")

_CLOSED = object()


class ChannelClosed(RuntimeError):
    """Raised when sending on a closed channel."""


class HandoffChannel(Generic[T]):
    """Unbuffered many-producer, single-consumer channel.

    ``send`` returns only once the consumer has taken the item. Iterating the
    channel yields items until ``close`` is called. If the consumer stops
    iterating early the channel is abandoned and later sends are dropped, so
    producers still run to completion.
    """

    def __init__(self) -> None:
        self._slot: Queue = Queue(maxsize=1)
        self._taken: Queue = Queue(maxsize=1)
        self._send_lock = Lock()
        self._closed = False
        self._abandoned = False

    def send(self, item: T) -> None:
        with self._send_lock:
            if self._closed:
                raise ChannelClosed("send on closed channel")
            if self._abandoned:
                return
            self._slot.put(item)
            self._taken.get()

    def close(self) -> None:
        with self._send_lock:
            if self._closed:
                return
            self._closed = True
            if not self._abandoned:
                self._slot.put(_CLOSED)

    @property
    def closed(self) -> bool:
        return self._closed

    def _abandon(self) -> None:
        self._abandoned = True
        # release a producer parked between put and ack
        self._taken.put(None)

    def __iter__(self) -> Generator[T, None, None]:
        drained = False
        try:
            while True:
                item = self._slot.get()
                if item is _CLOSED:
                    drained = True
                    return
                self._taken.put(None)
                yield item
        finally:
            if not drained:
                self._abandon()


@dataclass
class MergeStats:
    """Counters filled in by producer threads during one merge."""

    fetched: dict[str, int] = field(default_factory=dict)
    failed_sources: list[str] = field(default_factory=list)
    filtered_subdomains: int = 0
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def record_fetch(self, source_name: str, count: int) -> None:
        with self._lock:
            self.fetched[source_name] = count

    def record_failure(self, source_name: str) -> None:
        with self._lock:
            self.failed_sources.append(source_name)

    def record_filtered(self) -> None:
        with self._lock:
            self.filtered_subdomains += 1


class FanInMerger:
    """Run every source concurrently and serialise their records.

    Each source fetches its full result list before pushing records one by
    one into a handoff channel. The stream ends once every source has
    finished, whether it succeeded or failed. A failing source contributes
    nothing and its error never reaches the consumer.
    """

    def __init__(self, sources: Sequence[SourceFetcher], thread_pool: ThreadPoolManager) -> None:
        self.sources = list(sources)
        self.thread_pool = thread_pool

    def merge(
        self,
        domain: str,
        exclude_subdomains: bool = False,
        stats: MergeStats | None = None,
    ) -> Generator[TimestampedURL, None, None]:
        stats = stats if stats is not None else MergeStats()
        channel: HandoffChannel[TimestampedURL] = HandoffChannel()
        if not self.sources:
            channel.close()
            return iter(channel)

        executor = self.thread_pool.get("sources", min_workers=len(self.sources))
        remaining = len(self.sources)
        remaining_lock = Lock()

        def _finished(_future: Future) -> None:
            nonlocal remaining
            with remaining_lock:
                remaining -= 1
                last = remaining == 0
            if last:
                channel.close()

        for source in self.sources:
            future = executor.submit(
                self._produce, source, domain, exclude_subdomains, channel, stats
            )
            future.add_done_callback(_finished)
        return iter(channel)

    @staticmethod
    def _produce(
        source: SourceFetcher,
        domain: str,
        exclude_subdomains: bool,
        channel: HandoffChannel[TimestampedURL],
        stats: MergeStats,
    ) -> None:
        logger = source_logger(source.name)
        try:
            records = source.fetch(domain, exclude_subdomains)
        except Exception as exc:  # noqa: BLE001
            logger.debug("source_failed", domain=domain, error=str(exc))
            stats.record_failure(source.name)
            return
        stats.record_fetch(source.name, len(records))
        for record in records:
            if exclude_subdomains and is_subdomain(record.url, domain):
                stats.record_filtered()
                continue
            channel.send(record)


__all__ = ["ChannelClosed", "FanInMerger", "HandoffChannel", "MergeStats"]
