"""Shared fixtures: settings builder, stub archive sources, collecting exporter."""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterable, Iterator

import pytest

from archive_harvester.config import HarvestSettings
from archive_harvester.engine import SourceFetcher, ThreadPoolManager, TimestampedURL
from archive_harvester.engine.exporter import BaseExporter
from archive_harvester.logging_conf import configure_logging


class StubSource(SourceFetcher):
    """Archive source returning canned records, failing, or waiting on a gate."""

    def __init__(
        self,
        name: str,
        records: Iterable[TimestampedURL | str] = (),
        error: Exception | None = None,
        gate: threading.Event | None = None,
    ) -> None:
        self.name = name
        self.records = [
            record if isinstance(record, TimestampedURL) else TimestampedURL(url=record, date="20200101000000")
            for record in records
        ]
        self.error = error
        self.gate = gate
        self.calls: list[tuple[str, bool]] = []

    def fetch(self, domain: str, exclude_subdomains: bool) -> list[TimestampedURL]:
        self.calls.append((domain, exclude_subdomains))
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return list(self.records)


class ListExporter(BaseExporter):
    def __init__(self) -> None:
        self.records: list[TimestampedURL] = []
        self.flushes = 0

    def export(self, record: TimestampedURL) -> None:
        self.records.append(record)

    def flush(self) -> None:
        self.flushes += 1

    def close(self) -> None:
        return

    @property
    def urls(self) -> list[str]:
        return [record.url for record in self.records]


@pytest.fixture(scope="session", autouse=True)
def _configured_logging() -> None:
    configure_logging()


@pytest.fixture
def make_settings() -> Callable[..., HarvestSettings]:
    def _builder(**overrides: Any) -> HarvestSettings:
        return HarvestSettings(**overrides)

    return _builder


@pytest.fixture
def stub_source() -> Callable[..., StubSource]:
    return StubSource


@pytest.fixture
def list_exporter() -> ListExporter:
    return ListExporter()


@pytest.fixture
def thread_pool() -> Iterator[ThreadPoolManager]:
    manager = ThreadPoolManager(default_workers=2)
    yield manager
    manager.shutdown()
