"""Line-oriented exporter writing harvested URLs to a text stream."""

from __future__ import annotations

import sys
from typing import TextIO

import structlog

from ..records import TimestampedURL, format_timestamp
from .base import BaseExporter


class StreamExporter(BaseExporter):
    """Write one line per record, ``"<timestamp> <url>"`` in date mode."""

    def __init__(
        self,
        stream: TextIO | None = None,
        dates: bool = False,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.dates = dates
        self.logger = logger or structlog.get_logger("archive_harvester.exporter")
        self.count = 0

    def export(self, record: TimestampedURL) -> None:
        self.stream.write(self.format(record) + "\n")
        self.count += 1

    def format(self, record: TimestampedURL) -> str:
        if not self.dates:
            return record.url
        rendered, parsed = format_timestamp(record.date)
        if not parsed:
            self.logger.warning("date_parse_failed", date=record.date, url=record.url)
        return f"{rendered} {record.url}"

    def flush(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        # stdout belongs to the process; other streams are owned by the caller
        self.flush()


__all__ = ["StreamExporter"]
