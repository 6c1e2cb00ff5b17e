"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..records import TimestampedURL


class BaseExporter(ABC):
    """Uniform output contract for surviving archive records."""

    @abstractmethod
    def export(self, record: TimestampedURL) -> None:
        """Emit a single record."""

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data to destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""


__all__ = ["BaseExporter"]
