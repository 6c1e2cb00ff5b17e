"""Archive source Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..records import TimestampedURL


class SourceFetcher(ABC):
    """Uniform contract for archive adapters consumed by the fan-in merger."""

    name: str = "source"

    @abstractmethod
    def fetch(self, domain: str, exclude_subdomains: bool) -> list[TimestampedURL]:
        """Return every capture the archive holds for ``domain``.

        Raises on network failure or an unusable top-level response; single
        malformed entries are skipped instead.
        """

    @staticmethod
    def url_pattern(domain: str, exclude_subdomains: bool) -> str:
        wildcard = "" if exclude_subdomains else "*."
        return f"{wildcard}{domain}/*"


__all__ = ["SourceFetcher"]
