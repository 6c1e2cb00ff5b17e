"""Archive source adapters and their registry."""

from __future__ import annotations

from ...config import HarvestSettings
from ..fetcher import Fetcher
from .base import SourceFetcher
from .commoncrawl import CommonCrawlSource
from .wayback import WaybackSource


def build_sources(settings: HarvestSettings, fetcher: Fetcher) -> list[SourceFetcher]:
    """Instantiate the archives enabled in ``settings``, in configured order."""

    sources: list[SourceFetcher] = []
    for name in settings.sources:
        if name == WaybackSource.name:
            sources.append(WaybackSource(fetcher, settings.wayback_endpoint))
        elif name == CommonCrawlSource.name:
            sources.append(
                CommonCrawlSource(
                    fetcher, settings.commoncrawl_endpoint, settings.commoncrawl_index
                )
            )
        else:
            raise ValueError(f"Unsupported archive source: {name}")
    return sources


__all__ = ["CommonCrawlSource", "SourceFetcher", "WaybackSource", "build_sources"]
