"""Common Crawl index API adapter."""

from __future__ import annotations

import json

from ..fetcher import Fetcher
from ..records import TimestampedURL
from .base import SourceFetcher


class CommonCrawlSource(SourceFetcher):
    """Query one Common Crawl index; the answer is newline-delimited JSON."""

    name = "commoncrawl"

    def __init__(self, fetcher: Fetcher, endpoint: str, index: str) -> None:
        self.fetcher = fetcher
        self.endpoint = endpoint
        self.index = index

    def build_url(self, domain: str, exclude_subdomains: bool) -> str:
        pattern = self.url_pattern(domain, exclude_subdomains)
        return f"{self.endpoint}/{self.index}-index?url={pattern}&output=json"

    def fetch(self, domain: str, exclude_subdomains: bool) -> list[TimestampedURL]:
        lines = self.fetcher.iter_lines(self.build_url(domain, exclude_subdomains))
        return self.parse(lines)

    @staticmethod
    def parse(lines) -> list[TimestampedURL]:
        records: list[TimestampedURL] = []
        for line in lines:
            try:
                entry = json.loads(line)
            except json.JSONDecodeError:
                continue
            # error payloads such as {"error": "No Captures found ..."} carry no url
            if not isinstance(entry, dict) or not isinstance(entry.get("url"), str):
                continue
            timestamp = entry.get("timestamp")
            records.append(
                TimestampedURL(url=entry["url"], date=timestamp if isinstance(timestamp, str) else "")
            )
        return records


__all__ = ["CommonCrawlSource"]
