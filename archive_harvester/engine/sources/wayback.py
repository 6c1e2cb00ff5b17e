"""Wayback Machine CDX API adapter."""

from __future__ import annotations

import json

from ..fetcher import Fetcher
from ..records import TimestampedURL
from .base import SourceFetcher


class WaybackSource(SourceFetcher):
    """Query the CDX server, which answers with one JSON array of rows.

    The first row holds the field names; each following row carries the
    timestamp at index 1 and the original URL at index 2.
    """

    name = "wayback"

    def __init__(self, fetcher: Fetcher, endpoint: str) -> None:
        self.fetcher = fetcher
        self.endpoint = endpoint

    def build_url(self, domain: str, exclude_subdomains: bool) -> str:
        pattern = self.url_pattern(domain, exclude_subdomains)
        return f"{self.endpoint}?url={pattern}&output=json&collapse=urlkey"

    def fetch(self, domain: str, exclude_subdomains: bool) -> list[TimestampedURL]:
        response = self.fetcher.get(self.build_url(domain, exclude_subdomains))
        return self.parse(response.text)

    @staticmethod
    def parse(body: str) -> list[TimestampedURL]:
        if not body.strip():
            return []
        try:
            rows = json.loads(body)
        except json.JSONDecodeError as exc:
            raise ValueError(f"CDX response is not JSON: {exc}") from exc
        if not isinstance(rows, list):
            raise ValueError("CDX response is not a JSON array")
        records: list[TimestampedURL] = []
        for row in rows[1:]:
            if not isinstance(row, list) or len(row) < 3:
                continue
            date, url = row[1], row[2]
            if not isinstance(date, str) or not isinstance(url, str):
                continue
            records.append(TimestampedURL(url=url, date=date))
        return records


__all__ = ["WaybackSource"]
