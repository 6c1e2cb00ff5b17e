"""HTTP access shared by the archive source adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator

import httpx
import structlog

from ..config import HarvestSettings


class FetchError(RuntimeError):
    """Raised when an archive request fails at the transport level."""


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    url: str
    status_code: int
    text: str
    headers: Dict[str, str]
    raw: httpx.Response | None = field(repr=False, default=None)


class Fetcher:
    """Thin wrapper over one ``httpx.Client`` shared by every source thread.

    Status codes are not treated as failures: archive APIs report errors in
    the body, which the source adapters reject while parsing.
    """

    def __init__(
        self,
        settings: HarvestSettings,
        transport: httpx.BaseTransport | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger or structlog.get_logger("archive_harvester.fetcher")
        headers = {"User-Agent": settings.user_agent} if settings.user_agent else None
        self._client = httpx.Client(
            follow_redirects=True,
            timeout=settings.request_timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def get(self, url: str) -> FetchResponse:
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc
        self.logger.debug("archive_response", url=url, status=response.status_code)
        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
            raw=response,
        )

    def iter_lines(self, url: str) -> Iterator[str]:
        """Stream the response body line by line."""

        try:
            with self._client.stream("GET", url) as response:
                self.logger.debug("archive_response", url=url, status=response.status_code)
                yield from response.iter_lines()
        except httpx.HTTPError as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc


__all__ = ["FetchError", "FetchResponse", "Fetcher"]
