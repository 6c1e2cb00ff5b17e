"""Pydantic models used across the archive-harvester configuration flow."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

KNOWN_SOURCES = ("wayback", "commoncrawl")


class HarvestSettings(BaseModel):
    """Run-wide settings: output mode, enabled archives and HTTP behaviour."""

    dates: bool = False
    no_subs: bool = False
    sources: list[str] = Field(default_factory=lambda: list(KNOWN_SOURCES))
    request_timeout: float | None = Field(
        default=None,
        description="Seconds before an archive request gives up; null waits indefinitely.",
    )
    user_agent: str | None = None
    wayback_endpoint: str = "http://web.archive.org/cdx/search/cdx"
    commoncrawl_endpoint: str = "http://index.commoncrawl.org"
    commoncrawl_index: str = "CC-MAIN-2018-22"
    thread_pool_workers: int = 4

    @field_validator("sources", mode="before")
    @classmethod
    def _coerce_sources(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            raise ValueError("sources expects a list of archive names")
        names = [str(item).strip().lower() for item in value if str(item).strip()]
        if not names:
            raise ValueError("at least one archive source must be enabled")
        unknown = [name for name in names if name not in KNOWN_SOURCES]
        if unknown:
            raise ValueError(f"Unknown archive sources: {unknown}; supported: {list(KNOWN_SOURCES)}")
        if len(set(names)) != len(names):
            raise ValueError("archive sources must not repeat")
        return names

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("request_timeout must be > 0 or null")
        return value

    @field_validator("thread_pool_workers")
    @classmethod
    def _positive_workers(cls, value: int) -> int:
        if value < 1:
            raise ValueError("thread_pool_workers must be >= 1")
        return value

    @field_validator("wayback_endpoint", "commoncrawl_endpoint")
    @classmethod
    def _strip_endpoint(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("archive endpoints must be http(s) URLs")
        return value


__all__ = ["HarvestSettings", "KNOWN_SOURCES"]
