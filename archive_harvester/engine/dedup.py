"""Deduplication layer: exact URL set plus structural fingerprints."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field

from .urls import URLParseError, parse_url, url_host, url_path

ASSET_SUFFIXES = frozenset({"svg", "css", "jpg", "png", "gif"})
DIGIT_PLACEHOLDER = "1"

_DIGIT_RUN = re.compile(r"[0-9]+")


class ShortURLError(ValueError):
    """Raised when a URL is too short for the asset suffix check."""


@dataclass(frozen=True, slots=True)
class FingerprintKey:
    """Structural shape of a URL: host, digit-normalised path, query key names."""

    host: str = ""
    normalized_path: str = ""
    query_keys: tuple[str, ...] = ()

    @classmethod
    def from_url(cls, raw_url: str) -> "FingerprintKey":
        try:
            parts = parse_url(raw_url)
        except URLParseError:
            return cls()
        # "".split("&") gives [""]: URLs without a query carry one empty key
        keys = tuple(segment.split("=", 1)[0] for segment in parts.query.split("&"))
        return cls(
            host=url_host(parts),
            normalized_path=_DIGIT_RUN.sub(DIGIT_PLACEHOLDER, url_path(parts)),
            query_keys=keys,
        )

    def digest(self) -> str:
        payload = self.host + self.normalized_path + "".join(self.query_keys)
        # lone surrogates stand for raw path bytes and must not collapse
        return hashlib.md5(payload.encode("utf-8", "surrogatepass")).hexdigest()


def fingerprint(raw_url: str) -> str:
    return FingerprintKey.from_url(raw_url).digest()


def is_asset_url(raw_url: str) -> bool:
    """Literal check of the last three characters against the asset denylist."""

    if len(raw_url) < 3:
        raise ShortURLError(f"URL too short for suffix check: {raw_url!r}")
    return raw_url[-3:] in ASSET_SUFFIXES


@dataclass
class DeduplicationResult:
    url_duplicate: bool = False
    structure_duplicate: bool = False
    asset: bool = False

    @property
    def is_duplicate(self) -> bool:
        return self.url_duplicate or self.structure_duplicate

    @property
    def accepted(self) -> bool:
        return not (self.is_duplicate or self.asset)


@dataclass
class DedupRegistry:
    """Per-domain record of emitted URLs and structural fingerprints.

    Owned by a single consumer, so it carries no lock. Fingerprints are only
    ever appended.
    """

    urls: set[str] = field(default_factory=set)
    fingerprints: list[str] = field(default_factory=list)

    def seen_url(self, url: str) -> bool:
        """Record ``url`` and report whether it was already present."""

        if url in self.urls:
            return True
        self.urls.add(url)
        return False

    def seen_structure(self, url: str) -> bool:
        """Record the URL's fingerprint and report whether it was already present."""

        digest = fingerprint(url)
        for known in self.fingerprints:
            if known == digest:
                return True
        self.fingerprints.append(digest)
        return False

    def check_and_store(self, url: str, structural: bool = True) -> DeduplicationResult:
        """Run exact dedup, then (when ``structural``) the asset and fingerprint checks.

        Raises ``ShortURLError`` for URLs under three characters in structural
        mode; the URL stays registered as seen.
        """

        if self.seen_url(url):
            return DeduplicationResult(url_duplicate=True)
        if not structural:
            return DeduplicationResult()
        if is_asset_url(url):
            return DeduplicationResult(asset=True)
        return DeduplicationResult(structure_duplicate=self.seen_structure(url))


__all__ = [
    "ASSET_SUFFIXES",
    "DedupRegistry",
    "DeduplicationResult",
    "FingerprintKey",
    "ShortURLError",
    "fingerprint",
    "is_asset_url",
]
