"""URL parsing with explicit failure cases, plus the subdomain filter."""

from __future__ import annotations

import re
from urllib.parse import SplitResult, unquote, urlsplit

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# ASCII allowed in a host; "%" is left to the escape check
_BAD_HOST_CHAR = re.compile(r"[^0-9A-Za-z\-._~!$&'()*+,;=:\[\]<>\"%\x80-\U0010ffff]")


class URLParseError(ValueError):
    """Raised when an archived URL cannot be parsed."""


def parse_url(raw: str) -> SplitResult:
    """Split ``raw`` into components, rejecting malformed input.

    ``urlsplit`` accepts nearly anything, so control characters, broken
    percent escapes outside the query, illegal host characters and
    non-numeric ports are rejected explicitly. The raw query is never
    validated.
    """

    if _CONTROL_CHARS.search(raw):
        raise URLParseError(f"invalid control character in URL: {raw!r}")
    head, _, fragment = raw.partition("#")
    head = head.partition("?")[0]
    if _BAD_ESCAPE.search(head) or _BAD_ESCAPE.search(fragment):
        raise URLParseError(f"invalid percent escape in URL: {raw!r}")
    try:
        parts = urlsplit(raw)
        parts.port  # non-numeric or out-of-range port raises ValueError
    except ValueError as exc:
        raise URLParseError(str(exc)) from exc
    if _BAD_HOST_CHAR.search(url_host(parts)):
        raise URLParseError(f"invalid character in host: {raw!r}")
    return parts


def url_host(parts: SplitResult) -> str:
    """Return host[:port] without any userinfo."""

    return parts.netloc.rpartition("@")[2]


def url_path(parts: SplitResult) -> str:
    """Return the percent-decoded path.

    Bytes that are not valid UTF-8 decode to lone surrogates, so distinct raw
    paths stay distinct.
    """

    return unquote(parts.path, errors="surrogateescape")


def is_subdomain(raw_url: str, domain: str) -> bool:
    """Return True when the URL's host is not exactly ``domain``.

    Comparison is case-insensitive and literal (no suffix matching). URLs that
    fail to parse are kept, so this returns False for them.
    """

    try:
        parts = parse_url(raw_url)
    except URLParseError:
        return False
    hostname = parts.hostname or ""
    return hostname.lower() != domain.lower()


__all__ = ["URLParseError", "is_subdomain", "parse_url", "url_host", "url_path"]
