"""Archive record type and timestamp rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

ARCHIVE_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"

# strptime tolerates short fields, archive timestamps are always 14 digits
_TIMESTAMP_PATTERN = re.compile(r"[0-9]{14}", re.ASCII)


@dataclass(frozen=True, slots=True)
class TimestampedURL:
    """A single capture reported by an archive source."""

    url: str
    date: str = ""


def parse_archive_timestamp(raw: str) -> datetime:
    """Parse a ``YYYYMMDDhhmmss`` capture timestamp, raising ``ValueError``."""

    if not _TIMESTAMP_PATTERN.fullmatch(raw):
        raise ValueError(f"Not an archive timestamp: {raw!r}")
    return datetime.strptime(raw, ARCHIVE_TIMESTAMP_FORMAT)


def format_timestamp(raw: str) -> tuple[str, bool]:
    """Return the RFC 3339 rendering of ``raw`` and whether it parsed.

    Unparseable values render as the zero timestamp so the record can still
    be emitted.
    """

    try:
        parsed = parse_archive_timestamp(raw)
    except ValueError:
        return ZERO_TIMESTAMP, False
    return parsed.isoformat(timespec="seconds") + "Z", True


__all__ = [
    "TimestampedURL",
    "ZERO_TIMESTAMP",
    "format_timestamp",
    "parse_archive_timestamp",
]
