"""Engine components: fetch → fan-in merge → dedup → export."""

from .dedup import DedupRegistry, DeduplicationResult, FingerprintKey, fingerprint
from .fetcher import FetchError, Fetcher
from .merger import FanInMerger, HandoffChannel, MergeStats
from .records import TimestampedURL
from .sources import SourceFetcher, build_sources
from .thread_pool import ThreadPoolManager

__all__ = [
    "DedupRegistry",
    "DeduplicationResult",
    "FanInMerger",
    "FetchError",
    "Fetcher",
    "FingerprintKey",
    "HandoffChannel",
    "MergeStats",
    "SourceFetcher",
    "ThreadPoolManager",
    "TimestampedURL",
    "build_sources",
    "fingerprint",
]
