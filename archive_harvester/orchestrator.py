"""Per-domain pipeline wiring fan-in merge, dedup and export."""

from __future__ import annotations

from contextlib import closing
from typing import Iterable, Sequence

from .config import HarvestSettings
from .engine import DedupRegistry, FanInMerger, MergeStats, SourceFetcher, ThreadPoolManager
from .engine.dedup import ShortURLError
from .engine.exporter import BaseExporter
from .logging_conf import configure_logging

SUMMARY_KEYS = (
    "received",
    "exact_duplicates",
    "structural_duplicates",
    "assets",
    "invalid",
    "emitted",
    "failed_sources",
)


class Orchestrator:
    """Process domains one after another, each with a fresh dedup registry."""

    def __init__(
        self,
        settings: HarvestSettings,
        sources: Sequence[SourceFetcher],
        thread_pool: ThreadPoolManager,
        exporter: BaseExporter,
    ) -> None:
        self.settings = settings
        self.merger = FanInMerger(sources, thread_pool)
        self.exporter = exporter
        self.logger = configure_logging().bind(component="orchestrator")

    def run(self, domains: Iterable[str]) -> dict[str, dict[str, int]]:
        summaries: dict[str, dict[str, int]] = {}
        for domain in domains:
            summaries[domain] = self.run_domain(domain)
        return summaries

    def run_domain(self, domain: str) -> dict[str, int]:
        registry = DedupRegistry()
        stats = MergeStats()
        summary = dict.fromkeys(SUMMARY_KEYS, 0)
        structural = not self.settings.dates

        try:
            with closing(self.merger.merge(domain, self.settings.no_subs, stats)) as stream:
                for record in stream:
                    summary["received"] += 1
                    try:
                        result = registry.check_and_store(record.url, structural=structural)
                    except ShortURLError as exc:
                        self.logger.warning(
                            "record_skipped", domain=domain, url=record.url, reason=str(exc)
                        )
                        summary["invalid"] += 1
                        continue
                    if result.url_duplicate:
                        summary["exact_duplicates"] += 1
                    elif result.asset:
                        summary["assets"] += 1
                    elif result.structure_duplicate:
                        summary["structural_duplicates"] += 1
                    else:
                        self.exporter.export(record)
                        summary["emitted"] += 1
        finally:
            self.exporter.flush()

        summary["failed_sources"] = len(stats.failed_sources)
        self.logger.debug(
            "domain_complete",
            domain=domain,
            fingerprints=len(registry.fingerprints),
            filtered_subdomains=stats.filtered_subdomains,
            failed=stats.failed_sources,
            **summary,
        )
        return summary


__all__ = ["Orchestrator", "SUMMARY_KEYS"]
