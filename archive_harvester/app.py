"""Typer CLI entrypoint for archive-harvester."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, TextIO

import typer
import yaml
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ConfigLoader, HarvestSettings
from .engine import Fetcher, ThreadPoolManager, build_sources
from .engine.exporter import StreamExporter
from .logging_conf import configure_logging
from .orchestrator import SUMMARY_KEYS, Orchestrator

app = typer.Typer(
    help="Fetch every URL the web archives know for a domain.",
    add_completion=False,
    rich_markup_mode=None,
)

# stdout carries URLs only
console = Console(stderr=True)

_SUMMARY_LABELS = {
    "received": "Received",
    "exact_duplicates": "Exact dup",
    "structural_duplicates": "Struct dup",
    "assets": "Assets",
    "invalid": "Invalid",
    "emitted": "Emitted",
    "failed_sources": "Failed src",
}


@dataclass
class AppState:
    settings: HarvestSettings
    thread_pool: ThreadPoolManager
    fetcher: Fetcher
    orchestrator: Orchestrator

    def close(self) -> None:
        self.thread_pool.shutdown()
        self.fetcher.close()


def build_state(settings: HarvestSettings, stream: TextIO | None = None) -> AppState:
    thread_pool = ThreadPoolManager(settings.thread_pool_workers)
    fetcher = Fetcher(settings)
    sources = build_sources(settings, fetcher)
    exporter = StreamExporter(stream, dates=settings.dates)
    orchestrator = Orchestrator(settings, sources, thread_pool, exporter)
    return AppState(
        settings=settings,
        thread_pool=thread_pool,
        fetcher=fetcher,
        orchestrator=orchestrator,
    )


def read_domains(stream: Iterable[str]) -> list[str]:
    """Collect one domain per line, keeping what was read if the stream fails."""

    domains: list[str] = []
    try:
        for line in stream:
            domain = line.strip()
            if domain:
                domains.append(domain)
    except (OSError, ValueError) as exc:
        configure_logging().error("stdin_read_failed", error=str(exc), domains_read=len(domains))
    return domains


def _load_settings(config: Optional[Path], **overrides: object) -> HarvestSettings:
    try:
        return ConfigLoader().load(config, **overrides)
    except FileNotFoundError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    except (ValidationError, yaml.YAMLError, ValueError) as exc:
        raise typer.BadParameter(f"Invalid settings: {exc}", param_hint="--config") from exc


def _render_summary_table(summaries: dict[str, dict[str, int]]) -> Table:
    table = Table(title=f"Harvest summary · {len(summaries)} domain(s)", box=box.SIMPLE_HEAD)
    table.add_column("Domain", style="cyan", overflow="fold")
    for key in SUMMARY_KEYS:
        table.add_column(_SUMMARY_LABELS[key], justify="right")
    for domain, summary in summaries.items():
        table.add_row(domain, *(str(summary.get(key, 0)) for key in SUMMARY_KEYS))
    return table


@app.command(help="Harvest archived URLs for DOMAIN, or for each domain read from stdin.")
def main(
    domain: Optional[str] = typer.Argument(None, help="Target domain; read from stdin when omitted."),
    dates: bool = typer.Option(False, "--dates", help="Show the capture date in the first column."),
    no_subs: bool = typer.Option(False, "--no-subs", help="Don't include subdomains of the target domain."),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML/JSON settings file."),
    summary: bool = typer.Option(False, "--summary", help="Print per-domain counts to stderr."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging on stderr."),
) -> None:
    configure_logging(verbose=verbose)
    settings = _load_settings(
        config,
        dates=True if dates else None,
        no_subs=True if no_subs else None,
    )
    domains = [domain] if domain else read_domains(sys.stdin)

    state = build_state(settings)
    try:
        summaries = state.orchestrator.run(domains)
    finally:
        state.close()
    if summary:
        console.print(_render_summary_table(summaries))


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
