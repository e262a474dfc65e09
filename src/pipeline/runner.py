"""Entry points for fetching repositories and writing the metrics report."""

from __future__ import annotations

import asyncio
import datetime as dt
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from src.metrics.aggregate import build_report_rows
from src.metrics.reducer import build_repository_report
from src.metrics.window import ConfigurationError, TimeWindow
from src.report.writer import ReportWriteError, report_path, write_report
from src.retrieval.collectors import fetch_repository
from src.retrieval.models import RepositorySnapshot

from .config import EXAMPLE_USAGE, ReportSettings, parse_args, resolve_settings

RepositoryFetcher = Callable[[str], RepositorySnapshot]


@dataclass(frozen=True)
class FetchOutcome:
    """A repository's snapshot, or the error that prevented fetching it."""

    repo: str
    snapshot: Optional[RepositorySnapshot] = None
    error: Optional[Exception] = None


async def fetch_one(repo: str, fetch: RepositoryFetcher) -> FetchOutcome:
    try:
        snapshot = await asyncio.to_thread(fetch, repo)
    except Exception as exc:
        print(f"[error] {repo}: {exc}")
        return FetchOutcome(repo=repo, error=exc)
    return FetchOutcome(repo=repo, snapshot=snapshot)


async def fetch_all(repos: Sequence[str],
                    fetch: RepositoryFetcher = fetch_repository) -> List[FetchOutcome]:
    """Fetch every repository concurrently; one failure never cancels the others."""
    return list(await asyncio.gather(*(fetch_one(repo, fetch) for repo in repos)))


def build_rows(outcomes: Sequence[FetchOutcome],
               window: TimeWindow,
               now: dt.datetime) -> List[Dict[str, Any]]:
    """Rows for repositories that were fetched, then the TOTAL row."""
    reports = [
        build_repository_report(outcome.snapshot, window, now)
        for outcome in outcomes
        if outcome.snapshot is not None
    ]
    return build_report_rows(reports)


def run_report(settings: ReportSettings,
               *,
               now: Optional[dt.datetime] = None,
               fetch: RepositoryFetcher = fetch_repository) -> Path:
    """Fetch, compute, and write the report; return the CSV path."""
    now = now or dt.datetime.now(dt.timezone.utc)
    print(f"Querying GitHub for {len(settings.repos)} repos...")
    outcomes = asyncio.run(fetch_all(settings.repos, fetch))

    failed = [outcome.repo for outcome in outcomes if outcome.error is not None]
    if failed:
        print(f"[warn] {len(failed)} of {len(outcomes)} repos failed and are excluded "
              f"from every row, including TOTAL: {', '.join(failed)}")

    print("\nProcessing repository data...")
    rows = build_rows(outcomes, settings.window, now)
    return write_report(rows, report_path(settings.reports_dir, now, settings.window))


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: `start end [owner/repo ...]`."""
    args = parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ConfigurationError as exc:
        print(f"[error] Invalid inputs - {exc}")
        print(EXAMPLE_USAGE)
        sys.exit(1)

    try:
        path = run_report(settings)
    except ReportWriteError as exc:
        print(f"[error] {exc}")
        sys.exit(2)
    print(f"\nReport written to {path}")


if __name__ == "__main__":
    main()
