"""Command-line configuration for a metrics report run."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from src.metrics.window import ConfigurationError, TimeWindow, parse_time_window
from src.retrieval.collectors import split_repo_name
from src.retrieval.config import REPOS

REPORTS_DIR = os.getenv("REPORTS_DIR", "./reports")
EXAMPLE_USAGE = "example: python run_pipeline.py 2024-01-01 2024-02-01 [owner/repo ...]"


@dataclass(frozen=True)
class ReportSettings:
    """Resolved, validated settings for one report run."""

    window: TimeWindow
    repos: Tuple[str, ...]
    reports_dir: Path


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the report entry point."""

    parser = argparse.ArgumentParser(
        description="Compute issue, pull request, and contributor metrics for GitHub repositories.",
        epilog=EXAMPLE_USAGE,
    )
    parser.add_argument("start", help="first day of the reporting period (YYYY-MM-DD, excluded)")
    parser.add_argument("end", help="last day of the reporting period (YYYY-MM-DD, excluded)")
    parser.add_argument("repos", nargs="*", help="owner/repo names; defaults to REPOS in src/retrieval/config.py")
    parser.add_argument("--reports-dir", default=REPORTS_DIR)
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> ReportSettings:
    """Validate arguments before anything touches the network.

    Raises ConfigurationError for a malformed or too-short window, a repo name
    that is not `owner/repo`, or an empty repository list.
    """

    window = parse_time_window(args.start, args.end)
    repos = tuple(repo.strip() for repo in (args.repos or REPOS) if repo and repo.strip())
    if not repos:
        raise ConfigurationError("No repositories specified. Provide CLI args or edit REPOS in the config.")
    for repo in repos:
        try:
            split_repo_name(repo)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
    return ReportSettings(window=window, repos=repos, reports_dir=Path(args.reports_dir))


__all__ = [
    "REPORTS_DIR",
    "EXAMPLE_USAGE",
    "ReportSettings",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
