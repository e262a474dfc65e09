"""CSV output for the per-repository metrics report."""

from __future__ import annotations

import csv
import datetime as dt
import os
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from src.metrics.window import TimeWindow

COLUMNS: List[Tuple[str, str]] = [
    ("repo", "Repo Name"),
    # all time, as of the run
    ("stars", "Stars"),
    ("watches", "Watches"),
    ("forks", "Forks"),
    ("issues", "Issues"),
    ("internal_issues", "Issues (Internal)"),
    ("external_issues", "Issues (External)"),
    ("open_issues", "Open Issues"),
    ("stale_issues", "Stale Issues (No activity for >14 days)"),
    ("percent_stale_issues", "% Stale Issues"),
    ("old_issues", "Old Issues (Open for >120 days)"),
    ("percent_old_issues", "% Old Issues"),
    ("percent_issues_closed_by_pull_request", "% Issues Closed by Pull Request"),
    ("average_issue_open_time", "Average Issue Open Time (Days)"),
    ("pull_requests", "Pull Requests"),
    ("internal_pull_requests", "Pull Requests (Internal)"),
    ("external_pull_requests", "Pull Requests (External)"),
    ("open_pull_requests", "Open Pull Requests"),
    ("average_pull_request_merge_time", "Average Pull Request Time to Merge (Days)"),
    ("contributors_all_time", "Contributors (All Time)"),
    ("contributors_all_time_internal", "Contributors (All Time - Internal)"),
    ("contributors_all_time_external", "Contributors (All Time - External)"),
    # reporting window
    ("opened_issues", "Issues Opened"),
    ("opened_issues_internal", "Issues Opened (Internal)"),
    ("opened_issues_external", "Issues Opened (External)"),
    ("opened_issues_first_time_contributor", "Issues Opened (First Time Contributor)"),
    ("closed_issues", "Issues Closed"),
    ("opened_pull_requests", "Pull Requests Opened"),
    ("opened_pull_requests_internal", "Pull Requests Opened (Internal)"),
    ("opened_pull_requests_external", "Pull Requests Opened (External)"),
    ("opened_pull_requests_first_time_contributor", "Pull Requests Opened (First Time Contributor)"),
    ("merged_pull_requests", "Pull Requests Merged"),
    ("closed_pull_requests", "Pull Requests Closed"),
    ("contributors_this_period", "Contributors (This Period)"),
    ("contributors_this_period_internal", "Contributors (This Period - Internal)"),
    ("contributors_this_period_external", "Contributors (This Period - External)"),
    ("contributors_this_period_first_time_contributor", "Contributors (This Period - First Time Contributor)"),
]


class ReportWriteError(RuntimeError):
    """The report could not be persisted."""


def ensure_dir(path: str | Path) -> None:
    """Create output directories as-needed without raising for existing folders."""
    os.makedirs(path, exist_ok=True)


def report_path(reports_dir: str | Path, generated: dt.datetime, window: TimeWindow) -> Path:
    """`<reports_dir>/<generated date>_<start>_to_<end>.csv`"""
    return Path(reports_dir) / f"{generated:%Y-%m-%d}_{window.label()}.csv"


def write_report(rows: Sequence[Dict[str, Any]], path: str | Path) -> Path:
    """Write rows with a human-readable header; return the written path."""
    out = Path(path)
    fieldnames = [column for column, _ in COLUMNS]
    try:
        ensure_dir(out.parent)
        with out.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=fieldnames, extrasaction="ignore")
            writer.writerow(dict(COLUMNS))
            writer.writerows(rows)
    except OSError as exc:
        raise ReportWriteError(f"could not write report to {out}: {exc}") from exc
    print(f"[info] wrote {len(rows)} rows to {out}")
    return out


__all__ = ["COLUMNS", "ReportWriteError", "ensure_dir", "report_path", "write_report"]
