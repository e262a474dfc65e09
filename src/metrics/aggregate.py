"""Roll per-repository reports up into the trailing TOTAL row."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

from .issues import IssueMetrics
from .pull_requests import PullRequestMetrics
from .reducer import RepositoryReport

TOTAL_LABEL = "TOTAL"


def aggregate_reports(reports: Iterable[RepositoryReport]) -> RepositoryReport:
    """Sum counters and union contributors across repositories.

    Only raw components are summed, so the TOTAL percentages and averages
    come from the pooled numerators and open-time lists, weighting every
    repository by its size.
    """
    issue_metrics = IssueMetrics()
    pull_request_metrics = PullRequestMetrics()
    stars = watches = forks = issues = pull_requests = 0
    for report in reports:
        stars += report.stars
        watches += report.watches
        forks += report.forks
        issues += report.issues
        pull_requests += report.pull_requests
        issue_metrics = issue_metrics + report.issue_metrics
        pull_request_metrics = pull_request_metrics + report.pull_request_metrics
    return RepositoryReport(
        repo=TOTAL_LABEL,
        stars=stars,
        watches=watches,
        forks=forks,
        issues=issues,
        pull_requests=pull_requests,
        issue_metrics=issue_metrics,
        pull_request_metrics=pull_request_metrics,
    )


def build_report_rows(reports: Sequence[RepositoryReport]) -> List[Dict[str, Any]]:
    """Per-repository rows followed by exactly one TOTAL row."""
    rows = [report.as_row() for report in reports]
    rows.append(aggregate_reports(reports).as_row())
    return rows


__all__ = ["TOTAL_LABEL", "aggregate_reports", "build_report_rows"]
