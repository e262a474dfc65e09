"""Combine issue and pull-request metrics into one flat report row per repository."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict

from src.retrieval.models import RepositorySnapshot

from .contributors import ContributorSets
from .issues import IssueMetrics, compute_issue_metrics
from .pull_requests import PullRequestMetrics, compute_pull_request_metrics
from .utils import average, percent
from .window import TimeWindow


@dataclass(frozen=True)
class RepositoryReport:
    """Raw components for one row; percentages are derived only in `as_row`."""

    repo: str
    stars: int = 0
    watches: int = 0
    forks: int = 0
    issues: int = 0
    pull_requests: int = 0
    issue_metrics: IssueMetrics = field(default_factory=IssueMetrics)
    pull_request_metrics: PullRequestMetrics = field(default_factory=PullRequestMetrics)

    @property
    def contributors(self) -> ContributorSets:
        return self.issue_metrics.contributors | self.pull_request_metrics.contributors

    def as_row(self) -> Dict[str, Any]:
        im = self.issue_metrics
        pm = self.pull_request_metrics
        people = self.contributors.counts()
        return {
            "repo": self.repo,
            # all time, as of the run
            "stars": self.stars,
            "watches": self.watches,
            "forks": self.forks,
            "issues": self.issues,
            "internal_issues": im.internal,
            "external_issues": im.external,
            "open_issues": im.open,
            "stale_issues": im.stale,
            "percent_stale_issues": percent(im.stale, im.open),
            "old_issues": im.old,
            "percent_old_issues": percent(im.old, im.open),
            "percent_issues_closed_by_pull_request": percent(im.closed_by_pull_request, im.closed_total),
            "average_issue_open_time": average(im.open_times),
            "pull_requests": self.pull_requests,
            "internal_pull_requests": pm.internal,
            "external_pull_requests": pm.external,
            "open_pull_requests": pm.open,
            "average_pull_request_merge_time": average(pm.open_times),
            "contributors_all_time": people["all_time"],
            "contributors_all_time_internal": people["all_time_internal"],
            "contributors_all_time_external": people["all_time_external"],
            # reporting window
            "opened_issues": im.opened,
            "opened_issues_internal": im.opened_internal,
            "opened_issues_external": im.opened_external,
            "opened_issues_first_time_contributor": im.opened_first_time,
            "closed_issues": im.closed,
            "opened_pull_requests": pm.opened,
            "opened_pull_requests_internal": pm.opened_internal,
            "opened_pull_requests_external": pm.opened_external,
            "opened_pull_requests_first_time_contributor": pm.opened_first_time,
            "merged_pull_requests": pm.merged,
            "closed_pull_requests": pm.closed,
            "contributors_this_period": people["this_period"],
            "contributors_this_period_internal": people["this_period_internal"],
            "contributors_this_period_external": people["this_period_external"],
            "contributors_this_period_first_time_contributor": people["this_period_first_time"],
        }


def build_repository_report(snapshot: RepositorySnapshot,
                            window: TimeWindow,
                            now: dt.datetime) -> RepositoryReport:
    return RepositoryReport(
        repo=snapshot.name,
        stars=snapshot.stars,
        watches=snapshot.watches,
        forks=snapshot.forks,
        issues=snapshot.issue_count,
        pull_requests=snapshot.pull_request_count,
        issue_metrics=compute_issue_metrics(snapshot.issues, window, now, snapshot.name),
        pull_request_metrics=compute_pull_request_metrics(snapshot.pull_requests, window, snapshot.name),
    )


__all__ = ["RepositoryReport", "build_repository_report"]
