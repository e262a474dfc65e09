"""Fold a repository's issues into counters, open times, and contributor sets."""

from __future__ import annotations

import datetime as dt
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from functools import reduce
from typing import DefaultDict, Iterable, List, Optional, Sequence, Set, Tuple

from src.retrieval.models import CLOSED_EVENT, PULL_REQUEST_CLOSER, Issue, TimelineEvent

from .contributors import ContributorSets, record_contribution
from .utils import days_between, merge_metrics
from .window import TimeWindow

STALE_AFTER_DAYS = 14
OLD_AFTER_DAYS = 120


@dataclass(frozen=True)
class IssueMetrics:
    internal: int = 0
    external: int = 0
    open: int = 0
    stale: int = 0
    old: int = 0
    closed_total: int = 0
    closed_by_pull_request: int = 0
    opened: int = 0
    opened_internal: int = 0
    opened_external: int = 0
    opened_first_time: int = 0
    closed: int = 0
    open_times: Tuple[float, ...] = ()
    contributors: ContributorSets = field(default_factory=ContributorSets)

    def __add__(self, other: "IssueMetrics") -> "IssueMetrics":
        return merge_metrics(self, other)


def last_activity(issue: Issue) -> dt.datetime:
    """Timestamp of the last dated timeline event, or creation when there is none."""
    return reduce(
        lambda last, event: event.created_at or last,
        issue.timeline,
        issue.created_at,
    )


def last_close_event(timeline: Sequence[TimelineEvent]) -> Optional[TimelineEvent]:
    return reduce(
        lambda last, event: event if event.kind == CLOSED_EVENT else last,
        timeline,
        None,
    )


def closed_by_pull_request(issue: Issue) -> bool:
    """Only the final close decides; a later manual close overrides a PR close."""
    event = last_close_event(issue.timeline)
    return event is not None and event.closer_kind == PULL_REQUEST_CLOSER


def compute_issue_metrics(issues: Iterable[Issue],
                          window: TimeWindow,
                          now: dt.datetime,
                          repo_name: str = "") -> IssueMetrics:
    counts: Counter = Counter()
    groups: DefaultDict[str, Set[str]] = defaultdict(set)
    open_times: List[float] = []

    for issue in issues:
        if not issue.author:
            print(f"[warn] {repo_name} issue created {issue.created_at:%Y-%m-%d} has no author "
                  "(deleted account); counted but not listed as a contributor")
        record_contribution(
            counts, groups, issue.author, issue.author_association,
            window.contains(issue.created_at),
        )

        if issue.state == "OPEN":
            counts["open"] += 1
            if days_between(last_activity(issue), now) > STALE_AFTER_DAYS:
                counts["stale"] += 1
            if days_between(issue.created_at, now) > OLD_AFTER_DAYS:
                counts["old"] += 1

        if issue.closed_at:
            counts["closed_total"] += 1
            open_times.append(days_between(issue.created_at, issue.closed_at))
            if window.contains(issue.closed_at):
                counts["closed"] += 1
            if closed_by_pull_request(issue):
                counts["closed_by_pull_request"] += 1

    return IssueMetrics(
        **counts,
        open_times=tuple(open_times),
        contributors=ContributorSets.from_groups(groups),
    )


__all__ = [
    "STALE_AFTER_DAYS",
    "OLD_AFTER_DAYS",
    "IssueMetrics",
    "last_activity",
    "last_close_event",
    "closed_by_pull_request",
    "compute_issue_metrics",
]
