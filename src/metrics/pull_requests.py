"""Fold a repository's pull requests into counters, merge times, and contributor sets."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import DefaultDict, Iterable, List, Set, Tuple

from src.retrieval.models import PullRequest

from .contributors import ContributorSets, record_contribution
from .utils import days_between, merge_metrics
from .window import TimeWindow


@dataclass(frozen=True)
class PullRequestMetrics:
    internal: int = 0
    external: int = 0
    open: int = 0
    opened: int = 0
    opened_internal: int = 0
    opened_external: int = 0
    opened_first_time: int = 0
    merged: int = 0
    closed: int = 0
    open_times: Tuple[float, ...] = ()  # created -> merged, in days
    contributors: ContributorSets = field(default_factory=ContributorSets)

    def __add__(self, other: "PullRequestMetrics") -> "PullRequestMetrics":
        return merge_metrics(self, other)


def compute_pull_request_metrics(pull_requests: Iterable[PullRequest],
                                 window: TimeWindow,
                                 repo_name: str = "") -> PullRequestMetrics:
    """Closed-unmerged pull requests are counted in the window but get no duration."""
    counts: Counter = Counter()
    groups: DefaultDict[str, Set[str]] = defaultdict(set)
    open_times: List[float] = []

    for pr in pull_requests:
        if not pr.author:
            print(f"[warn] {repo_name} pull request created {pr.created_at:%Y-%m-%d} has no author "
                  "(deleted account); counted but not listed as a contributor")
        record_contribution(
            counts, groups, pr.author, pr.author_association,
            window.contains(pr.created_at),
        )

        if pr.state == "OPEN":
            counts["open"] += 1

        if pr.state == "MERGED" and pr.merged_at:
            open_times.append(days_between(pr.created_at, pr.merged_at))
            if window.contains(pr.merged_at):
                counts["merged"] += 1

        if pr.state == "CLOSED" and pr.closed_at and window.contains(pr.closed_at):
            counts["closed"] += 1

    return PullRequestMetrics(
        **counts,
        open_times=tuple(open_times),
        contributors=ContributorSets.from_groups(groups),
    )


__all__ = ["PullRequestMetrics", "compute_pull_request_metrics"]
