"""Tests for src.metrics.aggregate producing the TOTAL row.

Run with:
    pytest tests/test_aggregate.py --maxfail=1 -v --cov=src.metrics.aggregate --cov-report=term-missing
"""

from src.metrics.aggregate import TOTAL_LABEL, aggregate_reports, build_report_rows
from src.metrics.contributors import ContributorSets
from src.metrics.issues import IssueMetrics
from src.metrics.pull_requests import PullRequestMetrics
from src.metrics.reducer import RepositoryReport
from src.metrics.utils import NOT_APPLICABLE


def _report(repo, people=(), **issue_fields):
    return RepositoryReport(
        repo=repo,
        stars=1,
        issues=issue_fields.get("closed_total", 0),
        issue_metrics=IssueMetrics(
            contributors=ContributorSets(all_time=frozenset(people), this_period=frozenset(people)),
            **issue_fields,
        ),
    )


def test_total_percent_is_weighted_by_repository_size():
    small = _report("o/small", closed_total=1, closed_by_pull_request=1)
    large = _report("o/large", closed_total=100, closed_by_pull_request=0)
    total = aggregate_reports([small, large]).as_row()
    assert total["percent_issues_closed_by_pull_request"] == 1  # not the mean of 100 and 0
    assert total["issues"] == 101
    assert total["stars"] == 2


def test_total_stale_and_old_ratios_are_pooled():
    busy = _report("o/busy", open=1, stale=1, old=1)
    quiet = _report("o/quiet", open=100, stale=0, old=0)
    rows = build_report_rows([busy, quiet])
    assert rows[0]["percent_stale_issues"] == 100
    assert rows[1]["percent_stale_issues"] == 0
    total = rows[-1]
    assert total["open_issues"] == 101
    assert total["percent_stale_issues"] == 1  # 1/101, not the mean of 100 and 0
    assert total["percent_old_issues"] == 1


def test_total_average_pools_open_times():
    a = _report("o/a", open_times=(1.0,))
    b = _report("o/b", open_times=(2.0, 3.0, 6.0))
    assert aggregate_reports([a, b]).as_row()["average_issue_open_time"] == 3.0


def test_total_contributors_are_unioned_not_summed():
    rows = build_report_rows([_report("o/a", people={"x", "y"}), _report("o/b", people={"y", "z"})])
    total = rows[-1]
    assert total["contributors_all_time"] == 3
    assert total["contributors_this_period"] == 3


def test_total_row_comes_last_and_once():
    rows = build_report_rows([_report("o/a"), _report("o/b")])
    assert [row["repo"] for row in rows] == ["o/a", "o/b", TOTAL_LABEL]


def test_no_repositories_still_yields_total():
    rows = build_report_rows([])
    assert len(rows) == 1
    total = rows[0]
    assert total["repo"] == TOTAL_LABEL
    assert total["stars"] == 0
    assert total["percent_stale_issues"] == NOT_APPLICABLE
    assert total["average_pull_request_merge_time"] == NOT_APPLICABLE


def test_pull_request_metrics_are_summed():
    a = RepositoryReport(repo="o/a", pull_request_metrics=PullRequestMetrics(merged=2, open_times=(1.0,)))
    b = RepositoryReport(repo="o/b", pull_request_metrics=PullRequestMetrics(merged=3, open_times=(2.0,)))
    total = aggregate_reports([a, b])
    assert total.pull_request_metrics.merged == 5
    assert total.as_row()["average_pull_request_merge_time"] == 1.5
