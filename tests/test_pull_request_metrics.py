"""Tests for src.metrics.pull_requests.

Run with:
    pytest tests/test_pull_request_metrics.py --maxfail=1 -v --cov=src.metrics.pull_requests --cov-report=term-missing
"""

import datetime as dt

from src.metrics.pull_requests import compute_pull_request_metrics
from src.metrics.window import parse_time_window
from src.retrieval.models import PullRequest

UTC = dt.timezone.utc
WINDOW = parse_time_window("2024-01-01", "2024-02-15")


def day(month, d, hour=0):
    return dt.datetime(2024, month, d, hour, tzinfo=UTC)


def pr(created, state="OPEN", author="dev", association="MEMBER", merged_at=None, closed_at=None):
    return PullRequest(
        author=author,
        author_association=association,
        created_at=created,
        state=state,
        merged_at=merged_at,
        closed_at=closed_at,
    )


def test_merged_and_closed_count_only_inside_window():
    metrics = compute_pull_request_metrics([
        pr(day(1, 2), "MERGED", merged_at=day(1, 4), closed_at=day(1, 4)),
        pr(day(2, 1), "MERGED", merged_at=day(2, 20), closed_at=day(2, 20)),
        pr(day(1, 5), "CLOSED", closed_at=day(1, 6)),
        pr(day(1, 5), "CLOSED", closed_at=day(3, 1)),
        pr(day(1, 7)),
    ], WINDOW)
    assert metrics.merged == 1
    assert metrics.closed == 1
    assert metrics.open == 1
    assert metrics.opened == 5
    assert metrics.open_times == (2.0, 19.0)


def test_closed_unmerged_pull_request_has_no_merge_time():
    metrics = compute_pull_request_metrics([pr(day(1, 2), "CLOSED", closed_at=day(1, 3))], WINDOW)
    assert metrics.open_times == ()


def test_affiliation_counters_and_first_timers():
    metrics = compute_pull_request_metrics([
        pr(day(1, 2), author="lead", association="OWNER"),
        pr(day(1, 3), author="newbie", association="FIRST_TIME_CONTRIBUTOR"),
        pr(dt.datetime(2023, 6, 1, tzinfo=UTC), author="old", association="CONTRIBUTOR"),
    ], WINDOW)
    assert (metrics.internal, metrics.external) == (1, 2)
    assert (metrics.opened_internal, metrics.opened_external, metrics.opened_first_time) == (1, 1, 1)
    assert metrics.contributors.all_time_external == {"newbie", "old"}
    assert metrics.contributors.this_period_first_time == {"newbie"}


def test_null_author_does_not_halt_processing(capsys):
    metrics = compute_pull_request_metrics([
        pr(day(1, 2), author=None, association="NONE"),
        pr(day(1, 3), author="after", association="CONTRIBUTOR"),
    ], WINDOW, "o/r")
    assert metrics.opened == 2
    assert metrics.external == 2
    assert metrics.contributors.all_time == {"after"}
    assert metrics.contributors.this_period_external == {"after"}
    assert "o/r pull request created 2024-01-02 has no author" in capsys.readouterr().out


def test_sum_concatenates_times_and_unions_people():
    a = compute_pull_request_metrics([pr(day(1, 2), "MERGED", author="x", merged_at=day(1, 3))], WINDOW)
    b = compute_pull_request_metrics([pr(day(1, 2), "MERGED", author="x", merged_at=day(1, 5))], WINDOW)
    total = a + b
    assert total.merged == 2
    assert total.open_times == (1.0, 3.0)
    assert total.contributors.all_time == {"x"}
