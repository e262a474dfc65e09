"""Tests for src.retrieval.models covering node validation and timestamp parsing.

Run with coverage:
    pytest tests/test_models.py --maxfail=1 -v --cov=src.retrieval.models --cov-report=term-missing
"""

import datetime as dt

import pytest

from src.retrieval import models

UTC = dt.timezone.utc


def test_parse_github_timestamp_variants():
    assert models.parse_github_timestamp("2024-01-02T03:04:05Z") == dt.datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert models.parse_github_timestamp("2024-01-02T05:04:05+02:00") == dt.datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert models.parse_github_timestamp("yesterday") is None
    assert models.parse_github_timestamp(None) is None


def test_issue_from_node_with_timeline():
    issue = models.Issue.from_node({
        "author": {"login": "octocat"},
        "authorAssociation": "MEMBER",
        "createdAt": "2024-01-01T00:00:00Z",
        "closedAt": "2024-01-10T00:00:00Z",
        "state": "CLOSED",
        "timelineItems": {"nodes": [
            {"__typename": "IssueComment", "createdAt": "2024-01-05T00:00:00Z"},
            {"__typename": "ClosedEvent", "createdAt": "2024-01-10T00:00:00Z",
             "closer": {"__typename": "PullRequest"}},
            {"__typename": "SubscribedEvent"},
        ]},
    })
    assert issue.author == "octocat"
    assert issue.closed_at == dt.datetime(2024, 1, 10, tzinfo=UTC)
    assert [event.kind for event in issue.timeline] == ["IssueComment", "ClosedEvent", "SubscribedEvent"]
    assert issue.timeline[1].closer_kind == "PullRequest"
    assert issue.timeline[2].created_at is None


def test_ghost_author_is_tolerated():
    pr = models.PullRequest.from_node({
        "author": None,
        "authorAssociation": "NONE",
        "createdAt": "2024-01-01T00:00:00Z",
        "state": "OPEN",
    })
    assert pr.author is None
    assert pr.merged_at is None and pr.closed_at is None


@pytest.mark.parametrize("node", [
    None,
    "not a node",
    {"state": "OPEN", "authorAssociation": "NONE"},
    {"createdAt": "2024-01-01T00:00:00Z", "state": "WEIRD"},
    {"createdAt": "2024-01-01T00:00:00Z", "state": "CLOSED", "closedAt": "garbage"},
])
def test_issue_from_node_rejects_malformed(node):
    with pytest.raises(models.RecordError):
        models.Issue.from_node(node)


def test_pull_request_accepts_merged_state():
    pr = models.PullRequest.from_node({
        "author": {"login": "dev"},
        "authorAssociation": "CONTRIBUTOR",
        "createdAt": "2024-01-01T00:00:00Z",
        "mergedAt": "2024-01-03T12:00:00Z",
        "closedAt": "2024-01-03T12:00:00Z",
        "state": "MERGED",
    })
    assert pr.state == "MERGED"
    assert pr.merged_at == dt.datetime(2024, 1, 3, 12, tzinfo=UTC)
