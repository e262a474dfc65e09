"""Fetchers that turn GitHub GraphQL responses into repository snapshots."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .config import PAGE_SIZE, TIMELINE_PAGE_SIZE
from .http_client import GraphQLError, run_graphql_query
from .models import (
    ISSUES,
    PULL_REQUESTS,
    RECORD_TYPES,
    Page,
    RecordError,
    RepositorySnapshot,
)
from .pagination import PageFetcher, accumulate_pages
from .queries import ISSUES_QUERY, PULL_REQUESTS_QUERY, REPOSITORY_QUERY

KIND_QUERIES = {ISSUES: ISSUES_QUERY, PULL_REQUESTS: PULL_REQUESTS_QUERY}


def split_repo_name(full_name: str) -> Tuple[str, str]:
    """Split `owner/repo` into its parts, rejecting anything else."""
    owner, sep, repo = (full_name or "").strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ValueError(f"expected owner/repo, got {full_name!r}")
    return owner, repo


def _total_count(obj: Dict[str, Any], key: str) -> int:
    return int(((obj.get(key) or {}).get("totalCount")) or 0)


def _repository_node(data: Dict[str, Any], repo_name: str) -> Dict[str, Any]:
    repository = data.get("repository")
    if not isinstance(repository, dict):
        raise GraphQLError(f"repository {repo_name} not found or not accessible")
    return repository


def get_repo_counters(repo_name: str) -> Dict[str, int]:
    """Return stars, watches, forks, and issue/PR totals for a repository."""
    owner, repo = split_repo_name(repo_name)
    data = run_graphql_query(REPOSITORY_QUERY, {"owner": owner, "name": repo})
    repository = _repository_node(data, repo_name)
    return {
        "stars": _total_count(repository, "stargazers"),
        "watches": _total_count(repository, "watchers"),
        "forks": int(repository.get("forkCount") or 0),
        "issue_count": _total_count(repository, "issues"),
        "pull_request_count": _total_count(repository, "pullRequests"),
    }


def parse_page(kind: str, connection: Dict[str, Any], repo_name: str = "") -> Page:
    """Validate one connection page; malformed nodes are reported and dropped."""
    record_type = RECORD_TYPES[kind]
    records: List[Any] = []
    for index, node in enumerate(connection.get("nodes") or []):
        try:
            records.append(record_type.from_node(node))
        except RecordError as exc:
            print(f"[warn] {repo_name} {kind}: skipping malformed node #{index}: {exc}")
    page_info = connection.get("pageInfo") or {}
    return Page(
        records=tuple(records),
        has_next_page=bool(page_info.get("hasNextPage")),
        end_cursor=page_info.get("endCursor"),
    )


def fetch_page(repo_name: str, kind: str, cursor: Optional[str] = None) -> Page:
    """Fetch one page of issues or pull requests, starting after `cursor`."""
    if kind not in KIND_QUERIES:
        raise ValueError(f"unknown record kind {kind!r}")
    owner, repo = split_repo_name(repo_name)
    variables: Dict[str, Any] = {
        "owner": owner,
        "name": repo,
        "pageSize": PAGE_SIZE,
        "cursor": cursor,
    }
    if kind == ISSUES:
        variables["timelineSize"] = TIMELINE_PAGE_SIZE
    data = run_graphql_query(KIND_QUERIES[kind], variables)
    connection = _repository_node(data, repo_name).get(kind) or {}
    return parse_page(kind, connection, repo_name)


def fetch_repository(repo_name: str, fetch: PageFetcher = fetch_page) -> RepositorySnapshot:
    """Fetch counters plus the complete issue and pull-request collections."""
    print(f"[info] {repo_name}: fetching repo counters...")
    counters = get_repo_counters(repo_name)

    print(f"[info] {repo_name}: fetching issues...")
    issues = accumulate_pages(fetch, repo_name, ISSUES)

    print(f"[info] {repo_name}: fetching pull requests...")
    pull_requests = accumulate_pages(fetch, repo_name, PULL_REQUESTS)

    print(f"[info] {repo_name}: fetched {len(issues)} issues and {len(pull_requests)} pull requests")
    return RepositorySnapshot(
        name=repo_name,
        issues=tuple(issues),
        pull_requests=tuple(pull_requests),
        **counters,
    )


__all__ = [
    "split_repo_name",
    "get_repo_counters",
    "parse_page",
    "fetch_page",
    "fetch_repository",
]
