"""Typed records built from GitHub GraphQL nodes.

Nodes are validated once, when a page is parsed. Anything missing a field the
metrics depend on raises :class:`RecordError` so the caller can quarantine it
instead of feeding ``None`` into date arithmetic.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

ISSUES = "issues"
PULL_REQUESTS = "pullRequests"
RECORD_KINDS = (ISSUES, PULL_REQUESTS)

CLOSED_EVENT = "ClosedEvent"
PULL_REQUEST_CLOSER = "PullRequest"

ISSUE_STATES = {"OPEN", "CLOSED"}
PULL_REQUEST_STATES = {"OPEN", "MERGED", "CLOSED"}


class RecordError(ValueError):
    """A GraphQL node is missing or has malformed required fields."""


def parse_github_timestamp(raw: Optional[str]) -> Optional[dt.datetime]:
    """Parse GitHub's ISO-8601 timestamps into timezone-aware UTC datetimes."""
    if not raw or not isinstance(raw, str):
        return None
    try:
        return dt.datetime.strptime(raw, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=dt.timezone.utc)
    except ValueError:
        pass
    try:
        parsed = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed.astimezone(dt.timezone.utc)


def _require_timestamp(node: Dict[str, Any], field: str) -> dt.datetime:
    value = parse_github_timestamp(node.get(field))
    if value is None:
        raise RecordError(f"missing or invalid {field!r}: {node.get(field)!r}")
    return value


def _optional_timestamp(node: Dict[str, Any], field: str) -> Optional[dt.datetime]:
    raw = node.get(field)
    if raw is None:
        return None
    value = parse_github_timestamp(raw)
    if value is None:
        raise RecordError(f"invalid {field!r}: {raw!r}")
    return value


def _require_state(node: Dict[str, Any], allowed: set) -> str:
    state = node.get("state")
    if state not in allowed:
        raise RecordError(f"unexpected state {state!r}")
    return state


def _author_login(node: Dict[str, Any]) -> Optional[str]:
    """Return the author's login; deleted ("ghost") accounts come back as null."""
    author = node.get("author")
    if not isinstance(author, dict):
        return None
    return author.get("login") or None


def _require_dict(node: Any) -> Dict[str, Any]:
    if not isinstance(node, dict):
        raise RecordError(f"expected an object, got {type(node).__name__}")
    return node


@dataclass(frozen=True)
class TimelineEvent:
    kind: str
    created_at: Optional[dt.datetime] = None
    closer_kind: Optional[str] = None

    @classmethod
    def from_node(cls, node: Any) -> "TimelineEvent":
        node = _require_dict(node)
        kind = node.get("__typename")
        if not kind:
            raise RecordError("timeline item without __typename")
        closer = node.get("closer")
        return cls(
            kind=kind,
            created_at=parse_github_timestamp(node.get("createdAt")),
            closer_kind=closer.get("__typename") if isinstance(closer, dict) else None,
        )


@dataclass(frozen=True)
class Issue:
    author: Optional[str]
    author_association: str
    created_at: dt.datetime
    state: str
    closed_at: Optional[dt.datetime] = None
    timeline: Tuple[TimelineEvent, ...] = ()

    @classmethod
    def from_node(cls, node: Any) -> "Issue":
        node = _require_dict(node)
        timeline_nodes = ((node.get("timelineItems") or {}).get("nodes")) or []
        return cls(
            author=_author_login(node),
            author_association=node.get("authorAssociation") or "",
            created_at=_require_timestamp(node, "createdAt"),
            state=_require_state(node, ISSUE_STATES),
            closed_at=_optional_timestamp(node, "closedAt"),
            timeline=tuple(TimelineEvent.from_node(item) for item in timeline_nodes if item),
        )


@dataclass(frozen=True)
class PullRequest:
    author: Optional[str]
    author_association: str
    created_at: dt.datetime
    state: str
    merged_at: Optional[dt.datetime] = None
    closed_at: Optional[dt.datetime] = None

    @classmethod
    def from_node(cls, node: Any) -> "PullRequest":
        node = _require_dict(node)
        return cls(
            author=_author_login(node),
            author_association=node.get("authorAssociation") or "",
            created_at=_require_timestamp(node, "createdAt"),
            state=_require_state(node, PULL_REQUEST_STATES),
            merged_at=_optional_timestamp(node, "mergedAt"),
            closed_at=_optional_timestamp(node, "closedAt"),
        )


RECORD_TYPES = {ISSUES: Issue, PULL_REQUESTS: PullRequest}


@dataclass(frozen=True)
class Page:
    """One page of a cursor-paginated connection."""

    records: Tuple[Any, ...]
    has_next_page: bool
    end_cursor: Optional[str] = None


@dataclass(frozen=True)
class RepositorySnapshot:
    """Everything fetched for one repository in a run."""

    name: str
    stars: int = 0
    watches: int = 0
    forks: int = 0
    issue_count: int = 0
    pull_request_count: int = 0
    issues: Tuple[Issue, ...] = ()
    pull_requests: Tuple[PullRequest, ...] = ()


__all__ = [
    "ISSUES",
    "PULL_REQUESTS",
    "RECORD_KINDS",
    "RECORD_TYPES",
    "CLOSED_EVENT",
    "PULL_REQUEST_CLOSER",
    "RecordError",
    "parse_github_timestamp",
    "TimelineEvent",
    "Issue",
    "PullRequest",
    "Page",
    "RepositorySnapshot",
]
