"""GraphQL documents for repository counters, issues, and pull requests."""

from __future__ import annotations

REPOSITORY_QUERY = """
query RepositoryCounters($owner:String!, $name:String!) {
  repository(owner:$owner, name:$name) {
    nameWithOwner
    forkCount
    stargazers { totalCount }
    watchers { totalCount }
    issues { totalCount }
    pullRequests { totalCount }
  }
}
"""

# Timeline items are requested with `last:` so the newest activity is kept and
# the nodes still arrive oldest-first.
ISSUES_QUERY = """
query RepositoryIssues($owner:String!, $name:String!, $pageSize:Int!, $timelineSize:Int!, $cursor:String) {
  repository(owner:$owner, name:$name) {
    issues(first:$pageSize, after:$cursor, orderBy:{field:CREATED_AT, direction:ASC}) {
      pageInfo { hasNextPage endCursor }
      nodes {
        author { login }
        authorAssociation
        createdAt
        closedAt
        state
        timelineItems(last:$timelineSize) {
          nodes {
            __typename
            ... on ClosedEvent { createdAt closer { __typename } }
            ... on ReopenedEvent { createdAt }
            ... on IssueComment { createdAt }
            ... on LabeledEvent { createdAt }
            ... on UnlabeledEvent { createdAt }
            ... on AssignedEvent { createdAt }
            ... on UnassignedEvent { createdAt }
            ... on MilestonedEvent { createdAt }
            ... on DemilestonedEvent { createdAt }
            ... on RenamedTitleEvent { createdAt }
            ... on CrossReferencedEvent { createdAt }
            ... on ReferencedEvent { createdAt }
            ... on MentionedEvent { createdAt }
            ... on LockedEvent { createdAt }
            ... on UnlockedEvent { createdAt }
            ... on PinnedEvent { createdAt }
            ... on UnpinnedEvent { createdAt }
            ... on SubscribedEvent { createdAt }
            ... on UnsubscribedEvent { createdAt }
            ... on ConnectedEvent { createdAt }
            ... on DisconnectedEvent { createdAt }
            ... on AddedToProjectEvent { createdAt }
            ... on RemovedFromProjectEvent { createdAt }
            ... on MovedColumnsInProjectEvent { createdAt }
            ... on ConvertedNoteToIssueEvent { createdAt }
            ... on ConvertedToDiscussionEvent { createdAt }
            ... on CommentDeletedEvent { createdAt }
            ... on MarkedAsDuplicateEvent { createdAt }
            ... on UnmarkedAsDuplicateEvent { createdAt }
            ... on TransferredEvent { createdAt }
            ... on UserBlockedEvent { createdAt }
          }
        }
      }
    }
  }
}
"""

PULL_REQUESTS_QUERY = """
query RepositoryPullRequests($owner:String!, $name:String!, $pageSize:Int!, $cursor:String) {
  repository(owner:$owner, name:$name) {
    pullRequests(first:$pageSize, after:$cursor, orderBy:{field:CREATED_AT, direction:ASC}) {
      pageInfo { hasNextPage endCursor }
      nodes {
        author { login }
        authorAssociation
        createdAt
        mergedAt
        closedAt
        state
      }
    }
  }
}
"""

__all__ = ["REPOSITORY_QUERY", "ISSUES_QUERY", "PULL_REQUESTS_QUERY"]
