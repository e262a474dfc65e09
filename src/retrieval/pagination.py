"""Drain cursor-paginated GraphQL connections into complete collections."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from .config import MAX_PAGES
from .models import Page

PageFetcher = Callable[[str, str, Optional[str]], Page]


class PaginationError(RuntimeError):
    """The paginated source broke its contract (no cursor, or never ends)."""


def accumulate_pages(fetch: PageFetcher,
                     repo_name: str,
                     kind: str,
                     *,
                     max_pages: int = MAX_PAGES) -> List[Any]:
    """Fetch every page of `kind` for `repo_name`, preserving page order.

    `fetch(repo_name, kind, cursor)` is called with ``cursor=None`` first and
    then with each page's ``end_cursor`` while ``has_next_page`` holds.
    Exceptions from `fetch` propagate and the partial collection is dropped.
    """
    records: List[Any] = []
    cursor: Optional[str] = None
    pages = 0
    while True:
        if max_pages and pages >= max_pages:
            raise PaginationError(
                f"{repo_name} {kind}: still reporting more pages after {max_pages} pages"
            )
        page = fetch(repo_name, kind, cursor)
        pages += 1
        records.extend(page.records)

        if not page.has_next_page:
            return records
        if not page.end_cursor:
            raise PaginationError(
                f"{repo_name} {kind}: page {pages} has a next page but no end cursor"
            )
        cursor = page.end_cursor


__all__ = ["PageFetcher", "PaginationError", "accumulate_pages"]
