"""Predicates over GitHub's `authorAssociation` values.

A first-time contributor is also external, so these stay three separate
checks rather than one enum. Unknown values answer False to all of them.
"""

from __future__ import annotations

from typing import Optional

INTERNAL_ASSOCIATIONS = frozenset({"OWNER", "MEMBER", "COLLABORATOR"})
FIRST_TIME_ASSOCIATIONS = frozenset({"FIRST_TIME_CONTRIBUTOR"})
EXTERNAL_ASSOCIATIONS = frozenset({"CONTRIBUTOR", "NONE"}) | FIRST_TIME_ASSOCIATIONS


def is_internal(association: Optional[str]) -> bool:
    return association in INTERNAL_ASSOCIATIONS


def is_external(association: Optional[str]) -> bool:
    return association in EXTERNAL_ASSOCIATIONS


def is_first_time(association: Optional[str]) -> bool:
    return association in FIRST_TIME_ASSOCIATIONS


__all__ = [
    "INTERNAL_ASSOCIATIONS",
    "EXTERNAL_ASSOCIATIONS",
    "FIRST_TIME_ASSOCIATIONS",
    "is_internal",
    "is_external",
    "is_first_time",
]
