"""Contributor login sets, unioned across record kinds and repositories."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, fields
from typing import DefaultDict, Dict, FrozenSet, Iterable, Mapping, Optional, Set

from .classifier import is_external, is_first_time, is_internal

CONTRIBUTOR_GROUPS = (
    "all_time",
    "all_time_internal",
    "all_time_external",
    "this_period",
    "this_period_internal",
    "this_period_external",
    "this_period_first_time",
)


@dataclass(frozen=True)
class ContributorSets:
    all_time: FrozenSet[str] = frozenset()
    all_time_internal: FrozenSet[str] = frozenset()
    all_time_external: FrozenSet[str] = frozenset()
    this_period: FrozenSet[str] = frozenset()
    this_period_internal: FrozenSet[str] = frozenset()
    this_period_external: FrozenSet[str] = frozenset()
    this_period_first_time: FrozenSet[str] = frozenset()

    @classmethod
    def from_groups(cls, groups: Mapping[str, Set[str]]) -> "ContributorSets":
        return cls(**{name: frozenset(groups.get(name) or ()) for name in CONTRIBUTOR_GROUPS})

    @classmethod
    def union_all(cls, items: Iterable["ContributorSets"]) -> "ContributorSets":
        result = cls()
        for item in items:
            result = result | item
        return result

    def union(self, other: "ContributorSets") -> "ContributorSets":
        return ContributorSets(**{
            f.name: getattr(self, f.name) | getattr(other, f.name) for f in fields(self)
        })

    __or__ = union

    def counts(self) -> Dict[str, int]:
        return {f.name: len(getattr(self, f.name)) for f in fields(self)}


def record_contribution(counts: Counter,
                        groups: DefaultDict[str, Set[str]],
                        login: Optional[str],
                        association: Optional[str],
                        in_window: bool) -> None:
    """Tally one issue or pull request by author affiliation.

    Bumps `internal`/`external` and, inside the window, `opened*` counters.
    Logins go into the matching `groups`; a null login (ghost author) is still
    counted but joins no group.
    """
    flags = {
        "internal": is_internal(association),
        "external": is_external(association),
        "first_time": is_first_time(association),
    }
    if login:
        groups["all_time"].add(login)
    for group in ("internal", "external"):
        if flags[group]:
            counts[group] += 1
            if login:
                groups[f"all_time_{group}"].add(login)

    if not in_window:
        return
    counts["opened"] += 1
    if login:
        groups["this_period"].add(login)
    for group, flagged in flags.items():
        if flagged:
            counts[f"opened_{group}"] += 1
            if login:
                groups[f"this_period_{group}"].add(login)


__all__ = ["CONTRIBUTOR_GROUPS", "ContributorSets", "record_contribution"]
