"""Small numeric helpers shared by the metric engines and the reducer."""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import fields, replace
from typing import Any, Sequence, TypeVar, Union

from .contributors import ContributorSets

NOT_APPLICABLE = "N/A"
SECONDS_PER_DAY = 24 * 60 * 60

Derived = Union[int, float, str]
M = TypeVar("M")


def days_between(earlier: dt.datetime, later: dt.datetime) -> float:
    """Signed fractional days from `earlier` to `later`."""
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(numerator: int, denominator: int) -> Derived:
    """Whole-number percentage, or "N/A" when the denominator is zero."""
    if not denominator:
        return NOT_APPLICABLE
    return round_half_up(100 * numerator / denominator)


def average(values: Sequence[float], digits: int = 2) -> Derived:
    """Mean rounded to `digits` places, or "N/A" for an empty sequence."""
    if not values:
        return NOT_APPLICABLE
    return round(sum(values) / len(values), digits)


def merge_metrics(left: M, right: M) -> M:
    """Combine two metric dataclasses field by field.

    Counters add, open-time tuples concatenate, contributor sets union.
    """
    merged = {}
    for f in fields(left):
        a: Any = getattr(left, f.name)
        b: Any = getattr(right, f.name)
        merged[f.name] = a | b if isinstance(a, ContributorSets) else a + b
    return replace(left, **merged)


__all__ = [
    "NOT_APPLICABLE",
    "SECONDS_PER_DAY",
    "days_between",
    "round_half_up",
    "percent",
    "average",
    "merge_metrics",
]
