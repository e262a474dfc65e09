"""Reporting period parsed from `YYYY-MM-DD` start and end dates."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MIN_WINDOW = dt.timedelta(days=1)


class ConfigurationError(ValueError):
    """Run parameters are invalid; nothing should be fetched."""


@dataclass(frozen=True)
class TimeWindow:
    start: dt.datetime
    end: dt.datetime

    def __post_init__(self) -> None:
        if self.end - self.start < MIN_WINDOW:
            raise ConfigurationError(
                "end date must be at least one day after start date "
                f"(got {self.start:%Y-%m-%d} -> {self.end:%Y-%m-%d})"
            )

    def contains(self, moment: dt.datetime) -> bool:
        """True when `moment` lies strictly between start and end."""
        return self.start < moment < self.end

    def label(self) -> str:
        return f"{self.start:%Y-%m-%d}_to_{self.end:%Y-%m-%d}"


def parse_date(raw: str, name: str = "date") -> dt.datetime:
    """Parse `YYYY-MM-DD` as midnight UTC."""
    value = (raw or "").strip()
    if not DATE_RE.match(value):
        raise ConfigurationError(f"{name} must use the format YYYY-MM-DD (got {raw!r})")
    try:
        parsed = dt.datetime.strptime(value, "%Y-%m-%d")
    except ValueError as exc:
        raise ConfigurationError(f"{name} is not a valid calendar date: {raw!r}") from exc
    return parsed.replace(tzinfo=dt.timezone.utc)


def parse_time_window(start: str, end: str) -> TimeWindow:
    return TimeWindow(parse_date(start, "start date"), parse_date(end, "end date"))


__all__ = ["ConfigurationError", "TimeWindow", "parse_date", "parse_time_window", "MIN_WINDOW"]
