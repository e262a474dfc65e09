"""Engagement and health metrics computed from fetched repository snapshots."""

from .aggregate import TOTAL_LABEL, aggregate_reports, build_report_rows
from .reducer import RepositoryReport, build_repository_report
from .window import ConfigurationError, TimeWindow, parse_time_window

__all__ = [
    "TOTAL_LABEL",
    "aggregate_reports",
    "build_report_rows",
    "RepositoryReport",
    "build_repository_report",
    "ConfigurationError",
    "TimeWindow",
    "parse_time_window",
]
