"""Report pipeline: configuration, concurrent fetch, metrics, and CSV output."""

from .runner import fetch_all, main, run_report

__all__ = ["fetch_all", "main", "run_report"]
