"""Report sinks."""

from .writer import COLUMNS, ReportWriteError, report_path, write_report

__all__ = ["COLUMNS", "ReportWriteError", "report_path", "write_report"]
