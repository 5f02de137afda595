"""
Gutory Reporting
Aggregation, reporting windows, report generation, and the report archive
"""

from .aggregator import (
    average_severity,
    metric_series,
    severity_score,
    streak,
    time_series,
)
from .archive import ReportSnapshotArchive
from .range_selector import filter_logs, resolve
from .report_builder import ReportOutcome, ReportRequestBuilder, build_fallback_report

__all__ = [
    "severity_score",
    "average_severity",
    "streak",
    "time_series",
    "metric_series",
    "resolve",
    "filter_logs",
    "ReportRequestBuilder",
    "ReportOutcome",
    "build_fallback_report",
    "ReportSnapshotArchive",
]
