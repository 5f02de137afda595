"""
Gutory Models Module
Pydantic models for daily logs and reports
"""

from .daily_log import (
    ALL_METRICS,
    GUT_SYMPTOM_METRICS,
    METRIC_LABELS,
    WELLBEING_METRICS,
    DailyLog,
    DailyLogDraft,
    calmness_to_stress,
    stress_to_calmness,
)
from .report import (
    GutReport,
    MetricSeries,
    ReportRange,
    ReportWindow,
    SavedWeeklyReport,
    TrendPoint,
)

__all__ = [
    # Daily logs
    "DailyLog",
    "DailyLogDraft",
    "GUT_SYMPTOM_METRICS",
    "WELLBEING_METRICS",
    "ALL_METRICS",
    "METRIC_LABELS",
    "calmness_to_stress",
    "stress_to_calmness",
    # Reports
    "ReportRange",
    "ReportWindow",
    "GutReport",
    "SavedWeeklyReport",
    "TrendPoint",
    "MetricSeries",
]
