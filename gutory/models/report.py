"""
Gutory Models - Reports
Report windows, generated reports, archived snapshots, and chart series
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportRange(str, Enum):
    """Reporting window presets"""

    LAST_7_DAYS = "last7Days"
    LAST_30_DAYS = "last30Days"
    ALL_TIME = "allTime"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return {
            ReportRange.LAST_7_DAYS: "Last 7 Days",
            ReportRange.LAST_30_DAYS: "Last 30 Days",
            ReportRange.ALL_TIME: "All Time",
            ReportRange.CUSTOM: "Custom",
        }[self]


class ReportWindow(BaseModel):
    """Resolved date range; None bounds are unbounded"""

    model_config = ConfigDict(frozen=True)

    kind: ReportRange
    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, day: date) -> bool:
        """Inclusive on both bounds"""
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


class GutReport(BaseModel):
    """Output of one summarization pass"""

    model_config = ConfigDict(frozen=True)

    summary: str
    key_takeaways: List[str] = Field(default_factory=list)
    patterns: List[str] = Field(default_factory=list)
    action_items: List[str] = Field(default_factory=list)


class SavedWeeklyReport(BaseModel):
    """Immutable snapshot of a generated report kept in local storage"""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    period_start: date
    period_end: date
    days_logged: int = Field(..., ge=1)
    range_type: str
    report: GutReport

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC so the archive stays sortable"""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class TrendPoint(BaseModel):
    """Chart point, both axes normalized to 0...1"""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., ge=0.0, le=1.0)
    y: float = Field(..., ge=0.0, le=1.0)


class MetricSeries(BaseModel):
    """Trend points for one metric"""

    metric: str
    points: List[TrendPoint]
