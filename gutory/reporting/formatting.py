"""Display strings for periods, windows, and streaks."""

from datetime import date
from typing import Optional, Union

from gutory.models.report import ReportRange, ReportWindow, SavedWeeklyReport

DateLike = Union[date, str, None]


def format_day(day: date) -> str:
    """Medium date style, e.g. 'Jan 5, 2024'"""
    return f"{day:%b} {day.day}, {day.year}"


def _parse(value: DateLike) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def format_period(start: DateLike, end: DateLike) -> str:
    """'Jan 1, 2024 – Jan 7, 2024'; raw values when either side does not parse"""
    start_day, end_day = _parse(start), _parse(end)
    if start_day is not None and end_day is not None:
        return f"{format_day(start_day)} – {format_day(end_day)}"
    return f"{start or ''} – {end or ''}"


def window_description(window: ReportWindow) -> str:
    if window.kind is ReportRange.ALL_TIME:
        return "All available logs"
    return format_period(window.start, window.end)


def viewing_title(
    kind: ReportRange, saved_report: Optional[SavedWeeklyReport] = None
) -> str:
    if saved_report is not None:
        period = format_period(saved_report.period_start, saved_report.period_end)
        return f"Currently viewing: {period} report"
    if kind is ReportRange.ALL_TIME:
        return "Currently viewing: All-time report"
    if kind is ReportRange.CUSTOM:
        return "Currently viewing: Custom range report"
    return f"Currently viewing: {kind.label} report"


def streak_message(count: int) -> Optional[str]:
    if count <= 0:
        return None
    return f"You've logged {count} day{'' if count == 1 else 's'} in a row."
