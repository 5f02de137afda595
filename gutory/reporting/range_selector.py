"""Resolves reporting windows and filters logs into them."""

from datetime import date, timedelta
from typing import Iterable, List, Optional, Union

from gutory.models.daily_log import DailyLog
from gutory.models.report import ReportRange, ReportWindow
from gutory.utils.errors import ValidationError

PRESET_LENGTH_DAYS = {
    ReportRange.LAST_7_DAYS: 7,
    ReportRange.LAST_30_DAYS: 30,
}


def resolve(
    kind: Union[ReportRange, str],
    today: date,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> ReportWindow:
    """
    Turn a range preset into concrete dates.

    Presets always end at ``today``. Custom windows are taken as given; a start
    after the end is allowed and simply matches nothing.

    Raises:
        ValidationError: If a custom window is missing either bound
    """
    kind = ReportRange(kind)

    if kind in PRESET_LENGTH_DAYS:
        start = today - timedelta(days=PRESET_LENGTH_DAYS[kind] - 1)
        return ReportWindow(kind=kind, start=start, end=today)

    if kind is ReportRange.ALL_TIME:
        return ReportWindow(kind=kind)

    if custom_start is None or custom_end is None:
        raise ValidationError(
            "Custom range needs both a start and an end date",
            details={"start": custom_start, "end": custom_end},
        )
    return ReportWindow(kind=kind, start=custom_start, end=custom_end)


def filter_logs(records: Iterable[DailyLog], window: ReportWindow) -> List[DailyLog]:
    """Logs inside the window, inclusive on both ends, in their original order"""
    return [record for record in records if window.contains(record.log_date)]
