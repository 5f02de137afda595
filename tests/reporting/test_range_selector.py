from datetime import date, timedelta

import pytest

from gutory.models.report import ReportRange
from gutory.reporting.range_selector import filter_logs, resolve
from gutory.utils.errors import ValidationError
from tests.conftest import TODAY, make_log


def test_last_7_days_includes_today_and_excludes_a_week_ago() -> None:
    window = resolve(ReportRange.LAST_7_DAYS, TODAY)
    records = [make_log(TODAY - timedelta(days=n)) for n in range(10)]

    kept = {record.log_date for record in filter_logs(records, window)}

    assert window.start == TODAY - timedelta(days=6)
    assert window.end == TODAY
    assert TODAY in kept
    assert TODAY - timedelta(days=7) not in kept
    assert len(kept) == 7


def test_last_30_days_bounds() -> None:
    window = resolve("last30Days", TODAY)
    assert window.kind is ReportRange.LAST_30_DAYS
    assert window.start == TODAY - timedelta(days=29)
    assert window.end == TODAY


def test_all_time_passes_everything() -> None:
    window = resolve(ReportRange.ALL_TIME, TODAY)
    records = [make_log("2001-01-01"), make_log(TODAY), make_log("2099-12-31")]
    assert window.start is None and window.end is None
    assert filter_logs(records, window) == records


def test_custom_window_is_inclusive() -> None:
    window = resolve(
        ReportRange.CUSTOM, TODAY, date(2024, 1, 1), date(2024, 1, 2)
    )
    records = [make_log("2023-12-31"), make_log("2024-01-01"), make_log("2024-01-02"), make_log("2024-01-03")]
    assert [r.log_date.isoformat() for r in filter_logs(records, window)] == [
        "2024-01-01",
        "2024-01-02",
    ]


def test_reversed_custom_window_matches_nothing() -> None:
    window = resolve(ReportRange.CUSTOM, TODAY, date(2024, 2, 1), date(2024, 1, 1))
    records = [make_log("2024-01-15"), make_log("2024-02-01")]
    assert filter_logs(records, window) == []


def test_custom_window_requires_both_bounds() -> None:
    with pytest.raises(ValidationError):
        resolve(ReportRange.CUSTOM, TODAY, date(2024, 1, 1), None)
