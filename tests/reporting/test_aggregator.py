from datetime import timedelta

import pytest

from gutory.reporting.aggregator import (
    average_severity,
    count_with_gut_data,
    metric_series,
    severity_label,
    severity_score,
    streak,
    time_series,
    todays_log,
)
from gutory.utils.errors import ValidationError
from tests.conftest import TODAY, make_log


def _days_ago(n: int):
    return TODAY - timedelta(days=n)


def test_severity_score_averages_only_present_metrics() -> None:
    assert severity_score(make_log(TODAY, bloating=4, gas=2)) == 3.0
    assert severity_score(make_log(TODAY, bloating=4, gas=0)) == 2.0


def test_severity_score_absent_without_gut_metrics() -> None:
    record = make_log(TODAY, energy_level=8, sleep_quality=6, meals_text="toast")
    assert severity_score(record) is None
    assert severity_label(record) == 0


def test_severity_label_rounds_half_up() -> None:
    assert severity_label(make_log(TODAY, bloating=4, gas=5)) == 5


def test_average_severity_empty_is_zero() -> None:
    assert average_severity([]) == 0.0
    assert average_severity([make_log(TODAY, mood=3)]) == 0.0


def test_average_severity_two_records_scenario() -> None:
    records = [make_log("2024-01-01", bloating=2), make_log("2024-01-02", bloating=8)]
    assert average_severity(records) == pytest.approx(0.5)


def test_average_severity_uses_most_recent_scored_records() -> None:
    records = [make_log(_days_ago(n), bloating=10) for n in range(7)]
    records += [make_log(_days_ago(n), bloating=0) for n in range(7, 14)]
    # unscored days inside the window do not take a slot
    records.append(make_log(_days_ago(0) + timedelta(days=1), energy_level=5))

    assert average_severity(records, window_size=7) == pytest.approx(1.0)
    assert average_severity(records, window_size=14) == pytest.approx(0.5)


def test_average_severity_stays_in_unit_range() -> None:
    records = [make_log(_days_ago(n), bloating=10, gas=10) for n in range(5)]
    assert 0.0 <= average_severity(records) <= 1.0


def test_streak_counts() -> None:
    assert streak([], TODAY) == 0
    assert streak([make_log(_days_ago(n)) for n in range(3)], TODAY) == 3
    assert streak([make_log(TODAY), make_log(_days_ago(2))], TODAY) == 1


def test_streak_starts_yesterday_when_today_missing() -> None:
    records = [make_log(_days_ago(1)), make_log(_days_ago(2))]
    assert streak(records, TODAY) == 2


def test_streak_capped_by_lookback() -> None:
    records = [make_log(_days_ago(n)) for n in range(45)]
    assert streak(records, TODAY) == 30
    assert streak(records, TODAY, max_window=10) == 10


def test_time_series_scenario() -> None:
    records = [make_log("2024-01-02", bloating=8), make_log("2024-01-01", bloating=2)]
    points = [(p.x, p.y) for p in time_series(records, "bloating")]
    assert points == [(0.0, pytest.approx(0.2)), (1.0, pytest.approx(0.8))]


def test_time_series_single_point_is_centered() -> None:
    points = list(time_series([make_log(TODAY, gas=5)], "gas"))
    assert len(points) == 1
    assert points[0].x == 0.5
    assert points[0].y == 0.5


def test_time_series_skips_missing_values_and_keeps_earliest() -> None:
    records = [make_log(_days_ago(n), gas=n % 10) for n in range(20)]
    records.append(make_log(_days_ago(25), bloating=3))

    series = time_series(records, "gas", max_points=14)
    points = list(series)

    assert len(series) == 14
    assert points[0].x == 0.0
    assert points[-1].x == 1.0
    # earliest gas day is 19 days ago
    assert points[0].y == pytest.approx(0.9)


def test_time_series_is_restartable() -> None:
    series = time_series([make_log(TODAY, gas=1), make_log(_days_ago(1), gas=2)], "gas")
    assert list(series) == list(series)


def test_time_series_rejects_unknown_metric() -> None:
    with pytest.raises(ValidationError):
        time_series([make_log(TODAY, gas=1)], "caffeine")


def test_metric_series_omits_metrics_without_data() -> None:
    records = [make_log(TODAY, bloating=3), make_log(_days_ago(1), bloating=4, gas=1)]
    series = metric_series(records)
    assert [s.metric for s in series] == ["bloating", "gas"]
    assert len(series[0].points) == 2


def test_todays_log_and_gut_data_count() -> None:
    records = [make_log(TODAY, bloating=1), make_log(_days_ago(1), energy_level=4)]
    assert todays_log(records, TODAY).bloating == 1
    assert todays_log(records[1:], TODAY) is None
    assert count_with_gut_data(records) == 1
