"""
Daily log aggregation: severity scores, streaks, and chart series.

Everything here is a pure function over an in-memory list of DailyLog rows.
Missing metrics are skipped, never counted as zero.
"""

from datetime import date, timedelta
from typing import Iterable, Iterator, List, Optional, Sequence

from gutory.models.daily_log import GUT_SYMPTOM_METRICS, DailyLog
from gutory.models.report import MetricSeries, TrendPoint

SEVERITY_WINDOW = 7
STREAK_LOOKBACK_DAYS = 30
TREND_MAX_POINTS = 14


def _average(values: Iterable[Optional[float]]) -> Optional[float]:
    total = 0.0
    count = 0
    for value in values:
        if value is None:
            continue
        total += float(value)
        count += 1
    if count == 0:
        return None
    return total / count


def newest_first(records: Iterable[DailyLog]) -> List[DailyLog]:
    return sorted(records, key=lambda log: log.log_date, reverse=True)


def oldest_first(records: Iterable[DailyLog]) -> List[DailyLog]:
    return sorted(records, key=lambda log: log.log_date)


def severity_score(record: DailyLog) -> Optional[float]:
    """Mean of the gut symptom metrics present on the record, 0...10"""
    return _average(getattr(record, name) for name in GUT_SYMPTOM_METRICS)


def severity_label(record: DailyLog) -> int:
    """Rounded score for display; 0 when the day has no gut data"""
    score = severity_score(record)
    return int(score + 0.5) if score is not None else 0


def average_severity(
    records: Iterable[DailyLog], window_size: int = SEVERITY_WINDOW
) -> float:
    """
    Average severity of the most recent scored records, normalized to 0...1.

    Only records with a severity score count toward the window. Returns 0 when
    there are none, so callers must check the record count to tell "no data"
    from "no symptoms".
    """
    scores: List[float] = []
    for record in newest_first(records):
        if len(scores) >= window_size:
            break
        score = severity_score(record)
        if score is not None:
            scores.append(score)

    average = _average(scores)
    if average is None:
        return 0.0
    return average / 10.0


def streak(
    records: Iterable[DailyLog],
    today: date,
    max_window: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """
    Consecutive logged days going back from today.

    A missing entry for today does not break the streak; counting starts from
    yesterday in that case. Any other gap ends it.
    """
    logged = {record.log_date for record in records}
    count = 0
    for offset in range(max_window):
        day = today - timedelta(days=offset)
        if day in logged:
            count += 1
        elif offset > 0:
            break
    return count


class TimeSeries:
    """
    Chart points for one metric over the earliest records that define it.

    Points are computed on iteration, so the series can be walked any number
    of times. Order is ascending by date.
    """

    def __init__(
        self,
        records: Iterable[DailyLog],
        metric: str,
        max_points: int = TREND_MAX_POINTS,
    ):
        self.metric = metric
        self._records = [
            record
            for record in oldest_first(records)
            if record.metric(metric) is not None
        ][:max_points]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TrendPoint]:
        count = len(self._records)
        for index, record in enumerate(self._records):
            x = 0.5 if count <= 1 else index / (count - 1)
            yield TrendPoint(x=x, y=record.metric(self.metric) / 10.0)

    def to_series(self) -> MetricSeries:
        return MetricSeries(metric=self.metric, points=list(self))


def time_series(
    records: Iterable[DailyLog], metric: str, max_points: int = TREND_MAX_POINTS
) -> TimeSeries:
    return TimeSeries(records, metric, max_points)


def metric_series(
    records: Sequence[DailyLog],
    metrics: Sequence[str] = GUT_SYMPTOM_METRICS,
    max_points: int = TREND_MAX_POINTS,
) -> List[MetricSeries]:
    """One series per metric; metrics with no data are left out"""
    series = []
    for metric in metrics:
        points = time_series(records, metric, max_points)
        if len(points):
            series.append(points.to_series())
    return series


def todays_log(records: Iterable[DailyLog], today: date) -> Optional[DailyLog]:
    for record in records:
        if record.log_date == today:
            return record
    return None


def count_with_gut_data(records: Iterable[DailyLog]) -> int:
    return sum(1 for record in records if severity_score(record) is not None)
