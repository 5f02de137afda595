import asyncio
from typing import Optional, Sequence

import pytest

from gutory.models.daily_log import DailyLog
from gutory.models.report import GutReport
from gutory.reporting.report_builder import (
    FALLBACK_ACTION_ITEMS,
    ReportRequestBuilder,
    build_fallback_report,
)
from gutory.summarizer.exceptions import SummarizerResponseError
from gutory.utils.errors import InsufficientDataError
from tests.conftest import FailingSummarizer, FakeSummarizer, make_log, sample_report


def _run(coroutine):
    return asyncio.run(coroutine)


def _week():
    return [make_log(f"2024-01-0{d}", bloating=d) for d in (3, 1, 2)]


class SlowSummarizer:
    async def summarize(
        self,
        period_logs: Sequence[DailyLog],
        all_logs: Sequence[DailyLog],
        goals_text: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> GutReport:
        await asyncio.sleep(5)
        return sample_report()


def test_can_generate_threshold() -> None:
    builder = ReportRequestBuilder(FakeSummarizer())
    assert builder.can_generate(2) is False
    assert builder.can_generate(3) is True


def test_generate_sends_window_newest_first() -> None:
    summarizer = FakeSummarizer()
    builder = ReportRequestBuilder(summarizer)
    history = _week() + [make_log("2023-12-30", gas=1)]

    outcome = _run(builder.generate(_week(), history, goals_text="Reduce bloating"))

    assert outcome.report == sample_report()
    assert outcome.is_fallback is False
    call = summarizer.calls[0]
    assert [log.log_date.day for log in call["period_logs"]] == [3, 2, 1]
    assert len(call["all_logs"]) == 4
    assert call["goals_text"] == "Reduce bloating"


def test_generate_refuses_small_window() -> None:
    summarizer = FakeSummarizer()
    builder = ReportRequestBuilder(summarizer)

    with pytest.raises(InsufficientDataError) as excinfo:
        _run(builder.generate(_week()[:2], _week()))

    assert excinfo.value.required == 3
    assert excinfo.value.actual == 2
    assert summarizer.calls == []


def test_generate_falls_back_on_timeout() -> None:
    builder = ReportRequestBuilder(SlowSummarizer())

    outcome = _run(builder.generate(_week(), _week(), timeout=0.01))

    assert outcome.is_fallback
    assert "timed out" in outcome.error
    assert outcome.report.patterns == []
    assert len(outcome.report.action_items) == 3


def test_generate_falls_back_on_call_error() -> None:
    outcome = _run(ReportRequestBuilder(FailingSummarizer()).generate(_week(), _week()))

    assert outcome.is_fallback
    assert outcome.error == "AI backend returned status 500."
    assert outcome.report == build_fallback_report(_week())


def test_generate_falls_back_on_bad_response() -> None:
    summarizer = FakeSummarizer(error=SummarizerResponseError("bad body"))
    outcome = _run(ReportRequestBuilder(summarizer).generate(_week(), _week()))
    assert outcome.is_fallback
    assert outcome.error == "bad body"


def test_fallback_report_names_days_and_period() -> None:
    report = build_fallback_report(_week())

    assert report.summary.startswith("Over 3 logged days from Jan 1, 2024 – Jan 3, 2024,")
    assert len(report.key_takeaways) == 3
    assert report.patterns == []
    assert report.action_items == FALLBACK_ACTION_ITEMS


def test_fallback_report_is_deterministic() -> None:
    assert build_fallback_report(_week()) == build_fallback_report(list(reversed(_week())))
