from datetime import date
from typing import List, Optional, Sequence
from uuid import UUID

import pytest

from gutory.models.daily_log import DailyLog
from gutory.models.report import GutReport
from gutory.summarizer.exceptions import SummarizerCallError

USER_ID = UUID("11111111-2222-3333-4444-555555555555")
TODAY = date(2024, 3, 15)


def make_log(day, **metrics) -> DailyLog:
    if isinstance(day, str):
        day = date.fromisoformat(day)
    return DailyLog(user_id=USER_ID, log_date=day, **metrics)


def sample_report(summary: str = "Steady week") -> GutReport:
    return GutReport(
        summary=summary,
        key_takeaways=["Bloating eased after day 3"],
        patterns=["Coffee days had more gas"],
        action_items=["Try decaf for a week"],
    )


class FakeSummarizer:
    """Records calls; returns a fixed report or raises the configured error"""

    def __init__(self, report: Optional[GutReport] = None, error: Optional[Exception] = None):
        self.report = report or sample_report()
        self.error = error
        self.calls: List[dict] = []

    async def summarize(
        self,
        period_logs: Sequence[DailyLog],
        all_logs: Sequence[DailyLog],
        goals_text: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> GutReport:
        self.calls.append(
            {
                "period_logs": list(period_logs),
                "all_logs": list(all_logs),
                "goals_text": goals_text,
                "timeout": timeout,
            }
        )
        if self.error is not None:
            raise self.error
        return self.report


class FailingSummarizer(FakeSummarizer):
    def __init__(self):
        super().__init__(error=SummarizerCallError("AI backend returned status 500.", 500))


@pytest.fixture
def settings(tmp_path):
    from gutory.utils.config import Settings

    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon-key",
        local_storage_dir=str(tmp_path),
    )
