"""
Report generation with a local fallback.

The external summarizer gets the window's logs newest-first plus the full
history. When it fails for any transport or parse reason, a fixed local report
is shown instead and the failure is returned alongside it as a warning.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from gutory.models.daily_log import DailyLog
from gutory.models.report import GutReport
from gutory.reporting.aggregator import newest_first
from gutory.reporting.formatting import format_period
from gutory.summarizer.exceptions import SummarizerError
from gutory.utils.errors import InsufficientDataError
from gutory.utils.logger import get_logger
from gutory.utils.logging_config import log_error_with_context

logger = get_logger(__name__)

MIN_DAYS_FOR_REPORT = 3

FALLBACK_TAKEAWAYS = [
    "Logging consistently is the most important thing – even a few quick entries per week add up.",
    "Use the History tab to look back at days where you felt especially good or uncomfortable.",
    "As more data builds up, AI reports will be able to spot patterns with meals, tags, and symptoms.",
]

FALLBACK_ACTION_ITEMS = [
    "Keep logging symptoms and meals on most days.",
    "Consider tagging common triggers like dairy, gluten, coffee, or alcohol when you use them.",
    "When you feel ready, generate another report to see updated trends.",
]


class Summarizer(Protocol):
    async def summarize(
        self,
        period_logs: Sequence[DailyLog],
        all_logs: Sequence[DailyLog],
        goals_text: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> GutReport: ...


@dataclass(frozen=True)
class ReportOutcome:
    """Result of one generate call"""

    report: GutReport
    period_logs: List[DailyLog]
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.error is not None


def build_fallback_report(period_logs: Sequence[DailyLog]) -> GutReport:
    """Deterministic report used when the summarizer cannot be reached"""
    days = len(period_logs)
    if period_logs:
        dates = [log.log_date for log in period_logs]
        period = format_period(min(dates), max(dates))
    else:
        period = format_period(None, None)

    summary = (
        f"Over {days} logged days from {period}, we weren't able to generate a full "
        "AI report right now, but you still tracked useful information about your "
        "gut, energy, mood, and sleep. Keep logging so future reports can highlight "
        "clearer trends."
    )
    return GutReport(
        summary=summary,
        key_takeaways=list(FALLBACK_TAKEAWAYS),
        patterns=[],
        action_items=list(FALLBACK_ACTION_ITEMS),
    )


class ReportRequestBuilder:
    """Packages window logs for the summarizer and maps the result"""

    def __init__(
        self,
        summarizer: Summarizer,
        min_days: int = MIN_DAYS_FOR_REPORT,
        timeout: Optional[float] = None,
    ):
        self.summarizer = summarizer
        self.min_days = min_days
        self.timeout = timeout

    def can_generate(self, window_record_count: int) -> bool:
        return window_record_count >= self.min_days

    async def generate(
        self,
        window_records: Sequence[DailyLog],
        all_records: Sequence[DailyLog],
        goals_text: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ReportOutcome:
        """
        Generate a report for the window.

        Args:
            window_records: Logs in the selected window
            all_records: Every loaded log, for context
            goals_text: User's goals, if any
            timeout: Seconds to wait for the summarizer; overrides the default

        Returns:
            ReportOutcome with either the summarizer's report or the fallback
            report plus the error message

        Raises:
            InsufficientDataError: If the window has fewer than min_days logs
        """
        if not self.can_generate(len(window_records)):
            raise InsufficientDataError(self.min_days, len(window_records))

        period_logs = newest_first(window_records)
        limit = timeout if timeout is not None else self.timeout

        try:
            call = self.summarizer.summarize(
                period_logs, list(all_records), goals_text, timeout=limit
            )
            if limit is not None:
                report = await asyncio.wait_for(call, timeout=limit)
            else:
                report = await call
        except asyncio.TimeoutError as error:
            message = f"AI backend timed out after {limit}s."
            log_error_with_context(logger, error, {"days": len(period_logs)})
            return ReportOutcome(build_fallback_report(period_logs), period_logs, message)
        except SummarizerError as error:
            log_error_with_context(logger, error, {"days": len(period_logs)})
            return ReportOutcome(
                build_fallback_report(period_logs), period_logs, error.message
            )

        logger.info(f"Generated report for {len(period_logs)} logged days")
        return ReportOutcome(report, period_logs)
