"""Report screen state: loaded logs, selected window, current and saved reports."""

import asyncio
from datetime import date, timedelta
from typing import Callable, List, Optional
from uuid import UUID

from gutory.auth.session import SessionProvider, require_session
from gutory.models.daily_log import DailyLog
from gutory.models.report import GutReport, ReportRange, ReportWindow, SavedWeeklyReport
from gutory.profile import ProfileStore
from gutory.reporting import range_selector
from gutory.reporting.archive import ReportSnapshotArchive
from gutory.reporting.report_builder import ReportOutcome, ReportRequestBuilder
from gutory.repositories.daily_logs import DailyLogRepository
from gutory.utils.errors import (
    AuthenticationError,
    InsufficientDataError,
    NotFoundError,
    RecordStoreError,
)
from gutory.utils.logging_config import get_logger_with_context, log_error_with_context


class ReportsService:
    """
    Owns one signed-in user's report session.

    Logs are loaded once per ``load`` and filtered in memory whenever the
    selected range changes. Only summarizer-produced reports are archived; a
    fallback report becomes the current report with ``error_message`` set.
    """

    def __init__(
        self,
        repository: DailyLogRepository,
        builder: ReportRequestBuilder,
        archive: ReportSnapshotArchive,
        sessions: SessionProvider,
        profile: Optional[ProfileStore] = None,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.builder = builder
        self.archive = archive
        self.sessions = sessions
        self.profile = profile
        self.today = today

        self.all_logs: List[DailyLog] = []
        self.logs_in_range: List[DailyLog] = []
        self.selected_range = ReportRange.LAST_7_DAYS
        self.custom_start: date = today() - timedelta(days=6)
        self.custom_end: date = today()
        self.current_report: Optional[GutReport] = None
        self.saved_reports: List[SavedWeeklyReport] = []
        self.selected_saved_report_id: Optional[UUID] = None
        self.error_message: Optional[str] = None
        self.is_loading = False

        self._generate_lock = asyncio.Lock()

    @property
    def logged_days_in_range(self) -> int:
        return len(self.logs_in_range)

    @property
    def window(self) -> ReportWindow:
        return range_selector.resolve(
            self.selected_range, self.today(), self.custom_start, self.custom_end
        )

    @property
    def selected_saved_report(self) -> Optional[SavedWeeklyReport]:
        if self.selected_saved_report_id is None:
            return None
        return self.archive.find(self.selected_saved_report_id)

    async def load(self) -> None:
        """Load saved reports, then the user's logs, then apply the range"""
        self.error_message = None
        self.saved_reports = await self.archive.load()
        await self._load_all_logs()
        self._update_range_logs()

    async def _load_all_logs(self) -> None:
        session = self.sessions.current()
        if session is None:
            self.all_logs = []
            self.error_message = AuthenticationError().message
            return

        user_logger = get_logger_with_context(__name__, str(session.user_id))
        self.is_loading = True
        try:
            self.all_logs = await self.repository.query(session.user_id)
        except RecordStoreError as e:
            log_error_with_context(user_logger, e)
            self.all_logs = []
            self.error_message = f"Failed to load logs: {e.message}"
        else:
            user_logger.info(f"Loaded {len(self.all_logs)} logs for reports")
        finally:
            self.is_loading = False

    def _update_range_logs(self) -> None:
        if not self.all_logs:
            self.logs_in_range = []
            return
        self.logs_in_range = range_selector.filter_logs(self.all_logs, self.window)

    def change_range(self, kind: ReportRange) -> None:
        self.selected_range = ReportRange(kind)
        self.selected_saved_report_id = None
        self._update_range_logs()

    def set_custom_range(self, start: date, end: date) -> None:
        self.custom_start = start
        self.custom_end = end
        self.selected_range = ReportRange.CUSTOM
        self.selected_saved_report_id = None
        self._update_range_logs()

    def select_saved_report(self, report_id: UUID) -> GutReport:
        """Show an archived snapshot as the current report"""
        saved = self.archive.find(report_id)
        if saved is None:
            raise NotFoundError(
                "Saved report not found", details={"report_id": str(report_id)}
            )
        self.selected_saved_report_id = saved.id
        self.current_report = saved.report
        return saved.report

    async def generate_report(self, timeout: Optional[float] = None) -> ReportOutcome:
        """
        Generate a report for the selected range.

        Raises:
            AuthenticationError: If nobody is signed in
            InsufficientDataError: If the range has too few logged days
        """
        self.error_message = None
        try:
            require_session(self.sessions)
            if not self.builder.can_generate(self.logged_days_in_range):
                raise InsufficientDataError(
                    self.builder.min_days, self.logged_days_in_range
                )
        except (AuthenticationError, InsufficientDataError) as e:
            self.error_message = e.message
            raise

        window = self.window
        window_logs = list(self.logs_in_range)
        goals_text = await self.profile.get_goals() if self.profile else None

        async with self._generate_lock:
            self.is_loading = True
            try:
                outcome = await self.builder.generate(
                    window_logs, self.all_logs, goals_text, timeout=timeout
                )
            finally:
                self.is_loading = False

            self.current_report = outcome.report
            if outcome.is_fallback:
                self.error_message = outcome.error
                return outcome

            self.selected_saved_report_id = None
            await self.archive.append(outcome.report, window, outcome.period_logs)
            self.saved_reports = self.archive.reports
            return outcome
