"""Dashboard snapshot over the last month of logs."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, List, Optional

from gutory.auth.session import SessionProvider
from gutory.models.daily_log import DailyLog
from gutory.models.report import MetricSeries
from gutory.reporting import aggregator
from gutory.repositories.daily_logs import DailyLogRepository
from gutory.utils.config import Settings, get_settings
from gutory.utils.errors import AuthenticationError, RecordStoreError
from gutory.utils.logging_config import get_logger_with_context, log_error_with_context


@dataclass
class DashboardSnapshot:
    recent_logs: List[DailyLog] = field(default_factory=list)
    todays_log: Optional[DailyLog] = None
    streak: int = 0
    average_severity: float = 0.0
    series: List[MetricSeries] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def has_gut_data(self) -> bool:
        return aggregator.count_with_gut_data(self.recent_logs) > 0


class DashboardService:
    def __init__(
        self,
        repository: DailyLogRepository,
        sessions: SessionProvider,
        settings: Optional[Settings] = None,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.sessions = sessions
        self.settings = settings or get_settings()
        self.today = today

    async def load(self) -> DashboardSnapshot:
        """Fetch recent logs and derive the dashboard numbers; errors give an empty snapshot"""
        session = self.sessions.current()
        if session is None:
            return DashboardSnapshot(error=AuthenticationError().message)

        user_logger = get_logger_with_context(__name__, str(session.user_id))
        today = self.today()
        start = today - timedelta(days=self.settings.dashboard_lookback_days)
        try:
            logs = await self.repository.query(session.user_id, start, today)
        except RecordStoreError as e:
            log_error_with_context(user_logger, e)
            return DashboardSnapshot(error="Failed to load logs.")

        user_logger.info(f"Dashboard: loaded {len(logs)} logs")
        return DashboardSnapshot(
            recent_logs=logs,
            todays_log=aggregator.todays_log(logs, today),
            streak=aggregator.streak(
                logs, today, self.settings.streak_lookback_days
            ),
            average_severity=aggregator.average_severity(
                logs, self.settings.severity_window
            ),
            series=aggregator.metric_series(
                logs, max_points=self.settings.trend_max_points
            ),
        )
