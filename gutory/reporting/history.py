"""Calendar month view of which days have a log."""

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Set

from gutory.auth.session import SessionProvider
from gutory.repositories.daily_logs import DailyLogRepository
from gutory.utils.errors import AuthenticationError, RecordStoreError, ValidationError
from gutory.utils.logger import get_logger
from gutory.utils.logging_config import log_error_with_context

logger = get_logger(__name__)


@dataclass
class MonthHistory:
    year: int
    month: int
    logged_dates: Set[date] = field(default_factory=set)
    error: Optional[str] = None

    def is_logged(self, day: date) -> bool:
        return day in self.logged_dates


def month_bounds(year: int, month: int) -> tuple:
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}", details={"month": month})
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class HistoryService:
    def __init__(self, repository: DailyLogRepository, sessions: SessionProvider):
        self.repository = repository
        self.sessions = sessions

    async def month(self, year: int, month: int) -> MonthHistory:
        start, end = month_bounds(year, month)
        session = self.sessions.current()
        if session is None:
            return MonthHistory(year, month, error=AuthenticationError().message)

        try:
            dates = await self.repository.logged_dates(session.user_id, start, end)
        except RecordStoreError as e:
            log_error_with_context(logger, e, {"month": f"{year}-{month:02d}"})
            return MonthHistory(year, month, error="Failed to load month history.")

        return MonthHistory(year, month, logged_dates=dates)
