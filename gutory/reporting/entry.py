"""Loading and saving a single day's entry."""

from datetime import date
from typing import Optional

from gutory.auth.session import SessionProvider, require_session
from gutory.models.daily_log import DailyLog, DailyLogDraft
from gutory.repositories.daily_logs import DailyLogRepository
from gutory.utils.errors import RecordStoreError
from gutory.utils.logger import get_logger
from gutory.utils.logging_config import log_error_with_context

logger = get_logger(__name__)


class LogEntryService:
    def __init__(self, repository: DailyLogRepository, sessions: SessionProvider):
        self.repository = repository
        self.sessions = sessions

    async def load_existing(self, log_date: date) -> Optional[DailyLogDraft]:
        """Form values for a day that was already logged, or None"""
        session = self.sessions.current()
        if session is None:
            return None

        try:
            existing = await self.repository.get_by_date(session.user_id, log_date)
        except RecordStoreError as e:
            log_error_with_context(logger, e, {"log_date": log_date.isoformat()})
            return None

        if existing is None:
            return None
        return DailyLogDraft.from_daily_log(existing)

    async def save(self, draft: DailyLogDraft, log_date: date) -> DailyLog:
        """
        Upsert the day's log.

        Raises:
            AuthenticationError: If nobody is signed in
            RecordStoreError: If the save fails
        """
        session = require_session(self.sessions)
        log = draft.to_daily_log(session.user_id, log_date)
        return await self.repository.upsert(log)
