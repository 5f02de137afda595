"""
Local archive of generated reports.

The whole list is stored under one key and rewritten on every append. An
asyncio lock serializes the load-mutate-persist cycle so two appends cannot
interleave.
"""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from uuid import UUID

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from gutory.models.daily_log import DailyLog
from gutory.models.report import GutReport, ReportWindow, SavedWeeklyReport
from gutory.storage.local import KeyValueStore
from gutory.utils.config import Settings, get_settings
from gutory.utils.errors import InsufficientDataError, StorageError
from gutory.utils.logger import get_logger
from gutory.utils.logging_config import log_error_with_context

logger = get_logger(__name__)

_REPORT_LIST = TypeAdapter(List[SavedWeeklyReport])


def newest_created_first(reports: Sequence[SavedWeeklyReport]) -> List[SavedWeeklyReport]:
    return sorted(reports, key=lambda report: report.created_at, reverse=True)


class ReportSnapshotArchive:
    """Append-only list of SavedWeeklyReport snapshots, newest first"""

    def __init__(self, store: KeyValueStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or get_settings()
        self.key = self.settings.saved_reports_key
        self._reports: Optional[List[SavedWeeklyReport]] = None
        self._lock = asyncio.Lock()

    @property
    def reports(self) -> List[SavedWeeklyReport]:
        """In-memory list as of the last load or append"""
        return list(self._reports or [])

    async def load(self) -> List[SavedWeeklyReport]:
        """
        Read the persisted list, newest first.

        Missing or unreadable data yields an empty list.
        """
        async with self._lock:
            self._reports = await self._read()
            return list(self._reports)

    async def _read(self) -> List[SavedWeeklyReport]:
        try:
            data = await self.store.get(self.key)
        except StorageError as e:
            log_error_with_context(logger, e, {"key": self.key})
            return []

        if data is None:
            return []

        try:
            reports = newest_created_first(_REPORT_LIST.validate_json(data))
        except (PydanticValidationError, TypeError) as e:
            log_error_with_context(logger, e, {"key": self.key})
            return []

        logger.info(f"Loaded {len(reports)} saved reports")
        return reports

    async def append(
        self,
        report: GutReport,
        window: ReportWindow,
        window_records: Sequence[DailyLog],
        created_at: Optional[datetime] = None,
    ) -> SavedWeeklyReport:
        """
        Archive a generated report and persist the full list.

        The saved period spans the earliest and latest logged days actually in
        the window, which can be narrower than the window itself.

        Raises:
            InsufficientDataError: If window_records is empty
        """
        if not window_records:
            raise InsufficientDataError(
                1, 0, "Cannot archive a report for a window with no logs"
            )

        dates = [record.log_date for record in window_records]
        snapshot = SavedWeeklyReport(
            created_at=created_at or datetime.now(timezone.utc),
            period_start=min(dates),
            period_end=max(dates),
            days_logged=len(window_records),
            range_type=window.kind.label,
            report=report,
        )

        async with self._lock:
            if self._reports is None:
                self._reports = await self._read()
            self._reports.insert(0, snapshot)
            await self._persist()

        return snapshot

    async def _persist(self) -> None:
        data = _REPORT_LIST.dump_json(self._reports)
        try:
            await self.store.set(self.key, data)
        except StorageError as e:
            log_error_with_context(logger, e, {"key": self.key})
            return
        logger.info(f"Persisted {len(self._reports)} saved reports")

    def find(self, report_id: UUID) -> Optional[SavedWeeklyReport]:
        for report in self._reports or []:
            if report.id == report_id:
                return report
        return None
