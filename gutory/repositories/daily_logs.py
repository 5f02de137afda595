"""
Gutory Daily Log Repository
Data access for the remote daily_logs table

The table is keyed by (user_id, log_date). Writes are upserts on that pair, so
saving the same day twice replaces the earlier row instead of adding one.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Set, Tuple
from uuid import UUID

import httpx
from pydantic import ValidationError as PydanticValidationError

from gutory.models.daily_log import DailyLog
from gutory.utils.config import Settings, get_settings
from gutory.utils.errors import RecordStoreError
from gutory.utils.logger import get_logger

logger = get_logger(__name__)

CONFLICT_COLUMNS = "user_id,log_date"


# ============================================================================
# BASE REPOSITORY
# ============================================================================


class BaseRepository:
    """Base repository over the platform's table REST API"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        access_token: Optional[str] = None,
    ):
        self.settings = settings or get_settings()
        self.client = http_client or httpx.AsyncClient(timeout=10.0)
        self.access_token = access_token

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        api_key = self.settings.supabase_anon_key or ""
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {self.access_token or api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def request(
        self,
        method: str,
        table: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        """Send one table request and return the decoded JSON body"""
        url = f"{self.settings.rest_url}/{table}"
        try:
            response = await self.client.request(
                method, url, params=params, json=json, headers=self._headers(prefer)
            )
        except httpx.HTTPError as e:
            raise RecordStoreError(
                f"Request to {table} failed: {e}", details={"table": table}
            ) from e

        if response.status_code < 200 or response.status_code >= 300:
            raise RecordStoreError(
                f"{table} returned status {response.status_code}.",
                details={"table": table, "status_code": response.status_code},
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RecordStoreError(
                f"{table} returned a malformed body", details={"table": table}
            ) from e

    async def aclose(self) -> None:
        await self.client.aclose()


# ============================================================================
# DAILY LOG REPOSITORY
# ============================================================================


class DailyLogRepository(BaseRepository):
    """Repository for daily gut-health logs"""

    @property
    def table(self) -> str:
        return self.settings.daily_logs_table

    def _parse_row(self, row: Any) -> DailyLog:
        try:
            return DailyLog.model_validate(row)
        except PydanticValidationError as e:
            raise RecordStoreError(
                f"{self.table} returned a malformed row",
                details={"table": self.table, "errors": e.error_count()},
            ) from e

    async def upsert(self, log: DailyLog) -> DailyLog:
        """Create or replace the row for (user_id, log_date)"""
        if log.user_id is None:
            raise RecordStoreError("Cannot save a daily log without a user id")

        rows = await self.request(
            "POST",
            self.table,
            params=[("on_conflict", CONFLICT_COLUMNS)],
            json=log.to_payload(),
            prefer="resolution=merge-duplicates,return=representation",
        )
        logger.info(f"Upserted daily log for {log.log_date.isoformat()}")

        if rows:
            return self._parse_row(rows[0])
        return log

    async def query(
        self,
        user_id: UUID,
        start: Optional[date] = None,
        end: Optional[date] = None,
        ascending: bool = False,
    ) -> List[DailyLog]:
        """Get a user's logs, optionally bounded (inclusive) by date"""
        params = [("select", "*"), ("user_id", f"eq.{user_id}")]
        if start is not None:
            params.append(("log_date", f"gte.{start.isoformat()}"))
        if end is not None:
            params.append(("log_date", f"lte.{end.isoformat()}"))
        params.append(("order", f"log_date.{'asc' if ascending else 'desc'}"))

        rows = await self.request("GET", self.table, params=params) or []
        logger.debug(f"Loaded {len(rows)} daily logs")
        return [self._parse_row(row) for row in rows]

    async def get_by_date(self, user_id: UUID, log_date: date) -> Optional[DailyLog]:
        """Get the log for one specific day"""
        rows = await self.request(
            "GET",
            self.table,
            params=[
                ("select", "*"),
                ("user_id", f"eq.{user_id}"),
                ("log_date", f"eq.{log_date.isoformat()}"),
                ("limit", "1"),
            ],
        )
        if not rows:
            return None
        return self._parse_row(rows[0])

    async def logged_dates(self, user_id: UUID, start: date, end: date) -> Set[date]:
        """Dates in [start, end] that have a log"""
        rows = await self.request(
            "GET",
            self.table,
            params=[
                ("select", "log_date"),
                ("user_id", f"eq.{user_id}"),
                ("log_date", f"gte.{start.isoformat()}"),
                ("log_date", f"lte.{end.isoformat()}"),
                ("order", "log_date.asc"),
            ],
        ) or []
        try:
            return {date.fromisoformat(row["log_date"]) for row in rows}
        except (KeyError, TypeError, ValueError) as e:
            raise RecordStoreError(
                f"{self.table} returned a malformed row", details={"table": self.table}
            ) from e


class InMemoryDailyLogRepository:
    """Dict-backed stand-in for the remote table with the same interface"""

    def __init__(self, logs: Optional[List[DailyLog]] = None):
        self._rows: Dict[Tuple[UUID, date], DailyLog] = {}
        for log in logs or []:
            self._rows[(log.user_id, log.log_date)] = log

    async def upsert(self, log: DailyLog) -> DailyLog:
        if log.user_id is None:
            raise RecordStoreError("Cannot save a daily log without a user id")
        self._rows[(log.user_id, log.log_date)] = log
        return log

    async def query(
        self,
        user_id: UUID,
        start: Optional[date] = None,
        end: Optional[date] = None,
        ascending: bool = False,
    ) -> List[DailyLog]:
        logs = [
            log
            for (owner, day), log in self._rows.items()
            if owner == user_id
            and (start is None or day >= start)
            and (end is None or day <= end)
        ]
        return sorted(logs, key=lambda log: log.log_date, reverse=not ascending)

    async def get_by_date(self, user_id: UUID, log_date: date) -> Optional[DailyLog]:
        return self._rows.get((user_id, log_date))

    async def logged_dates(self, user_id: UUID, start: date, end: date) -> Set[date]:
        return {log.log_date for log in await self.query(user_id, start, end)}
