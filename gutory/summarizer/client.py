"""
Report Summarizer Client
Calls the generate-gut-report edge function that turns daily logs into a report
"""

from typing import List, Optional, Sequence

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from gutory.models.daily_log import DailyLog
from gutory.models.report import GutReport
from gutory.summarizer.exceptions import SummarizerCallError, SummarizerResponseError
from gutory.utils.config import Settings, get_settings
from gutory.utils.logger import get_logger

logger = get_logger(__name__)


class SummarizerResponse(BaseModel):
    """Body returned by the edge function on success"""

    summary: str
    key_takeaways: List[str]
    patterns: List[str]
    action_items: List[str]

    def to_report(self) -> GutReport:
        return GutReport(
            summary=self.summary,
            key_takeaways=self.key_takeaways,
            patterns=self.patterns,
            action_items=self.action_items,
        )


def build_request_body(
    period_logs: Sequence[DailyLog],
    all_logs: Sequence[DailyLog],
    goals_text: Optional[str] = None,
) -> dict:
    """JSON body sent to the edge function"""
    return {
        "period_logs": [_report_row(log) for log in period_logs],
        "all_logs": [_report_row(log) for log in all_logs],
        "goals_text": goals_text.strip() if goals_text else None,
    }


def _report_row(log: DailyLog) -> dict:
    row = log.to_payload()
    row.pop("user_id", None)
    return row


class SummarizerClient:
    """
    Client for the report summarization function.

    One POST per call, no retries. Every failure surfaces as a SummarizerError
    subclass so callers can fall back with a single except clause.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        access_token: Optional[str] = None,
    ):
        self.settings = settings or get_settings()
        self.client = http_client or httpx.AsyncClient()
        self.access_token = access_token

    @property
    def endpoint(self) -> str:
        return f"{self.settings.functions_url}/{self.settings.report_function_name}"

    async def summarize(
        self,
        period_logs: Sequence[DailyLog],
        all_logs: Sequence[DailyLog],
        goals_text: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> GutReport:
        """
        Request a report for the given logs.

        Args:
            period_logs: Logs in the selected window, newest first
            all_logs: Full history for context
            goals_text: User's goals, if any
            timeout: Seconds before the call is abandoned

        Returns:
            GutReport built from the function's response

        Raises:
            SummarizerCallError: Transport failure, timeout, or non-2xx status
            SummarizerResponseError: Body is not a valid report
        """
        token = self.access_token or self.settings.supabase_anon_key or ""
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        body = build_request_body(period_logs, all_logs, goals_text)
        request_timeout = (
            timeout if timeout is not None else self.settings.summarizer_timeout_seconds
        )

        logger.info(
            f"Requesting report for {len(period_logs)} logged days "
            f"({len(all_logs)} days of history)"
        )

        try:
            response = await self.client.post(
                self.endpoint, json=body, headers=headers, timeout=request_timeout
            )
        except httpx.TimeoutException as e:
            raise SummarizerCallError(
                f"AI backend timed out after {request_timeout}s.", original_error=e
            ) from e
        except httpx.HTTPError as e:
            raise SummarizerCallError(
                f"AI backend unreachable: {e}", original_error=e
            ) from e

        if not 200 <= response.status_code <= 299:
            raise SummarizerCallError(
                f"AI backend returned status {response.status_code}.",
                status_code=response.status_code,
            )

        try:
            return SummarizerResponse.model_validate_json(response.content).to_report()
        except PydanticValidationError as e:
            raise SummarizerResponseError(
                "AI backend returned an unexpected response.", original_error=e
            ) from e

    async def aclose(self) -> None:
        await self.client.aclose()
