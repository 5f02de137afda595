"""Wires the collaborators for one signed-in session."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from gutory.auth.session import Session, SessionProvider
from gutory.profile import ProfileStore
from gutory.reporting.archive import ReportSnapshotArchive
from gutory.reporting.dashboard import DashboardService
from gutory.reporting.entry import LogEntryService
from gutory.reporting.history import HistoryService
from gutory.reporting.report_builder import ReportRequestBuilder
from gutory.reporting.service import ReportsService
from gutory.repositories.daily_logs import DailyLogRepository
from gutory.storage.local import FileKeyValueStore, KeyValueStore
from gutory.summarizer.client import SummarizerClient
from gutory.utils.config import Settings, get_settings
from gutory.utils.logger import get_logger
from gutory.utils.logging_config import setup_logging

logger = get_logger(__name__)


class Container:
    """Explicit collaborator graph; nothing here is a module-level singleton"""

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        sessions: SessionProvider,
        store: KeyValueStore,
    ):
        self.settings = settings
        self.http_client = http_client
        self.sessions = sessions
        self.store = store

        session = sessions.current()
        token = session.access_token if session else None

        self.repository = DailyLogRepository(settings, http_client, access_token=token)
        self.summarizer = SummarizerClient(settings, http_client, access_token=token)
        self.profile = ProfileStore(store, settings)
        self.archive = ReportSnapshotArchive(store, settings)
        self.builder = ReportRequestBuilder(
            self.summarizer,
            min_days=settings.min_days_for_report,
            timeout=settings.summarizer_timeout_seconds,
        )

        self.reports = ReportsService(
            self.repository, self.builder, self.archive, sessions, self.profile
        )
        self.dashboard = DashboardService(self.repository, sessions, settings)
        self.history = HistoryService(self.repository, sessions)
        self.entries = LogEntryService(self.repository, sessions)


@asynccontextmanager
async def open_container(
    session: Optional[Session] = None,
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
) -> AsyncIterator[Container]:
    """Build a container and close its HTTP client on exit."""
    settings = settings or get_settings()
    setup_logging(settings.service_name, settings.log_level, settings.json_logs)

    http_client = httpx.AsyncClient(timeout=settings.summarizer_timeout_seconds)
    container = Container(
        settings,
        http_client,
        SessionProvider(session),
        store or FileKeyValueStore(settings.local_storage_dir),
    )
    logger.info("Gutory session starting up...")
    try:
        yield container
    finally:
        logger.info("Gutory session shutting down...")
        await http_client.aclose()
