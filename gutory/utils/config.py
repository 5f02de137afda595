"""
Gutory Config
Environment configuration management using Pydantic
"""

from functools import lru_cache
from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    service_name: str = "gutory"
    json_logs: bool = False

    # Backend platform
    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: Optional[str] = None
    daily_logs_table: str = "daily_logs"

    # Summarizer edge function
    report_function_name: str = "generate-gut-report"
    summarizer_timeout_seconds: float = 60.0

    # Local storage
    local_storage_dir: str = "~/.gutory"
    saved_reports_key: str = "gutory_saved_weekly_reports_v1"
    profile_goals_key: str = "profile_goals"

    # Aggregation
    min_days_for_report: int = 3
    streak_lookback_days: int = 30
    dashboard_lookback_days: int = 30
    severity_window: int = 7
    trend_max_points: int = 14
    goals_max_length: int = 160

    @property
    def rest_url(self) -> str:
        """Base URL of the table REST API"""
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    @property
    def functions_url(self) -> str:
        """Base URL of the edge functions"""
        return f"{self.supabase_url.rstrip('/')}/functions/v1"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
