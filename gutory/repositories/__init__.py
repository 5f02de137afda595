from .daily_logs import BaseRepository, DailyLogRepository, InMemoryDailyLogRepository

__all__ = ["BaseRepository", "DailyLogRepository", "InMemoryDailyLogRepository"]
