"""
Gutory Profile Goals
Free-text goals kept on the device and passed to report generation
"""

import re
from typing import Optional

from gutory.storage.local import KeyValueStore
from gutory.utils.config import Settings, get_settings
from gutory.utils.errors import StorageError
from gutory.utils.logger import get_logger
from gutory.utils.logging_config import log_error_with_context

logger = get_logger(__name__)

QUICK_GOALS = (
    "Reduce bloating",
    "Less abdominal pain",
    "Improve energy",
    "Improve sleep quality",
    "Identify trigger foods",
    "Improve overall gut health",
)


class ProfileStore:
    """Reads and writes the goals text"""

    def __init__(self, store: KeyValueStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or get_settings()

    @property
    def key(self) -> str:
        return self.settings.profile_goals_key

    async def get_goals(self) -> Optional[str]:
        """Trimmed goals text, or None when blank or unreadable"""
        try:
            raw = await self.store.get(self.key)
            if raw is None:
                return None
            text = raw.decode("utf-8").strip()
        except (StorageError, UnicodeDecodeError) as e:
            log_error_with_context(logger, e, {"key": self.key})
            return None
        return text or None

    async def set_goals(self, text: str) -> str:
        limited = text[: self.settings.goals_max_length]
        await self.store.set(self.key, limited.encode("utf-8"))
        return limited

    async def toggle_goal(self, goal: str) -> str:
        """Append a quick goal phrase, or remove it (case-insensitive) if present"""
        phrase = goal.strip()
        current = ((await self.get_goals()) or "").replace("\n", " ").strip()

        if not current:
            current = phrase
        elif phrase.lower() in current.lower():
            current = re.sub(re.escape(phrase), "", current, flags=re.IGNORECASE)
            current = re.sub(r" {2,}", " ", current).strip()
            if current.endswith(","):
                current = current[:-1]
        else:
            if not current.endswith((",", " ")):
                current += ", "
            current += phrase

        return await self.set_goals(current)

    def is_selected(self, goals_text: Optional[str], goal: str) -> bool:
        return goal.strip().lower() in (goals_text or "").lower()
